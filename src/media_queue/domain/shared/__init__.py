"""
Shared Domain Kernel

Contains exceptions, message templates and constrained types shared across the package.
"""

from media_queue.domain.shared.exceptions import (
    DomainError,
    PersistenceError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "PersistenceError",
]
