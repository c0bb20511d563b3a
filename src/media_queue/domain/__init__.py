"""
Domain Layer

Contains pure queue logic organized by bounded context:
- shared/: Cross-cutting exceptions, messages and constrained types
- music/: Track, queue state, sequencing and shuffle rules
"""

from media_queue.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
