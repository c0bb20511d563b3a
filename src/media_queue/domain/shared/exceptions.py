"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when domain validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class PersistenceError(DomainError):
    """Raised when the durable store cannot read or write a key."""

    def __init__(self, operation: str, key: str, message: str | None = None) -> None:
        msg = message or f"Failed to {operation} key '{key}'"
        super().__init__(msg, code="PERSISTENCE_ERROR")
        self.operation = operation
        self.key = key
