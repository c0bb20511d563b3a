"""
Domain Exceptions Tests

Tests the shared domain error hierarchy.
"""

from media_queue.domain.shared.exceptions import DomainError, PersistenceError, ValidationError


class TestDomainExceptions:
    """Tests for domain exception construction."""

    def test_domain_error_with_message(self):
        """Should create DomainError with message."""
        error = DomainError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "DomainError"

    def test_domain_error_with_custom_code(self):
        """Should use custom error code when provided."""
        assert DomainError("Custom error", code="CUSTOM_CODE").code == "CUSTOM_CODE"

    def test_validation_error_field(self):
        """Should carry the offending field name."""
        error = ValidationError("bad version", field="version")

        assert isinstance(error, DomainError)
        assert error.code == "VALIDATION_ERROR"
        assert error.field == "version"

    def test_persistence_error_default_message(self):
        """Should build a message from operation and key."""
        error = PersistenceError("write", "queue.state")

        assert error.message == "Failed to write key 'queue.state'"
        assert error.code == "PERSISTENCE_ERROR"
        assert error.operation == "write"
        assert error.key == "queue.state"

    def test_persistence_error_custom_message(self):
        assert PersistenceError("read", "k", message="disk full").message == "disk full"
