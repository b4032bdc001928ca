"""
Unit tests for domain error types.
"""

from gto_workforce.core.errors import (
    ConflictError,
    DomainError,
    ExternalServiceError,
    InvalidTransitionError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)


class TestDomainErrors:
    def test_not_found_message_and_details(self):
        err = NotFoundError("Apprentice", 7)
        assert err.status_code == 404
        assert err.message == "Apprentice with ID 7 not found"
        assert err.details == {"entity": "Apprentice", "id": 7}

    def test_validation_error_defaults_errors_to_message(self):
        err = ValidationError("Bad input")
        assert err.status_code == 400
        assert err.errors == ["Bad input"]

    def test_invalid_transition(self):
        err = InvalidTransitionError("completed", "active")
        assert isinstance(err, ValidationError)
        assert err.message == "Cannot transition from completed to active"
        assert err.details == {"current_status": "completed", "requested_status": "active"}

    def test_status_codes(self):
        assert ConflictError("dup").status_code == 409
        assert ExternalServiceError("down").status_code == 502
        assert ServiceUnavailableError("off").status_code == 503
        assert issubclass(ServiceUnavailableError, DomainError)
