"""Domain error types.

Services raise these instead of HTTP exceptions so they stay usable outside a
request context. ``gto_workforce.server.exception_handlers`` maps each type to
an HTTP status code.
"""

from __future__ import annotations

from typing import Any, List, Optional


class DomainError(Exception):
    """Base error for business-rule and lookup failures.

    Args:
        message: Human-readable error description.
        details: Optional structured context returned to API clients.
    """

    status_code: int = 400

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: Any) -> None:
        super().__init__(f"{entity} with ID {entity_id} not found", details={"entity": entity, "id": entity_id})
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(DomainError):
    """Raised when input violates field or business rules.

    Args:
        message: Summary of the failure.
        errors: Individual rule violations.
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        *,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.errors = errors or [message]


class InvalidTransitionError(ValidationError):
    """Raised when a status change is not allowed by a workflow table."""

    def __init__(self, current: str, new: str) -> None:
        super().__init__(
            f"Cannot transition from {current} to {new}",
            details={"current_status": current, "requested_status": new},
        )
        self.current = current
        self.new = new


class ConflictError(DomainError):
    """Raised when a unique constraint would be violated."""

    status_code = 409


class ExternalServiceError(DomainError):
    """Raised when an upstream dependency (e.g. FairWork) is unavailable."""

    status_code = 502


class ServiceUnavailableError(ExternalServiceError):
    """Raised when an optional integration is not configured."""

    status_code = 503
