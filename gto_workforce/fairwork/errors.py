"""Error types specific to the FairWork API layer.

Purpose:
- Provide typed exceptions thrown by `FairWorkClient` and its callers.
- Expose HTTP-oriented context (status code, response body) for diagnosis.

Usage:
- Catch `FairWorkApiError` for general failures and inspect `status_code` or
  `details`.
- Catch `FairWorkNotFoundError` when a lookup returns 404.
"""

from __future__ import annotations

from typing import Any, Optional


class FairWorkApiError(Exception):
    """Base error for FairWork API failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional payload from the server (e.g., JSON body).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class FairWorkNotFoundError(FairWorkApiError):
    """Raised when the requested FairWork resource does not exist (HTTP 404).

    Args:
        resource: The path that was not found.
    """

    def __init__(self, resource: str) -> None:
        super().__init__(f"FairWork resource not found: {resource}", status_code=404)
        self.resource = resource
