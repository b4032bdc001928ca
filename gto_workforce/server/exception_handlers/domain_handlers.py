"""
Domain Exception Handler.

Maps ``gto_workforce.core.errors`` exceptions raised by services to JSON
responses. The status code comes from the exception class; structured
``details`` are merged into the body next to ``detail``.
"""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from gto_workforce.core.errors import DomainError, ValidationError
from gto_workforce.core.logging_config import get_logger

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """
    Convert a domain error into an HTTP response.

    Args:
        request: The HTTP request that caused the exception
        exc: The domain error raised by a service

    Returns:
        JSONResponse shaped ``{"detail": ..., "errors": [...], **details}``
    """
    content = {"detail": exc.message, **exc.details}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors

    log = logger.warning if exc.status_code >= 500 else logger.info
    log(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(content))
