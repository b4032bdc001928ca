"""
Exception handlers for the GTO Workforce server.

This package contains the handlers that turn domain errors into HTTP responses
and a setup function to register them with the FastAPI application.
"""

from .domain_handlers import domain_exception_handler
from .global_handler import global_exception_handler, setup_exception_handlers

__all__ = ["domain_exception_handler", "global_exception_handler", "setup_exception_handlers"]
