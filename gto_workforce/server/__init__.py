"""
GTO Workforce Server Package.

This package contains the web server implementation for the GTO Workforce service.
It includes the API definition, configuration, middleware and the service layer.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Core configuration.
    exception_handlers: Mapping of domain errors to HTTP responses.
    middleware: Request logging and timing.
    services: Business logic and service layer.
"""
