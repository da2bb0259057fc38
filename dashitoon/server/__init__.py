"""
DashiToon Server Package.

This package contains the web server implementation for the DashiToon platform.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Mapping of application errors to HTTP responses.
    middleware: Request logging and timing.
    services: Request dependencies (current user, session, application services).
"""
