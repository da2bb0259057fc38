"""
Application Error Handlers.

Translates the application's error taxonomy into HTTP responses:

- NotFoundError -> 404
- ForbiddenAccessError -> 403
- UnauthorizedError -> 401
- ValidationError (and its subclasses), request validation -> 400
- ModerationError -> 502

Bodies carry ``detail``, ``error_type`` and, for validation failures, ``errors``.
"""

from typing import Dict, List, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dashitoon.core.errors import ForbiddenAccessError, NotFoundError, UnauthorizedError, ValidationError
from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.io.common import ErrorResponse
from dashitoon.moderation import ModerationError

logger = get_logger(__name__)


def _error_response(
    status_code: int, exc: Exception, detail: Optional[str] = None, errors: Optional[Dict[str, List[str]]] = None
) -> JSONResponse:
    body = ErrorResponse(detail=detail or str(exc), error_type=type(exc).__name__, errors=errors or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


async def forbidden_handler(request: Request, exc: ForbiddenAccessError) -> JSONResponse:
    logger.info(f"Forbidden {request.method} {request.url.path}: {exc}")
    return _error_response(status.HTTP_403_FORBIDDEN, exc)


async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return _error_response(status.HTTP_401_UNAUTHORIZED, exc)


async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, exc, errors=exc.errors)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.setdefault(".".join(location) or "request", []).append(error.get("msg", "Invalid value."))
    return _error_response(
        status.HTTP_400_BAD_REQUEST, exc, detail="One or more validation failures have occurred.", errors=errors
    )


async def moderation_error_handler(request: Request, exc: ModerationError) -> JSONResponse:
    logger.error(f"Moderation failed during {request.method} {request.url.path}: {exc} (status={exc.status_code})")
    return _error_response(status.HTTP_502_BAD_GATEWAY, exc)
