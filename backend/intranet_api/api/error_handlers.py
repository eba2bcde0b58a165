"""Error Handlers — global exception handlers producing problem-details bodies.

Invariants:
    - IntranetError -> its own status with {title, detail, status, code, instance}
    - RequestValidationError -> 400 with field-level details
    - Exception (catch-all) -> 500, never leaks internal details
    - Every body served as application/problem+json

Design Decisions:
    - Three-layer handler: domain (IntranetError), validation (Pydantic), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from intranet_api.core.errors import IntranetError

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_intranet_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def problem_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=content, media_type=PROBLEM_MEDIA_TYPE,
    )


def _register_intranet_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(IntranetError)
    async def intranet_error_handler(request: Request, exc: IntranetError):
        """Handle all typed intranet errors."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"IntranetError: {exc.code} -> {exc.http_status}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": exc.http_status,
            },
        )
        return problem_response(
            exc.http_status, exc.to_problem(instance=request.url.path),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return problem_response(
            status.HTTP_400_BAD_REQUEST,
            _build_validation_problem(exc, request.url.path),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return problem_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {
                "title": "An unexpected error occurred.",
                "detail": "An error occurred while processing your request.",
                "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "code": "INTERNAL_ERROR",
                "instance": request.url.path,
            },
        )


def _build_validation_problem(
    exc: RequestValidationError, instance: str,
) -> dict:
    """Build structured validation problem body."""
    return {
        "title": "Invalid request argument.",
        "detail": "One or more fields failed validation.",
        "status": status.HTTP_400_BAD_REQUEST,
        "code": "VALIDATION_ERROR",
        "instance": instance,
        "errors": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
