"""Error Handlers — global exception handlers for the ColdFlow API.

Invariants:
    - ColdFlowError → structured JSON with error code, message, severity (and
      violation details for ValidationFailedError)
    - Validation failures log every "field: message" pair at WARNING
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (ColdFlowError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the entry point's import fan-out small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from coldflow.core.errors import ColdFlowError, ErrorSeverity, ValidationFailedError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_coldflow_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_coldflow_error_handler(app: FastAPI) -> None:
    """Register ColdFlow domain/infrastructure error handler."""

    @app.exception_handler(ColdFlowError)
    async def coldflow_error_handler(request: Request, exc: ColdFlowError):
        """Handle all ColdFlow domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            _describe(exc),
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "transfer_id": exc.context.transfer_id,
                "wallet_id": exc.context.wallet_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
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
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
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
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _describe(exc: ColdFlowError) -> str:
    """Log line for a ColdFlowError; validation failures list field: message pairs."""
    if isinstance(exc, ValidationFailedError):
        fields = "; ".join(f"{v.field}: {v.message}" for v in exc.violations)
        return f"ColdFlowError: {exc.message} [{fields}]"
    return f"ColdFlowError: {exc.message}"


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
