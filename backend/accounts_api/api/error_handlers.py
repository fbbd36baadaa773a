"""Error Handlers: global exception handlers that hand every failure to the classifier.

Invariants:
    - AccountsError -> classifier status + structured JSON, message verbatim
    - RequestValidationError -> VALIDATION failure naming the first violated field
    - Exception (catch-all) -> 500, never leaks internal details
    - Route handlers never build error responses themselves

Design Decisions:
    - Three-layer handler: domain (AccountsError), validation (Pydantic), catch-all (Exception)
    - Status selection lives in core/error_classifier.py; this module only wires it
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from accounts_api.core.error_classifier import classify
from accounts_api.core.errors import AccountsError, FailureKind
from accounts_api.schemas.validation import first_error_failure

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_accounts_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_accounts_error_handler(app: FastAPI) -> None:
    """Register typed account failure handler."""

    @app.exception_handler(AccountsError)
    async def accounts_error_handler(request: Request, exc: AccountsError):
        """Handle all typed account failures."""
        status_code, body = classify(exc)
        log = logger.error if exc.kind is FailureKind.INTERNAL else logger.warning
        log(
            f"AccountsError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": status_code,
            },
        )
        return JSONResponse(status_code=status_code, content=body)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Report the first violated field as a VALIDATION failure."""
        failure = first_error_failure(exc.errors())
        status_code, body = classify(failure)
        logger.warning(
            f"Validation error on {request.url.path}: {failure.message}",
            extra={"error_code": failure.code, "path": request.url.path},
        )
        return JSONResponse(status_code=status_code, content=body)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        status_code, body = classify(exc)
        return JSONResponse(status_code=status_code, content=body)
