"""
Error handling for the API.

Every error leaves the service as an ErrorResponse body:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action

Ledger exceptions map to status codes by their base class. AccessDeniedError
is rendered exactly like the matching not-found error so that callers cannot
probe for resources in projects they do not own. Driver and internal error
text only ever reaches the logs.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from stockledger.application.dto.responses import ErrorResponse
from stockledger.config import get_logger
from stockledger.core.exceptions import (
    AccessDeniedError,
    ConflictError,
    LedgerError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)

logger = get_logger(__name__)

# Checked in order; the first matching base class wins
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StorageUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}

HINT_MAP: dict[str, str] = {
    "INVALID_QUANTITY": "Send a quantity greater than 0 (up to 3 decimal places).",
    "INVALID_TRANSACTION_TYPE": "Use ENTRY, USAGE or ADJUSTMENT (upper case).",
    "INVALID_INPUT": "Check the field named in the message.",
    "MATERIAL_NOT_FOUND": "Check the material ID and project, and that the material is active.",
    "PROJECT_NOT_FOUND": "Check the project ID.",
    "SUPPLIER_NOT_FOUND": "Check the supplier ID.",
    "INSUFFICIENT_STOCK": "Register an ENTRY first or lower the USAGE quantity.",
    "NEGATIVE_STOCK_REJECTED": "The movement would leave negative stock.",
    "STOCK_LIMIT_EXCEEDED": "The movement would push stock past the largest storable balance.",
    "DUPLICATE_MATERIAL": "Pick another name or use the existing material.",
    "DUPLICATE_SUPPLIER": "A supplier with this RUC exists. Update it instead.",
    "CONCURRENT_MODIFICATION": "The material changed during the request. Retry.",
    "STORAGE_UNAVAILABLE": "Storage is busy or offline. Retry later.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "UNAUTHENTICATED": "Send the acting user in the X-User-Id header.",
}

# Fallback hints when an error code has none of its own
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authenticate and retry.",
    404: "The requested resource was not found. Verify the ID.",
    405: "Check the HTTP method for this path.",
    409: "The request conflicts with the current state.",
    500: "An internal error occurred. Check server logs.",
    503: "The service is temporarily unavailable. Retry later.",
}

# Error codes for HTTPExceptions raised by the framework or dependencies
HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHENTICATED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def _error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _public_error(exc: Exception) -> tuple[str, str]:
    """Error code and message exposed to the client."""
    if isinstance(exc, AccessDeniedError):
        if exc.material_id is not None:
            return "MATERIAL_NOT_FOUND", f"Material not found: {exc.material_id}"
        return "PROJECT_NOT_FOUND", f"Project not found: {exc.project_id}"
    if isinstance(exc, LedgerError):
        return exc.code, exc.message
    return "INTERNAL_ERROR", "An internal error occurred"


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log the exception and convert it to an ErrorResponse."""
    status_code = _status_for(exc)
    error_code, message = _public_error(exc)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        status=status_code,
        error_type=exc.__class__.__name__,
        error_code=getattr(exc, "code", error_code),
        error=str(exc),
        traceback=traceback.format_exc() if status_code == 500 else None,
    )

    headers = None
    if isinstance(exc, LedgerError) and exc.retryable:
        headers = {"Retry-After": "1"}
    return _error_json(request, status_code, error_code, message, headers=headers)


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    return build_error_response(request, exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Schema violations in path, query or body."""
    problems = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return _error_json(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        detail="; ".join(problems),
    )


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_json(
        request,
        exc.status_code,
        HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        str(exc.detail) if exc.detail else "An error occurred",
        headers=getattr(exc, "headers", None),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last line of defence for exceptions no handler claimed."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the ErrorResponse handlers on the app."""
    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
