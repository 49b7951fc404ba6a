"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from cpg_inventory.application.dto.responses import ErrorResponse
from cpg_inventory.config import get_logger
from cpg_inventory.core.exceptions import (
    ConfigurationError,
    ConflictError,
    InventoryError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; first match wins
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "INSUFFICIENT_STOCK": "Reduce the quantity or restock the item first.",
    "DUPLICATE_ITEM": "The item already exists. Use a restock or other adjustment action instead of add_new.",
    "CUSTOM_FIELD_INVALID": "Check the values against GET /api/company/custom-fields.",
    "INVALID_STATUS_TRANSITION": "Delivered and cancelled shipments cannot change status.",
    "ITEM_NOT_FOUND": "Check the item ID or name and try GET /api/inventory to list items.",
    "ORDER_NOT_FOUND": "Check the order ID and try GET /api/orders to list orders.",
    "SHIPMENT_NOT_FOUND": "Check the shipment ID and try GET /api/shipments to list shipments.",
    "CUSTOMER_NOT_FOUND": "Check the customer ID and try GET /api/customers to list customers.",
    "COMPANY_NOT_FOUND": "Send a valid company ID in the X-Company-ID header.",
    "CUSTOM_FIELD_NOT_FOUND": "Check the field ID and try GET /api/company/custom-fields.",
    "ITEM_HAS_TRANSACTIONS": "Items with ledger history cannot be deleted.",
    "ORDER_HAS_SHIPMENTS": "Delete the order's shipments before deleting the order.",
    "DUPLICATE_CUSTOM_FIELD": "Pick a different field name for this table.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "ValueError": "A parameter value is invalid. Check the request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with existing data.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def status_for_exception(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions to standardized JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return self._handle_exception(request, e)

    def _handle_exception(
        self,
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Convert exception to standardized JSON response."""
        status_code = status_for_exception(exc)

        details = None
        if isinstance(exc, InventoryError):
            error_code = exc.code
            message = exc.message
            details = exc.details
        else:
            error_code = exc.__class__.__name__
            message = str(exc)

        request_id = getattr(request.state, "request_id", None)

        if status_code >= 500:
            logger.error(
                "unhandled_exception",
                request_id=request_id,
                path=request.url.path,
                error_type=error_code,
                error=str(exc),
                traceback=traceback.format_exc(),
            )
        else:
            logger.warning(
                "request_rejected",
                request_id=request_id,
                path=request.url.path,
                error_type=error_code,
                error=message,
            )

        error_response = ErrorResponse(
            error_code=error_code,
            message=message,
            hint=_get_hint(error_code, status_code),
            details=details,
            path=request.url.path,
        )

        return JSONResponse(
            status_code=status_code,
            content=error_response.model_dump(mode="json"),
        )


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code, exc.detail or "")
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(InventoryError)
    async def inventory_exception_handler(
        request: Request,
        exc: InventoryError,
    ) -> JSONResponse:
        """Handle domain errors raised inside dependencies or routes."""
        status_code = status_for_exception(exc)
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error_code=exc.code,
                message=exc.message,
                hint=_get_hint(exc.code, status_code),
                details=exc.details,
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int, detail: str) -> str:
    """Infer a machine-readable error code from HTTPException detail."""
    detail_lower = detail.lower()

    if status_code == 404:
        if "shipment" in detail_lower:
            return "SHIPMENT_NOT_FOUND"
        if "order" in detail_lower:
            return "ORDER_NOT_FOUND"
        if "customer" in detail_lower:
            return "CUSTOMER_NOT_FOUND"
        if "custom field" in detail_lower:
            return "CUSTOM_FIELD_NOT_FOUND"
        if "item" in detail_lower:
            return "ITEM_NOT_FOUND"
        if "company" in detail_lower:
            return "COMPANY_NOT_FOUND"
        return "NOT_FOUND"

    if status_code == 400:
        if "company" in detail_lower:
            return "MISSING_COMPANY"
        return "BAD_REQUEST"

    if status_code == 422:
        return "UNPROCESSABLE_ENTITY"

    return "HTTP_ERROR"
