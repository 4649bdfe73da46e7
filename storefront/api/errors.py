# storefront/api/errors.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.data.models.common import utcnow
from storefront.errors import (
    AddressNotFoundError,
    AuthenticationRequiredError,
    CartItemNotFoundError,
    CheckoutInProgressError,
    InsufficientStockError,
    InvalidStatusTransitionError,
    InvalidTokenError,
    NoUpdatesProvidedError,
    OrderConflictError,
    OrderNotFoundError,
    PaymentFailedError,
    PaymentGatewayError,
    PersistenceError,
    ProductNotFoundError,
    SessionRequiredError,
    StockMismatchError,
    StorefrontError,
    SubtotalMismatchError,
    ValidationFailedError,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# Map exception types to HTTP status codes
ERROR_STATUS_CODES: dict[type, int] = {
    ValidationFailedError: 400,
    SessionRequiredError: 400,
    AuthenticationRequiredError: 401,
    InvalidTokenError: 403,
    ProductNotFoundError: 404,
    AddressNotFoundError: 404,
    CartItemNotFoundError: 404,
    OrderNotFoundError: 404,
    InsufficientStockError: 400,
    SubtotalMismatchError: 400,
    PaymentFailedError: 400,
    NoUpdatesProvidedError: 400,
    PaymentGatewayError: 502,
    CheckoutInProgressError: 409,
    OrderConflictError: 409,
    InvalidStatusTransitionError: 409,
    StockMismatchError: 409,
    PersistenceError: 500,
}


def error_body(message: str, error_code: str, details=None) -> dict:
    body = {
        "success": False,
        "message": message,
        "error_code": error_code,
        "timestamp": utcnow().isoformat(),
    }
    if details is not None:
        body["details"] = details
    return body


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Map StorefrontError subclasses to the shared error envelope."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error_body(exc.message, exc.error_code, exc.details)),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=error_body("Validation failed", "VALIDATION_ERROR", errors),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # wszystko spoza StorefrontError, np. redis albo baza przy odczytach
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_body("Internal server error", "INTERNAL_SERVER_ERROR"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
