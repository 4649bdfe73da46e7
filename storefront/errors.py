"""Domain exceptions for the storefront service.

Every exception carries a stable ``error_code`` that the frontend branches on;
the HTTP status for each class lives in ``storefront.api.errors``.
"""


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationFailedError(StorefrontError):
    error_code = "VALIDATION_ERROR"


class SessionRequiredError(StorefrontError):
    error_code = "AUTH_OR_SESSION_REQUIRED"

    def __init__(self):
        super().__init__("User authentication or session_id required")


class AuthenticationRequiredError(StorefrontError):
    error_code = "AUTH_TOKEN_MISSING"

    def __init__(self):
        super().__init__("Access token required")


class InvalidTokenError(StorefrontError):
    error_code = "AUTH_TOKEN_INVALID"

    def __init__(self):
        super().__init__("Invalid or expired token")


class ProductNotFoundError(StorefrontError):
    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(
            f"Product {product_id} not found or inactive",
            {"product_id": product_id},
        )


class AddressNotFoundError(StorefrontError):
    error_code = "ADDRESS_NOT_FOUND"

    def __init__(self, address_id: str):
        self.address_id = address_id
        super().__init__(f"Address {address_id} not found", {"address_id": address_id})


class CartItemNotFoundError(StorefrontError):
    error_code = "CART_ITEM_NOT_FOUND"

    def __init__(self, cart_item_id: str):
        self.cart_item_id = cart_item_id
        super().__init__("Cart item not found", {"cart_item_id": cart_item_id})


class OrderNotFoundError(StorefrontError):
    error_code = "ORDER_NOT_FOUND"

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__("Order not found", {"order_id": order_id})


class InsufficientStockError(StorefrontError):
    """Raised when a product cannot cover the requested quantity."""

    error_code = "INSUFFICIENT_STOCK"

    def __init__(self, product_id: str, product_name: str, available: int, requested: int):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product {product_name}. Only {available} available.",
            {"product_id": product_id, "available": available, "requested": requested},
        )


class SubtotalMismatchError(StorefrontError):
    """Raised when the client's subtotal drifted from current server prices."""

    error_code = "SUBTOTAL_MISMATCH"

    def __init__(self, declared, calculated):
        self.declared = declared
        self.calculated = calculated
        super().__init__(
            "Subtotal mismatch. Please refresh and try again.",
            {"declared_subtotal": str(declared), "calculated_subtotal": str(calculated)},
        )


class PaymentFailedError(StorefrontError):
    error_code = "PAYMENT_FAILED"

    def __init__(self, status: str | None = None):
        self.status = status
        super().__init__("Payment processing failed", {"payment_status": status} if status else None)


class PaymentGatewayError(StorefrontError):
    """Raised when the payment provider is unreachable or times out."""

    error_code = "PAYMENT_GATEWAY_UNAVAILABLE"


class CheckoutInProgressError(StorefrontError):
    error_code = "CHECKOUT_IN_PROGRESS"

    def __init__(self):
        super().__init__("A checkout for this customer is already in progress")


class OrderConflictError(StorefrontError):
    error_code = "ORDER_CONFLICT"

    def __init__(self):
        super().__init__("Order could not be saved due to a conflicting write. Please try again.")


class InvalidStatusTransitionError(StorefrontError):
    error_code = "INVALID_STATUS_TRANSITION"

    def __init__(self, old_status: str, new_status: str):
        self.old_status = old_status
        self.new_status = new_status
        super().__init__(
            f"Cannot change order status from {old_status} to {new_status}",
            {"old_status": old_status, "new_status": new_status},
        )


class NoUpdatesProvidedError(StorefrontError):
    error_code = "NO_UPDATES_PROVIDED"

    def __init__(self):
        super().__init__("No valid fields to update")


class StockMismatchError(StorefrontError):
    error_code = "STOCK_MISMATCH"

    def __init__(self, expected: int, current: int):
        self.expected = expected
        self.current = current
        super().__init__(
            "Old quantity does not match current stock",
            {"old_quantity": expected, "current_stock": current},
        )


class PersistenceError(StorefrontError):
    """Raised after a rolled-back database failure; the cause is only logged."""

    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self):
        super().__init__("Internal server error")
