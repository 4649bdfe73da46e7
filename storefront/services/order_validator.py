# storefront/services/order_validator.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.context import CustomerContext
from storefront.domain.schemas import OrderItemIn
from storefront.errors import AddressNotFoundError, InsufficientStockError, ProductNotFoundError, SubtotalMismatchError
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.settings import SUBTOTAL_TOLERANCE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidatedLine:
    item: OrderItemIn
    product: ProductModel
    effective_price: Decimal


@dataclass(frozen=True)
class ValidatedOrder:
    lines: list[ValidatedLine]
    calculated_subtotal: Decimal


class OrderValidator:
    """
    Sprawdza pozycje zamowienia wzgledem aktualnego stanu produktow.
    Tylko odczyty - pierwszy blad przerywa cale zamowienie zanim cokolwiek zostanie zapisane.
    """

    def __init__(self, db: Session, tolerance: Decimal = SUBTOTAL_TOLERANCE):
        self.products = ProductRepo(db)
        self.users = UserRepo(db)
        self.tolerance = tolerance

    def validate(self, items: Sequence[OrderItemIn], declared_subtotal: Decimal) -> ValidatedOrder:
        lines: list[ValidatedLine] = []
        requested: dict[str, int] = {}
        calculated = Decimal("0.00")

        for item in items:
            product = self.products.get_active(item.product_id)
            if product is None:
                logger.warning(f"Checkout rejected: product {item.product_id} not found or inactive")
                raise ProductNotFoundError(item.product_id)

            # ten sam produkt w kilku pozycjach liczymy razem
            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity
            if product.stock_quantity < requested[item.product_id]:
                logger.warning(
                    f"Checkout rejected: product {product.product_id} has {product.stock_quantity}, "
                    f"requested {requested[item.product_id]}"
                )
                raise InsufficientStockError(
                    product_id=product.product_id,
                    product_name=item.product_name,
                    available=product.stock_quantity,
                    requested=requested[item.product_id],
                )

            price = product.effective_price
            calculated += price * item.quantity
            lines.append(ValidatedLine(item=item, product=product, effective_price=price))

        if abs(calculated - declared_subtotal) > self.tolerance:
            logger.warning(f"Checkout rejected: subtotal declared {declared_subtotal}, calculated {calculated}")
            raise SubtotalMismatchError(declared=declared_subtotal, calculated=calculated)

        return ValidatedOrder(lines=lines, calculated_subtotal=calculated)

    def validate_addresses(self, customer: CustomerContext | None, *address_ids: str) -> None:
        # adres musi istniec, a jesli ma wlasciciela to musi nim byc kupujacy
        for address_id in dict.fromkeys(address_ids):
            address = self.users.get_address(address_id)
            owner = customer.user_id if customer else None
            if address is None or (address.user_id is not None and address.user_id != owner):
                raise AddressNotFoundError(address_id)
