# storefront/services/cart_service.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.common import utcnow
from storefront.domain.context import CartOwner
from storefront.errors import CartItemNotFoundError, InsufficientStockError, ProductNotFoundError
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.settings import FLAT_SHIPPING_COST, FREE_SHIPPING_THRESHOLD, TAX_RATE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


class CartService:
    """
    Use case'y koszyka, wlasciciel (user albo sesja goscia) przychodzi jako CartOwner.
    commands (add, update, remove, clear) modyfikuja stan
    query (get) tylko odczyt
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query - odczyt
    def get_cart(self, owner: CartOwner) -> Dict[str, Any]:
        items = self.repo.list_items(owner)

        lines = []
        subtotal = Decimal("0.00")
        total_quantity = 0
        for i in items:
            line_total = i.product.effective_price * i.quantity
            subtotal += line_total
            total_quantity += i.quantity
            lines.append(
                {
                    "cart_item_id": i.cart_item_id,
                    "user_id": i.user_id,
                    "session_id": i.session_id,
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "added_at": i.added_at,
                    "updated_at": i.updated_at,
                    "product": i.product,
                    "line_total": line_total,
                }
            )

        # darmowa wysylka od progu, pusty koszyk nic nie kosztuje
        if subtotal >= FREE_SHIPPING_THRESHOLD or not lines:
            shipping = Decimal("0.00")
        else:
            shipping = FLAT_SHIPPING_COST
        tax = (subtotal * TAX_RATE).quantize(CENT, rounding=ROUND_HALF_UP)

        #dict przeksztalcany w jsona
        return {
            "items": lines,
            "total_quantity": total_quantity,
            "subtotal": subtotal,
            "shipping_cost": shipping,
            "tax_amount": tax,
            "total": subtotal + shipping + tax,
        }

    #commands
    def add_item(self, owner: CartOwner, product_id: str, quantity: int) -> Dict[str, Any]:
        product = self.products.get_active(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        existing = self.repo.get_item_by_product(owner, product_id)
        merged = quantity + (existing.quantity if existing else 0)
        if merged > product.stock_quantity:
            logger.warning(f"Cart add rejected: {product_id} has {product.stock_quantity}, requested {merged}")
            raise InsufficientStockError(
                product_id=product_id,
                product_name=product.name,
                available=product.stock_quantity,
                requested=merged,
            )

        now = utcnow()
        if existing:
            logger.info(f"Produkt {product_id} juz jest w koszyku, ilosc {existing.quantity} -> {merged}")
            existing.quantity = merged
            existing.updated_at = now
        else:
            self.repo.add_item(
                CartItemModel(
                    user_id=owner.user_id,
                    session_id=owner.session_id,
                    product_id=product_id,
                    quantity=quantity,
                    added_at=now,
                    updated_at=now,
                )
            )
            logger.info(f"Dodano produkt {product_id} do koszyka {owner}")

        self.repo.commit()
        return self.get_cart(owner)

    def update_item(self, owner: CartOwner, cart_item_id: str, quantity: int) -> Dict[str, Any]:
        item = self.repo.get_item(owner, cart_item_id)
        if item is None:
            raise CartItemNotFoundError(cart_item_id)

        product = self.products.get_active(item.product_id)
        if product is None:
            raise ProductNotFoundError(item.product_id)
        if quantity > product.stock_quantity:
            raise InsufficientStockError(
                product_id=product.product_id,
                product_name=product.name,
                available=product.stock_quantity,
                requested=quantity,
            )

        item.quantity = quantity
        item.updated_at = utcnow()
        self.repo.commit()
        logger.info(f"Cart item {cart_item_id} quantity set to {quantity}")
        return self.get_cart(owner)

    def remove_item(self, owner: CartOwner, cart_item_id: str) -> None:
        item = self.repo.get_item(owner, cart_item_id)
        if item is None:
            raise CartItemNotFoundError(cart_item_id)

        self.repo.delete_item(item)
        self.repo.commit()
        logger.info(f"Usunieto pozycje {cart_item_id} z koszyka")

    def clear(self, owner: CartOwner) -> int:
        removed = self.repo.delete_for_owner(owner)
        self.repo.commit()
        logger.info(f"Cart of {owner} cleared, {removed} items removed")
        return removed
