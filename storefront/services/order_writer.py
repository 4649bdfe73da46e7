# storefront/services/order_writer.py
import time

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.common import new_id, utcnow
from storefront.data.models.inventory_adjustment import InventoryAdjustmentModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.order_status_history import OrderStatusHistoryModel
from storefront.domain.context import CustomerContext
from storefront.domain.order_status import AdjustmentType, OrderStatus, PaymentStatus
from storefront.domain.schemas import OrderCreate
from storefront.errors import InsufficientStockError, OrderConflictError, PersistenceError, StorefrontError
from storefront.repos.inventory_repo import InventoryRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.cart_reconciler import CartReconciler
from storefront.services.order_validator import ValidatedOrder
from storefront.services.payment_gateway import PaymentResult
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def generate_order_number(now=None) -> str:
    """ORD-<rok>-<ostatnie 6 cyfr timestampu w ms>."""
    now = now or utcnow()
    return f"ORD-{now.year}-{str(int(time.time() * 1000))[-6:]}"


class OrderWriter:
    """
    Zapis zamowienia w jednej transakcji:
    order -> pozycje + zmniejszenie stanu + wpis w inventory_adjustments
    -> historia statusu -> czyszczenie koszyka -> commit.
    Dowolny blad = rollback calosci.
    """

    def __init__(self, db: Session):
        self.db = db
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)
        self.inventory = InventoryRepo(db)
        self.cart = CartReconciler(db)

    def write(
        self,
        payload: OrderCreate,
        validated: ValidatedOrder,
        payment: PaymentResult,
        customer: CustomerContext | None,
    ) -> str:
        now = utcnow()
        order_id = new_id()
        order_number = generate_order_number(now)

        try:
            self.orders.add_order(
                OrderModel(
                    order_id=order_id,
                    order_number=order_number,
                    user_id=customer.user_id if customer else None,
                    guest_email=payload.guest_email,
                    status=OrderStatus.PENDING.value,
                    subtotal=payload.subtotal,
                    shipping_cost=payload.shipping_cost,
                    tax_amount=payload.tax_amount,
                    discount_amount=payload.discount_amount,
                    total_amount=payload.total_amount,
                    currency=payload.currency,
                    payment_method=payload.payment_method,
                    # platnosc juz przeszla
                    payment_status=PaymentStatus.PAID.value,
                    payment_transaction_id=payment.transaction_id,
                    shipping_address_id=payload.shipping_address_id,
                    billing_address_id=payload.billing_address_id,
                    shipping_method=payload.shipping_method,
                    notes=payload.notes,
                    promo_code=payload.promo_code,
                    created_at=now,
                    updated_at=now,
                )
            )

            for line in validated.lines:
                item = line.item
                self.orders.add_item(
                    OrderItemModel(
                        order_id=order_id,
                        product_id=item.product_id,
                        product_name=item.product_name,
                        product_brand=item.product_brand,
                        product_sku=item.product_sku,
                        product_image_url=item.product_image_url,
                        product_price=item.product_price,
                        sale_price=item.sale_price,
                        quantity=item.quantity,
                        line_total=item.line_total,
                        created_at=now,
                    )
                )
                self._take_stock(order_number, line.product.product_id, item.product_name, item.quantity, now)

            self.orders.add_status_history(
                OrderStatusHistoryModel(
                    order_id=order_id,
                    old_status=None,
                    new_status=OrderStatus.PENDING.value,
                    notes="Order placed",
                    created_at=now,
                )
            )

            if customer is not None:
                self.cart.clear_user_cart(customer.user_id)

            self.orders.commit()

        except StorefrontError:
            self.orders.rollback()
            raise
        except IntegrityError as e:
            self.orders.rollback()
            logger.error(f"Order {order_number} conflicted with an existing row: {e}")
            raise OrderConflictError() from e
        except SQLAlchemyError as e:
            self.orders.rollback()
            logger.exception(f"Order {order_number} rolled back")
            raise PersistenceError() from e

        logger.info(f"Order {order_number} ({order_id}) committed with {len(validated.lines)} items")
        return order_id

    def _take_stock(self, order_number: str, product_id: str, product_name: str, quantity: int, now) -> None:
        # warunkowy UPDATE zamyka wyscig miedzy sprawdzeniem stanu a zapisem
        if not self.products.decrement_stock(product_id, quantity, now):
            available = self.products.get_stock(product_id) or 0
            logger.warning(f"Stock of {product_id} changed during checkout, {available} left")
            raise InsufficientStockError(
                product_id=product_id,
                product_name=product_name,
                available=available,
                requested=quantity,
            )

        new_quantity = self.products.get_stock(product_id)
        self.inventory.add_adjustment(
            InventoryAdjustmentModel(
                product_id=product_id,
                adjustment_type=AdjustmentType.SALE.value,
                quantity_change=-quantity,
                old_quantity=new_quantity + quantity,
                new_quantity=new_quantity,
                reason=f"Order #{order_number}",
                created_at=now,
            )
        )
