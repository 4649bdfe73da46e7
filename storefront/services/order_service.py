# storefront/services/order_service.py
from redis import RedisError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.context import CustomerContext
from storefront.domain.schemas import OrderCreate
from storefront.errors import CheckoutInProgressError, OrderNotFoundError, PaymentFailedError, ValidationFailedError
from storefront.repos.order_repo import OrderRepo
from storefront.services.lock_service import LockService, checkout_lock_key
from storefront.services.notification_service import NotificationService
from storefront.services.order_validator import OrderValidator
from storefront.services.order_writer import OrderWriter
from storefront.services.payment_gateway import PaymentGateway
from storefront.utils.settings import CHECKOUT_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien klienta.
    Klient (albo jego brak) przychodzi jawnie jako CustomerContext.
    """

    def __init__(
        self,
        db: Session,
        payment_gateway: PaymentGateway,
        notification_service: NotificationService,
        lock_service: LockService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.validator = OrderValidator(db)
        self.writer = OrderWriter(db)
        self.payment_gateway = payment_gateway
        self.notification_service = notification_service
        self.lock_service = lock_service

    # =====================================================
    # COMMAND
    # =====================================================
    def place_order(self, payload: OrderCreate, customer: CustomerContext | None) -> OrderModel:
        """
        Use Case: checkout.

        1. Walidacja pozycji (produkt aktywny, stan, subtotal)
        2. Autoryzacja platnosci
        3. Zapis zamowienia w jednej transakcji (OrderWriter)
        4. Powiadomienie (best-effort, po commicie)
        """
        if customer is None and not payload.guest_email:
            raise ValidationFailedError(
                "guest_email is required for guest checkout",
                {"field": "guest_email"},
            )

        lock_key = checkout_lock_key(customer.user_id if customer else None, payload.guest_email)
        lock_token = None
        if self.lock_service is not None:
            lock_token = self.lock_service.new_token()
            if not self.lock_service.acquire(lock_key, lock_token, CHECKOUT_LOCK_TTL_SECONDS):
                raise CheckoutInProgressError()

        try:
            order_id = self._checkout(payload, customer)
        finally:
            if lock_token is not None:
                self._release_lock(lock_key, lock_token)

        order = self.repo.get_order_with_items(order_id)
        self._notify_confirmation(order, customer)
        return order

    def _checkout(self, payload: OrderCreate, customer: CustomerContext | None) -> str:
        try:
            validated = self.validator.validate(payload.order_items, payload.subtotal)
            self.validator.validate_addresses(
                customer, payload.shipping_address_id, payload.billing_address_id
            )

            payment = self.payment_gateway.authorize(
                amount=payload.total_amount,
                currency=payload.currency,
                payment_method=payload.payment_method,
                payment_details=payload.payment_details,
            )
            if not payment.success:
                logger.warning(f"Payment declined with status {payment.status}")
                raise PaymentFailedError(payment.status)
        except Exception:
            # zamknij transakcje odczytu, nic nie zostalo zapisane
            self.repo.rollback()
            raise

        return self.writer.write(payload, validated, payment, customer)

    def _release_lock(self, lock_key: str, lock_token: str):
        # zamowienie moze byc juz zapisane, lock i tak wygasnie po TTL
        try:
            self.lock_service.release(lock_key, lock_token)
        except RedisError as e:
            logger.warning(f"Checkout lock {lock_key} not released, expires with TTL: {e}")

    def _notify_confirmation(self, order: OrderModel, customer: CustomerContext | None):
        recipient = order.guest_email or (customer.email if customer else None)
        if not recipient:
            return
        try:
            self.notification_service.send_order_confirmation(recipient, order.order_number, order.order_id)
        except Exception as e:
            logger.warning(f"Order confirmation for {order.order_number} not sent: {e}")

    # =====================================================
    # QUERY
    # =====================================================
    def get_order(
        self,
        order_id: str,
        customer: CustomerContext | None,
        guest_email: str | None = None,
    ) -> OrderModel:
        """
        Zalogowany widzi tylko swoje zamowienia, gosc musi podac guest_email zamowienia.
        Cudze zamowienie = 404, zeby nie zdradzac ze istnieje.
        """
        order = self.repo.get_order_with_items(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if customer is not None:
            visible = order.user_id == customer.user_id
        else:
            visible = (
                order.user_id is None
                and guest_email is not None
                and order.guest_email is not None
                and order.guest_email.lower() == guest_email.lower()
            )
        if not visible:
            raise OrderNotFoundError(order_id)
        return order

    def list_orders(self, customer: CustomerContext, status: str | None, limit: int, offset: int) -> dict:
        orders, total = self.repo.search(user_id=customer.user_id, status=status, limit=limit, offset=offset)
        return {
            "orders": orders,
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": offset + limit < total,
        }
