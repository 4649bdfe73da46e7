# storefront/services/admin_order_service.py
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.common import utcnow
from storefront.data.models.order import OrderModel
from storefront.data.models.order_status_history import OrderStatusHistoryModel
from storefront.data.models.user import UserModel
from storefront.domain.context import AdminContext
from storefront.domain.order_status import OrderStatus, can_transition
from storefront.domain.schemas import AdminOrderUpdate
from storefront.errors import (
    InvalidStatusTransitionError,
    NoUpdatesProvidedError,
    OrderNotFoundError,
    PersistenceError,
    StorefrontError,
)
from storefront.repos.order_repo import OrderRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AdminOrderService:
    def __init__(self, db: Session, notification_service: NotificationService):
        self.db = db
        self.repo = OrderRepo(db)
        self.notification_service = notification_service

    def list_orders(
        self,
        status: str | None = None,
        payment_status: str | None = None,
        search_query: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> dict:
        orders, total = self.repo.search(
            status=status,
            payment_status=payment_status,
            search_query=search_query,
            date_from=date_from,
            date_to=date_to,
            limit=limit,
            offset=offset,
        )
        return {
            "orders": orders,
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": offset + limit < total,
        }

    def get_order(self, order_id: str) -> OrderModel:
        order = self.repo.get_order_with_items(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def update_order(self, order_id: str, payload: AdminOrderUpdate, admin: AdminContext) -> OrderModel:
        """
        Use Case: zmiana statusu / platnosci / trackingu przez admina.

        Przejscia statusu tylko wg ALLOWED_TRANSITIONS, kazde prawdziwe przejscie
        dopisuje wiersz do order_status_history. Pierwsze 'delivered' ustawia delivered_at.
        """
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise NoUpdatesProvidedError()

        order = self.repo.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        old_status = order.status
        new_status = payload.status.value if payload.status is not None else None
        status_changed = new_status is not None and new_status != old_status

        try:
            if status_changed:
                if not self._transition_allowed(old_status, new_status):
                    logger.warning(f"Order {order.order_number}: rejected transition {old_status} -> {new_status}")
                    raise InvalidStatusTransitionError(old_status, new_status)
                order.status = new_status
                if new_status == OrderStatus.DELIVERED.value and order.delivered_at is None:
                    order.delivered_at = utcnow()

            if "payment_status" in changes and payload.payment_status is not None:
                order.payment_status = payload.payment_status.value
            if "tracking_number" in changes:
                order.tracking_number = payload.tracking_number
            if "estimated_delivery_date" in changes:
                order.estimated_delivery_date = payload.estimated_delivery_date
            if "notes" in changes:
                order.notes = payload.notes
            order.updated_at = utcnow()

            if status_changed:
                self.repo.add_status_history(
                    OrderStatusHistoryModel(
                        order_id=order.order_id,
                        old_status=old_status,
                        new_status=new_status,
                        changed_by_admin_id=admin.admin_id,
                        notes=payload.notes or f"Status changed to {new_status}",
                    )
                )

            self.repo.commit()
        except StorefrontError:
            self.repo.rollback()
            raise
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.exception(f"Update of order {order_id} rolled back")
            raise PersistenceError() from e

        updated = self.repo.get_order_with_items(order_id)

        if status_changed:
            logger.info(f"Order {updated.order_number}: {old_status} -> {new_status} by admin {admin.admin_id}")
            self._notify_status(updated)

        return updated

    @staticmethod
    def _transition_allowed(old_status: str, new_status: str) -> bool:
        # status spoza enuma (stare dane) nie ma zadnych dozwolonych przejsc
        try:
            return can_transition(OrderStatus(old_status), OrderStatus(new_status))
        except ValueError:
            return False

    def _notify_status(self, order: OrderModel):
        recipient = order.guest_email
        if recipient is None and order.user_id is not None:
            user = self.db.get(UserModel, order.user_id)
            recipient = user.email if user else None
        if not recipient:
            return
        try:
            self.notification_service.send_status_update(
                recipient, order.order_number, order.order_id, order.status, order.tracking_number
            )
        except Exception as e:
            logger.warning(f"Status notification for {order.order_number} not sent: {e}")
