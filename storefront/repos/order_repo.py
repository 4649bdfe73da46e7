# storefront/repos/order_repo.py
from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.order_status_history import OrderStatusHistoryModel


def _contains_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    # ----- zapis (bez commita, transakcja nalezy do serwisu) -----
    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def add_status_history(self, entry: OrderStatusHistoryModel) -> OrderStatusHistoryModel:
        self.db.add(entry)
        self.db.flush()
        return entry

    # ----- odczyt -----
    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_order_with_items(self, order_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.order_id == order_id)
            .options(
                selectinload(OrderModel.order_items),
                selectinload(OrderModel.status_history),
                selectinload(OrderModel.shipping_address),
                selectinload(OrderModel.billing_address),
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def search(
        self,
        user_id: str | None = None,
        status: str | None = None,
        payment_status: str | None = None,
        search_query: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[OrderModel], int]:
        """Filtry budowane z wyrazen SQLAlchemy, zadnego sklejania stringow SQL."""
        conditions = []
        if user_id is not None:
            conditions.append(OrderModel.user_id == user_id)
        if status:
            conditions.append(OrderModel.status == status)
        if payment_status:
            conditions.append(OrderModel.payment_status == payment_status)
        if search_query:
            pattern = _contains_pattern(search_query)
            conditions.append(
                or_(
                    OrderModel.order_number.ilike(pattern, escape="\\"),
                    OrderModel.guest_email.ilike(pattern, escape="\\"),
                )
            )
        if date_from is not None:
            conditions.append(OrderModel.created_at >= date_from)
        if date_to is not None:
            conditions.append(OrderModel.created_at <= date_to)

        orders = list(
            self.db.execute(
                select(OrderModel)
                .where(*conditions)
                .options(selectinload(OrderModel.order_items))
                .order_by(OrderModel.created_at.desc())
                .limit(limit)
                .offset(offset)
            ).scalars()
        )
        total = self.db.execute(
            select(func.count()).select_from(OrderModel).where(*conditions)
        ).scalar_one()
        return orders, total

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
