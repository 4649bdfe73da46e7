from sqlalchemy import Column, String, DateTime, Text, ForeignKey

from storefront.data.database import Base
from storefront.data.models.common import new_id, utcnow


class OrderStatusHistoryModel(Base):
    __tablename__ = "order_status_history"

    status_history_id = Column(String(255), primary_key=True, default=new_id)
    order_id = Column(String(255), ForeignKey("orders.order_id"), nullable=False, index=True)
    old_status = Column(String(100), nullable=True)
    new_status = Column(String(100), nullable=False)
    changed_by_admin_id = Column(String(255), ForeignKey("admin_users.admin_id"), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
