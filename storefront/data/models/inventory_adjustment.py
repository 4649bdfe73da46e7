from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey

from storefront.data.database import Base
from storefront.data.models.common import new_id, utcnow


class InventoryAdjustmentModel(Base):
    # append-only, nigdy nie aktualizujemy ani nie usuwamy wierszy
    __tablename__ = "inventory_adjustments"

    adjustment_id = Column(String(255), primary_key=True, default=new_id)
    product_id = Column(String(255), ForeignKey("products.product_id"), nullable=False, index=True)
    adjustment_type = Column(String(100), nullable=False)
    quantity_change = Column(Integer, nullable=False)
    old_quantity = Column(Integer, nullable=False)
    new_quantity = Column(Integer, nullable=False)
    reason = Column(Text, nullable=True)
    admin_id = Column(String(255), ForeignKey("admin_users.admin_id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
