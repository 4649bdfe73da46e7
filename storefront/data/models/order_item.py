from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models.common import new_id, utcnow


class OrderItemModel(Base):
    """Niezmienny snapshot produktu z chwili zakupu."""

    __tablename__ = "order_items"

    order_item_id = Column(String(255), primary_key=True, default=new_id)
    order_id = Column(String(255), ForeignKey("orders.order_id"), nullable=False, index=True)
    product_id = Column(String(255), ForeignKey("products.product_id"), nullable=False)

    product_name = Column(String(255), nullable=False)
    product_brand = Column(String(255), nullable=False)
    product_sku = Column(String(255), nullable=False)
    product_image_url = Column(String(1000), nullable=True)
    product_price = Column(Numeric(10, 2), nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=True)
    quantity = Column(Integer, nullable=False)
    line_total = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    order = relationship("OrderModel", back_populates="order_items")
