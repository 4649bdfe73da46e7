from sqlalchemy import Column, String, DateTime, Numeric, Text, ForeignKey
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models.common import new_id, utcnow


class OrderModel(Base):
    __tablename__ = "orders"

    order_id = Column(String(255), primary_key=True, default=new_id)
    order_number = Column(String(255), nullable=False, unique=True)
    user_id = Column(String(255), ForeignKey("users.user_id"), nullable=True, index=True)
    guest_email = Column(String(255), nullable=True)

    status = Column(String(100), nullable=False, default="pending")
    subtotal = Column(Numeric(10, 2), nullable=False)
    shipping_cost = Column(Numeric(10, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(10, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(10), nullable=False, default="USD")

    payment_method = Column(String(100), nullable=False)
    payment_status = Column(String(100), nullable=False, default="pending")
    payment_transaction_id = Column(String(255), nullable=True)

    shipping_address_id = Column(String(255), ForeignKey("addresses.address_id"), nullable=False)
    billing_address_id = Column(String(255), ForeignKey("addresses.address_id"), nullable=False)
    shipping_method = Column(String(255), nullable=False)
    tracking_number = Column(String(255), nullable=True)
    estimated_delivery_date = Column(DateTime(timezone=True), nullable=True)
    delivered_at = Column(DateTime(timezone=True), nullable=True)

    notes = Column(Text, nullable=True)
    promo_code = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    order_items = relationship(
        "OrderItemModel",
        back_populates="order",
        order_by="OrderItemModel.created_at",
    )
    status_history = relationship(
        "OrderStatusHistoryModel",
        order_by="OrderStatusHistoryModel.created_at",
    )
    shipping_address = relationship("AddressModel", foreign_keys=[shipping_address_id])
    billing_address = relationship("AddressModel", foreign_keys=[billing_address_id])
