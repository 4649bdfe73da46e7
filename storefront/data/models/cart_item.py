from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models.common import new_id, utcnow


class CartItemModel(Base):
    __tablename__ = "cart_items"

    cart_item_id = Column(String(255), primary_key=True, default=new_id)
    # dokladnie jedno z user_id / session_id
    user_id = Column(String(255), ForeignKey("users.user_id"), nullable=True, index=True)
    session_id = Column(String(255), nullable=True, index=True)
    product_id = Column(String(255), ForeignKey("products.product_id"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    added_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    product = relationship("ProductModel")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
        CheckConstraint(
            "(user_id IS NULL) <> (session_id IS NULL)",
            name="ck_cart_items_single_owner",
        ),
    )
