from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric, CheckConstraint

from storefront.data.database import Base
from storefront.data.models.common import new_id, utcnow


class ProductModel(Base):
    __tablename__ = "products"

    product_id = Column(String(255), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    sku = Column(String(255), nullable=False, unique=True)
    is_active = Column(Boolean, nullable=False, default=True)
    sales_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),)

    @property
    def effective_price(self):
        # sale_price ma pierwszenstwo jesli jest ustawiona
        return self.sale_price if self.sale_price is not None else self.price
