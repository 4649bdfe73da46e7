from sqlalchemy import Column, String, DateTime, ForeignKey

from storefront.data.database import Base
from storefront.data.models.common import new_id, utcnow


class AddressModel(Base):
    __tablename__ = "addresses"

    address_id = Column(String(255), primary_key=True, default=new_id)
    # None dla adresow podanych przy zakupie goscia
    user_id = Column(String(255), ForeignKey("users.user_id"), nullable=True, index=True)
    type = Column(String(50), nullable=False, default="shipping")
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    street_address_1 = Column(String(500), nullable=False)
    street_address_2 = Column(String(500), nullable=True)
    city = Column(String(255), nullable=False)
    state_province = Column(String(255), nullable=False)
    postal_code = Column(String(50), nullable=False)
    country = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
