from sqlalchemy import Column, String, Boolean, DateTime

from storefront.data.database import Base
from storefront.data.models.common import new_id, utcnow


class UserModel(Base):
    __tablename__ = "users"

    user_id = Column(String(255), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class AdminUserModel(Base):
    __tablename__ = "admin_users"

    admin_id = Column(String(255), primary_key=True, default=new_id)
    username = Column(String(255), nullable=False, unique=True)
    email = Column(String(255), nullable=False)
    role = Column(String(100), nullable=False, default="admin")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
