from sqlalchemy import Column, String, DateTime, ForeignKey

from storefront.data.database import Base
from storefront.data.models.common import new_id, utcnow


class UserSessionModel(Base):
    """
    Sesja z tokenem bearer. Trzymamy tylko hash SHA-256 tokenu,
    wlascicielem jest albo klient (user_id) albo admin (admin_id).
    """

    __tablename__ = "user_sessions"

    session_id = Column(String(255), primary_key=True, default=new_id)
    user_id = Column(String(255), ForeignKey("users.user_id"), nullable=True)
    admin_id = Column(String(255), ForeignKey("admin_users.admin_id"), nullable=True)
    token_hash = Column(String(128), nullable=False, unique=True, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
