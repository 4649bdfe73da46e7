# storefront/services/auth_service.py
import hashlib

from sqlalchemy.orm import Session

from storefront.data.models.common import utcnow
from storefront.domain.context import AdminContext, CustomerContext
from storefront.errors import InvalidTokenError
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def hash_token(token: str) -> str:
    """W bazie lezy tylko hash tokenu, nigdy sam token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class AuthService:
    """
    Zamienia token bearer na kontekst klienta albo admina.
    Wydawanie tokenow (login, rejestracja) jest poza tym serwisem.
    """

    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def resolve_user(self, token: str) -> CustomerContext:
        session = self.repo.get_active_session(hash_token(token), utcnow())
        if session is None or session.user_id is None:
            raise InvalidTokenError()

        user = self.repo.get_active_user(session.user_id)
        if user is None:
            logger.warning(f"Session {session.session_id} points to inactive user {session.user_id}")
            raise InvalidTokenError()

        return CustomerContext(user_id=user.user_id, email=user.email)

    def resolve_admin(self, token: str) -> AdminContext:
        session = self.repo.get_active_session(hash_token(token), utcnow())
        if session is None or session.admin_id is None:
            raise InvalidTokenError()

        admin = self.repo.get_active_admin(session.admin_id)
        if admin is None:
            logger.warning(f"Session {session.session_id} points to inactive admin {session.admin_id}")
            raise InvalidTokenError()

        return AdminContext(admin_id=admin.admin_id, username=admin.username)
