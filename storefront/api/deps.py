# storefront/api/deps.py
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.context import AdminContext, CustomerContext
from storefront.errors import AuthenticationRequiredError, InvalidTokenError
from storefront.services.auth_service import AuthService
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.payment_gateway import PaymentGateway, get_payment_gateway as build_payment_gateway
from storefront.utils.settings import CHECKOUT_LOCK_ENABLED

# brak naglowka nie konczy requestu, decyduje konkretna zaleznosc
bearer = HTTPBearer(auto_error=False)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> CustomerContext | None:
    """Zly albo wygasly token = gosc."""
    if credentials is None:
        return None
    try:
        return AuthService(db).resolve_user(credentials.credentials)
    except InvalidTokenError:
        return None


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> CustomerContext:
    if credentials is None:
        raise AuthenticationRequiredError()
    return AuthService(db).resolve_user(credentials.credentials)


def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> AdminContext:
    if credentials is None:
        raise AuthenticationRequiredError()
    return AuthService(db).resolve_admin(credentials.credentials)


def get_payment_gateway() -> PaymentGateway:
    return build_payment_gateway()


def get_notification_service() -> NotificationService:
    return NotificationService()


_lock_service: LockService | None = None


def get_lock_service() -> LockService | None:
    global _lock_service
    if not CHECKOUT_LOCK_ENABLED:
        return None
    if _lock_service is None:
        _lock_service = LockService()
    return _lock_service
