# storefront/services/cart_reconciler.py
from sqlalchemy.orm import Session

from storefront.domain.context import CartOwner
from storefront.repos.cart_repo import CartRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartReconciler:
    """
    Czysci koszyk uzytkownika po zlozeniu zamowienia, w transakcji wolajacego (bez commita).
    Koszyki gosci (session_id) nie sa tu czyszczone - sprzata je purge_stale_guest_carts_task.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)

    def clear_user_cart(self, user_id: str) -> int:
        removed = self.repo.delete_for_owner(CartOwner(user_id=user_id))
        logger.info(f"Removed {removed} cart items of user {user_id}")
        return removed
