# storefront/tasks/expire.py
from datetime import timedelta

from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.data.models.common import utcnow
from storefront.repos.cart_repo import CartRepo
from storefront.utils.settings import GUEST_CART_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def purge_stale_guest_carts(db, ttl_seconds: int = GUEST_CART_TTL_SECONDS) -> int:
    # koszyki zalogowanych zostaja, czyscimy tylko porzucone koszyki gosci
    cutoff = utcnow() - timedelta(seconds=ttl_seconds)
    repo = CartRepo(db)
    try:
        removed = repo.delete_stale_guest_items(cutoff)
        repo.commit()
    except Exception:
        repo.rollback()
        raise
    logger.info(f"Purged {removed} guest cart items idle since before {cutoff.isoformat()}")
    return removed


@celery_app.task(name="storefront.tasks.expire.purge_stale_guest_carts_task")
def purge_stale_guest_carts_task():
    logger.info("Purge stale guest carts task started")

    db = SessionLocal()
    try:
        return purge_stale_guest_carts(db)
    finally:
        db.close()
