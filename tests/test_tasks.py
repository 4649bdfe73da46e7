"""Tests for Celery tasks, the checkout lock and the development seed."""

from datetime import timedelta

import fakeredis
from sqlalchemy import func, select

from conftest import make_cart_item
from storefront.data.models import CartItemModel, ProductModel
from storefront.data.models.common import utcnow
from storefront.data.seed import DEV_ADMIN_TOKEN, DEV_CUSTOMER_TOKEN, seed
from storefront.services.auth_service import AuthService
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService, send_order_notification_task
from storefront.tasks import expire
from storefront.tasks.expire import purge_stale_guest_carts, purge_stale_guest_carts_task


class TestNotifications:
    def test_task_returns_summary(self):
        result = send_order_notification_task.delay("order_confirmation", "a@example.com", "ORD-2026-000001", "o1")
        assert result.get() == {
            "kind": "order_confirmation",
            "recipient": "a@example.com",
            "order_number": "ORD-2026-000001",
            "status": "sent",
        }

    def test_service_dispatches_tasks(self):
        NotificationService.send_order_confirmation("a@example.com", "ORD-2026-000001", "o1")
        NotificationService.send_status_update("a@example.com", "ORD-2026-000001", "o1", "shipped", "TRK-1")


class TestGuestCartPurge:
    def test_removes_only_stale_guest_rows(self, db, product, customer):
        old = utcnow() - timedelta(days=10)
        make_cart_item(db, product, session_id="stale", updated_at=old)
        make_cart_item(db, product, session_id="fresh")
        make_cart_item(db, product, user_id=customer.user_id, updated_at=old)

        removed = purge_stale_guest_carts(db, ttl_seconds=3600)

        assert removed == 1
        remaining = list(db.execute(select(CartItemModel)).scalars())
        assert sorted(i.session_id or "user" for i in remaining) == ["fresh", "user"]

    def test_celery_task_uses_own_session(self, db, session_factory, monkeypatch, product):
        make_cart_item(db, product, session_id="stale", updated_at=utcnow() - timedelta(days=30))
        monkeypatch.setattr(expire, "SessionLocal", session_factory)

        assert purge_stale_guest_carts_task.delay().get() == 1


class TestLockService:
    def test_acquire_and_release(self):
        locks = LockService(client=fakeredis.FakeRedis(decode_responses=True))
        assert locks.acquire("k", "t1", 30) is True
        assert locks.acquire("k", "t2", 30) is False
        # cudzy token nie zdejmie locka
        assert locks.release("k", "t2") is False
        assert locks.release("k", "t1") is True
        assert locks.acquire("k", "t2", 30) is True

    def test_lock_expires(self):
        locks = LockService(client=fakeredis.FakeRedis(decode_responses=True))
        locks.acquire("k", "t1", 30)
        assert 0 < locks.redis.ttl("k") <= 30


class TestSeed:
    def test_seed_is_idempotent(self, db):
        seed(db)
        seed(db)
        assert db.execute(select(func.count()).select_from(ProductModel)).scalar_one() == 4

    def test_seeded_tokens_resolve(self, db):
        seed(db)
        assert AuthService(db).resolve_user(DEV_CUSTOMER_TOKEN).email == "customer@example.com"
        assert AuthService(db).resolve_admin(DEV_ADMIN_TOKEN).username == "admin"


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == "1.0.0"
        assert "timestamp" in data
