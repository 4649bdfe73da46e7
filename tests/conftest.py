"""Pytest fixtures for storefront tests."""

import os

# przed importem storefront, zeby engine w database.py nie celowal w postgresa
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import timedelta
from decimal import Decimal

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.api import deps
from storefront.celery_worker import celery_app
from storefront.data.database import Base, get_db
from storefront.data.models import (
    AddressModel,
    AdminUserModel,
    CartItemModel,
    ProductModel,
    UserModel,
    UserSessionModel,
)
from storefront.data.models.common import utcnow
from storefront.errors import PaymentGatewayError
from storefront.main import app
from storefront.services.auth_service import hash_token
from storefront.services.lock_service import LockService
from storefront.services.payment_gateway import PaymentGateway, PaymentResult

celery_app.conf.task_always_eager = True
celery_app.conf.task_eager_propagates = True


class RecordingNotifier:
    """Zapisuje wywolania zamiast wysylac taski."""

    def __init__(self):
        self.confirmations = []
        self.status_updates = []

    def send_order_confirmation(self, recipient, order_number, order_id):
        self.confirmations.append((recipient, order_number, order_id))

    def send_status_update(self, recipient, order_number, order_id, new_status, tracking_number=None):
        self.status_updates.append((recipient, order_number, order_id, new_status, tracking_number))


class FakeGateway(PaymentGateway):
    def __init__(self):
        self.success = True
        self.unavailable = False
        self.calls = []

    def authorize(self, amount, currency, payment_method, payment_details):
        self.calls.append((amount, currency, payment_method, payment_details))
        if self.unavailable:
            raise PaymentGatewayError("Payment provider is unavailable. Please try again later.")
        if not self.success:
            return PaymentResult(success=False, transaction_id=None, status="declined")
        return PaymentResult(success=True, transaction_id=f"txn_test_{len(self.calls)}", status="paid")


# =====================================================
# DB
# =====================================================
@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# =====================================================
# Collaborators + client
# =====================================================
@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def lock_service():
    return LockService(client=fakeredis.FakeRedis(decode_responses=True))


@pytest.fixture
def client(db, notifier, gateway, lock_service):
    # app i test dziela jedna sesje, wiec test widzi to samo co request
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[deps.get_notification_service] = lambda: notifier
    app.dependency_overrides[deps.get_payment_gateway] = lambda: gateway
    app.dependency_overrides[deps.get_lock_service] = lambda: lock_service
    # bez "with", lifespan (init_db na prawdziwym engine) nie startuje
    yield TestClient(app)
    app.dependency_overrides.clear()


# =====================================================
# Seed helpers
# =====================================================
def make_product(db, name="Test Product", price="10.00", stock=5, sale_price=None, is_active=True, sku=None):
    product = ProductModel(
        name=name,
        brand="Acme",
        price=Decimal(price),
        sale_price=Decimal(sale_price) if sale_price is not None else None,
        stock_quantity=stock,
        sku=sku or f"SKU-{name.replace(' ', '-').upper()}",
        is_active=is_active,
    )
    db.add(product)
    db.commit()
    return product


def make_user(db, email="customer@example.com", token="customer-token", is_active=True, expires_in=timedelta(days=1)):
    user = UserModel(email=email, first_name="Test", last_name="Customer", is_active=is_active)
    db.add(user)
    db.flush()
    db.add(UserSessionModel(user_id=user.user_id, token_hash=hash_token(token), expires_at=utcnow() + expires_in))
    db.commit()
    return user


def make_admin(db, username="admin", token="admin-token"):
    admin = AdminUserModel(username=username, email=f"{username}@example.com")
    db.add(admin)
    db.flush()
    db.add(UserSessionModel(admin_id=admin.admin_id, token_hash=hash_token(token), expires_at=utcnow() + timedelta(days=1)))
    db.commit()
    return admin


def make_address(db, user_id=None):
    address = AddressModel(
        user_id=user_id,
        first_name="Test",
        last_name="Customer",
        street_address_1="1 Main Street",
        city="Springfield",
        state_province="IL",
        postal_code="62701",
        country="US",
    )
    db.add(address)
    db.commit()
    return address


def make_cart_item(db, product, quantity=1, user_id=None, session_id=None, updated_at=None):
    now = updated_at or utcnow()
    item = CartItemModel(
        user_id=user_id,
        session_id=session_id,
        product_id=product.product_id,
        quantity=quantity,
        added_at=now,
        updated_at=now,
    )
    db.add(item)
    db.commit()
    return item


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def order_payload(lines, address, subtotal=None, guest_email=None):
    """lines: lista (produkt, ilosc). Subtotal domyslnie z aktualnych cen."""
    items = []
    calculated = Decimal("0.00")
    for product, quantity in lines:
        price = product.effective_price
        calculated += price * quantity
        items.append(
            {
                "product_id": product.product_id,
                "product_name": product.name,
                "product_brand": product.brand,
                "product_sku": product.sku,
                "product_price": str(product.price),
                "sale_price": str(product.sale_price) if product.sale_price is not None else None,
                "quantity": quantity,
                "line_total": str(price * quantity),
            }
        )
    declared = Decimal(subtotal) if subtotal is not None else calculated
    payload = {
        "subtotal": str(declared),
        "shipping_cost": "0.00",
        "tax_amount": "0.00",
        "total_amount": str(declared),
        "payment_method": "card",
        "payment_details": {"card_last4": "4242"},
        "shipping_address_id": address.address_id,
        "billing_address_id": address.address_id,
        "shipping_method": "standard",
        "order_items": items,
    }
    if guest_email is not None:
        payload["guest_email"] = guest_email
    return payload


# =====================================================
# Common fixtures
# =====================================================
@pytest.fixture
def product(db):
    return make_product(db)


@pytest.fixture
def customer(db):
    return make_user(db)


@pytest.fixture
def customer_headers(customer):
    return auth("customer-token")


@pytest.fixture
def customer_address(db, customer):
    return make_address(db, user_id=customer.user_id)


@pytest.fixture
def guest_address(db):
    return make_address(db)


@pytest.fixture
def admin(db):
    return make_admin(db)


@pytest.fixture
def admin_headers(admin):
    return auth("admin-token")


@pytest.fixture
def placed_order(client, product, customer_headers, customer_address):
    """Zamowienie zalogowanego klienta, status pending."""
    response = client.post(
        "/api/orders",
        json=order_payload([(product, 1)], customer_address),
        headers=customer_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
