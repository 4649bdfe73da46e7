# storefront/data/seed.py
from datetime import timedelta
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.database import SessionLocal, init_db
from storefront.data.models import (
    AddressModel,
    AdminUserModel,
    ProductModel,
    UserModel,
    UserSessionModel,
)
from storefront.data.models.common import utcnow
from storefront.services.auth_service import hash_token
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEV_CUSTOMER_TOKEN = "dev-customer-token"
DEV_ADMIN_TOKEN = "dev-admin-token"

PRODUCTS = [
    # (sku, name, brand, price, sale_price, stock)
    ("SKU-TEE-001", "Classic Tee", "Northwind", "19.99", None, 120),
    ("SKU-HOOD-002", "Zip Hoodie", "Northwind", "54.00", "44.00", 35),
    ("SKU-CAP-003", "Canvas Cap", "Fieldline", "15.50", None, 8),
    ("SKU-BAG-004", "Weekender Bag", "Fieldline", "89.00", None, 0),
]


def seed(db: Session) -> dict:
    """Dane developerskie. Mozna odpalac wielokrotnie, istniejace wiersze zostaja."""
    # not forcing: only seed if empty
    if db.execute(select(UserModel).where(UserModel.email == "customer@example.com")).scalar_one_or_none():
        logger.info("Seed data already present, skipping")
        return {"customer_token": DEV_CUSTOMER_TOKEN, "admin_token": DEV_ADMIN_TOKEN}

    now = utcnow()
    for sku, name, brand, price, sale_price, stock in PRODUCTS:
        db.add(
            ProductModel(
                sku=sku,
                name=name,
                brand=brand,
                price=Decimal(price),
                sale_price=Decimal(sale_price) if sale_price else None,
                stock_quantity=stock,
            )
        )

    customer = UserModel(email="customer@example.com", first_name="Dev", last_name="Customer")
    admin = AdminUserModel(username="admin", email="admin@example.com", role="admin")
    db.add_all([customer, admin])
    db.flush()

    db.add(
        AddressModel(
            user_id=customer.user_id,
            type="shipping",
            first_name="Dev",
            last_name="Customer",
            street_address_1="1 Main Street",
            city="Springfield",
            state_province="IL",
            postal_code="62701",
            country="US",
        )
    )
    db.add_all(
        [
            UserSessionModel(
                user_id=customer.user_id,
                token_hash=hash_token(DEV_CUSTOMER_TOKEN),
                expires_at=now + timedelta(days=30),
            ),
            UserSessionModel(
                admin_id=admin.admin_id,
                token_hash=hash_token(DEV_ADMIN_TOKEN),
                expires_at=now + timedelta(days=30),
            ),
        ]
    )
    db.commit()

    logger.info(f"Seeded {len(PRODUCTS)} products, customer {customer.user_id}, admin {admin.admin_id}")
    return {"customer_token": DEV_CUSTOMER_TOKEN, "admin_token": DEV_ADMIN_TOKEN}


if __name__ == "__main__":
    init_db()
    db = SessionLocal()
    try:
        tokens = seed(db)
    finally:
        db.close()
    print(f"customer token: {tokens['customer_token']}")
    print(f"admin token:    {tokens['admin_token']}")
