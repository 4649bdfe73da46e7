"""Tests for the admin inventory endpoints."""

from sqlalchemy import select

from conftest import make_product
from storefront.data.models import InventoryAdjustmentModel
from storefront.repos.product_repo import ProductRepo


def adjust(client, product_id, headers, **body):
    return client.post(f"/api/admin/inventory/{product_id}/adjust", json=body, headers=headers)


class TestListInventory:
    def test_lists_active_products_by_stock(self, client, db, admin_headers):
        make_product(db, name="Plenty", stock=100)
        make_product(db, name="Low", stock=3)
        make_product(db, name="Empty", stock=0)
        make_product(db, name="Hidden", stock=1, is_active=False)

        response = client.get("/api/admin/inventory", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert [i["product_name"] for i in data["inventory"]] == ["Empty", "Low", "Plenty"]
        assert data["low_stock_count"] == 2
        assert data["out_of_stock_count"] == 1

    def test_custom_threshold(self, client, db, admin_headers):
        make_product(db, name="Mid", stock=20)
        data = client.get("/api/admin/inventory", params={"low_stock_threshold": 25}, headers=admin_headers).json()
        assert data["inventory"][0]["is_low_stock"] is True

    def test_last_restocked(self, client, db, admin_headers):
        product = make_product(db, stock=1)
        data = client.get("/api/admin/inventory", headers=admin_headers).json()
        assert data["inventory"][0]["last_restocked"] is None

        adjust(client, product.product_id, admin_headers, adjustment_type="restock", quantity_change=9, new_quantity=10)
        data = client.get("/api/admin/inventory", headers=admin_headers).json()
        assert data["inventory"][0]["last_restocked"] is not None

    def test_requires_admin(self, client, customer_headers):
        assert client.get("/api/admin/inventory", headers=customer_headers).status_code == 403


class TestAdjustInventory:
    def test_restock(self, client, db, admin, admin_headers, product):
        response = adjust(
            client,
            product.product_id,
            admin_headers,
            adjustment_type="restock",
            quantity_change=10,
            old_quantity=5,
            new_quantity=15,
            reason="Delivery",
        )
        assert response.status_code == 200
        data = response.json()
        assert data["updated_product"] == {"product_id": product.product_id, "stock_quantity": 15}
        assert data["adjustment"]["admin_id"] == admin.admin_id
        assert data["adjustment"]["old_quantity"] == 5

        assert ProductRepo(db).get_stock(product.product_id) == 15
        rows = list(db.execute(select(InventoryAdjustmentModel)).scalars())
        assert len(rows) == 1
        assert rows[0].reason == "Delivery"

    def test_stale_old_quantity(self, client, db, admin_headers, product):
        response = adjust(
            client, product.product_id, admin_headers, adjustment_type="damaged", quantity_change=-1, old_quantity=7, new_quantity=6
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "STOCK_MISMATCH"
        assert ProductRepo(db).get_stock(product.product_id) == 5

    def test_inconsistent_change(self, client, db, admin_headers, product):
        response = adjust(
            client, product.product_id, admin_headers, adjustment_type="adjustment", quantity_change=3, new_quantity=6
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert db.execute(select(InventoryAdjustmentModel)).first() is None

    def test_negative_new_quantity(self, client, admin_headers, product):
        response = adjust(
            client, product.product_id, admin_headers, adjustment_type="damaged", quantity_change=-6, new_quantity=-1
        )
        assert response.status_code == 400

    def test_unknown_adjustment_type(self, client, admin_headers, product):
        response = adjust(
            client, product.product_id, admin_headers, adjustment_type="stolen", quantity_change=-1, new_quantity=4
        )
        assert response.status_code == 400

    def test_inactive_product(self, client, db, admin_headers):
        hidden = make_product(db, name="Hidden", is_active=False)
        response = adjust(client, hidden.product_id, admin_headers, adjustment_type="restock", quantity_change=1, new_quantity=6)
        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    def test_compare_and_set_refuses_stale_value(self, db, product):
        repo = ProductRepo(db)
        assert repo.set_stock(product.product_id, 4, 10, product.updated_at) is False
        assert repo.set_stock(product.product_id, 5, 10, product.updated_at) is True
        assert repo.get_stock(product.product_id) == 10
