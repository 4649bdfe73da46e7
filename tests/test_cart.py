"""Tests for the /api/cart endpoints."""

import pytest
from sqlalchemy import func, select

from conftest import make_cart_item, make_product
from storefront.data.models import CartItemModel


def add(client, product_id, quantity=1, headers=None, session_id=None):
    body = {"product_id": product_id, "quantity": quantity}
    if session_id:
        body["session_id"] = session_id
    return client.post("/api/cart", json=body, headers=headers)


class TestCartOwner:
    def test_requires_token_or_session(self, client, product):
        response = add(client, product.product_id)
        assert response.status_code == 400
        assert response.json()["error_code"] == "AUTH_OR_SESSION_REQUIRED"

    def test_get_requires_token_or_session(self, client):
        response = client.get("/api/cart")
        assert response.status_code == 400

    def test_guest_cart_by_session(self, client, product):
        response = add(client, product.product_id, 2, session_id="sess-1")
        assert response.status_code == 201
        item = response.json()["items"][0]
        assert item["session_id"] == "sess-1"
        assert item["user_id"] is None

    def test_token_wins_over_session(self, client, product, customer, customer_headers):
        response = add(client, product.product_id, headers=customer_headers, session_id="sess-1")
        item = response.json()["items"][0]
        assert item["user_id"] == customer.user_id
        assert item["session_id"] is None

    def test_sessions_are_isolated(self, client, product):
        add(client, product.product_id, session_id="sess-1")
        response = client.get("/api/cart", params={"session_id": "sess-2"})
        assert response.json()["items"] == []


class TestCartSummary:
    def test_summary_below_free_shipping(self, client, product, customer_headers):
        response = add(client, product.product_id, 2, headers=customer_headers)
        data = response.json()
        assert data["total_quantity"] == 2
        assert data["subtotal"] == pytest.approx(20.0)
        assert data["shipping_cost"] == pytest.approx(9.99)
        assert data["tax_amount"] == pytest.approx(1.6)
        assert data["total"] == pytest.approx(31.59)
        assert data["items"][0]["line_total"] == pytest.approx(20.0)
        assert data["items"][0]["product"]["sku"] == product.sku

    def test_free_shipping_over_threshold(self, client, db, customer_headers):
        pricey = make_product(db, name="Pricey", price="60.00")
        data = add(client, pricey.product_id, headers=customer_headers).json()
        assert data["shipping_cost"] == 0
        assert data["tax_amount"] == pytest.approx(4.8)

    def test_sale_price_used_for_line_total(self, client, db, customer_headers):
        discounted = make_product(db, name="Discounted", price="20.00", sale_price="15.00")
        data = add(client, discounted.product_id, 2, headers=customer_headers).json()
        assert data["items"][0]["line_total"] == pytest.approx(30.0)

    def test_empty_cart(self, client, customer_headers):
        data = client.get("/api/cart", headers=customer_headers).json()
        assert data["items"] == []
        assert data["total"] == 0
        assert data["shipping_cost"] == 0

    def test_inactive_products_hidden(self, client, db, customer, customer_headers):
        hidden = make_product(db, name="Hidden", is_active=False)
        make_cart_item(db, hidden, user_id=customer.user_id)
        data = client.get("/api/cart", headers=customer_headers).json()
        assert data["items"] == []


class TestAddItem:
    def test_adding_same_product_merges(self, client, db, product, customer_headers):
        add(client, product.product_id, 2, headers=customer_headers)
        data = add(client, product.product_id, 1, headers=customer_headers).json()
        assert len(data["items"]) == 1
        assert data["items"][0]["quantity"] == 3
        assert db.execute(select(func.count()).select_from(CartItemModel)).scalar_one() == 1

    def test_merged_quantity_over_stock(self, client, product, customer_headers):
        add(client, product.product_id, 4, headers=customer_headers)
        response = add(client, product.product_id, 2, headers=customer_headers)
        assert response.status_code == 400
        assert response.json()["error_code"] == "INSUFFICIENT_STOCK"

    def test_unknown_product(self, client, customer_headers):
        response = add(client, "missing", headers=customer_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    def test_zero_quantity(self, client, product, customer_headers):
        response = add(client, product.product_id, 0, headers=customer_headers)
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestUpdateAndRemove:
    def test_update_quantity(self, client, product, customer_headers):
        item_id = add(client, product.product_id, headers=customer_headers).json()["items"][0]["cart_item_id"]
        response = client.patch(f"/api/cart/{item_id}", json={"quantity": 4}, headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["items"][0]["quantity"] == 4

    def test_update_over_stock(self, client, product, customer_headers):
        item_id = add(client, product.product_id, headers=customer_headers).json()["items"][0]["cart_item_id"]
        response = client.patch(f"/api/cart/{item_id}", json={"quantity": 9}, headers=customer_headers)
        assert response.status_code == 400

    def test_cannot_touch_other_owners_item(self, client, db, product, customer_headers):
        foreign = make_cart_item(db, product, session_id="someone-else")
        response = client.patch(f"/api/cart/{foreign.cart_item_id}", json={"quantity": 2}, headers=customer_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "CART_ITEM_NOT_FOUND"

        response = client.delete(f"/api/cart/{foreign.cart_item_id}", headers=customer_headers)
        assert response.status_code == 404

    def test_remove_item(self, client, product):
        item_id = add(client, product.product_id, session_id="sess-1").json()["items"][0]["cart_item_id"]
        response = client.delete(f"/api/cart/{item_id}", params={"session_id": "sess-1"})
        assert response.status_code == 200
        assert client.get("/api/cart", params={"session_id": "sess-1"}).json()["items"] == []

    def test_clear(self, client, db, product, customer_headers):
        other = make_product(db, name="Other")
        add(client, product.product_id, headers=customer_headers)
        add(client, other.product_id, headers=customer_headers)
        add(client, product.product_id, session_id="sess-1")

        response = client.delete("/api/cart/clear", headers=customer_headers)
        assert response.status_code == 200
        assert "2 items" in response.json()["message"]
        assert client.get("/api/cart", headers=customer_headers).json()["items"] == []
        assert len(client.get("/api/cart", params={"session_id": "sess-1"}).json()["items"]) == 1
