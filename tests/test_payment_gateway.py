"""Tests for the payment gateway clients."""

from decimal import Decimal

import pytest
import requests

from storefront.errors import PaymentGatewayError
from storefront.services import payment_gateway
from storefront.services.payment_gateway import HttpPaymentGateway, MockPaymentGateway


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def authorize(gateway):
    return gateway.authorize(Decimal("10.00"), "USD", "card", {"card_last4": "4242"})


class TestMockGateway:
    def test_always_succeeds(self):
        result = authorize(MockPaymentGateway())
        assert result.success is True
        assert result.status == "paid"
        assert result.transaction_id.startswith("txn_mock_")


class TestHttpGateway:
    def test_success(self, monkeypatch):
        calls = {}

        def fake_post(url, json, timeout):
            calls.update(url=url, json=json, timeout=timeout)
            return FakeResponse({"success": True, "transaction_id": "txn_1", "status": "paid"})

        monkeypatch.setattr(payment_gateway.requests, "post", fake_post)
        result = authorize(HttpPaymentGateway(base_url="http://pay.local/", timeout=3))

        assert result.success is True
        assert result.transaction_id == "txn_1"
        assert calls["url"] == "http://pay.local/payments/authorize"
        assert calls["timeout"] == 3
        assert calls["json"]["amount"] == "10.00"

    def test_decline(self, monkeypatch):
        monkeypatch.setattr(
            payment_gateway.requests,
            "post",
            lambda url, json, timeout: FakeResponse({"success": False, "status": "declined"}),
        )
        result = authorize(HttpPaymentGateway(base_url="http://pay.local"))
        assert result.success is False
        assert result.status == "declined"

    def test_timeout(self, monkeypatch):
        def fake_post(url, json, timeout):
            raise requests.Timeout("timed out")

        monkeypatch.setattr(payment_gateway.requests, "post", fake_post)
        with pytest.raises(PaymentGatewayError):
            authorize(HttpPaymentGateway(base_url="http://pay.local"))

    def test_server_error(self, monkeypatch):
        monkeypatch.setattr(payment_gateway.requests, "post", lambda url, json, timeout: FakeResponse({}, 503))
        with pytest.raises(PaymentGatewayError):
            authorize(HttpPaymentGateway(base_url="http://pay.local"))

    def test_invalid_json(self, monkeypatch):
        monkeypatch.setattr(payment_gateway.requests, "post", lambda url, json, timeout: FakeResponse(None))
        with pytest.raises(PaymentGatewayError):
            authorize(HttpPaymentGateway(base_url="http://pay.local"))


class TestGatewaySelection:
    def test_mock_without_url(self, monkeypatch):
        monkeypatch.setattr(payment_gateway, "PAYMENT_GATEWAY_URL", "")
        assert isinstance(payment_gateway.get_payment_gateway(), MockPaymentGateway)

    def test_http_with_url(self, monkeypatch):
        monkeypatch.setattr(payment_gateway, "PAYMENT_GATEWAY_URL", "http://pay.local")
        assert isinstance(payment_gateway.get_payment_gateway(), HttpPaymentGateway)
