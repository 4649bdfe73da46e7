# storefront/services/payment_gateway.py
import time
from dataclasses import dataclass
from decimal import Decimal

import requests
from requests import RequestException

from storefront.errors import PaymentGatewayError
from storefront.utils.settings import PAYMENT_GATEWAY_URL, PAYMENT_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    transaction_id: str | None
    status: str


class PaymentGateway:
    """
    Interfejs bramki platnosci. Synchroniczny wynik z id transakcji,
    zeby prawdziwa bramka mogla zastapic mocka bez zmian w checkoucie.
    """

    def authorize(
        self,
        amount: Decimal,
        currency: str,
        payment_method: str,
        payment_details: dict,
    ) -> PaymentResult:
        raise NotImplementedError


class MockPaymentGateway(PaymentGateway):
    """Dev mock - zawsze sukces."""

    def authorize(self, amount, currency, payment_method, payment_details) -> PaymentResult:
        logger.info(f"Mock: processing payment of {amount} {currency} via {payment_method}")
        return PaymentResult(
            success=True,
            transaction_id=f"txn_mock_{int(time.time() * 1000)}",
            status="paid",
        )


class HttpPaymentGateway(PaymentGateway):
    # bez retry: odrzucona platnosc to decyzja biznesowa, a ponowienie obciazenia jest niebezpieczne
    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or PAYMENT_GATEWAY_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else PAYMENT_TIMEOUT_SECONDS

    def authorize(self, amount, currency, payment_method, payment_details) -> PaymentResult:
        url = f"{self.base_url}/payments/authorize"
        logger.info(f"PaymentGateway POST {url} amount={amount} {currency}")

        try:
            resp = requests.post(
                url,
                json={
                    "amount": str(amount),
                    "currency": currency,
                    "payment_method": payment_method,
                    "payment_details": payment_details,
                },
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except RequestException as e:
            logger.error(f"Payment gateway unavailable: {e}")
            raise PaymentGatewayError("Payment provider is unavailable. Please try again later.") from e
        except ValueError as e:
            logger.error(f"Payment gateway returned invalid JSON: {e}")
            raise PaymentGatewayError("Payment provider returned an invalid response.") from e

        return PaymentResult(
            success=bool(data.get("success")),
            transaction_id=data.get("transaction_id"),
            status=data.get("status", "failed"),
        )


def get_payment_gateway() -> PaymentGateway:
    if PAYMENT_GATEWAY_URL:
        return HttpPaymentGateway()
    return MockPaymentGateway()
