"""
Tests for the Razorpay SDK adapter.
"""
from unittest.mock import MagicMock

import pytest
import requests
from razorpay.errors import BadRequestError, ServerError

from app.core.config import Settings
from app.core.exceptions import GatewayError
from app.core.gateway import RazorpayGateway


@pytest.fixture
def sdk_client() -> MagicMock:
    return MagicMock()


def test_create_order_passes_timeout(sdk_client: MagicMock) -> None:
    sdk_client.order.create.return_value = {"id": "order_1", "amount": 100, "currency": "INR"}
    gateway = RazorpayGateway("rzp_test_key", "secret", timeout=10, client=sdk_client)

    order = gateway.create_order({"amount": 100, "currency": "INR"})

    assert order["id"] == "order_1"
    sdk_client.order.create.assert_called_once_with(data={"amount": 100, "currency": "INR"}, timeout=10)


def test_fetch_payment_passes_timeout(sdk_client: MagicMock) -> None:
    sdk_client.payment.fetch.return_value = {"id": "pay_1"}
    gateway = RazorpayGateway("rzp_test_key", "secret", timeout=2.5, client=sdk_client)

    assert gateway.fetch_payment("pay_1") == {"id": "pay_1"}
    sdk_client.payment.fetch.assert_called_once_with("pay_1", timeout=2.5)


@pytest.mark.parametrize("error", [
    BadRequestError("The amount must be atleast INR 1.00"),
    ServerError("Internal error"),
    requests.Timeout("Read timed out"),
    requests.ConnectionError("Connection refused"),
])
def test_sdk_errors_become_gateway_errors(sdk_client: MagicMock, error: Exception) -> None:
    sdk_client.order.create.side_effect = error
    sdk_client.payment.fetch.side_effect = error
    gateway = RazorpayGateway("rzp_test_key", "secret", client=sdk_client)

    with pytest.raises(GatewayError) as exc_info:
        gateway.create_order({"amount": 100})
    assert exc_info.value.original_error is error
    assert str(error) in exc_info.value.message

    with pytest.raises(GatewayError):
        gateway.fetch_payment("pay_1")


def test_unconfigured_gateway_refuses_calls() -> None:
    gateway = RazorpayGateway("", "")

    assert gateway.client is None
    with pytest.raises(GatewayError, match="not initialized"):
        gateway.create_order({"amount": 100})
    with pytest.raises(GatewayError, match="not initialized"):
        gateway.fetch_payment("pay_1")


def test_from_settings() -> None:
    settings = Settings(RAZORPAY_KEY_ID="rzp_test_key", RAZORPAY_SECRET="secret", GATEWAY_TIMEOUT_SECONDS=4)

    gateway = RazorpayGateway.from_settings(settings)

    assert gateway.key_id == "rzp_test_key"
    assert gateway.timeout == 4
    assert gateway.client is not None
