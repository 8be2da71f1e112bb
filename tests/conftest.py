"""
Pytest configuration and fixtures.
"""
from typing import Any, Iterator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_gateway
from app.core.config import settings
from app.core.gateway import RazorpayGateway
from app.core.security import compute_payment_signature
from app.main import app

TEST_KEY_ID = "rzp_test_key"
TEST_SECRET = "testsecret"


@pytest.fixture
def gateway() -> MagicMock:
    """Gateway double that records calls instead of reaching Razorpay."""
    mock_gateway = MagicMock(spec=RazorpayGateway)
    mock_gateway.key_id = TEST_KEY_ID
    mock_gateway.create_order.side_effect = lambda data: {
        "id": "order_ABC123",
        "entity": "order",
        "amount": data["amount"],
        "currency": data["currency"],
        "receipt": data["receipt"],
        "status": "created",
        "notes": data["notes"],
    }
    mock_gateway.fetch_payment.return_value = {
        "id": "pay_XYZ789",
        "entity": "payment",
        "amount": 49900,
        "currency": "INR",
        "status": "captured",
        "method": "upi",
        "email": "reader@example.com",
        "contact": "+919999999999",
    }
    return mock_gateway


@pytest.fixture
def razorpay_settings(monkeypatch: pytest.MonkeyPatch) -> Any:
    monkeypatch.setattr(settings, "RAZORPAY_KEY_ID", TEST_KEY_ID)
    monkeypatch.setattr(settings, "RAZORPAY_SECRET", TEST_SECRET)
    monkeypatch.setattr(settings, "ENABLE_AUTH", False)
    return settings


@pytest.fixture
def client(gateway: MagicMock, razorpay_settings: Any) -> Iterator[TestClient]:
    """HTTP client with the gateway swapped for the double."""
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_order_data() -> dict:
    return {"planId": "premium_monthly", "amount": 499, "currency": "INR", "userId": "user_42"}


@pytest.fixture
def signed_payment() -> dict:
    """Checkout callback fields carrying a valid signature."""
    return {
        "razorpay_order_id": "order_ABC123",
        "razorpay_payment_id": "pay_XYZ789",
        "razorpay_signature": compute_payment_signature("order_ABC123", "pay_XYZ789", TEST_SECRET),
        "userId": "user_42",
        "planId": "premium_monthly",
    }
