import logging
from typing import Any, Dict, Optional

import razorpay
import requests
from razorpay.errors import BadRequestError, GatewayError as RazorpayGatewayError, ServerError

from app.core.config import Settings
from app.core.exceptions import GatewayError

logger = logging.getLogger(__name__)

# Exceptions the SDK raises for rejected requests, plus transport failures
# (timeouts, refused connections) from the underlying requests session.
GATEWAY_EXCEPTIONS = (
    BadRequestError,
    RazorpayGatewayError,
    ServerError,
    requests.RequestException,
)


class RazorpayGateway:
    """
    Thin adapter over the Razorpay SDK client.

    Built once from settings and handed to the services that need it. No
    retries happen here; each call is bounded by the configured timeout and
    any failure is re-raised as GatewayError.
    """

    def __init__(self, key_id: str, key_secret: str, timeout: float = 10.0, client: Optional[Any] = None):
        self.key_id = key_id
        self.timeout = timeout

        if client is not None:
            self.client = client
        elif key_id and key_secret:
            self.client = razorpay.Client(auth=(key_id, key_secret))
        else:
            self.client = None
            logger.warning("Razorpay keys not set. Payment operations will fail.")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RazorpayGateway":
        return cls(
            key_id=settings.RAZORPAY_KEY_ID,
            key_secret=settings.RAZORPAY_SECRET,
            timeout=settings.GATEWAY_TIMEOUT_SECONDS,
        )

    def _require_client(self):
        if not self.client:
            raise GatewayError("Razorpay client not initialized")
        return self.client

    def create_order(self, data: Dict[str, Any]) -> Dict[str, Any]:
        client = self._require_client()
        try:
            return client.order.create(data=data, timeout=self.timeout)
        except GATEWAY_EXCEPTIONS as e:
            logger.error(f"Error creating Razorpay order: {e}")
            raise GatewayError(str(e), original_error=e) from e

    def fetch_payment(self, payment_id: str) -> Dict[str, Any]:
        client = self._require_client()
        try:
            return client.payment.fetch(payment_id, timeout=self.timeout)
        except GATEWAY_EXCEPTIONS as e:
            logger.error(f"Error fetching Razorpay payment {payment_id}: {e}")
            raise GatewayError(str(e), original_error=e) from e
