import logging
import secrets
import time
from typing import Any, Dict, Optional
from app.core.exceptions import SignatureMismatchError, ValidationError
from app.core.gateway import RazorpayGateway
from app.core.security import compute_payment_signature, signatures_match
from app.schemas.payment import PaymentDetails, PaymentVerificationRequest, VerificationResult

logger = logging.getLogger(__name__)

MISSING_PARAMS_MESSAGE = "Missing payment verification parameters"


def generate_subscription_id() -> str:
    # Time ordered with a random suffix; not persisted anywhere.
    return f"sub_{int(time.time() * 1000)}_{secrets.token_hex(4)}"


def payment_details_from_gateway(payment: Dict[str, Any]) -> PaymentDetails:
    return PaymentDetails(
        id=payment["id"],
        amount=payment["amount"] / 100,
        currency=payment.get("currency"),
        status=payment.get("status"),
        method=payment.get("method"),
        email=payment.get("email"),
        contact=payment.get("contact"),
    )


class VerificationService:
    def __init__(self, gateway: RazorpayGateway, key_secret: str):
        self.gateway = gateway
        self.key_secret = key_secret

    def verify_payment(self, request: PaymentVerificationRequest) -> VerificationResult:
        """
        Verifies the checkout signature and, if authentic, fetches payment details.

        1. All of order id, payment id and signature must be present.
        2. The expected signature is recomputed locally from the secret and
           compared in constant time. A mismatch raises SignatureMismatchError
           and nothing else happens.
        3. Payment details are fetched best-effort: a failed fetch is logged
           and the result is still authentic, just without details.
        """
        order_id = request.razorpay_order_id
        payment_id = request.razorpay_payment_id
        signature = request.razorpay_signature

        if not order_id or not payment_id or not signature:
            raise ValidationError(MISSING_PARAMS_MESSAGE)

        if not self.key_secret:
            raise RuntimeError("Razorpay secret not configured")

        expected = compute_payment_signature(order_id, payment_id, self.key_secret)
        if not signatures_match(expected, signature):
            logger.warning(
                f"Payment signature verification failed: order_id={order_id} "
                f"payment_id={payment_id} user_id={request.userId}"
            )
            raise SignatureMismatchError()

        payment = self._fetch_payment_details(payment_id)
        if payment is not None:
            logger.info(
                f"Payment verified successfully: order_id={order_id} payment_id={payment_id} "
                f"user_id={request.userId} plan_id={request.planId} "
                f"amount={payment.amount} status={payment.status}"
            )
        else:
            logger.info(
                f"Payment verified successfully: order_id={order_id} payment_id={payment_id} "
                f"user_id={request.userId} plan_id={request.planId}"
            )

        return VerificationResult(
            authentic=True,
            subscription_id=generate_subscription_id(),
            payment=payment,
        )

    def _fetch_payment_details(self, payment_id: str) -> Optional[PaymentDetails]:
        try:
            return payment_details_from_gateway(self.gateway.fetch_payment(payment_id))
        except Exception as e:
            # Signature is already proven; a failed lookup only drops the details
            logger.error(f"Error fetching payment details for {payment_id}: {e}")
            return None
