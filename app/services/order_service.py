import logging
import time
from datetime import datetime, timezone
from decimal import Decimal
from app.core.exceptions import ValidationError
from app.core.gateway import RazorpayGateway
from app.schemas.payment import OrderCreateRequest, OrderResponse

logger = logging.getLogger(__name__)

# Razorpay amounts are always in the smallest currency unit. The factor is
# applied to every currency alike, so callers must send major units.
MINOR_UNITS_PER_MAJOR = 100

MISSING_FIELDS_MESSAGE = "Missing required fields: planId, amount, currency, userId"


def to_minor_units(amount: Decimal) -> int:
    minor = amount * MINOR_UNITS_PER_MAJOR
    if minor != minor.to_integral_value():
        raise ValidationError(f"Amount {amount} has more precision than the currency allows")
    return int(minor)


class OrderService:
    def __init__(self, gateway: RazorpayGateway, key_id: str):
        self.gateway = gateway
        self.key_id = key_id

    def _validate(self, request: OrderCreateRequest) -> None:
        if not request.planId or not request.amount or not request.currency or not request.userId:
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        if request.amount < 0:
            raise ValidationError("Amount must be positive")
        if len(request.currency) != 3 or not request.currency.isalpha():
            raise ValidationError("Currency must be a 3-letter ISO 4217 code")

    def create_order(self, request: OrderCreateRequest) -> OrderResponse:
        """
        Create a Razorpay order for a checkout intent.

        Validation failures never reach the gateway. A gateway failure is
        raised as GatewayError; no deduplication happens, so a retried call
        creates a second order.
        """
        self._validate(request)

        amount_minor = to_minor_units(request.amount)
        data = {
            "amount": amount_minor,
            "currency": request.currency.upper(),
            "receipt": f"receipt_{int(time.time() * 1000)}",
            "notes": {
                "planId": request.planId,
                "userId": request.userId,
                "orderDate": datetime.now(timezone.utc).isoformat(),
            },
        }

        order = self.gateway.create_order(data)
        logger.info(
            f"Order created: order_id={order['id']} user_id={request.userId} "
            f"plan_id={request.planId} amount={amount_minor} currency={order['currency']}"
        )

        return OrderResponse(
            order_id=order["id"],
            amount=order["amount"],
            currency=order["currency"],
            key_id=self.key_id,
        )
