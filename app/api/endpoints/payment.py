from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from app.api.deps import get_current_user_conditional, get_order_service, get_verification_service
from app.core.exceptions import PaymentError, ValidationError
from app.core.security import TokenData
from app.schemas.payment import (
    OrderCreateRequest,
    OrderResponse,
    PaymentVerificationRequest,
    VerificationResult,
    VerifyResponse,
)
from app.services.order_service import OrderService
from app.services.verification_service import VerificationService
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/order", response_model=OrderResponse)
async def create_order(
    request: OrderCreateRequest,
    service: OrderService = Depends(get_order_service),
    current_user: Optional[TokenData] = Depends(get_current_user_conditional),
):
    """
    Create a Razorpay order for checkout.

    Accepts: planId, amount (major units), currency, userId
    Returns: order_id, amount (minor units), currency, key_id
    """
    try:
        return await run_in_threadpool(service.create_order, request)
    except ValidationError:
        raise
    except Exception as e:
        logger.error(f"Failed to create order: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to create order", "message": str(e)},
        )


@router.post("/verify", response_model=VerifyResponse, response_model_exclude_unset=True)
async def verify_payment(
    request: PaymentVerificationRequest,
    service: VerificationService = Depends(get_verification_service),
    current_user: Optional[TokenData] = Depends(get_current_user_conditional),
):
    """
    Verify the signature Razorpay returned to the checkout client.

    - 200 with subscriptionId (and payment details when the gateway lookup succeeds)
    - 400 on missing fields or a signature mismatch
    """
    return await verify_and_respond(service, request)


async def verify_and_respond(service: VerificationService, request: PaymentVerificationRequest):
    try:
        result = await run_in_threadpool(service.verify_payment, request)
    except PaymentError:
        raise
    except Exception as e:
        logger.error(f"Verification error: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Verification failed", "message": str(e)},
        )
    return build_verify_response(result)


def build_verify_response(result: VerificationResult) -> VerifyResponse:
    response = VerifyResponse(
        success=result.authentic,
        message="Payment verified successfully",
        subscriptionId=result.subscription_id,
    )
    # Only mark payment as set when enrichment succeeded, so it is left out
    # of the body entirely otherwise.
    if result.payment is not None:
        response.payment = result.payment
    return response
