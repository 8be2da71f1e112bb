from decimal import Decimal
from typing import Optional
from pydantic import BaseModel

# Request fields are optional at the schema level so that a missing field is
# reported by the services as a 400, not rejected by FastAPI as a 422.

class OrderCreateRequest(BaseModel):
    planId: Optional[str] = None
    amount: Optional[Decimal] = None  # Major currency units (e.g. rupees)
    currency: Optional[str] = None
    userId: Optional[str] = None

class OrderResponse(BaseModel):
    order_id: str
    amount: int  # Minor currency units (e.g. paise)
    currency: str
    key_id: str

class PaymentVerificationRequest(BaseModel):
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    userId: Optional[str] = None
    planId: Optional[str] = None

class PaymentDetails(BaseModel):
    id: str
    amount: float  # Major currency units
    currency: Optional[str] = None
    status: Optional[str] = None
    method: Optional[str] = None
    email: Optional[str] = None
    contact: Optional[str] = None

class VerificationResult(BaseModel):
    authentic: bool
    subscription_id: str
    payment: Optional[PaymentDetails] = None

class VerifyResponse(BaseModel):
    success: bool
    message: str
    subscriptionId: str
    payment: Optional[PaymentDetails] = None
