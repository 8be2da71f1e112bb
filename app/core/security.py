import hashlib
import hmac
from typing import Optional
from jose import jwt, JWTError
from fastapi import HTTPException, status
from pydantic import BaseModel
from app.core.config import settings


def compute_payment_signature(order_id: str, payment_id: str, secret: str) -> str:
    """
    Signature Razorpay attaches to a completed checkout.

    HMAC-SHA256 keyed with the account secret over "<order_id>|<payment_id>",
    rendered as lowercase hex. Field order and the "|" delimiter are fixed by
    the gateway.
    """
    message = f"{order_id}|{payment_id}"
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def signatures_match(expected: str, supplied: str) -> bool:
    # compare_digest only takes ASCII str, so compare the encoded bytes
    return hmac.compare_digest(expected.encode("utf-8"), supplied.encode("utf-8"))


class TokenData(BaseModel):
    id: Optional[str] = None
    email: Optional[str] = None

def verify_token(token: str) -> TokenData:
    try:
        payload = jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=["HS256"],
            options={"verify_aud": False}
        )
        user_id: str = payload.get("sub")
        email: str = payload.get("email")
        if user_id is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return TokenData(id=user_id, email=email)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
