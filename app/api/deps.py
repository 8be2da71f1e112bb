from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from app.core.config import settings
from app.core.gateway import RazorpayGateway
from app.core.security import verify_token, TokenData
from app.services.order_service import OrderService
from app.services.verification_service import VerificationService

# The gateway adapter is built once in the app lifespan and kept on app.state.
# Services are cheap and built per request around it, so tests can swap the
# gateway (or a whole service) through app.dependency_overrides.

oauth2_scheme_optional = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    auto_error=False
)

def get_gateway(request: Request) -> RazorpayGateway:
    return request.app.state.gateway

def get_order_service(gateway: RazorpayGateway = Depends(get_gateway)) -> OrderService:
    return OrderService(gateway, key_id=gateway.key_id)

def get_verification_service(gateway: RazorpayGateway = Depends(get_gateway)) -> VerificationService:
    return VerificationService(gateway, key_secret=settings.RAZORPAY_SECRET)

def get_current_user_conditional(token: Optional[str] = Depends(oauth2_scheme_optional)) -> Optional[TokenData]:
    """
    Returns current user if authentication is enabled and token is valid.
    If authentication is disabled via settings, returns None.
    If authentication is enabled but token is invalid/missing, raises HTTPException.
    """
    if not settings.ENABLE_AUTH:
        return None

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return verify_token(token)
