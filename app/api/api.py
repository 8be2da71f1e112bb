from datetime import datetime, timezone
from fastapi import APIRouter
from app.api.endpoints import payment
from app.core.config import settings

api_router = APIRouter()
api_router.include_router(payment.router, tags=["payment"])

@api_router.get("/health", tags=["health"])
async def health_check():
    return {
        "status": "OK",
        "message": f"{settings.PROJECT_NAME} is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "razorpayConfigured": settings.razorpay_configured,
    }
