import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.exceptions import PaymentError
from app.core.gateway import RazorpayGateway
from app.api.api import api_router
from app.api.deps import get_verification_service
from app.api.endpoints.payment import verify_and_respond
from app.schemas.payment import PaymentVerificationRequest
from app.services.verification_service import VerificationService

# Logging Configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.gateway = RazorpayGateway.from_settings(settings)
    if settings.razorpay_configured:
        logger.info("Razorpay client initialized.")
    else:
        logger.warning("Razorpay credentials not configured! Set RAZORPAY_KEY_ID and RAZORPAY_SECRET.")
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan
)

# CORS Middleware
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(PaymentError)
async def payment_exception_handler(request: Request, exc: PaymentError):
    logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

# Malformed bodies are client errors like missing fields: 400, not 422
@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field_path = " -> ".join(str(loc) for loc in err.get("loc", []))
        messages.append(f"{field_path}: {err.get('msg', 'Invalid input')}")
    logger.warning(f"Invalid request body on {request.method} {request.url.path}: {messages}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request data", "message": "; ".join(messages)},
    )

# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": str(exc)},
    )

# Include Router
app.include_router(api_router, prefix=settings.API_PREFIX)

@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}

@app.post("/")
async def handle_payment_return(
    request: Request,
    service: VerificationService = Depends(get_verification_service),
):
    # Razorpay posts the checkout result here as a form when the order was
    # opened with a callback_url instead of the JS handler.
    form_data = await request.form()
    params = PaymentVerificationRequest(
        razorpay_order_id=form_data.get("razorpay_order_id"),
        razorpay_payment_id=form_data.get("razorpay_payment_id"),
        razorpay_signature=form_data.get("razorpay_signature"),
    )
    result = await verify_and_respond(service, params)
    if isinstance(result, JSONResponse):
        return result
    return JSONResponse(content=result.model_dump(exclude_unset=True))
