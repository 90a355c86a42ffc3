from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.logging_config import get_logger
from app.schemas.billing import CheckoutRequest, CheckoutResponse
from app.services.errors import PaymentFailed
from app.services.payment_service import create_checkout
from app.services.twilio_service import is_valid_nigerian_phone

logger = get_logger("billing")

router = APIRouter(prefix="/billing")


@router.post("/create-checkout", response_model=CheckoutResponse)
def create_checkout_link(payload: CheckoutRequest, settings: Settings = Depends(get_settings)):
    if not payload.phone or not payload.plan or not payload.email:
        return JSONResponse(status_code=400, content={"error": "phone, plan, email required"})
    if not is_valid_nigerian_phone(payload.phone):
        return JSONResponse(status_code=400, content={"error": "must be +234..."})

    try:
        checkout = create_checkout(
            phone=payload.phone,
            plan=payload.plan,
            email=payload.email,
            secret_key=settings.flw_secret_key,
            redirect_url=settings.flw_redirect_url,
        )
    except PaymentFailed as e:
        logger.error(f"Billing error: {e}", extra={"context": {"plan": payload.plan}})
        return JSONResponse(status_code=500, content={"error": "billing failed"})

    return CheckoutResponse(checkout_link=checkout.checkout_link, tx_ref=checkout.tx_ref, amount=checkout.amount)
