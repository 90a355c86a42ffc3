import secrets
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from app.logging_config import get_logger
from app.services.agent_registry import get_agent_price
from app.services.errors import PaymentFailed

logger = get_logger("payment_service")

FLUTTERWAVE_PAYMENTS_URL = "https://api.flutterwave.com/v3/payments"


@dataclass
class Checkout:
    checkout_link: Optional[str]
    tx_ref: str
    amount: int


def build_tx_ref() -> str:
    return f"ODIA-{int(time.time() * 1000)}-{secrets.randbelow(10**6)}"


def create_checkout(
    *,
    phone: str,
    plan: str,
    email: str,
    secret_key: Optional[str],
    redirect_url: str,
    timeout_seconds: float = 30.0,
) -> Checkout:
    """Create a Flutterwave hosted payment link for a monthly agent plan."""
    if not secret_key:
        raise PaymentFailed("Flutterwave secret key is not configured")

    amount = get_agent_price(plan)
    tx_ref = build_tx_ref()
    payload = {
        "tx_ref": tx_ref,
        "amount": amount,
        "currency": "NGN",
        "redirect_url": redirect_url,
        "customer": {"email": email, "phonenumber": phone, "name": email.split("@")[0]},
        "meta": {"plan": plan},
    }

    try:
        with httpx.Client(timeout=timeout_seconds) as client:
            response = client.post(
                FLUTTERWAVE_PAYMENTS_URL,
                headers={"Authorization": f"Bearer {secret_key}", "Content-Type": "application/json"},
                json=payload,
            )
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise PaymentFailed(f"Flutterwave request failed: {e}") from e

    # Success only when the gateway says so literally.
    if not response.is_success or not isinstance(data, dict) or data.get("status") != "success":
        logger.error(
            "Flutterwave error",
            extra={"context": {"status_code": response.status_code, "body": data}},
        )
        raise PaymentFailed(f"Flutterwave error: {response.status_code}")

    details = data.get("data")
    link = details.get("link") if isinstance(details, dict) else None
    return Checkout(checkout_link=link, tx_ref=tx_ref, amount=amount)
