from typing import Optional

from pydantic import BaseModel


class CheckoutRequest(BaseModel):
    phone: Optional[str] = None
    plan: Optional[str] = None
    email: Optional[str] = None


class CheckoutResponse(BaseModel):
    checkout_link: Optional[str] = None
    tx_ref: str
    amount: int
