"""Payment method and checkout session models"""

from pydantic import BaseModel, Field
from typing import Any, Optional
from enum import Enum


class PaymentMethod(str, Enum):
    GCASH = "gcash"
    MAYA = "maya"
    ONLINE_BANKING = "online_banking"
    CARD = "card"


ONLINE_BANKING_OPTIONS = ["BPI", "BDO", "UnionBank", "Landbank"]
CARD_OPTIONS = ["Visa", "Mastercard"]

METHOD_LABELS = {
    PaymentMethod.GCASH: "GCash",
    PaymentMethod.MAYA: "Maya",
    PaymentMethod.ONLINE_BANKING: "Online Banking",
    PaymentMethod.CARD: "Cards",
}


class PaymentMethodChoice(BaseModel):
    """Chosen method plus its bank or card brand, when relevant"""
    method: PaymentMethod = PaymentMethod.GCASH
    sub_choice: Optional[str] = None


class CustomerPayload(BaseModel):
    """Customer details forwarded to the payment backend"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class CreateCheckoutSessionRequest(BaseModel):
    """Body of the create-session call"""
    amount: float = Field(gt=0)
    description: str
    payment_method: PaymentMethod
    customer: Optional[CustomerPayload] = None


class CheckoutSession(BaseModel):
    """Session issued by the payment backend"""
    checkout_id: Optional[str] = None
    checkout_url: Optional[str] = None


class VerifiedSession(BaseModel):
    """Result of verifying a checkout session"""
    checkout_id: str
    status: Optional[str] = None
    payment_intent_id: Optional[str] = None
    raw: Optional[dict[str, Any]] = None


class PaymentOutcome(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    FAILED = "failed"


def classify_status(status: Optional[str]) -> PaymentOutcome:
    """Map a gateway session status onto what the confirmation page shows"""
    status = (status or "").lower()
    if "paid" in status and status != "unpaid":
        return PaymentOutcome.PAID
    if status in ("unpaid", "active"):
        return PaymentOutcome.PENDING
    return PaymentOutcome.FAILED
