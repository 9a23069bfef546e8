"""Checkout session models for the mock payment backend"""

from pydantic import BaseModel, Field
from typing import Any, Optional
from datetime import datetime
from enum import Enum


class PaymentMethod(str, Enum):
    GCASH = "gcash"
    MAYA = "maya"
    ONLINE_BANKING = "online_banking"
    CARD = "card"


class SessionStatus(str, Enum):
    ACTIVE = "active"
    PAID = "paid"
    EXPIRED = "expired"


class Customer(BaseModel):
    """Customer details attached to a session"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class CreateSessionRequest(BaseModel):
    """Request to open a checkout session"""
    amount: float = Field(gt=0)
    description: str
    payment_method: PaymentMethod
    customer: Optional[Customer] = None


class CreateSessionResponse(BaseModel):
    """Opened session; both fields are null when no gateway rail exists"""
    checkout_id: Optional[str] = None
    checkout_url: Optional[str] = None


class GatewaySession(BaseModel):
    """Session as recorded by the backend"""
    checkout_id: str
    checkout_url: str
    amount: float
    currency: str = "PHP"
    description: str
    payment_method: PaymentMethod
    customer: Optional[Customer] = None
    status: SessionStatus = SessionStatus.ACTIVE
    payment_intent_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class VerifySessionResponse(BaseModel):
    """Verification result for a session"""
    checkout_id: str
    status: Optional[str] = None
    payment_intent_id: Optional[str] = None
    raw: Optional[dict[str, Any]] = None
