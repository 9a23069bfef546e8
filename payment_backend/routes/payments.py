"""Checkout session API routes for the mock payment backend"""

import logging
from fastapi import APIRouter, HTTPException

from ..models import (
    CreateSessionRequest,
    CreateSessionResponse,
    PaymentMethod,
    VerifySessionResponse,
)
from ..database import session_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments/checkout-session", tags=["Payments"])

# Methods the gateway has no rail for yet
UNSUPPORTED_METHODS = {PaymentMethod.ONLINE_BANKING}


@router.post("", response_model=CreateSessionResponse)
async def create_checkout_session(request: CreateSessionRequest):
    """
    Open a gateway checkout session.

    Unsupported methods get an empty response rather than an error, the
    way the gateway answers when it cannot build a checkout page.
    """
    if request.payment_method in UNSUPPORTED_METHODS:
        logger.warning(f"No gateway rail for {request.payment_method.value}")
        return CreateSessionResponse()

    session = session_db.create_session(request)
    logger.info(
        f"Session {session.checkout_id} opened: {session.currency} {session.amount} "
        f"via {session.payment_method.value}"
    )
    return CreateSessionResponse(
        checkout_id=session.checkout_id,
        checkout_url=session.checkout_url,
    )


@router.get("/{checkout_id}", response_model=VerifySessionResponse)
async def verify_checkout_session(checkout_id: str):
    """Report a session's payment status"""
    session = session_db.get_session(checkout_id)
    if not session:
        raise HTTPException(status_code=404, detail="Checkout session not found")

    return VerifySessionResponse(
        checkout_id=session.checkout_id,
        status=session.status.value,
        payment_intent_id=session.payment_intent_id,
        raw=session.model_dump(mode="json"),
    )


@router.post("/{checkout_id}/complete", response_model=VerifySessionResponse)
async def complete_checkout_session(checkout_id: str):
    """Mark a session paid, standing in for the gateway's webhook"""
    session = session_db.mark_paid(checkout_id)
    if not session:
        raise HTTPException(status_code=404, detail="Checkout session not found")

    logger.info(f"Session {checkout_id} paid: {session.payment_intent_id}")
    return VerifySessionResponse(
        checkout_id=session.checkout_id,
        status=session.status.value,
        payment_intent_id=session.payment_intent_id,
    )
