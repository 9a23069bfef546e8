"""Order confirmation routes"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import JSONResponse

from ..core.config import settings
from ..core.session import ShopperSession
from ..models.payment import classify_status
from ..services.session_client import CheckoutSessionClient, SessionVerificationError
from .dependencies import get_shopper, get_session_client, remember_shopper

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkout", tags=["Confirmation"])


@router.get("/success")
async def checkout_success(
    shopper: ShopperSession = Depends(get_shopper),
    client: CheckoutSessionClient = Depends(get_session_client),
):
    """
    Verify the shopper's last checkout session.

    Reads the checkout id persisted at hand-off; verification is
    read-only, so reloading this page is harmless.
    """
    checkout_id = shopper.handoff.last_checkout_id()
    if not checkout_id:
        raise HTTPException(status_code=404, detail="No checkout reference found")

    try:
        result = await client.verify_session(checkout_id)
    except SessionVerificationError as e:
        logger.error(f"Could not verify checkout {checkout_id}: {e}")
        raise HTTPException(status_code=502, detail="Verification failed")

    outcome = classify_status(result.status)
    logger.info(f"Checkout {checkout_id} verified: status={result.status} outcome={outcome.value}")
    return remember_shopper(
        JSONResponse(content={
            "checkout_id": result.checkout_id,
            "status": result.status,
            "payment_intent_id": result.payment_intent_id,
            "outcome": outcome.value,
        }),
        shopper,
    )


@router.get("/failed")
async def checkout_failed():
    """Landing payload for a cancelled or failed gateway payment"""
    return {
        "outcome": "failed",
        "message": "Your payment was not completed. No charge was made.",
        "retry_url": settings.guest_checkout_url,
        "home_url": settings.landing_url,
    }
