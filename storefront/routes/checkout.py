"""Checkout API routes for the storefront"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import BaseModel

from ..core.config import settings
from ..core.session import ShopperSession
from ..models.forms import GuestForm, GuestFormUpdate, Identity
from ..models.payment import PaymentMethod
from ..models.selection import SelectionItem, CheckoutDraft
from ..services.checkout_controller import CheckoutPhase, CheckoutState, SubmitInProgress
from ..services.pricing import compute_breakdown, format_price, format_handling_fee
from .dependencies import get_shopper, get_identity, remember_shopper

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


class PaymentMethodRequest(BaseModel):
    """Request to change the payment method"""
    method: PaymentMethod
    bank: Optional[str] = None
    card_brand: Optional[str] = None


class BuyNowRequest(BaseModel):
    """Direct purchase of a single item"""
    item: SelectionItem
    payment_method: PaymentMethod = PaymentMethod.GCASH
    bank: Optional[str] = None
    card_brand: Optional[str] = None


def _apply_payment_method(
    shopper: ShopperSession,
    method: PaymentMethod,
    bank: Optional[str] = None,
    card_brand: Optional[str] = None,
) -> None:
    controller = shopper.controller
    try:
        controller.select_method(method)
        if bank:
            controller.selector.select_bank(bank)
        if card_brand:
            controller.selector.select_card_brand(card_brand)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _state_response(shopper: ShopperSession, state: CheckoutState) -> Response:
    """Redirect to the gateway, or report why the attempt stopped"""
    if state.phase == CheckoutPhase.REDIRECTING:
        response = RedirectResponse(url=state.redirect_url, status_code=303)
    else:
        status_code = 422 if state.errors else 200
        response = JSONResponse(content=state.to_dict(), status_code=status_code)
    return remember_shopper(response, shopper)


def _landing_redirect(shopper: ShopperSession) -> Response:
    return remember_shopper(RedirectResponse(url=settings.landing_url, status_code=303), shopper)


def _draft_summary(draft: CheckoutDraft) -> dict:
    item = draft.to_selection()
    return {
        "draft": draft.model_dump(by_alias=True),
        "variants": item.variant_labels,
        "display": {
            "price": format_price(draft.product.price, settings.currency),
            "subtotal": format_price(draft.subtotal, settings.currency),
            "handling_fee": format_handling_fee(draft.handling_fee, settings.currency),
            "total": format_price(draft.total, settings.currency),
        },
    }


@router.post("/buy-now")
async def buy_now(
    request: BuyNowRequest,
    shopper: ShopperSession = Depends(get_shopper),
    identity: Optional[Identity] = Depends(get_identity),
):
    """
    Start a gateway session for a single item.

    Redirects (303) to the gateway on success. Otherwise returns the
    checkout state with the notice or alert to show.
    """
    _apply_payment_method(shopper, request.payment_method, request.bank, request.card_brand)
    try:
        state = await shopper.controller.submit(request.item, identity=identity)
    except SubmitInProgress:
        raise HTTPException(status_code=409, detail="Checkout already in progress")
    return _state_response(shopper, state)


@router.post("/draft")
async def save_draft(
    item: SelectionItem,
    shopper: ShopperSession = Depends(get_shopper),
):
    """Save a guest checkout draft and point the shopper at the checkout page"""
    if not shopper.controller.submit_enabled and shopper.controller.state.phase != CheckoutPhase.REDIRECTING:
        raise HTTPException(status_code=409, detail="Checkout already in progress")

    breakdown = compute_breakdown(
        item.product.price,
        item.quantity,
        threshold=settings.free_shipping_threshold,
        flat_fee=settings.handling_fee,
    )
    draft = CheckoutDraft.from_selection(item, breakdown)
    shopper.drafts.save(draft)
    shopper.controller.reset()

    payload = _draft_summary(draft)
    payload["next"] = settings.guest_checkout_url
    return remember_shopper(JSONResponse(content=payload), shopper)


@router.get("/draft")
async def get_draft(shopper: ShopperSession = Depends(get_shopper)):
    """Load the pending draft; missing or damaged drafts send the shopper home"""
    draft = shopper.drafts.load()
    if draft is None:
        return _landing_redirect(shopper)

    payload = _draft_summary(draft)
    payload["payment"] = shopper.controller.selector.to_dict()
    payload["form"] = shopper.form.model_dump()
    payload["state"] = shopper.controller.state.to_dict()
    return remember_shopper(JSONResponse(content=payload), shopper)


@router.put("/payment-method")
async def select_payment_method(
    request: PaymentMethodRequest,
    shopper: ShopperSession = Depends(get_shopper),
):
    """Change payment method and sub-option"""
    _apply_payment_method(shopper, request.method, request.bank, request.card_brand)
    return remember_shopper(JSONResponse(content=shopper.controller.selector.to_dict()), shopper)


@router.patch("/form")
async def update_form(
    update: GuestFormUpdate,
    shopper: ShopperSession = Depends(get_shopper),
):
    """Update guest form fields; edited fields lose their error immediately"""
    form = shopper.form
    for name, value in update.model_dump(exclude_unset=True).items():
        form = shopper.controller.set_field(form, name, value or "")
    shopper.form = form
    return remember_shopper(
        JSONResponse(content={
            "form": form.model_dump(),
            "errors": dict(shopper.controller.state.errors),
        }),
        shopper,
    )


@router.post("/submit")
async def submit_guest_checkout(
    form: GuestForm,
    shopper: ShopperSession = Depends(get_shopper),
    identity: Optional[Identity] = Depends(get_identity),
):
    """
    Submit the guest checkout.

    Validates the form, prices the saved draft and opens a gateway
    session. The draft is cleared only once the gateway URL is known.
    """
    shopper.form = form
    draft = shopper.drafts.load()
    if draft is None:
        return _landing_redirect(shopper)

    try:
        state = await shopper.controller.submit(draft.to_selection(), form=form, identity=identity)
    except SubmitInProgress:
        raise HTTPException(status_code=409, detail="Checkout already in progress")

    if state.phase == CheckoutPhase.REDIRECTING:
        shopper.form = GuestForm()
    return _state_response(shopper, state)


@router.get("/state")
async def get_state(shopper: ShopperSession = Depends(get_shopper)):
    """Current checkout state"""
    return remember_shopper(JSONResponse(content=shopper.controller.state.to_dict()), shopper)
