# Storefront Models

from .selection import ProductRef, SelectionItem, PricingBreakdown, DraftProduct, CheckoutDraft
from .forms import GuestForm, GuestFormUpdate, Identity, FormErrors
from .payment import (
    PaymentMethod,
    PaymentMethodChoice,
    PaymentOutcome,
    CustomerPayload,
    CreateCheckoutSessionRequest,
    CheckoutSession,
    VerifiedSession,
    ONLINE_BANKING_OPTIONS,
    CARD_OPTIONS,
    METHOD_LABELS,
    classify_status,
)

__all__ = [
    "ProductRef",
    "SelectionItem",
    "PricingBreakdown",
    "DraftProduct",
    "CheckoutDraft",
    "GuestForm",
    "GuestFormUpdate",
    "Identity",
    "FormErrors",
    "PaymentMethod",
    "PaymentMethodChoice",
    "PaymentOutcome",
    "CustomerPayload",
    "CreateCheckoutSessionRequest",
    "CheckoutSession",
    "VerifiedSession",
    "ONLINE_BANKING_OPTIONS",
    "CARD_OPTIONS",
    "METHOD_LABELS",
    "classify_status",
]
