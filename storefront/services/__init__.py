# Checkout services

from .pricing import compute_breakdown, format_price, FREE_SHIPPING_THRESHOLD, FLAT_HANDLING_FEE
from .validation import validate, clear_field_error
from .payment_selector import PaymentMethodSelector
from .session_client import (
    CheckoutSessionClient,
    SessionClientError,
    SessionCreationError,
    SessionVerificationError,
    UnsupportedPaymentMethodError,
    build_customer_payload,
)
from .checkout_controller import (
    CheckoutController,
    CheckoutPhase,
    CheckoutState,
    InvalidTransition,
    SubmitInProgress,
    transition,
)

__all__ = [
    "compute_breakdown",
    "format_price",
    "FREE_SHIPPING_THRESHOLD",
    "FLAT_HANDLING_FEE",
    "validate",
    "clear_field_error",
    "PaymentMethodSelector",
    "CheckoutSessionClient",
    "SessionClientError",
    "SessionCreationError",
    "SessionVerificationError",
    "UnsupportedPaymentMethodError",
    "build_customer_payload",
    "CheckoutController",
    "CheckoutPhase",
    "CheckoutState",
    "InvalidTransition",
    "SubmitInProgress",
    "transition",
]
