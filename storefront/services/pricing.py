"""Pricing calculator for checkout selections"""

from ..models.selection import PricingBreakdown

FREE_SHIPPING_THRESHOLD = 5000
FLAT_HANDLING_FEE = 99


def compute_breakdown(
    unit_price: float,
    quantity: int,
    *,
    threshold: float = FREE_SHIPPING_THRESHOLD,
    flat_fee: float = FLAT_HANDLING_FEE,
) -> PricingBreakdown:
    """
    Price a selection.

    The handling fee is waived once the subtotal reaches the threshold.
    Inputs are assumed valid (price > 0, quantity >= 1); the request
    models enforce that before anything reaches here.
    """
    subtotal = unit_price * quantity
    handling_fee = 0 if subtotal >= threshold else flat_fee
    return PricingBreakdown(
        subtotal=subtotal,
        handling_fee=handling_fee,
        total=subtotal + handling_fee,
    )


def format_price(amount: float, currency: str = "PHP") -> str:
    """Format an amount the way the order summary shows it"""
    if float(amount).is_integer():
        return f"{currency} {int(amount):,}"
    return f"{currency} {amount:,.2f}"


def format_handling_fee(handling_fee: float, currency: str = "PHP") -> str:
    return format_price(handling_fee, currency) if handling_fee else "Free"
