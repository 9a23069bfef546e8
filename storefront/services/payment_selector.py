"""Payment method selection state"""

from typing import Optional

from ..models.payment import (
    PaymentMethod,
    PaymentMethodChoice,
    ONLINE_BANKING_OPTIONS,
    CARD_OPTIONS,
    METHOD_LABELS,
)


DEFERRED_METHODS = frozenset({PaymentMethod.ONLINE_BANKING})


class PaymentMethodSelector:
    """
    Tracks the shopper's payment method and its sub-option.

    Bank and card brand each default to the first entry of their list and
    are kept when the shopper switches away from the method and back.
    Any selection clears a notice left over from an earlier attempt.
    """

    def __init__(self, method: PaymentMethod = PaymentMethod.GCASH):
        self.selected_method = method
        self.selected_bank = ONLINE_BANKING_OPTIONS[0]
        self.selected_card_brand = CARD_OPTIONS[0]
        self.notice: Optional[str] = None

    def select(self, method: PaymentMethod) -> None:
        """Select a payment method"""
        self.selected_method = PaymentMethod(method)
        self.notice = None

    def select_bank(self, bank: str) -> None:
        """Select the bank used for online banking"""
        if bank not in ONLINE_BANKING_OPTIONS:
            raise ValueError(f"Unknown bank: {bank}")
        self.selected_bank = bank
        self.notice = None

    def select_card_brand(self, brand: str) -> None:
        """Select the card brand"""
        if brand not in CARD_OPTIONS:
            raise ValueError(f"Unknown card brand: {brand}")
        self.selected_card_brand = brand
        self.notice = None

    def set_notice(self, notice: Optional[str]) -> None:
        self.notice = notice

    def is_deferred(self, method: Optional[PaymentMethod] = None) -> bool:
        """Whether the method has no gateway rail yet"""
        return (method or self.selected_method) in DEFERRED_METHODS

    def advisory_for(self, method: PaymentMethod) -> Optional[str]:
        """Advisory text shown under a method, if any"""
        if method == PaymentMethod.ONLINE_BANKING:
            return f"{METHOD_LABELS[method]} ({self.selected_bank}) is coming soon."
        if method == self.selected_method:
            return self.notice
        return None

    def sub_choice(self) -> Optional[str]:
        if self.selected_method == PaymentMethod.ONLINE_BANKING:
            return self.selected_bank
        if self.selected_method == PaymentMethod.CARD:
            return self.selected_card_brand
        return None

    def choice(self) -> PaymentMethodChoice:
        """Current method and sub-choice"""
        return PaymentMethodChoice(
            method=self.selected_method,
            sub_choice=self.sub_choice(),
        )

    def to_dict(self) -> dict:
        return {
            "method": self.selected_method.value,
            "label": METHOD_LABELS[self.selected_method],
            "sub_choice": self.sub_choice(),
            "bank": self.selected_bank,
            "card_brand": self.selected_card_brand,
            "advisory": self.advisory_for(self.selected_method),
        }
