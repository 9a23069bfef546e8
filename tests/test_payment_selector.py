"""Tests for payment method selection."""
import pytest

from storefront.models import PaymentMethod
from storefront.services.payment_selector import PaymentMethodSelector


def test_defaults():
    selector = PaymentMethodSelector()
    assert selector.selected_method == PaymentMethod.GCASH
    assert selector.selected_bank == "BPI"
    assert selector.selected_card_brand == "Visa"
    assert selector.choice().sub_choice is None


def test_online_banking_always_has_advisory():
    selector = PaymentMethodSelector()
    assert selector.advisory_for(PaymentMethod.ONLINE_BANKING) == "Online Banking (BPI) is coming soon."
    selector.select_bank("UnionBank")
    assert selector.advisory_for(PaymentMethod.ONLINE_BANKING) == "Online Banking (UnionBank) is coming soon."


def test_other_methods_have_no_advisory_by_default():
    selector = PaymentMethodSelector()
    for method in (PaymentMethod.GCASH, PaymentMethod.MAYA, PaymentMethod.CARD):
        assert selector.advisory_for(method) is None


def test_selecting_clears_notice():
    selector = PaymentMethodSelector()
    selector.set_notice("Something went wrong")
    assert selector.advisory_for(PaymentMethod.GCASH) == "Something went wrong"

    selector.select(PaymentMethod.MAYA)
    assert selector.notice is None
    assert selector.advisory_for(PaymentMethod.MAYA) is None


def test_sub_choice_follows_method():
    selector = PaymentMethodSelector()
    selector.select(PaymentMethod.CARD)
    selector.select_card_brand("Mastercard")
    assert selector.choice().sub_choice == "Mastercard"

    selector.select(PaymentMethod.ONLINE_BANKING)
    assert selector.choice().sub_choice == "BPI"


def test_sub_choice_kept_when_switching_back():
    selector = PaymentMethodSelector()
    selector.select(PaymentMethod.CARD)
    selector.select_card_brand("Mastercard")
    selector.select(PaymentMethod.GCASH)
    selector.select(PaymentMethod.CARD)
    assert selector.selected_card_brand == "Mastercard"


def test_unknown_sub_choices_rejected():
    selector = PaymentMethodSelector()
    with pytest.raises(ValueError):
        selector.select_bank("Chase")
    with pytest.raises(ValueError):
        selector.select_card_brand("Amex")


def test_deferred_methods():
    selector = PaymentMethodSelector()
    assert not selector.is_deferred()
    selector.select(PaymentMethod.ONLINE_BANKING)
    assert selector.is_deferred()
