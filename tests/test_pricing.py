"""Tests for the pricing calculator."""
import pytest

from storefront.services.pricing import (
    compute_breakdown,
    format_price,
    format_handling_fee,
    FREE_SHIPPING_THRESHOLD,
    FLAT_HANDLING_FEE,
)


def test_free_handling_above_threshold():
    breakdown = compute_breakdown(6000, 1)
    assert breakdown.subtotal == 6000
    assert breakdown.handling_fee == 0
    assert breakdown.total == 6000


def test_flat_fee_below_threshold():
    breakdown = compute_breakdown(1000, 3)
    assert breakdown.subtotal == 3000
    assert breakdown.handling_fee == 99
    assert breakdown.total == 3099


def test_threshold_is_inclusive():
    assert compute_breakdown(5000, 1).handling_fee == 0
    assert compute_breakdown(2500, 2).handling_fee == 0
    assert compute_breakdown(4999.99, 1).handling_fee == FLAT_HANDLING_FEE


@pytest.mark.parametrize("unit_price", [0.5, 1, 99, 1249.5, 2499.99, 4999, 5000, 7450, 125000])
@pytest.mark.parametrize("quantity", [1, 2, 3, 7, 40])
def test_breakdown_invariants(unit_price, quantity):
    breakdown = compute_breakdown(unit_price, quantity)
    assert breakdown.subtotal == unit_price * quantity
    assert breakdown.total == breakdown.subtotal + breakdown.handling_fee
    assert breakdown.handling_fee in (0, FLAT_HANDLING_FEE)
    assert (breakdown.handling_fee == 0) == (breakdown.subtotal >= FREE_SHIPPING_THRESHOLD)


def test_breakdown_is_pure():
    first = compute_breakdown(1899, 2)
    second = compute_breakdown(1899, 2)
    assert first == second
    assert first is not second


def test_custom_threshold_and_fee():
    breakdown = compute_breakdown(800, 2, threshold=1500, flat_fee=150)
    assert breakdown.handling_fee == 0
    breakdown = compute_breakdown(700, 2, threshold=1500, flat_fee=150)
    assert breakdown.handling_fee == 150
    assert breakdown.total == 1550


def test_format_price():
    assert format_price(12500) == "PHP 12,500"
    assert format_price(1249.5) == "PHP 1,249.50"
    assert format_handling_fee(0) == "Free"
    assert format_handling_fee(99) == "PHP 99"
