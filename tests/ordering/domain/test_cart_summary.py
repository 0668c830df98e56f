import pytest
from ordering.cart.summary import GST_RATE, summarize_cart


def test_empty_cart_totals_zero():
    assert summarize_cart([]) == {"item_count": 0, "subtotal": 0, "tax": 0, "total": 0}


def test_summary_applies_gst():
    items = [
        {"price": 100.0, "quantity": 2},
        {"price": 50.0, "quantity": 1},
    ]
    summary = summarize_cart(items)

    assert GST_RATE == 0.18
    assert summary["item_count"] == 3
    assert summary["subtotal"] == 250.0
    assert summary["tax"] == 45.0
    assert summary["total"] == 295.0


def test_summary_rounds_to_paise():
    summary = summarize_cart([{"price": 33.33, "quantity": 1}])
    assert summary["tax"] == pytest.approx(6.0)
    assert summary["total"] == pytest.approx(39.33)


def test_custom_tax_rate():
    summary = summarize_cart([{"price": 100.0, "quantity": 1}], tax_rate=0.05)
    assert summary["total"] == 105.0
