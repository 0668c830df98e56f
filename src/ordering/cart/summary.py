"""Cart reads: stored lines and the checkout price summary."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart

GST_RATE = 0.18


def get_cart_items(user_id):
    """Return the user's cart lines as plain dicts, or ``[]`` without a cart."""
    try:
        cart = current_domain.repository_for(Cart).get(user_id)
    except ObjectNotFoundError:
        return []
    return cart.to_list()


def summarize_cart(items, tax_rate=GST_RATE):
    """Subtotal, GST and total for a list of cart line dicts."""
    subtotal = sum(float(item["price"]) * int(item["quantity"]) for item in items)
    tax = subtotal * tax_rate
    return {
        "item_count": sum(int(item["quantity"]) for item in items),
        "subtotal": round(subtotal, 2),
        "tax": round(tax, 2),
        "total": round(subtotal + tax, 2),
    }
