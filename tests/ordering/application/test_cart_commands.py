"""Application tests for cart item commands."""

import pytest
from ordering.cart.cart import Cart
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.summary import get_cart_items
from protean.exceptions import ExpectedVersionError, ValidationError
from protean.utils.globals import current_domain


def _add(user_id="user-1", service_id="svc-1", name="Tap repair", price=299.0):
    current_domain.process(
        AddToCart(user_id=user_id, service_id=service_id, name=name, price=price),
        asynchronous=False,
    )


class TestAddToCart:
    def test_first_add_creates_cart(self):
        _add()
        cart = current_domain.repository_for(Cart).get("user-1")
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 1

    def test_repeated_add_merges_lines(self):
        _add()
        _add()
        items = get_cart_items("user-1")
        assert len(items) == 1
        assert items[0]["quantity"] == 2

    def test_carts_are_per_user(self):
        _add(user_id="user-1")
        _add(user_id="user-2", service_id="svc-2", name="Fan install", price=499.0)
        assert [i["id"] for i in get_cart_items("user-1")] == ["svc-1"]
        assert [i["id"] for i in get_cart_items("user-2")] == ["svc-2"]


class TestUpdateCartQuantity:
    def test_update_persists(self):
        _add()
        changed = current_domain.process(
            UpdateCartQuantity(user_id="user-1", service_id="svc-1", new_quantity=4),
            asynchronous=False,
        )
        assert changed is True
        assert get_cart_items("user-1")[0]["quantity"] == 4

    def test_update_to_zero_removes_line(self):
        _add()
        current_domain.process(
            UpdateCartQuantity(user_id="user-1", service_id="svc-1", new_quantity=0),
            asynchronous=False,
        )
        assert get_cart_items("user-1") == []

    def test_update_above_maximum_raises(self):
        _add()
        with pytest.raises(ValidationError):
            current_domain.process(
                UpdateCartQuantity(user_id="user-1", service_id="svc-1", new_quantity=100),
                asynchronous=False,
            )
        assert get_cart_items("user-1")[0]["quantity"] == 1

    def test_update_without_cart_returns_false(self):
        changed = current_domain.process(
            UpdateCartQuantity(user_id="nobody", service_id="svc-1", new_quantity=2),
            asynchronous=False,
        )
        assert changed is False

    def test_update_missing_line_returns_false(self):
        _add()
        changed = current_domain.process(
            UpdateCartQuantity(user_id="user-1", service_id="svc-9", new_quantity=2),
            asynchronous=False,
        )
        assert changed is False


class TestRemoveFromCart:
    def test_remove_persists(self):
        _add()
        removed = current_domain.process(
            RemoveFromCart(user_id="user-1", service_id="svc-1"),
            asynchronous=False,
        )
        assert removed is True
        assert get_cart_items("user-1") == []

    def test_remove_without_cart_returns_false(self):
        removed = current_domain.process(
            RemoveFromCart(user_id="nobody", service_id="svc-1"),
            asynchronous=False,
        )
        assert removed is False


def test_stale_cart_copy_cannot_overwrite_a_newer_save():
    _add()
    repo = current_domain.repository_for(Cart)
    first = repo.get("user-1")
    second = repo.get("user-1")

    first.update_item_quantity("svc-1", 5)
    repo.add(first)

    second.remove_item("svc-1")
    with pytest.raises(ExpectedVersionError):
        repo.add(second)

    assert get_cart_items("user-1")[0]["quantity"] == 5


def test_get_cart_items_without_cart_is_empty():
    assert get_cart_items("nobody") == []
