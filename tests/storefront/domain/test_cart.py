"""Tests for cart operations on the User aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.errors import NotFoundError
from storefront.user.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    CartReplaced,
)
from storefront.user.user import User


def _make_user():
    user = User.register(name="Jane Doe", email="jane@example.com", password_hash="hashed")
    user._events.clear()
    return user


def _line(product_id, quantity=1, price=10.0):
    return {"product_id": product_id, "name": f"Product {product_id}", "price": price, "quantity": quantity, "image": ""}


def _quantities(user):
    return {item["product_id"]: item["quantity"] for item in user.cart_snapshot()}


class TestAddToCart:
    def test_add_new_item(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 2, "lamp.png")

        assert user.cart_snapshot() == [
            {"product_id": "p1", "name": "Desk Lamp", "price": 10.0, "quantity": 2, "image": "lamp.png"}
        ]

    def test_image_defaults_to_empty(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 1)
        assert user.cart_snapshot()[0]["image"] == ""

    def test_repeated_adds_sum_into_one_line(self):
        user = _make_user()
        for quantity in (1, 2, 4):
            user.add_to_cart("p1", "Desk Lamp", 10.0, quantity)

        assert len(user.cart_items) == 1
        assert user.cart_items[0].quantity == 7

    def test_quantity_bump_keeps_stored_details(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 1, "lamp.png")
        user.add_to_cart("p1", "Renamed Lamp", 99.0, 1, "other.png")

        item = user.cart_snapshot()[0]
        assert item["name"] == "Desk Lamp"
        assert item["price"] == 10.0
        assert item["image"] == "lamp.png"
        assert item["quantity"] == 2

    def test_different_products_get_separate_lines(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 1)
        user.add_to_cart("p2", "Chair", 50.0, 1)
        assert _quantities(user) == {"p1": 1, "p2": 1}

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_below_one_is_rejected(self, quantity):
        user = _make_user()
        with pytest.raises(ValidationError):
            user.add_to_cart("p1", "Desk Lamp", 10.0, quantity)
        assert len(user.cart_items) == 0

    def test_negative_price_is_rejected(self):
        user = _make_user()
        with pytest.raises(ValidationError):
            user.add_to_cart("p1", "Desk Lamp", -1.0, 1)

    def test_add_raises_event(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 2)
        user.add_to_cart("p1", "Desk Lamp", 10.0, 3)

        events = [e for e in user._events if isinstance(e, CartItemAdded)]
        assert [(e.quantity, e.new_quantity) for e in events] == [(2, 2), (3, 5)]


class TestUpdateCartItem:
    def test_update_replaces_quantity(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 2)
        user.update_cart_item("p1", 5)
        assert user.cart_items[0].quantity == 5

    def test_update_missing_item_raises_not_found(self):
        user = _make_user()
        with pytest.raises(NotFoundError) as exc:
            user.update_cart_item("p404", 2)
        assert exc.value.message == "Item not found in cart"

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_update_to_non_positive_quantity_is_rejected(self, quantity):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 2)
        with pytest.raises(ValidationError):
            user.update_cart_item("p1", quantity)
        assert user.cart_items[0].quantity == 2

    def test_update_raises_event(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 2)
        user._events.clear()
        user.update_cart_item("p1", 5)

        event = user._events[0]
        assert isinstance(event, CartItemQuantityUpdated)
        assert event.previous_quantity == 2
        assert event.new_quantity == 5


class TestRemoveFromCart:
    def test_remove_existing_item(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 1)
        user.add_to_cart("p2", "Chair", 50.0, 1)

        assert user.remove_from_cart("p1") is True
        assert _quantities(user) == {"p2": 1}

    def test_remove_absent_item_is_a_no_op(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 1)
        user._events.clear()

        assert user.remove_from_cart("p404") is False
        assert _quantities(user) == {"p1": 1}
        assert user._events == []

    def test_remove_raises_event(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 1)
        user.remove_from_cart("p1")
        assert any(isinstance(e, CartItemRemoved) and e.product_id == "p1" for e in user._events)


class TestReplaceCart:
    def test_replace_overwrites_cart(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 1)
        user.replace_cart([_line("p2", 3), _line("p3", 1)])
        assert _quantities(user) == {"p2": 3, "p3": 1}

    def test_replace_with_empty_list_empties_cart(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 1)
        user.replace_cart([])
        assert user.cart_snapshot() == []

    def test_replace_with_duplicate_products_is_rejected(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 1)
        with pytest.raises(ValidationError):
            user.replace_cart([_line("p2", 1), _line("p2", 2)])
        assert _quantities(user) == {"p1": 1}

    def test_replace_with_invalid_quantity_is_rejected(self):
        user = _make_user()
        with pytest.raises(ValidationError):
            user.replace_cart([_line("p2", 0)])

    def test_replace_raises_event(self):
        user = _make_user()
        user.replace_cart([_line("p2", 3)])
        event = user._events[-1]
        assert isinstance(event, CartReplaced)
        assert event.item_count == 1


class TestClearCart:
    def test_clear_empties_cart(self):
        user = _make_user()
        user.add_to_cart("p1", "Desk Lamp", 10.0, 1)
        user.add_to_cart("p2", "Chair", 50.0, 2)
        user.clear_cart()
        assert user.cart_snapshot() == []

    def test_clear_on_empty_cart_succeeds(self):
        user = _make_user()
        user.clear_cart()
        assert user.cart_snapshot() == []
        assert isinstance(user._events[-1], CartCleared)
