"""Application tests for favorites and order placement commands."""

import json
from uuid import uuid4

import pytest
from protean import current_domain
from storefront.cart.items import AddToCart
from storefront.errors import BadRequestError
from storefront.favorites.management import AddFavorite, RemoveFavorite
from storefront.orders.placement import CreateOrder
from storefront.user.registration import RegisterUser
from storefront.user.user import User


def _register():
    command = RegisterUser(name="Jane Doe", email=f"fav-{uuid4().hex[:8]}@example.com", password_hash="hashed")
    return current_domain.process(command, asynchronous=False)


def _line(product_id, quantity=1, price=10.0):
    return {"product_id": product_id, "name": f"Product {product_id}", "price": price, "quantity": quantity, "image": ""}


def _user(user_id):
    return current_domain.repository_for(User).get(user_id)


class TestFavoriteCommands:
    def test_add_favorite_persists(self):
        user_id = _register()
        added = current_domain.process(AddFavorite(user_id=user_id, product_id="p1"), asynchronous=False)
        assert added is True
        assert _user(user_id).favorite_product_ids == ["p1"]

    def test_adding_existing_favorite_reports_no_change(self):
        user_id = _register()
        current_domain.process(AddFavorite(user_id=user_id, product_id="p1"), asynchronous=False)
        added = current_domain.process(AddFavorite(user_id=user_id, product_id="p1"), asynchronous=False)
        assert added is False
        assert _user(user_id).favorite_product_ids == ["p1"]

    def test_remove_favorite_persists(self):
        user_id = _register()
        current_domain.process(AddFavorite(user_id=user_id, product_id="p1"), asynchronous=False)
        current_domain.process(RemoveFavorite(user_id=user_id, product_id="p1"), asynchronous=False)
        assert _user(user_id).favorite_product_ids == []

    def test_remove_absent_favorite_is_rejected(self):
        user_id = _register()
        with pytest.raises(BadRequestError):
            current_domain.process(RemoveFavorite(user_id=user_id, product_id="p1"), asynchronous=False)


class TestCreateOrderCommand:
    def test_create_order_persists(self, shipping_info):
        user_id = _register()
        order_id = current_domain.process(
            CreateOrder(
                user_id=user_id,
                items=json.dumps([_line("p1", 5)]),
                total=50.0,
                shipping_info=json.dumps(shipping_info),
            ),
            asynchronous=False,
        )

        orders = _user(user_id).order_history()
        assert [o["id"] for o in orders] == [order_id]
        assert orders[0]["total"] == 50.0
        assert orders[0]["items"][0]["quantity"] == 5
        assert orders[0]["shipping_info"] == shipping_info

    def test_create_order_does_not_clear_cart(self, shipping_info):
        user_id = _register()
        current_domain.process(
            AddToCart(user_id=user_id, product_id="p1", name="Product p1", price=10.0, quantity=1),
            asynchronous=False,
        )
        current_domain.process(
            CreateOrder(
                user_id=user_id,
                items=json.dumps([_line("p1")]),
                total=10.0,
                shipping_info=json.dumps(shipping_info),
            ),
            asynchronous=False,
        )
        assert len(_user(user_id).cart_snapshot()) == 1

    def test_orders_accumulate(self, shipping_info):
        user_id = _register()
        for total in (10.0, 20.0):
            current_domain.process(
                CreateOrder(
                    user_id=user_id,
                    items=json.dumps([_line("p1")]),
                    total=total,
                    shipping_info=json.dumps(shipping_info),
                ),
                asynchronous=False,
            )
        assert [o["total"] for o in _user(user_id).order_history()] == [10.0, 20.0]
