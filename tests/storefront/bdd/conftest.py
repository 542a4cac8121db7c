"""Shared BDD fixtures and step definitions for the shopping journey."""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import given, parsers, then
from storefront.api.application import create_app
from storefront.domain import storefront


@pytest.fixture()
def client(storefront_bed):
    return TestClient(create_app(storefront))


@pytest.fixture()
def shopper():
    """Mutable state carried between steps."""
    return {"email": None, "password": None, "headers": {}}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a shopper registered as "{email}" with password "{password}"'))
def registered_shopper(client, shopper, email, password):
    response = client.post("/api/users/register", json={"name": "Jane Doe", "email": email, "password": password})
    assert response.status_code == 201
    shopper.update(email=email, password=password)


@given("the shopper is logged in")
def logged_in(client, shopper):
    response = client.post("/api/users/login", json={"email": shopper["email"], "password": shopper["password"]})
    assert response.status_code == 200
    shopper["headers"] = {"Authorization": f"Bearer {response.json()['token']}"}


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cart contains product "{product_id}" with quantity {quantity:d}'))
def cart_contains(client, shopper, product_id, quantity):
    cart = client.get("/api/users/cart", headers=shopper["headers"]).json()["cart"]
    assert {line["productId"]: line["quantity"] for line in cart}[product_id] == quantity


@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_lines(client, shopper, count):
    assert len(client.get("/api/users/cart", headers=shopper["headers"]).json()["cart"]) == count
