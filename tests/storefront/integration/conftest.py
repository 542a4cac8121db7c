from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from storefront.api.application import create_app
from storefront.domain import storefront


@pytest.fixture()
def app(storefront_bed):
    return create_app(storefront)


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def credentials():
    return {"name": "Jane Doe", "email": f"jane-{uuid4().hex[:8]}@example.com", "password": "correct-horse"}


@pytest.fixture()
def token(client, credentials):
    """Register a fresh shopper and log them in."""
    response = client.post("/api/users/register", json=credentials)
    assert response.status_code == 201
    response = client.post(
        "/api/users/login",
        json={"email": credentials["email"], "password": credentials["password"]},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture()
def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def shipping():
    return {"phoneNumber": "0912345678", "address": "12 Main St, Springfield", "paymentMethod": "credit-card"}
