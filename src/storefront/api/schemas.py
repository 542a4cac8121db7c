"""Pydantic request/response schemas for the storefront API.

These are the external contracts: JSON keys are camelCase on the wire and
snake_case in Python. They are kept separate from the Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartItemSchema(CamelModel):
    product_id: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image: str = Field("", max_length=1024)


class ShippingInfoSchema(CamelModel):
    phone_number: str = Field(..., pattern=r"^\d{10}$")
    address: str = Field(..., min_length=1, max_length=30)
    payment_method: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Jane Doe", "email": "jane.doe@example.com", "password": "correct-horse"}]
        },
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1)


class LoginRequest(CamelModel):
    model_config = {
        "json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "password": "correct-horse"}]},
    }

    email: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1)


class AddToCartRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "item": {
                        "productId": "p1",
                        "name": "Desk Lamp",
                        "price": 10.0,
                        "quantity": 2,
                        "image": "https://cdn.example.com/p1.png",
                    }
                }
            ]
        },
    }

    item: CartItemSchema


class CartRequest(CamelModel):
    """Body of PUT /cart and POST /merge-cart."""

    cart: list[CartItemSchema]


class UpdateCartItemRequest(CamelModel):
    quantity: int = Field(..., ge=1)


class FavoriteRequest(CamelModel):
    product_id: str = Field(..., min_length=1, max_length=255)


class CreateOrderRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"productId": "p1", "name": "Desk Lamp", "price": 10.0, "quantity": 5, "image": ""}],
                    "total": 50.0,
                    "shippingInfo": {
                        "phoneNumber": "0912345678",
                        "address": "12 Main St, Springfield",
                        "paymentMethod": "credit-card",
                    },
                }
            ]
        },
    }

    items: list[CartItemSchema] = Field(..., min_length=1)
    total: float = Field(..., ge=0)
    shipping_info: ShippingInfoSchema


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class MessageResponse(CamelModel):
    message: str


class UserSummary(CamelModel):
    id: str
    name: str
    email: str


class LoginResponse(CamelModel):
    message: str = "Login successful"
    user: UserSummary
    token: str


class OrderSchema(CamelModel):
    id: str
    items: list[CartItemSchema]
    total: float
    created_at: datetime
    shipping_info: ShippingInfoSchema


class ProfileResponse(CamelModel):
    id: str
    name: str
    email: str
    favorites: list[str]
    cart: list[CartItemSchema]
    orders: list[OrderSchema]


class CartResponse(CamelModel):
    cart: list[CartItemSchema]


class CartUpdateResponse(CamelModel):
    message: str
    cart: list[CartItemSchema]


class FavoritesResponse(CamelModel):
    favorites: list[str]


class FavoritesUpdateResponse(CamelModel):
    message: str
    favorites: list[str]


class OrderCreatedResponse(CamelModel):
    message: str = "Order created successfully"
    order: OrderSchema
