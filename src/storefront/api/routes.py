"""FastAPI routes for shopper accounts: auth, profile, cart, favorites, orders."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_user_id
from storefront.api.schemas import (
    AddToCartRequest,
    CartRequest,
    CartResponse,
    CartUpdateResponse,
    CreateOrderRequest,
    FavoriteRequest,
    FavoritesResponse,
    FavoritesUpdateResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    OrderCreatedResponse,
    OrderSchema,
    ProfileResponse,
    RegisterRequest,
    UpdateCartItemRequest,
    UserSummary,
)
from storefront.auth.passwords import hash_password
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartItem
from storefront.cart.management import ClearCart, MergeCart, ReplaceCart
from storefront.favorites.management import AddFavorite, RemoveFavorite
from storefront.orders.placement import CreateOrder
from storefront.user.authentication import authenticate
from storefront.user.locks import user_lock
from storefront.user.registration import RegisterUser
from storefront.user.user import User

router = APIRouter(prefix="/api/users", tags=["users"])


def _process(user_id, command):
    """Run ``command`` for ``user_id``, serialized against the user's other writes."""
    with user_lock(user_id):
        return current_domain.process(command, asynchronous=False)


def _load_user(user_id) -> User:
    return current_domain.repository_for(User).get(user_id)


def _lines(items) -> str:
    return json.dumps([item.model_dump() for item in items])


# ---------------------------------------------------------------------------
# Registration & login
# ---------------------------------------------------------------------------
@router.post("/register", status_code=201, response_model=MessageResponse)
def register(body: RegisterRequest) -> MessageResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
    )
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest) -> LoginResponse:
    user, token = authenticate(body.email, body.password)
    return LoginResponse(
        user=UserSummary(id=str(user.id), name=user.name, email=user.email),
        token=token,
    )


@router.get("/profile", response_model=ProfileResponse)
async def profile(user_id: str = Depends(current_user_id)) -> ProfileResponse:
    user = _load_user(user_id)
    return ProfileResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        favorites=user.favorite_product_ids,
        cart=user.cart_snapshot(),
        orders=user.order_history(),
    )


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@router.get("/cart", response_model=CartResponse)
async def list_cart(user_id: str = Depends(current_user_id)) -> CartResponse:
    return CartResponse(cart=_load_user(user_id).cart_snapshot())


@router.post("/cart", response_model=CartUpdateResponse)
async def add_to_cart(body: AddToCartRequest, user_id: str = Depends(current_user_id)) -> CartUpdateResponse:
    command = AddToCart(
        user_id=user_id,
        product_id=body.item.product_id,
        name=body.item.name,
        price=body.item.price,
        quantity=body.item.quantity,
        image=body.item.image,
    )
    _process(user_id, command)
    return CartUpdateResponse(message="Cart updated", cart=_load_user(user_id).cart_snapshot())


@router.put("/cart", response_model=CartUpdateResponse)
async def replace_cart(body: CartRequest, user_id: str = Depends(current_user_id)) -> CartUpdateResponse:
    _process(user_id, ReplaceCart(user_id=user_id, items=_lines(body.cart)))
    return CartUpdateResponse(message="Cart updated", cart=_load_user(user_id).cart_snapshot())


@router.put("/cart/{product_id}", response_model=CartUpdateResponse)
async def update_cart_item(
    product_id: str, body: UpdateCartItemRequest, user_id: str = Depends(current_user_id)
) -> CartUpdateResponse:
    _process(user_id, UpdateCartItem(user_id=user_id, product_id=product_id, quantity=body.quantity))
    return CartUpdateResponse(message="Cart item updated", cart=_load_user(user_id).cart_snapshot())


@router.delete("/cart/{product_id}", response_model=CartUpdateResponse)
async def remove_from_cart(product_id: str, user_id: str = Depends(current_user_id)) -> CartUpdateResponse:
    _process(user_id, RemoveFromCart(user_id=user_id, product_id=product_id))
    return CartUpdateResponse(message="Item removed from cart", cart=_load_user(user_id).cart_snapshot())


@router.delete("/cart", response_model=CartUpdateResponse)
async def clear_cart(user_id: str = Depends(current_user_id)) -> CartUpdateResponse:
    _process(user_id, ClearCart(user_id=user_id))
    return CartUpdateResponse(message="Cart cleared", cart=[])


@router.post("/merge-cart", response_model=CartUpdateResponse)
async def merge_cart(body: CartRequest, user_id: str = Depends(current_user_id)) -> CartUpdateResponse:
    _process(user_id, MergeCart(user_id=user_id, items=_lines(body.cart)))
    return CartUpdateResponse(message="Carts merged", cart=_load_user(user_id).cart_snapshot())


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------
@router.post("/favorites/add", response_model=FavoritesUpdateResponse)
async def add_favorite(body: FavoriteRequest, user_id: str = Depends(current_user_id)) -> FavoritesUpdateResponse:
    added = _process(user_id, AddFavorite(user_id=user_id, product_id=body.product_id))
    return FavoritesUpdateResponse(
        message="Product added to favorites" if added else "Product already in favorites",
        favorites=_load_user(user_id).favorite_product_ids,
    )


@router.post("/favorites/remove", response_model=FavoritesUpdateResponse)
async def remove_favorite(body: FavoriteRequest, user_id: str = Depends(current_user_id)) -> FavoritesUpdateResponse:
    _process(user_id, RemoveFavorite(user_id=user_id, product_id=body.product_id))
    return FavoritesUpdateResponse(
        message="Product removed from favorites",
        favorites=_load_user(user_id).favorite_product_ids,
    )


@router.get("/favorites", response_model=FavoritesResponse)
async def list_favorites(user_id: str = Depends(current_user_id)) -> FavoritesResponse:
    return FavoritesResponse(favorites=_load_user(user_id).favorite_product_ids)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@router.post("/orders", status_code=201, response_model=OrderCreatedResponse)
async def create_order(body: CreateOrderRequest, user_id: str = Depends(current_user_id)) -> OrderCreatedResponse:
    command = CreateOrder(
        user_id=user_id,
        items=_lines(body.items),
        total=body.total,
        shipping_info=json.dumps(body.shipping_info.model_dump()),
    )
    order_id = _process(user_id, command)

    order = next(o for o in _load_user(user_id).order_history() if o["id"] == order_id)
    return OrderCreatedResponse(order=order)


@router.get("/orders", response_model=list[OrderSchema])
async def list_orders(user_id: str = Depends(current_user_id)) -> list[OrderSchema]:
    return [OrderSchema(**order) for order in _load_user(user_id).order_history()]
