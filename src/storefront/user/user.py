"""User aggregate root with embedded cart, favorites and order history.

Everything a shopper owns lives inside the User: the cart (``CartItem``
entities), the favorites list (an ordered set of product ids) and the order
history (``Order`` entities). The aggregate is loaded, mutated and saved as a
single unit, so the "one cart line per product" rule and the order snapshots
are always checked against the full picture.
"""

import json
import re
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.errors import BadRequestError, NotFoundError
from storefront.shared.email import normalize_email
from storefront.user.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    CartReplaced,
    CartsMerged,
    FavoriteAdded,
    FavoriteRemoved,
    OrderPlaced,
    UserRegistered,
)

_PHONE_NUMBER = re.compile(r"\d{10}")

# Keys of a cart line / order line as exchanged with callers
LINE_ITEM_FIELDS = ("product_id", "name", "price", "quantity", "image")


def _require_positive_quantity(quantity):
    if quantity is None or isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be a whole number of at least 1"]})


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="User")
class ShippingInfo:
    """Where and how an order is delivered and paid, captured at checkout.

    The phone number is exactly ten digits and the address is short enough to
    fit a shipping label.
    """

    phone_number = String(required=True, max_length=10)
    address = String(required=True, max_length=30)
    payment_method = Text(required=True)

    @invariant.post
    def phone_number_is_ten_digits(self):
        if not _PHONE_NUMBER.fullmatch(self.phone_number or ""):
            raise ValidationError({"phone_number": [f"{self.phone_number} is not a valid phone number"]})


@storefront.value_object(part_of="User")
class LineItem:
    """A product line frozen into an order: what was bought, at what price."""

    product_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=1024, default="")

    def to_dict(self):
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "image": self.image or "",
        }


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="User")
class CartItem:
    product_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=1024, default="")
    added_at = DateTime()

    def to_dict(self):
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "image": self.image or "",
        }


@storefront.entity(part_of="User")
class Order:
    """A placed order. Immutable once appended to the user's history.

    Items and total are stored exactly as the caller supplied them; the total
    is not recomputed from the items.
    """

    items = Text(required=True)  # JSON: list of line item dicts
    total = Float(required=True, min_value=0.0)
    shipping_info = ValueObject(ShippingInfo, required=True)
    created_at = DateTime(required=True)

    @property
    def line_items(self):
        return json.loads(self.items) if self.items else []

    def to_dict(self):
        return {
            "id": str(self.id),
            "items": [{key: item.get(key) for key in LINE_ITEM_FIELDS} for item in self.line_items],
            "total": self.total,
            "created_at": self.created_at,
            "shipping_info": {
                "phone_number": self.shipping_info.phone_number,
                "address": self.shipping_info.address,
                "payment_method": self.shipping_info.payment_method,
            },
        }


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class User:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    favorites = Text()  # JSON array of product ids, insertion ordered
    cart_items = HasMany(CartItem)
    orders = HasMany(Order)
    registered_at = DateTime()

    @invariant.post
    def one_cart_line_per_product(self):
        product_ids = [item.product_id for item in self.cart_items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"cart": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, email, password_hash):
        if not name or not name.strip():
            raise ValidationError({"name": ["is required"]})

        normalized_email = normalize_email(email)
        now = datetime.now(UTC)

        user = cls(
            name=name.strip(),
            email=normalized_email,
            password_hash=password_hash,
            favorites=json.dumps([]),
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=user.name,
                email=normalized_email,
                registered_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    @property
    def favorite_product_ids(self):
        return json.loads(self.favorites) if self.favorites else []

    def cart_snapshot(self):
        """Cart lines as plain dicts, in cart order."""
        return [item.to_dict() for item in self.cart_items]

    def order_history(self):
        """Orders as plain dicts, oldest first."""
        return [order.to_dict() for order in sorted(self.orders, key=lambda o: o.created_at)]

    def _cart_item(self, product_id):
        return next((i for i in self.cart_items if i.product_id == str(product_id)), None)

    def _new_cart_item(self, product_id, name, price, quantity, image=None):
        return CartItem(
            product_id=str(product_id),
            name=name,
            price=price,
            quantity=quantity,
            image=image or "",
            added_at=datetime.now(UTC),
        )

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def add_to_cart(self, product_id, name, price, quantity, image=None):
        """Add a product to the cart, or bump the quantity of its existing line.

        On a bump the stored name, price and image are kept as they are.
        """
        _require_positive_quantity(quantity)

        existing = self._cart_item(product_id)
        if existing:
            existing.quantity += quantity
            new_quantity = existing.quantity
        else:
            self.add_cart_items(self._new_cart_item(product_id, name, price, quantity, image))
            new_quantity = quantity

        self.raise_(
            CartItemAdded(
                user_id=self.id,
                product_id=str(product_id),
                quantity=quantity,
                new_quantity=new_quantity,
            )
        )

    def update_cart_item(self, product_id, quantity):
        """Set the quantity of an existing cart line."""
        item = self._cart_item(product_id)
        if item is None:
            raise NotFoundError("Item not found in cart")

        _require_positive_quantity(quantity)

        previous_quantity = item.quantity
        item.quantity = quantity

        self.raise_(
            CartItemQuantityUpdated(
                user_id=self.id,
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_from_cart(self, product_id):
        """Remove a product's line from the cart. Returns False if it was not there."""
        item = self._cart_item(product_id)
        if item is None:
            return False

        self.remove_cart_items(item)
        self.raise_(CartItemRemoved(user_id=self.id, product_id=str(product_id)))
        return True

    def replace_cart(self, items):
        """Overwrite the cart with ``items`` (dicts keyed like ``LINE_ITEM_FIELDS``)."""
        product_ids = [str(item["product_id"]) for item in items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"cart": ["A product can appear only once in the cart"]})
        for item in items:
            _require_positive_quantity(item.get("quantity"))

        with atomic_change(self):
            for existing in list(self.cart_items):
                self.remove_cart_items(existing)
            for item in items:
                self.add_cart_items(
                    self._new_cart_item(
                        item["product_id"], item.get("name"), item.get("price"), item["quantity"], item.get("image")
                    )
                )

        self.raise_(CartReplaced(user_id=self.id, item_count=len(items)))

    def clear_cart(self):
        with atomic_change(self):
            for existing in list(self.cart_items):
                self.remove_cart_items(existing)

        self.raise_(CartCleared(user_id=self.id))

    def merge_cart(self, incoming_items):
        """Fold a client-side cart into the stored one.

        The stored cart is the base. Incoming lines are applied in the order
        given: a product already in the cart has its quantity increased, any
        other line is appended as supplied.
        """
        for incoming in incoming_items:
            _require_positive_quantity(incoming.get("quantity"))

        with atomic_change(self):
            for incoming in incoming_items:
                existing = self._cart_item(incoming["product_id"])
                if existing:
                    existing.quantity += incoming["quantity"]
                else:
                    self.add_cart_items(
                        self._new_cart_item(
                            incoming["product_id"],
                            incoming.get("name"),
                            incoming.get("price"),
                            incoming["quantity"],
                            incoming.get("image"),
                        )
                    )

        self.raise_(
            CartsMerged(
                user_id=self.id,
                items_merged_count=len(incoming_items),
                item_count=len(self.cart_items),
            )
        )

    # -------------------------------------------------------------------
    # Favorites
    # -------------------------------------------------------------------
    def add_favorite(self, product_id):
        """Favorite a product. Returns False when it was already a favorite."""
        favorites = self.favorite_product_ids
        if product_id in favorites:
            return False

        favorites.append(product_id)
        self.favorites = json.dumps(favorites)
        self.raise_(FavoriteAdded(user_id=self.id, product_id=product_id))
        return True

    def remove_favorite(self, product_id):
        favorites = self.favorite_product_ids
        if product_id not in favorites:
            raise BadRequestError("Product not in favorites")

        favorites.remove(product_id)
        self.favorites = json.dumps(favorites)
        self.raise_(FavoriteRemoved(user_id=self.id, product_id=product_id))

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def place_order(self, items, total, shipping_info):
        """Append a new order built verbatim from the caller's items and total.

        The cart is left untouched; clearing it after checkout is up to the
        caller.
        """
        if not items:
            raise ValidationError({"items": ["An order needs at least one item"]})

        line_items = [LineItem(**{key: item.get(key) for key in LINE_ITEM_FIELDS}) for item in items]
        shipping = ShippingInfo(**shipping_info) if isinstance(shipping_info, dict) else shipping_info
        now = datetime.now(UTC)

        order = Order(
            items=json.dumps([line.to_dict() for line in line_items]),
            total=total,
            shipping_info=shipping,
            created_at=now,
        )
        self.add_orders(order)

        self.raise_(
            OrderPlaced(
                user_id=self.id,
                order_id=order.id,
                item_count=len(line_items),
                total=total,
                created_at=now,
            )
        )
        return order
