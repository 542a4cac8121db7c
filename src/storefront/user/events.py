"""Domain events for the User aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new shopper account was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    email = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class CartItemAdded:
    """A product was put in the cart, or its quantity was bumped by a repeat add."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = String(required=True)
    quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="User")
class CartItemQuantityUpdated:
    """The quantity of a cart item was set to a new value."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = String(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="User")
class CartItemRemoved:
    """A product was taken out of the cart."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = String(required=True)


@storefront.event(part_of="User")
class CartReplaced:
    """The whole cart was overwritten with client-supplied contents."""

    __version__ = 1

    user_id = Identifier(required=True)
    item_count = Integer(required=True)


@storefront.event(part_of="User")
class CartCleared:
    """Every item was removed from the cart."""

    __version__ = 1

    user_id = Identifier(required=True)


@storefront.event(part_of="User")
class CartsMerged:
    """A client-side cart was folded into the stored cart."""

    __version__ = 1

    user_id = Identifier(required=True)
    items_merged_count = Integer(required=True)
    item_count = Integer(required=True)


@storefront.event(part_of="User")
class FavoriteAdded:
    __version__ = 1

    user_id = Identifier(required=True)
    product_id = String(required=True)


@storefront.event(part_of="User")
class FavoriteRemoved:
    __version__ = 1

    user_id = Identifier(required=True)
    product_id = String(required=True)


@storefront.event(part_of="User")
class OrderPlaced:
    """An order was appended to the user's order history."""

    __version__ = 1

    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    created_at = DateTime(required=True)
