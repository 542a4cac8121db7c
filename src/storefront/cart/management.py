"""Whole-cart management: commands and handler.

Covers wholesale replacement, clearing, and merging a client-side cart
(e.g. one built up before login) into the stored cart.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User

logger = structlog.get_logger(__name__)


def _items(payload):
    return json.loads(payload) if isinstance(payload, str) else payload


@storefront.command(part_of="User")
class ReplaceCart:
    """Overwrite the stored cart with the supplied lines."""

    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, name, price, quantity, image}


@storefront.command(part_of="User")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command(part_of="User")
class MergeCart:
    """Fold client-side cart lines into the stored cart."""

    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, name, price, quantity, image}


@storefront.command_handler(part_of=User)
class ManageCartHandler:
    @handle(ReplaceCart)
    def replace_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        items = _items(command.items)
        user.replace_cart(items)
        repo.add(user)

        logger.info("Cart replaced", user_id=str(command.user_id), item_count=len(items))

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.clear_cart()
        repo.add(user)

        logger.info("Cart cleared", user_id=str(command.user_id))

    @handle(MergeCart)
    def merge_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        items = _items(command.items)
        user.merge_cart(items)
        repo.add(user)

        logger.info(
            "Carts merged",
            user_id=str(command.user_id),
            items_merged_count=len(items),
            item_count=len(user.cart_items),
        )
