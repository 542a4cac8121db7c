"""Cart item management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=1024)


@storefront.command(part_of="User")
class UpdateCartItem:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="User")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.add_to_cart(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            quantity=command.quantity,
            image=command.image,
        )
        repo.add(user)

        logger.info(
            "Cart item added",
            user_id=str(command.user_id),
            product_id=command.product_id,
            quantity=command.quantity,
        )

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_cart_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(user)

        logger.info(
            "Cart item quantity updated",
            user_id=str(command.user_id),
            product_id=command.product_id,
            quantity=command.quantity,
        )

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        removed = user.remove_from_cart(product_id=command.product_id)
        if removed:
            repo.add(user)

        logger.info(
            "Cart item removed" if removed else "Cart item not in cart",
            user_id=str(command.user_id),
            product_id=command.product_id,
        )
        return removed
