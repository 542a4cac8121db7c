"""Order placement: command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class CreateOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, name, price, quantity, image}
    total = Float(required=True, min_value=0.0)
    shipping_info = Text(required=True)  # JSON: {phone_number, address, payment_method}


@storefront.command_handler(part_of=User)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        shipping_info = (
            json.loads(command.shipping_info) if isinstance(command.shipping_info, str) else command.shipping_info
        )

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        order = user.place_order(items=items, total=command.total, shipping_info=shipping_info)
        repo.add(user)

        logger.info(
            "Order created",
            user_id=str(command.user_id),
            order_id=str(order.id),
            total=command.total,
            item_count=len(items),
        )
        return str(order.id)
