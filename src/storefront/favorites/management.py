"""Favorites management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class AddFavorite:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=255)


@storefront.command(part_of="User")
class RemoveFavorite:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class ManageFavoritesHandler:
    @handle(AddFavorite)
    def add_favorite(self, command):
        """Favorite a product; returns whether the list changed."""
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        added = user.add_favorite(command.product_id)
        if added:
            repo.add(user)
            logger.info("Favorite added", user_id=str(command.user_id), product_id=command.product_id)
        return added

    @handle(RemoveFavorite)
    def remove_favorite(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_favorite(command.product_id)
        repo.add(user)

        logger.info("Favorite removed", user_id=str(command.user_id), product_id=command.product_id)
