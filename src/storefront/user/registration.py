"""User registration: command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import ConflictError
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create a shopper account. Carries the password hash, never the password."""

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ConflictError("Email already in use")

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
        )
        repo.add(user)

        logger.info("User registered", user_id=str(user.id))
        return str(user.id)
