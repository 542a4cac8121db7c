"""Credential checks for login.

Login only reads the User aggregate, so it is a plain application function
rather than a command.
"""

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.auth.passwords import verify_password
from storefront.auth.tokens import issue_token
from storefront.errors import AuthenticationError
from storefront.user.user import User

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def authenticate(email: str, password: str) -> tuple[User, str]:
    """Check ``email``/``password`` and return the user with a fresh token.

    An unknown email and a wrong password fail with the same error so the
    response does not reveal which accounts exist.
    """
    repo = current_domain.repository_for(User)
    try:
        user = repo.find_by_email(email)
    except ValidationError:
        user = None

    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected")
        raise AuthenticationError(INVALID_CREDENTIALS)

    logger.info("Login succeeded", user_id=str(user.id))
    return user, issue_token(str(user.id))
