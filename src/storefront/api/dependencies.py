"""FastAPI dependencies for bearer-token authentication."""

from fastapi import Header

from storefront.auth.tokens import verify_token
from storefront.errors import AuthenticationError


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        raise AuthenticationError("Token is not valid")
    return token.strip() or None


async def current_user_id(authorization: str | None = Header(None)) -> str:
    """Resolve the authenticated user's id from the request's bearer token."""
    return verify_token(bearer_token(authorization))
