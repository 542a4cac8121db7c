"""Signed bearer tokens (JWT, HS256) identifying a user."""

import os
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from storefront.errors import AuthenticationError

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(hours=4)

_DEVELOPMENT_SECRET = "storefront-development-secret"


def _secret() -> str:
    secret = os.environ.get("JWT_SECRET")
    if secret:
        return secret
    if os.environ.get("PROTEAN_ENV") == "production":
        raise RuntimeError("JWT_SECRET must be set in production")
    return _DEVELOPMENT_SECRET


def issue_token(user_id: str, now: datetime | None = None) -> str:
    """Sign a token for ``user_id`` that expires after ``TOKEN_LIFETIME``."""
    issued_at = now or datetime.now(UTC)
    claims = {
        "userId": str(user_id),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + TOKEN_LIFETIME).timestamp()),
    }
    return jwt.encode(claims, _secret(), algorithm=ALGORITHM)


def verify_token(token: str | None) -> str:
    """Return the user id carried by ``token``.

    Raises ``AuthenticationError`` if the token is missing, malformed,
    wrongly signed, expired, or has no user id.
    """
    if not token:
        raise AuthenticationError("No token, authorization denied")

    try:
        claims = jwt.decode(token, _secret(), algorithms=[ALGORITHM])
    except JWTError as exc:
        raise AuthenticationError("Token is not valid") from exc

    user_id = claims.get("userId")
    if not user_id:
        raise AuthenticationError("Token is not valid")
    return str(user_id)
