"""Error types raised by the storefront domain and mapped to HTTP responses.

Input validation failures use ``protean.exceptions.ValidationError`` and a
missing aggregate surfaces as ``protean.exceptions.ObjectNotFoundError``; the
classes here cover the remaining cases.
"""


class StorefrontError(Exception):
    """Base class for expected, client-facing failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConflictError(StorefrontError):
    """The requested write collides with existing data (e.g. a taken email)."""

    status_code = 400


class BadRequestError(StorefrontError):
    """The request is well-formed but does not apply to the current state."""

    status_code = 400


class AuthenticationError(StorefrontError):
    """Credentials or bearer token were missing, wrong, or expired."""

    status_code = 401


class NotFoundError(StorefrontError):
    """A sub-entity addressed through its user does not exist."""

    status_code = 404
