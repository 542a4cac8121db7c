"""Salted password hashing with bcrypt."""

import os

import bcrypt
from protean.exceptions import ValidationError

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72

DEFAULT_ROUNDS = 12


def _rounds() -> int:
    return int(os.environ.get("BCRYPT_ROUNDS", DEFAULT_ROUNDS))


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError({"password": [f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes"]})
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=_rounds())).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES or not password_hash:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
