"""Email address normalization and structural validation."""

from protean.exceptions import ValidationError

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def _invalid(email):
    return ValidationError({"email": [f"Invalid email address: {email!r}"]})


def normalize_email(email: str) -> str:
    """Return the canonical (trimmed, lower-cased) form of ``email``.

    Raises ``ValidationError`` when the address is not structurally valid:
    exactly one @, non-empty local and domain parts, a dotted domain without
    leading/trailing hyphens, no consecutive dots and no forbidden characters.
    """
    if email is None:
        raise ValidationError({"email": ["is required"]})

    normalized = email.strip().lower()

    if not normalized:
        raise ValidationError({"email": ["is required"]})

    if any(ch in normalized for ch in (" ", "\t", "\n")):
        raise _invalid(email)

    if normalized.count("@") != 1:
        raise _invalid(email)

    local_part, domain_part = normalized.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        raise _invalid(email)

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        raise _invalid(email)

    if "." not in domain_part:
        raise _invalid(email)

    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            raise _invalid(email)

    if ".." in local_part or ".." in domain_part:
        raise _invalid(email)

    if any(forbidden in normalized for forbidden in _FORBIDDEN):
        raise _invalid(email)

    return normalized
