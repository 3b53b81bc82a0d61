import re
from typing import Optional

from user_api.core.errors import InvalidInputError

# UUID versions 1-5, RFC 4122 variant
UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 6


def is_valid_user_id(value: Optional[str]) -> bool:
    return bool(value) and UUID_RE.match(value) is not None


def is_valid_email(value: Optional[str]) -> bool:
    return bool(value) and EMAIL_RE.match(value) is not None


def require_user_id(value: Optional[str]) -> str:
    if not is_valid_user_id(value):
        raise InvalidInputError("Invalid user ID provided")
    return value


def require_email(value: Optional[str], message: str = "Invalid email format") -> str:
    if not is_valid_email(value):
        raise InvalidInputError(message)
    return value


def require_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates survive JSON decoding but cannot be hashed
        raise InvalidInputError("Password contains invalid characters")
    return value
