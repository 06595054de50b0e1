"""
String helpers - random strings and URL-safe slugs.
"""
import re
import secrets

from ..api.exceptions import EmptyInputError, EmptySlugError
from ..core.config import RANDOM_STRING_SOURCE

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def random_string(length: int) -> str:
    """
    Generate a random string drawn from RANDOM_STRING_SOURCE.

    Each character is picked independently with a cryptographically
    secure source.
    """
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    return "".join(secrets.choice(RANDOM_STRING_SOURCE) for _ in range(length))


def slugify(s: str) -> str:
    """
    Convert s into a URL-safe slug.

    Raises:
        EmptyInputError: If s is blank
        EmptySlugError: If nothing alphanumeric is left
    """
    if not s.strip():
        raise EmptyInputError("empty string not permitted")

    slug = _NON_ALPHANUMERIC.sub("-", s.lower()).strip("-")
    if not slug:
        raise EmptySlugError("slugified string is empty")

    return slug
