"""Public slug generation for shareable khuwani links."""

import re
import secrets
from collections.abc import Callable
from string import ascii_lowercase, digits

SLUG_SUFFIX_LENGTH = 5
_BASE36_ALPHABET = digits + ascii_lowercase

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(name: str) -> str:
    """Reduce free text to lower-case, hyphen-separated ASCII."""
    base = _DISALLOWED.sub("", name.lower())
    base = _WHITESPACE.sub("-", base)
    base = _HYPHENS.sub("-", base)
    return base.strip("-")


def random_suffix(
    length: int = SLUG_SUFFIX_LENGTH,
    choice: Callable[[str], str] = secrets.choice,
) -> str:
    """Return a random base-36 string."""
    return "".join(choice(_BASE36_ALPHABET) for _ in range(length))


def generate_slug(
    name: str, choice: Callable[[str], str] = secrets.choice
) -> str:
    """Build a slug from a display name plus a random suffix.

    Uniqueness is probabilistic only; callers retry on collision and the
    storage constraint on the slug column has the final say.
    """
    suffix = random_suffix(choice=choice)
    base = slugify(name)
    if not base:
        return suffix
    return f"{base}-{suffix}"
