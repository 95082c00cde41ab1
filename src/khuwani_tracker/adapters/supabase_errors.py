"""Translation of PostgREST errors into domain failures."""

import re

from postgrest.exceptions import APIError

from khuwani_tracker.domain.errors import UniqueViolation

UNIQUE_VIOLATION_CODE = "23505"

_CONSTRAINT_PATTERN = re.compile(r'unique constraint "([^"]+)"')


def is_unique_violation(exc: APIError) -> bool:
    """Return true when Postgres rejected a write on a unique constraint."""
    return exc.code == UNIQUE_VIOLATION_CODE


def to_unique_violation(exc: APIError) -> UniqueViolation:
    """Build a UniqueViolation naming the violated constraint, if reported."""
    message = exc.message or ""
    match = _CONSTRAINT_PATTERN.search(message)
    return UniqueViolation(match.group(1) if match else None, message)
