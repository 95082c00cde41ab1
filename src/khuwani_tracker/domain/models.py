"""Domain models for organizers."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OrganizerRecord:
    """Represents an organizer stored in the database."""

    id: int
    email: str
    password_hash: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class OrganizerIdentity:
    """Opaque authenticated organizer identity."""

    id: int
    email: str
