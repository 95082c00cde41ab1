"""Organizer login session storage."""

import secrets
import threading
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class SessionStore(Protocol):
    """Maps opaque login tokens to organizer ids."""

    def create(self, organizer_id: int, ttl_seconds: int) -> str:
        """Store a new login session and return its token."""

    def get(self, token: str) -> int | None:
        """Return the organizer id for a token if present and not expired."""

    def delete(self, token: str) -> None:
        """Forget a login session."""


@dataclass
class _SessionEntry:
    organizer_id: int
    expires_at: datetime


@dataclass
class InMemorySessionStore(SessionStore):
    """In-process session store; sessions do not survive a restart.

    Expired entries are dropped when read and swept whenever a new session is
    created, so tokens that are never presented again do not accumulate.
    """

    _entries: dict[str, _SessionEntry]

    def __init__(self) -> None:
        self._entries = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def create(self, organizer_id: int, ttl_seconds: int) -> str:
        """Store a session under a fresh random token."""
        token = secrets.token_urlsafe(32)
        now = datetime.now(tz=UTC)
        with self._lock:
            self._sweep(now)
            self._entries[token] = _SessionEntry(
                organizer_id=organizer_id,
                expires_at=now + timedelta(seconds=ttl_seconds),
            )
        return token

    def get(self, token: str) -> int | None:
        """Return the organizer id if the session hasn't expired."""
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            if datetime.now(tz=UTC) >= entry.expires_at:
                self._entries.pop(token, None)
                return None
            return entry.organizer_id

    def delete(self, token: str) -> None:
        with self._lock:
            self._entries.pop(token, None)

    def _sweep(self, now: datetime) -> None:
        expired = [
            token for token, entry in self._entries.items() if now >= entry.expires_at
        ]
        for token in expired:
            del self._entries[token]
