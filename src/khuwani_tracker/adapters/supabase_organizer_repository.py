"""Supabase-backed organizer repository."""

from dataclasses import dataclass
from datetime import datetime

from postgrest.exceptions import APIError
from supabase import Client

from khuwani_tracker.adapters.supabase_errors import (
    is_unique_violation,
    to_unique_violation,
)
from khuwani_tracker.domain.models import OrganizerRecord
from khuwani_tracker.services.organizers import OrganizerRepository

_COLUMNS = "id, email, password_hash, created_at"


@dataclass
class SupabaseOrganizerRepository(OrganizerRepository):
    """Supabase implementation for organizer persistence."""

    client: Client

    def get_by_email(self, email: str) -> OrganizerRecord | None:
        """Return the organizer for an email, if present."""
        response = (
            self.client.table("organizers")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_organizer(response.data[0])
        return None

    def get_by_id(self, organizer_id: int) -> OrganizerRecord | None:
        """Return the organizer for an id, if present."""
        response = (
            self.client.table("organizers")
            .select(_COLUMNS)
            .eq("id", organizer_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_organizer(response.data[0])
        return None

    def create_organizer(self, email: str, password_hash: str) -> OrganizerRecord:
        """Create a new organizer row and return it."""
        try:
            response = (
                self.client.table("organizers")
                .insert({"email": email, "password_hash": password_hash})
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise to_unique_violation(exc) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create organizer in Supabase")
        return _to_organizer(response.data[0])


def _to_organizer(row: dict[str, object]) -> OrganizerRecord:
    created_at = row.get("created_at")
    return OrganizerRecord(
        id=int(row["id"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        created_at=datetime.fromisoformat(created_at)
        if isinstance(created_at, str) and created_at
        else None,
    )
