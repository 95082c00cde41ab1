"""Supabase-backed khuwani repository."""

from dataclasses import dataclass
from datetime import datetime

from postgrest.exceptions import APIError
from supabase import Client

from khuwani_tracker.adapters.supabase_errors import (
    is_unique_violation,
    to_unique_violation,
)
from khuwani_tracker.domain.khuwanies import KhuwaniRecord
from khuwani_tracker.services.khuwanies import KhuwaniRepository

_COLUMNS = "id, organizer_id, slug, marhoom_name, num_qurans, created_at"


@dataclass
class SupabaseKhuwaniRepository(KhuwaniRepository):
    """Supabase implementation for khuwanies."""

    client: Client

    def create_khuwani(
        self, organizer_id: int, slug: str, marhoom_name: str, num_qurans: int
    ) -> KhuwaniRecord:
        """Create a khuwani row and return it."""
        try:
            response = (
                self.client.table("khuwanies")
                .insert(
                    {
                        "organizer_id": organizer_id,
                        "slug": slug,
                        "marhoom_name": marhoom_name,
                        "num_qurans": num_qurans,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise to_unique_violation(exc) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create khuwani")
        return _to_khuwani(response.data[0])

    def get_khuwani(self, khuwani_id: int) -> KhuwaniRecord | None:
        """Return a khuwani by id, if present."""
        response = (
            self.client.table("khuwanies")
            .select(_COLUMNS)
            .eq("id", khuwani_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_khuwani(response.data[0])

    def get_by_slug(self, slug: str) -> KhuwaniRecord | None:
        """Return a khuwani by slug, if present."""
        response = (
            self.client.table("khuwanies")
            .select(_COLUMNS)
            .eq("slug", slug)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_khuwani(response.data[0])

    def slug_exists(self, slug: str) -> bool:
        """Return true when the slug is already in use."""
        response = (
            self.client.table("khuwanies")
            .select("id")
            .eq("slug", slug)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def list_for_organizer(self, organizer_id: int) -> list[KhuwaniRecord]:
        """Return an organizer's khuwanies, newest first."""
        response = (
            self.client.table("khuwanies")
            .select(_COLUMNS)
            .eq("organizer_id", organizer_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [_to_khuwani(row) for row in response.data or []]

    def increment_num_qurans(self, khuwani_id: int) -> KhuwaniRecord | None:
        """Run the increment_num_qurans function (a single UPDATE)."""
        response = self.client.rpc(
            "increment_num_qurans", {"p_khuwani_id": khuwani_id}
        ).execute()
        if not response.data:
            return None
        row = response.data[0] if isinstance(response.data, list) else response.data
        return _to_khuwani(row)

    def delete_khuwani(self, khuwani_id: int) -> None:
        """Run the delete_khuwani function (claims and row in one transaction)."""
        self.client.rpc("delete_khuwani", {"p_khuwani_id": khuwani_id}).execute()


def _to_khuwani(row: dict[str, object]) -> KhuwaniRecord:
    created_at = row.get("created_at")
    return KhuwaniRecord(
        id=int(row["id"]),
        organizer_id=int(row["organizer_id"]),
        slug=str(row["slug"]),
        marhoom_name=str(row["marhoom_name"]),
        num_qurans=int(row["num_qurans"]),
        created_at=datetime.fromisoformat(created_at)
        if isinstance(created_at, str) and created_at
        else None,
    )
