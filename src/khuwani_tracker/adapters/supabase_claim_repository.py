"""Supabase-backed claim repository."""

from dataclasses import dataclass
from datetime import datetime

from postgrest.exceptions import APIError
from supabase import Client

from khuwani_tracker.adapters.supabase_errors import (
    is_unique_violation,
    to_unique_violation,
)
from khuwani_tracker.domain.khuwanies import ClaimRecord
from khuwani_tracker.services.khuwanies import ClaimRepository

_COLUMNS = (
    "id, khuwani_id, quran_number, sipara_number, participant_name, claimed_at"
)


@dataclass
class SupabaseClaimRepository(ClaimRepository):
    """Supabase implementation for Sipara claims."""

    client: Client

    def create_claim(
        self,
        khuwani_id: int,
        quran_number: int,
        sipara_number: int,
        participant_name: str,
    ) -> ClaimRecord:
        """Insert a claim; the unique_claim constraint arbitrates races."""
        try:
            response = (
                self.client.table("claims")
                .insert(
                    {
                        "khuwani_id": khuwani_id,
                        "quran_number": quran_number,
                        "sipara_number": sipara_number,
                        "participant_name": participant_name,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise to_unique_violation(exc) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create claim")
        return _to_claim(response.data[0])

    def delete_claim(
        self,
        khuwani_id: int,
        quran_number: int,
        sipara_number: int,
        participant_name: str,
    ) -> bool:
        """Delete the claim matching every field."""
        response = (
            self.client.table("claims")
            .delete()
            .eq("khuwani_id", khuwani_id)
            .eq("quran_number", quran_number)
            .eq("sipara_number", sipara_number)
            .eq("participant_name", participant_name)
            .execute()
        )
        return bool(response.data)

    def delete_all_for_khuwani(self, khuwani_id: int) -> int:
        """Delete all claims of a khuwani."""
        response = (
            self.client.table("claims").delete().eq("khuwani_id", khuwani_id).execute()
        )
        return len(response.data or [])

    def list_for_khuwani(self, khuwani_id: int) -> list[ClaimRecord]:
        """Return all claims of a khuwani."""
        response = (
            self.client.table("claims")
            .select(_COLUMNS)
            .eq("khuwani_id", khuwani_id)
            .order("claimed_at")
            .execute()
        )
        return [_to_claim(row) for row in response.data or []]


def _to_claim(row: dict[str, object]) -> ClaimRecord:
    claimed_at = row.get("claimed_at")
    return ClaimRecord(
        id=int(row["id"]),
        khuwani_id=int(row["khuwani_id"]),
        quran_number=int(row["quran_number"]),
        sipara_number=int(row["sipara_number"]),
        participant_name=str(row["participant_name"]),
        claimed_at=datetime.fromisoformat(claimed_at)
        if isinstance(claimed_at, str) and claimed_at
        else None,
    )
