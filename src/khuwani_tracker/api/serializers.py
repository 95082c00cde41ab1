"""JSON shapes returned by the API."""

from khuwani_tracker.domain.khuwanies import ClaimRecord, KhuwaniRecord
from khuwani_tracker.domain.progress import (
    KhuwaniSummary,
    ParticipantView,
    QuranGrid,
)


def serialize_khuwani(khuwani: KhuwaniRecord) -> dict[str, object]:
    return {
        "id": khuwani.id,
        "organizerId": khuwani.organizer_id,
        "slug": khuwani.slug,
        "marhoomName": khuwani.marhoom_name,
        "numQurans": khuwani.num_qurans,
        "createdAt": khuwani.created_at.isoformat() if khuwani.created_at else None,
    }


def serialize_claim(claim: ClaimRecord) -> dict[str, object]:
    return {
        "id": claim.id,
        "khuwaniId": claim.khuwani_id,
        "quranNumber": claim.quran_number,
        "siparaNumber": claim.sipara_number,
        "participantName": claim.participant_name,
        "claimedAt": claim.claimed_at.isoformat() if claim.claimed_at else None,
    }


def serialize_summary(summary: KhuwaniSummary) -> dict[str, object]:
    """Organizer dashboard card with overall and per-Quran progress."""
    return {
        **serialize_khuwani(summary.khuwani),
        "claims": [serialize_claim(claim) for claim in summary.claims],
        "totalSiparas": summary.total_siparas,
        "claimedCount": summary.claimed_count,
        "percent": summary.percent,
        "qurans": [
            {
                "quranNumber": quran.quran_number,
                "claimedCount": quran.claimed_count,
                "percent": quran.percent,
            }
            for quran in summary.qurans
        ],
    }


def serialize_participant_view(view: ParticipantView) -> dict[str, object]:
    """Public page payload; organizer id is not exposed."""
    khuwani = view.khuwani
    return {
        "id": khuwani.id,
        "marhoomName": khuwani.marhoom_name,
        "numQurans": khuwani.num_qurans,
        "slug": khuwani.slug,
        "claims": [serialize_claim(claim) for claim in view.claims],
        "qurans": [_serialize_grid(grid) for grid in view.qurans],
    }


def _serialize_grid(grid: QuranGrid) -> dict[str, object]:
    return {
        "quranNumber": grid.quran_number,
        "claimedCount": grid.claimed_count,
        "percent": grid.percent,
        "siparas": [
            {
                "siparaNumber": slot.sipara_number,
                "name": slot.name,
                "arabicName": slot.arabic_name,
                "participantName": slot.participant_name,
                "claimed": slot.is_claimed,
            }
            for slot in grid.slots
        ],
    }
