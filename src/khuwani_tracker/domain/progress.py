"""Read models for organizer and participant views."""

from dataclasses import dataclass

from khuwani_tracker.domain.khuwanies import ClaimRecord, KhuwaniRecord


@dataclass(frozen=True)
class QuranProgress:
    """Claimed count and percentage for one Quran instance."""

    quran_number: int
    claimed_count: int
    percent: int


@dataclass(frozen=True)
class KhuwaniSummary:
    """Organizer dashboard card for a khuwani."""

    khuwani: KhuwaniRecord
    claims: list[ClaimRecord]
    total_siparas: int
    claimed_count: int
    percent: int
    qurans: list[QuranProgress]


@dataclass(frozen=True)
class SiparaSlot:
    """One Sipara cell on the participant grid."""

    sipara_number: int
    name: str
    arabic_name: str
    participant_name: str | None

    @property
    def is_claimed(self) -> bool:
        return self.participant_name is not None


@dataclass(frozen=True)
class QuranGrid:
    """All thirty Sipara slots of one Quran instance."""

    quran_number: int
    claimed_count: int
    percent: int
    slots: list[SiparaSlot]


@dataclass(frozen=True)
class ParticipantView:
    """Public view of a khuwani for participants."""

    khuwani: KhuwaniRecord
    claims: list[ClaimRecord]
    qurans: list[QuranGrid]
