"""Progress projections for organizer and participant views."""

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal

from khuwani_tracker.domain.khuwanies import (
    SIPARA_COUNT,
    SIPARA_NAMES,
    SIPARA_NAMES_ARABIC,
    ClaimRecord,
    KhuwaniRecord,
)
from khuwani_tracker.domain.progress import (
    KhuwaniSummary,
    ParticipantView,
    QuranGrid,
    QuranProgress,
    SiparaSlot,
)


def percent(claimed: int, total: int) -> int:
    """Return claimed/total as a whole percentage, rounding halves up."""
    if total <= 0:
        return 0
    value = Decimal(claimed * 100) / Decimal(total)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def claims_per_quran(
    khuwani: KhuwaniRecord, claims: list[ClaimRecord]
) -> dict[int, int]:
    """Count claims for every Quran instance, including empty ones."""
    counts = Counter(claim.quran_number for claim in claims)
    return {
        quran_number: counts.get(quran_number, 0)
        for quran_number in range(1, khuwani.num_qurans + 1)
    }


def project_organizer_summary(
    khuwani: KhuwaniRecord, claims: list[ClaimRecord]
) -> KhuwaniSummary:
    """Build the dashboard summary for a khuwani."""
    total_siparas = khuwani.num_qurans * SIPARA_COUNT
    claimed_count = len(claims)
    qurans = [
        QuranProgress(
            quran_number=quran_number,
            claimed_count=count,
            percent=percent(count, SIPARA_COUNT),
        )
        for quran_number, count in claims_per_quran(khuwani, claims).items()
    ]
    return KhuwaniSummary(
        khuwani=khuwani,
        claims=list(claims),
        total_siparas=total_siparas,
        claimed_count=claimed_count,
        percent=percent(claimed_count, total_siparas),
        qurans=qurans,
    )


def project_participant_view(
    khuwani: KhuwaniRecord, claims: list[ClaimRecord]
) -> ParticipantView:
    """Build the public grid of every Sipara slot."""
    holders = {
        (claim.quran_number, claim.sipara_number): claim.participant_name
        for claim in claims
    }
    grids = []
    for quran_number, count in claims_per_quran(khuwani, claims).items():
        slots = [
            SiparaSlot(
                sipara_number=index + 1,
                name=SIPARA_NAMES[index],
                arabic_name=SIPARA_NAMES_ARABIC[index],
                participant_name=holders.get((quran_number, index + 1)),
            )
            for index in range(SIPARA_COUNT)
        ]
        grids.append(
            QuranGrid(
                quran_number=quran_number,
                claimed_count=count,
                percent=percent(count, SIPARA_COUNT),
                slots=slots,
            )
        )
    return ParticipantView(khuwani=khuwani, claims=list(claims), qurans=grids)
