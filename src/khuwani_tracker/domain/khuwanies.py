"""Domain models for khuwanies and their claims."""

from dataclasses import dataclass
from datetime import datetime

SIPARA_COUNT = 30
MAX_PARTICIPANT_NAME_LENGTH = 100

SIPARA_NAMES = (
    "Alif Laam Meem",
    "Sayaqool",
    "Tilkal Rusul",
    "Lan Tana Loo",
    "Wal Mohsanat",
    "La Yuhibbullah",
    "Wa Iza Samiu",
    "Wa Lau Annana",
    "Qalal Malao",
    "Wa A'lamu",
    "Yata Zeroon",
    "Wa Mamin Dabbatin",
    "Wa Ma Ubrioo",
    "Rubama",
    "Subhanalladhi",
    "Qal Alam",
    "Iqtarabo",
    "Qadd Aflaha",
    "Wa Qalalladhina",
    "Amman Khalaqa",
    "Utlu Ma Oohi",
    "Wa Man Yaqnut",
    "Wa Mali",
    "Faman Azlamu",
    "Ilaihi Yuraddu",
    "Ha Meem",
    "Qala Fama Khatbukum",
    "Qadd Sami Allah",
    "Tabarakallazi",
    "Amma",
)

SIPARA_NAMES_ARABIC = (
    "الٓمٓ",
    "سَيَقُولُ",
    "تِلْكَ الرُّسُلُ",
    "لَن تَنَالُوا",
    "وَالْمُحْصَنَاتُ",
    "لَا يُحِبُّ اللهُ",
    "وَإِذَا سَمِعُوا",
    "وَلَوْ أَنَّنَا",
    "قَالَ الْمَلَأُ",
    "وَاعْلَمُوا",
    "يَعْتَذِرُونَ",
    "وَمَا مِن دَابَّةٍ",
    "وَمَا أُبَرِّئُ",
    "رُبَمَا",
    "سُبْحَانَ الَّذِي",
    "قَالَ أَلَمْ",
    "اقْتَرَبَ",
    "قَدْ أَفْلَحَ",
    "وَقَالَ الَّذِينَ",
    "أَمَّنْ خَلَقَ",
    "اتْلُ مَا أُوحِيَ",
    "وَمَن يَقْنُتْ",
    "وَمَالِيَ",
    "فَمَنْ أَظْلَمُ",
    "إِلَيْهِ يُرَدُّ",
    "حٰمٓ",
    "قَالَ فَمَا خَطْبُكُمْ",
    "قَدْ سَمِعَ اللهُ",
    "تَبَارَكَ الَّذِي",
    "عَمَّ",
)


@dataclass(frozen=True)
class KhuwaniRecord:
    """Represents a persisted khuwani (one dedication)."""

    id: int
    organizer_id: int
    slug: str
    marhoom_name: str
    num_qurans: int
    created_at: datetime | None = None


@dataclass(frozen=True)
class ClaimRecord:
    """A participant's hold on one (Quran, Sipara) slot."""

    id: int
    khuwani_id: int
    quran_number: int
    sipara_number: int
    participant_name: str
    claimed_at: datetime | None = None


@dataclass(frozen=True)
class KhuwaniWithClaims:
    """A khuwani together with all of its current claims."""

    khuwani: KhuwaniRecord
    claims: list[ClaimRecord]
