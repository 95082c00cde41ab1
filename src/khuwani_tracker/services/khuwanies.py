"""Khuwani lifecycle and race-safe Sipara claiming."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from khuwani_tracker.domain.errors import (
    DuplicateSlugError,
    InvalidSlotError,
    NotFoundError,
    SlotTakenError,
    UniqueViolation,
    ValidationFailure,
)
from khuwani_tracker.domain.khuwanies import (
    MAX_PARTICIPANT_NAME_LENGTH,
    SIPARA_COUNT,
    ClaimRecord,
    KhuwaniRecord,
    KhuwaniWithClaims,
)
from khuwani_tracker.services.slugs import generate_slug

logger = logging.getLogger(__name__)

DEFAULT_SLUG_ATTEMPTS = 10


class KhuwaniRepository(Protocol):
    """Persistence interface for khuwanies."""

    def create_khuwani(
        self, organizer_id: int, slug: str, marhoom_name: str, num_qurans: int
    ) -> KhuwaniRecord:
        """Insert a khuwani; raise UniqueViolation if the slug is taken."""

    def get_khuwani(self, khuwani_id: int) -> KhuwaniRecord | None:
        """Return a khuwani by id, if present."""

    def get_by_slug(self, slug: str) -> KhuwaniRecord | None:
        """Return a khuwani by public slug, if present."""

    def slug_exists(self, slug: str) -> bool:
        """Return true when a khuwani already uses the slug."""

    def list_for_organizer(self, organizer_id: int) -> list[KhuwaniRecord]:
        """Return all khuwanies owned by an organizer."""

    def increment_num_qurans(self, khuwani_id: int) -> KhuwaniRecord | None:
        """Atomically add one Quran instance and return the updated row."""

    def delete_khuwani(self, khuwani_id: int) -> None:
        """Delete a khuwani and all of its claims in one transaction."""


class ClaimRepository(Protocol):
    """Persistence interface for Sipara claims."""

    def create_claim(
        self,
        khuwani_id: int,
        quran_number: int,
        sipara_number: int,
        participant_name: str,
    ) -> ClaimRecord:
        """Insert a claim; raise UniqueViolation if the slot is taken."""

    def delete_claim(
        self,
        khuwani_id: int,
        quran_number: int,
        sipara_number: int,
        participant_name: str,
    ) -> bool:
        """Delete the claim matching every field; return whether one was removed."""

    def delete_all_for_khuwani(self, khuwani_id: int) -> int:
        """Delete every claim of a khuwani and return how many were removed."""

    def list_for_khuwani(self, khuwani_id: int) -> list[ClaimRecord]:
        """Return all claims of a khuwani."""


@dataclass
class KhuwaniService:
    """Creates, grows, resets and deletes khuwanies and arbitrates claims."""

    khuwani_repository: KhuwaniRepository
    claim_repository: ClaimRepository
    slug_factory: Callable[[str], str] = generate_slug
    max_slug_attempts: int = DEFAULT_SLUG_ATTEMPTS

    def create_khuwani(self, organizer_id: int, marhoom_name: str) -> KhuwaniRecord:
        """Create a khuwani with one Quran and a fresh public slug."""
        name = marhoom_name.strip()
        if not name:
            raise ValidationFailure("Please enter the name")

        slug = self.slug_factory(name)
        attempts = 0
        while self.khuwani_repository.slug_exists(slug) and (
            attempts < self.max_slug_attempts
        ):
            logger.info("Slug collision, regenerating", extra={"slug": slug})
            slug = self.slug_factory(name)
            attempts += 1

        try:
            khuwani = self.khuwani_repository.create_khuwani(
                organizer_id=organizer_id,
                slug=slug,
                marhoom_name=name,
                num_qurans=1,
            )
        except UniqueViolation as exc:
            logger.warning(
                "Slug still collided after retries",
                extra={"slug": slug, "constraint": exc.constraint},
            )
            raise DuplicateSlugError(slug) from exc
        logger.info(
            "Khuwani created",
            extra={"khuwani_id": khuwani.id, "organizer_id": organizer_id},
        )
        return khuwani

    def get_owned(self, khuwani_id: int, organizer_id: int) -> KhuwaniRecord:
        """Return a khuwani only if the organizer owns it."""
        khuwani = self.khuwani_repository.get_khuwani(khuwani_id)
        if khuwani is None or khuwani.organizer_id != organizer_id:
            raise NotFoundError()
        return khuwani

    def add_quran(self, khuwani_id: int, organizer_id: int) -> KhuwaniRecord:
        """Add one Quran instance to an owned khuwani."""
        self.get_owned(khuwani_id, organizer_id)
        updated = self.khuwani_repository.increment_num_qurans(khuwani_id)
        if updated is None:
            raise NotFoundError()
        logger.info(
            "Quran added",
            extra={"khuwani_id": khuwani_id, "num_qurans": updated.num_qurans},
        )
        return updated

    def reset_claims(self, khuwani_id: int, organizer_id: int) -> int:
        """Remove every claim of an owned khuwani."""
        self.get_owned(khuwani_id, organizer_id)
        removed = self.claim_repository.delete_all_for_khuwani(khuwani_id)
        logger.info(
            "Claims reset", extra={"khuwani_id": khuwani_id, "removed": removed}
        )
        return removed

    def delete_khuwani(self, khuwani_id: int, organizer_id: int) -> None:
        """Delete an owned khuwani together with its claims."""
        self.get_owned(khuwani_id, organizer_id)
        self.khuwani_repository.delete_khuwani(khuwani_id)
        logger.info("Khuwani deleted", extra={"khuwani_id": khuwani_id})

    def list_for_organizer(self, organizer_id: int) -> list[KhuwaniWithClaims]:
        """Return the organizer's khuwanies with their claims."""
        return [
            KhuwaniWithClaims(
                khuwani=khuwani,
                claims=self.claim_repository.list_for_khuwani(khuwani.id),
            )
            for khuwani in self.khuwani_repository.list_for_organizer(organizer_id)
        ]

    def get_public_view(self, slug: str) -> KhuwaniWithClaims:
        """Return a khuwani and its claims by public slug."""
        khuwani = self._resolve_slug(slug)
        return KhuwaniWithClaims(
            khuwani=khuwani,
            claims=self.claim_repository.list_for_khuwani(khuwani.id),
        )

    def claim_sipara(
        self,
        slug: str,
        quran_number: int,
        sipara_number: int,
        participant_name: str,
    ) -> ClaimRecord:
        """Claim a free slot.

        The insert itself is the availability check: the storage unique
        constraint on (khuwani, quran, sipara) decides races, and a rejected
        insert becomes SlotTakenError.
        """
        khuwani = self._resolve_slug(slug)
        name = _clean_participant_name(participant_name)
        _check_slot(khuwani, quran_number, sipara_number)
        try:
            claim = self.claim_repository.create_claim(
                khuwani_id=khuwani.id,
                quran_number=quran_number,
                sipara_number=sipara_number,
                participant_name=name,
            )
        except UniqueViolation as exc:
            logger.info(
                "Claim race lost",
                extra={
                    "khuwani_id": khuwani.id,
                    "quran_number": quran_number,
                    "sipara_number": sipara_number,
                },
            )
            raise SlotTakenError(quran_number, sipara_number) from exc
        return claim

    def release_sipara(
        self,
        slug: str,
        quran_number: int,
        sipara_number: int,
        participant_name: str,
    ) -> bool:
        """Release a claim by naming its slot and holder.

        Returns False when no claim matches, including a Quran number beyond
        the current count; that is an ordinary outcome.
        """
        khuwani = self._resolve_slug(slug)
        name = _clean_participant_name(participant_name)
        _check_slot_bounds(quran_number, sipara_number)
        return self.claim_repository.delete_claim(
            khuwani_id=khuwani.id,
            quran_number=quran_number,
            sipara_number=sipara_number,
            participant_name=name,
        )

    def _resolve_slug(self, slug: str) -> KhuwaniRecord:
        khuwani = self.khuwani_repository.get_by_slug(slug)
        if khuwani is None:
            raise NotFoundError()
        return khuwani


def _clean_participant_name(participant_name: str) -> str:
    name = participant_name.strip()
    if not name:
        raise ValidationFailure("Please enter your name")
    if len(name) > MAX_PARTICIPANT_NAME_LENGTH:
        raise ValidationFailure(
            f"Name must be at most {MAX_PARTICIPANT_NAME_LENGTH} characters"
        )
    return name


def _check_slot(khuwani: KhuwaniRecord, quran_number: int, sipara_number: int) -> None:
    if quran_number > khuwani.num_qurans:
        raise InvalidSlotError("Invalid Quran number")
    _check_slot_bounds(quran_number, sipara_number)


def _check_slot_bounds(quran_number: int, sipara_number: int) -> None:
    if quran_number < 1:
        raise InvalidSlotError("Invalid Quran number")
    if not 1 <= sipara_number <= SIPARA_COUNT:
        raise InvalidSlotError("Invalid Sipara number")
