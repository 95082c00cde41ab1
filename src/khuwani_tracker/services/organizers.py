"""Organizer registration, authentication and login sessions."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from werkzeug.security import check_password_hash, generate_password_hash

from khuwani_tracker.domain.errors import (
    AuthenticationError,
    DuplicateAccountError,
    UniqueViolation,
    ValidationFailure,
)
from khuwani_tracker.domain.models import OrganizerIdentity, OrganizerRecord
from khuwani_tracker.services.session_store import SessionStore

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
DEFAULT_SESSION_TTL_SECONDS = 7 * 24 * 60 * 60

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class OrganizerRepository(Protocol):
    """Persistence interface for organizers."""

    def get_by_email(self, email: str) -> OrganizerRecord | None:
        """Return the organizer with this email, if present."""

    def get_by_id(self, organizer_id: int) -> OrganizerRecord | None:
        """Return the organizer with this id, if present."""

    def create_organizer(self, email: str, password_hash: str) -> OrganizerRecord:
        """Insert an organizer; raise UniqueViolation if the email is taken."""


@dataclass(frozen=True)
class LoginSession:
    """An authenticated organizer plus the token identifying the login."""

    identity: OrganizerIdentity
    token: str


@dataclass
class OrganizerService:
    """Access gate mapping credentials and login tokens to organizers."""

    repository: OrganizerRepository
    session_store: SessionStore
    session_ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS

    def register(
        self, email: str, password: str, confirm_password: str
    ) -> OrganizerIdentity:
        """Create an organizer account after validating the credentials."""
        email = email.strip()
        _validate_email(email)
        _validate_password(password)
        if password != confirm_password:
            raise ValidationFailure("Passwords don't match")
        if self.repository.get_by_email(email) is not None:
            raise DuplicateAccountError()

        try:
            organizer = self.repository.create_organizer(
                email=email, password_hash=generate_password_hash(password)
            )
        except UniqueViolation as exc:
            raise DuplicateAccountError() from exc
        logger.info("Organizer registered", extra={"organizer_id": organizer.id})
        return _identity(organizer)

    def authenticate(self, email: str, password: str) -> OrganizerIdentity:
        """Return the organizer identity for valid credentials."""
        email = email.strip()
        _validate_email(email)
        _validate_password(password)
        organizer = self.repository.get_by_email(email)
        if organizer is None:
            raise AuthenticationError()
        if not check_password_hash(organizer.password_hash, password):
            raise AuthenticationError()
        return _identity(organizer)

    def login(self, email: str, password: str) -> LoginSession:
        """Authenticate and open a login session."""
        identity = self.authenticate(email, password)
        return self.open_session(identity)

    def register_and_login(
        self, email: str, password: str, confirm_password: str
    ) -> LoginSession:
        """Register and behave as if the organizer had logged in."""
        identity = self.register(email, password, confirm_password)
        return self.open_session(identity)

    def open_session(self, identity: OrganizerIdentity) -> LoginSession:
        token = self.session_store.create(identity.id, self.session_ttl_seconds)
        return LoginSession(identity=identity, token=token)

    def resolve(self, token: str | None) -> OrganizerIdentity | None:
        """Return the organizer behind a login token, if still valid."""
        if not token:
            return None
        organizer_id = self.session_store.get(token)
        if organizer_id is None:
            return None
        organizer = self.repository.get_by_id(organizer_id)
        if organizer is None:
            self.session_store.delete(token)
            return None
        return _identity(organizer)

    def logout(self, token: str | None) -> None:
        if token:
            self.session_store.delete(token)


def _identity(organizer: OrganizerRecord) -> OrganizerIdentity:
    return OrganizerIdentity(id=organizer.id, email=organizer.email)


def _validate_email(email: str) -> None:
    if not _EMAIL_PATTERN.match(email):
        raise ValidationFailure("Please enter a valid email")


def _validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailure(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
