"""Failure kinds raised by the khuwani services.

All exceptions inherit from KhuwaniError so the API layer can map them to
responses in one place.
"""


class KhuwaniError(Exception):
    """Base exception for all khuwani tracker errors."""

    error_code = "KHUWANI_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(KhuwaniError):
    """A khuwani, slug or organizer could not be resolved."""

    error_code = "NOT_FOUND"

    def __init__(self, message: str = "Khuwani not found") -> None:
        super().__init__(message)


class UnauthorizedError(KhuwaniError):
    """No authenticated organizer is present."""

    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class AuthenticationError(UnauthorizedError):
    """Email and password did not match a stored organizer."""

    error_code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class ValidationFailure(KhuwaniError):
    """Input was rejected before any mutation was attempted."""

    error_code = "VALIDATION_FAILED"


class InvalidSlotError(ValidationFailure):
    """Quran or Sipara number is outside the khuwani's range."""

    error_code = "INVALID_SLOT"


class SlotTakenError(KhuwaniError):
    """Another participant claimed the slot first."""

    error_code = "SLOT_TAKEN"

    def __init__(self, quran_number: int, sipara_number: int) -> None:
        self.quran_number = quran_number
        self.sipara_number = sipara_number
        super().__init__(
            "Sorry, this Sipara was just claimed by someone else. "
            "Please choose another."
        )


class DuplicateAccountError(KhuwaniError):
    """An organizer with this email already exists."""

    error_code = "DUPLICATE_ACCOUNT"

    def __init__(self) -> None:
        super().__init__("An account with this email already exists")


class DuplicateSlugError(KhuwaniError):
    """The final khuwani insert collided with an existing slug."""

    error_code = "DUPLICATE_SLUG"

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Could not allocate a unique link for slug {slug}")


class UniqueViolation(KhuwaniError):
    """Storage rejected a write because of a unique constraint.

    Raised by repositories only; services translate it into a specific
    failure kind.
    """

    error_code = "UNIQUE_VIOLATION"

    def __init__(self, constraint: str | None, message: str = "") -> None:
        self.constraint = constraint
        super().__init__(message or f"Unique constraint violated: {constraint}")
