"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from khuwani_tracker.adapters.supabase_claim_repository import (
    SupabaseClaimRepository,
)
from khuwani_tracker.adapters.supabase_khuwani_repository import (
    SupabaseKhuwaniRepository,
)
from khuwani_tracker.adapters.supabase_organizer_repository import (
    SupabaseOrganizerRepository,
)
from khuwani_tracker.config import Settings
from khuwani_tracker.services.khuwanies import KhuwaniService
from khuwani_tracker.services.organizers import OrganizerService
from khuwani_tracker.services.session_store import InMemorySessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    organizer_service: OrganizerService
    khuwani_service: KhuwaniService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    organizer_service = OrganizerService(
        repository=SupabaseOrganizerRepository(supabase_client),
        session_store=InMemorySessionStore(),
        session_ttl_seconds=resolved_settings.session_ttl_seconds,
    )
    khuwani_service = KhuwaniService(
        khuwani_repository=SupabaseKhuwaniRepository(supabase_client),
        claim_repository=SupabaseClaimRepository(supabase_client),
        max_slug_attempts=resolved_settings.slug_max_attempts,
    )

    return AppContainer(
        settings=resolved_settings,
        organizer_service=organizer_service,
        khuwani_service=khuwani_service,
    )
