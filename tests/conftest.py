"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from khuwani_tracker.api.app import create_app
from khuwani_tracker.config import Settings
from khuwani_tracker.containers import AppContainer
from khuwani_tracker.services.khuwanies import KhuwaniService
from khuwani_tracker.services.organizers import OrganizerService
from khuwani_tracker.services.session_store import InMemorySessionStore
from tests.fakes import (
    InMemoryClaimRepository,
    InMemoryDatabase,
    InMemoryKhuwaniRepository,
    InMemoryOrganizerRepository,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0.c2lnbmF0dXJl"
        ),
    )


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def khuwani_repository(db: InMemoryDatabase) -> InMemoryKhuwaniRepository:
    return InMemoryKhuwaniRepository(db)


@pytest.fixture
def claim_repository(db: InMemoryDatabase) -> InMemoryClaimRepository:
    return InMemoryClaimRepository(db)


@pytest.fixture
def organizer_service(db: InMemoryDatabase) -> OrganizerService:
    return OrganizerService(
        repository=InMemoryOrganizerRepository(db),
        session_store=InMemorySessionStore(),
    )


@pytest.fixture
def khuwani_service(
    khuwani_repository: InMemoryKhuwaniRepository,
    claim_repository: InMemoryClaimRepository,
) -> KhuwaniService:
    return KhuwaniService(
        khuwani_repository=khuwani_repository,
        claim_repository=claim_repository,
    )


@pytest.fixture
def container(
    settings: Settings,
    organizer_service: OrganizerService,
    khuwani_service: KhuwaniService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        organizer_service=organizer_service,
        khuwani_service=khuwani_service,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
