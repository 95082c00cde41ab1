"""Organizer API endpoints with cookie-based login sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, Response

from khuwani_tracker.api.schemas import (
    CreateKhuwaniRequest,
    LoginRequest,
    RegisterRequest,
)
from khuwani_tracker.api.serializers import serialize_khuwani, serialize_summary
from khuwani_tracker.domain.errors import UnauthorizedError
from khuwani_tracker.domain.models import OrganizerIdentity
from khuwani_tracker.services.organizers import LoginSession
from khuwani_tracker.services.progress import project_organizer_summary

if TYPE_CHECKING:
    from khuwani_tracker.containers import AppContainer

router = APIRouter(prefix="/api/organizer", tags=["organizer"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_organizer(request: Request) -> OrganizerIdentity:
    """Resolve the logged-in organizer from the session cookie."""
    container = _container(request)
    token = request.cookies.get(container.settings.session_cookie_name)
    identity = container.organizer_service.resolve(token)
    if identity is None:
        raise UnauthorizedError()
    return identity


def _set_session_cookie(
    container: AppContainer, response: Response, session: LoginSession
) -> None:
    response.set_cookie(
        key=container.settings.session_cookie_name,
        value=session.token,
        max_age=container.settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=container.settings.cookie_secure,
    )


@router.post("/register")
def register(
    body: RegisterRequest, request: Request, response: Response
) -> dict[str, object]:
    """Create an organizer account and log it in.

    Plain `def` so FastAPI runs the password hashing in its threadpool.
    """
    container = _container(request)
    session = container.organizer_service.register_and_login(
        body.email, body.password, body.confirm_password
    )
    _set_session_cookie(container, response, session)
    return {"success": True, "message": "Account created"}


@router.post("/login")
def login(
    body: LoginRequest, request: Request, response: Response
) -> dict[str, object]:
    """Log an organizer in."""
    container = _container(request)
    session = container.organizer_service.login(body.email, body.password)
    _set_session_cookie(container, response, session)
    return {"success": True, "message": "Logged in"}


@router.post("/logout")
async def logout(request: Request, response: Response) -> dict[str, object]:
    """End the current login session."""
    container = _container(request)
    cookie_name = container.settings.session_cookie_name
    container.organizer_service.logout(request.cookies.get(cookie_name))
    response.delete_cookie(cookie_name)
    return {"success": True, "message": "Logged out"}


@router.get("/session")
async def current_session(
    organizer: OrganizerIdentity = Depends(require_organizer),
) -> dict[str, object]:
    """Return the logged-in organizer."""
    return {"id": organizer.id, "email": organizer.email}


@router.get("/khuwanies")
async def list_khuwanies(
    request: Request,
    organizer: OrganizerIdentity = Depends(require_organizer),
) -> list[dict[str, object]]:
    """Return the organizer's khuwanies with claims and progress."""
    container = _container(request)
    return [
        serialize_summary(project_organizer_summary(entry.khuwani, entry.claims))
        for entry in container.khuwani_service.list_for_organizer(organizer.id)
    ]


@router.post("/khuwani/create")
async def create_khuwani(
    body: CreateKhuwaniRequest,
    request: Request,
    organizer: OrganizerIdentity = Depends(require_organizer),
) -> dict[str, object]:
    """Create a khuwani and return it with its shareable slug."""
    container = _container(request)
    khuwani = container.khuwani_service.create_khuwani(organizer.id, body.marhoom_name)
    return {"success": True, "khuwani": serialize_khuwani(khuwani)}


@router.post("/khuwani/{khuwani_id}/delete")
async def delete_khuwani(
    khuwani_id: int,
    request: Request,
    organizer: OrganizerIdentity = Depends(require_organizer),
) -> dict[str, object]:
    """Delete a khuwani and its claims."""
    _container(request).khuwani_service.delete_khuwani(khuwani_id, organizer.id)
    return {"success": True, "message": "Deleted"}


@router.post("/khuwani/{khuwani_id}/reset")
async def reset_khuwani(
    khuwani_id: int,
    request: Request,
    organizer: OrganizerIdentity = Depends(require_organizer),
) -> dict[str, object]:
    """Remove every claim from a khuwani."""
    _container(request).khuwani_service.reset_claims(khuwani_id, organizer.id)
    return {"success": True, "message": "Claims reset"}


@router.post("/khuwani/{khuwani_id}/add-quran")
async def add_quran(
    khuwani_id: int,
    request: Request,
    organizer: OrganizerIdentity = Depends(require_organizer),
) -> dict[str, object]:
    """Add one more Quran to a khuwani."""
    khuwani = _container(request).khuwani_service.add_quran(khuwani_id, organizer.id)
    return {
        "success": True,
        "message": "Quran added",
        "numQurans": khuwani.num_qurans,
    }
