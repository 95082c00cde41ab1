"""Public participant endpoints addressed by khuwani slug."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from khuwani_tracker.api.schemas import ClaimRequest
from khuwani_tracker.api.serializers import (
    serialize_claim,
    serialize_participant_view,
)
from khuwani_tracker.services.progress import project_participant_view

if TYPE_CHECKING:
    from khuwani_tracker.containers import AppContainer

router = APIRouter(prefix="/api/k", tags=["participants"])


@router.get("/{slug}")
async def khuwani_view(slug: str, request: Request) -> dict[str, object]:
    """Return the khuwani grid for participants."""
    container: AppContainer = request.app.state.container
    entry = container.khuwani_service.get_public_view(slug)
    return serialize_participant_view(
        project_participant_view(entry.khuwani, entry.claims)
    )


@router.post("/{slug}/claim")
async def claim_sipara(
    slug: str, body: ClaimRequest, request: Request
) -> dict[str, object]:
    """Claim a Sipara; a lost race is answered with 409."""
    container: AppContainer = request.app.state.container
    claim = container.khuwani_service.claim_sipara(
        slug, body.quran_number, body.sipara_number, body.participant_name
    )
    return {"success": True, "claim": serialize_claim(claim)}


@router.post("/{slug}/unclaim", response_model=None)
async def release_sipara(
    slug: str, body: ClaimRequest, request: Request
) -> dict[str, object] | JSONResponse:
    """Release a Sipara held under the given name."""
    container: AppContainer = request.app.state.container
    released = container.khuwani_service.release_sipara(
        slug, body.quran_number, body.sipara_number, body.participant_name
    )
    if not released:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": "Could not release this Sipara. You may not have claimed it.",
            },
        )
    return {"success": True, "message": "Sipara released"}
