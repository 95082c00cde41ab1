"""Tests for the HTTP surface."""

import asyncio

from fastapi.testclient import TestClient

from khuwani_tracker.api.app import create_app, status_for_error
from khuwani_tracker.domain.errors import (
    DuplicateSlugError,
    InvalidSlotError,
    SlotTakenError,
)

PASSWORD = "secret1"


def _register(client: TestClient, email: str = "ayesha@example.com") -> None:
    response = client.post(
        "/api/organizer/register",
        json={"email": email, "password": PASSWORD, "confirmPassword": PASSWORD},
    )
    assert response.status_code == 200


def _create_khuwani(client: TestClient, name: str = "Haji Abdul Rehman") -> dict:
    response = client.post("/api/organizer/khuwani/create", json={"marhoomName": name})
    assert response.status_code == 200
    return response.json()["khuwani"]


def _claim_body(quran: int, sipara: int, name: str) -> dict[str, object]:
    return {"quranNumber": quran, "siparaNumber": sipara, "participantName": name}


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_register_logs_in(client) -> None:
    _register(client)

    response = client.get("/api/organizer/session")

    assert response.status_code == 200
    assert response.json()["email"] == "ayesha@example.com"


def test_register_rejects_mismatched_passwords(client) -> None:
    response = client.post(
        "/api/organizer/register",
        json={
            "email": "ayesha@example.com",
            "password": PASSWORD,
            "confirmPassword": "different",
        },
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Passwords don't match"}


def test_register_rejects_duplicate_email(client) -> None:
    _register(client)

    response = client.post(
        "/api/organizer/register",
        json={
            "email": "ayesha@example.com",
            "password": PASSWORD,
            "confirmPassword": PASSWORD,
        },
    )

    assert response.status_code == 400
    assert "already exists" in response.json()["message"]


def test_login_and_logout(client) -> None:
    _register(client)
    client.post("/api/organizer/logout")
    assert client.get("/api/organizer/session").status_code == 401

    bad = client.post(
        "/api/organizer/login",
        json={"email": "ayesha@example.com", "password": "wrong-password"},
    )
    assert bad.status_code == 401
    assert bad.json()["message"] == "Invalid email or password"

    good = client.post(
        "/api/organizer/login",
        json={"email": "ayesha@example.com", "password": PASSWORD},
    )
    assert good.status_code == 200
    assert client.get("/api/organizer/session").status_code == 200


def test_organizer_endpoints_require_login(client) -> None:
    assert client.get("/api/organizer/khuwanies").status_code == 401
    response = client.post(
        "/api/organizer/khuwani/create", json={"marhoomName": "Haji Abdul Rehman"}
    )
    assert response.status_code == 401
    assert client.post("/api/organizer/khuwani/1/add-quran").status_code == 401


def test_create_and_list_khuwanies_with_progress(client) -> None:
    _register(client)
    khuwani = _create_khuwani(client)
    slug = khuwani["slug"]
    assert slug.startswith("haji-abdul-rehman-")
    assert khuwani["numQurans"] == 1

    client.post(f"/api/organizer/khuwani/{khuwani['id']}/add-quran")
    client.post(f"/api/k/{slug}/claim", json=_claim_body(1, 1, "Ahmed"))
    client.post(f"/api/k/{slug}/claim", json=_claim_body(1, 2, "Bilal"))
    client.post(f"/api/k/{slug}/claim", json=_claim_body(2, 1, "Fatima"))

    response = client.get("/api/organizer/khuwanies")

    assert response.status_code == 200
    (card,) = response.json()
    assert card["numQurans"] == 2
    assert card["totalSiparas"] == 60
    assert card["claimedCount"] == 3
    assert card["percent"] == 5
    assert card["qurans"][0] == {"quranNumber": 1, "claimedCount": 2, "percent": 7}
    assert len(card["claims"]) == 3


def test_create_khuwani_rejects_blank_name(client) -> None:
    _register(client)

    response = client.post("/api/organizer/khuwani/create", json={"marhoomName": " "})

    assert response.status_code == 400


def test_claim_release_flow(client) -> None:
    _register(client)
    slug = _create_khuwani(client)["slug"]

    first = client.post(f"/api/k/{slug}/claim", json=_claim_body(1, 5, "Ahmed"))
    assert first.status_code == 200
    assert first.json()["claim"]["participantName"] == "Ahmed"

    taken = client.post(f"/api/k/{slug}/claim", json=_claim_body(1, 5, "Fatima"))
    assert taken.status_code == 409
    assert "choose another" in taken.json()["message"]

    mismatch = client.post(f"/api/k/{slug}/unclaim", json=_claim_body(1, 5, "Fatima"))
    assert mismatch.status_code == 400
    assert "may not have claimed" in mismatch.json()["message"]

    released = client.post(f"/api/k/{slug}/unclaim", json=_claim_body(1, 5, "Ahmed"))
    assert released.status_code == 200

    again = client.post(f"/api/k/{slug}/claim", json=_claim_body(1, 5, "Fatima"))
    assert again.status_code == 200


def test_unclaim_beyond_quran_count_is_mismatch(client) -> None:
    _register(client)
    slug = _create_khuwani(client)["slug"]

    response = client.post(f"/api/k/{slug}/unclaim", json=_claim_body(2, 1, "Ahmed"))

    assert response.status_code == 400
    assert "may not have claimed" in response.json()["message"]


def test_claim_invalid_slot_is_bad_request(client) -> None:
    _register(client)
    slug = _create_khuwani(client)["slug"]

    response = client.post(f"/api/k/{slug}/claim", json=_claim_body(2, 1, "Ahmed"))

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid Quran number"


def test_claim_with_malformed_body_is_bad_request(client) -> None:
    _register(client)
    slug = _create_khuwani(client)["slug"]

    response = client.post(
        f"/api/k/{slug}/claim",
        json={"quranNumber": "one", "siparaNumber": 1, "participantName": "Ahmed"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_unknown_slug_is_not_found(client) -> None:
    assert client.get("/api/k/missing").status_code == 404
    response = client.post("/api/k/missing/claim", json=_claim_body(1, 1, "Ahmed"))
    assert response.status_code == 404


def test_participant_view_shows_slots(client) -> None:
    _register(client)
    slug = _create_khuwani(client)["slug"]
    client.post(f"/api/k/{slug}/claim", json=_claim_body(1, 30, "Ahmed"))

    response = client.get(f"/api/k/{slug}")

    assert response.status_code == 200
    data = response.json()
    assert data["marhoomName"] == "Haji Abdul Rehman"
    assert "organizerId" not in data
    grid = data["qurans"][0]
    assert grid["percent"] == 3
    assert grid["siparas"][29]["participantName"] == "Ahmed"
    assert grid["siparas"][29]["name"] == "Amma"
    assert grid["siparas"][0]["claimed"] is False


def test_reset_and_delete(client) -> None:
    _register(client)
    khuwani = _create_khuwani(client)
    slug = khuwani["slug"]
    client.post(f"/api/k/{slug}/claim", json=_claim_body(1, 1, "Ahmed"))

    reset = client.post(f"/api/organizer/khuwani/{khuwani['id']}/reset")
    assert reset.status_code == 200
    assert client.get(f"/api/k/{slug}").json()["claims"] == []

    deleted = client.post(f"/api/organizer/khuwani/{khuwani['id']}/delete")
    assert deleted.status_code == 200
    assert client.get(f"/api/k/{slug}").status_code == 404
    response = client.post(f"/api/organizer/khuwani/{khuwani['id']}/reset")
    assert response.status_code == 404


def test_other_organizer_cannot_manage_khuwani(container) -> None:
    owner = TestClient(create_app(container))
    intruder = TestClient(create_app(container))
    _register(owner)
    khuwani = _create_khuwani(owner)
    _register(intruder, email="someone@example.com")

    for action in ("add-quran", "reset", "delete"):
        response = intruder.post(f"/api/organizer/khuwani/{khuwani['id']}/{action}")
        assert response.status_code == 404

    assert intruder.get("/api/organizer/khuwanies").json() == []


def test_unexpected_errors_return_generic_message(container) -> None:
    def explode(_slug: str):  # type: ignore[no-untyped-def]
        raise RuntimeError("database offline")

    container.khuwani_service.get_public_view = explode
    client = TestClient(create_app(container), raise_server_exceptions=False)

    response = client.get("/api/k/any")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Something went wrong"}


def test_status_for_error_mapping() -> None:
    assert status_for_error(SlotTakenError(1, 1)) == 409
    assert status_for_error(InvalidSlotError("bad")) == 400
    assert status_for_error(DuplicateSlugError("a-11111")) == 500


def _running_loop_or_none() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def test_password_endpoints_run_off_the_event_loop(container) -> None:
    service = container.organizer_service
    loops: list[asyncio.AbstractEventLoop | None] = []
    register_and_login = service.register_and_login
    login = service.login

    def recording_register_and_login(*args):  # type: ignore[no-untyped-def]
        loops.append(_running_loop_or_none())
        return register_and_login(*args)

    def recording_login(*args):  # type: ignore[no-untyped-def]
        loops.append(_running_loop_or_none())
        return login(*args)

    service.register_and_login = recording_register_and_login
    service.login = recording_login
    client = TestClient(create_app(container))

    _register(client)
    response = client.post(
        "/api/organizer/login",
        json={"email": "ayesha@example.com", "password": PASSWORD},
    )

    assert response.status_code == 200
    assert loops == [None, None]
