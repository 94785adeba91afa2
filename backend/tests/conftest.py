"""Shared pytest fixtures.

Every API test gets a fresh SQLite database with two agencies (one user
each), and a TestClient carrying a bearer token for the first agency.

Fixture overview
----------------
client        — authenticated as an agent of "Maple Leaf Journeys" (CAD)
other_client  — authenticated as an agent of a second agency (USD)
make_contact  — POST a contact and return its JSON
make_trip     — POST a trip (defaults to a 3-day leisure trip) and return its JSON
main_itinerary — the selected itinerary of a trip, with its days
make_activity — POST an activity on a trip, optionally priced
"""

import asyncio
import os
import tempfile
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="tripdesk-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR / 'test.db'}"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["AUTO_SEED"] = "false"
os.environ["AUTH_JWT_SECRET"] = "test-secret"
os.environ["EXCHANGE_RATE_API_KEY"] = ""
os.environ["LOG_TO_FILE"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402

from app.database import Base, async_session_factory, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Agency, User  # noqa: E402


async def _reset_database() -> dict:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as db:
        agency = Agency(name="Maple Leaf Journeys", default_currency="CAD")
        other = Agency(name="Harbour Travel Co", default_currency="USD")
        db.add_all([agency, other])
        await db.flush()

        user = User(agency_id=agency.id, email="jordan@mapleleaf.test", first_name="Jordan", last_name="Lee")
        other_user = User(agency_id=other.id, email="sam@harbour.test", first_name="Sam", last_name="Park")
        db.add_all([user, other_user])
        await db.commit()
        return {
            "agency_id": agency.id,
            "user_id": user.id,
            "other_agency_id": other.id,
            "other_user_id": other_user.id,
        }


def make_token(user_id) -> str:
    return jwt.encode({"sub": str(user_id)}, "test-secret", algorithm="HS256")


@pytest.fixture
def seeded() -> dict:
    return asyncio.run(_reset_database())


@pytest.fixture
def client(seeded) -> TestClient:
    return TestClient(app, headers={"Authorization": f"Bearer {make_token(seeded['user_id'])}"})


@pytest.fixture
def other_client(seeded) -> TestClient:
    return TestClient(app, headers={"Authorization": f"Bearer {make_token(seeded['other_user_id'])}"})


@pytest.fixture
def anon_client(seeded) -> TestClient:
    return TestClient(app)


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_contact(client):
    def _make(**fields) -> dict:
        payload = {"first_name": "Maya", "last_name": "Okafor", "email": "maya@example.com", **fields}
        resp = client.post("/api/contacts", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def make_trip(client):
    def _make(**fields) -> dict:
        payload = {
            "name": "Amalfi Coast Escape",
            "trip_type": "leisure",
            "start_date": "2026-06-01",
            "end_date": "2026-06-03",
            **fields,
        }
        resp = client.post("/api/trips", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def main_itinerary(client):
    def _get(trip_id: str) -> dict:
        resp = client.get(f"/api/trips/{trip_id}/itineraries")
        selected = next(i for i in resp.json() if i["is_selected"])
        return client.get(f"/api/trips/{trip_id}/itineraries/{selected['id']}").json()
    return _get


@pytest.fixture
def make_activity(client, main_itinerary):
    def _make(trip_id: str, day_index: int | None = 0, price_cents: int | None = None,
              currency: str = "CAD", **fields) -> dict:
        itinerary = main_itinerary(trip_id)
        payload = {
            "itinerary_id": itinerary["id"],
            "itinerary_day_id": itinerary["days"][day_index]["id"] if day_index is not None else None,
            "activity_type": "tour",
            "name": "Pompeii Guided Tour",
            **fields,
        }
        resp = client.post(f"/api/trips/{trip_id}/activities", json=payload)
        assert resp.status_code == 201, resp.text
        activity = resp.json()
        if price_cents is not None:
            pricing = client.put(
                f"/api/trips/{trip_id}/activities/{activity['id']}/pricing",
                json={"total_price_cents": price_cents, "currency": currency},
            )
            assert pricing.status_code == 200, pricing.text
        return activity
    return _make


@pytest.fixture
def add_traveler(client):
    def _add(trip_id: str, first_name: str, last_name: str = "Traveler", **fields) -> dict:
        payload = {"contact_snapshot": {"firstName": first_name, "lastName": last_name}, **fields}
        resp = client.post(f"/api/trips/{trip_id}/travelers", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _add
