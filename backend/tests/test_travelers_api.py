from unittest.mock import AsyncMock

from sqlalchemy.exc import SQLAlchemyError

from app.services.traveler_split_service import traveler_split_service


def _travelers_url(trip):
    return f"/api/trips/{trip['id']}/travelers"


def test_add_traveler_from_contact(client, make_trip, make_contact):
    trip = make_trip()
    contact = make_contact(preferred_name="Mae", passport_number="AB123456", date_of_birth="1986-04-12")

    resp = client.post(_travelers_url(trip), json={"contact_id": contact["id"]})
    assert resp.status_code == 201
    traveler = resp.json()
    assert traveler["display_name"] == "Mae"
    assert traveler["legal_full_name"] == "Maya Okafor"
    assert traveler["contact_snapshot"]["passportNumber"] == "AB123456"
    assert traveler["contact_snapshot"]["dateOfBirth"] == "1986-04-12"
    assert traveler["is_snapshot_stale"] is False
    assert traveler["sequence_order"] == 1
    assert traveler["role"] == "limited_access"


def test_add_traveler_from_snapshot_creates_lead(client, make_trip, add_traveler):
    trip = make_trip()
    traveler = add_traveler(trip["id"], "Luca", "Moretti")
    assert traveler["contact_id"] is not None

    leads = client.get("/api/contacts", params={"contact_type": "lead"}).json()
    assert leads["total"] == 1
    assert leads["contacts"][0]["first_name"] == "Luca"


def test_traveler_requires_contact_or_snapshot(client, make_trip):
    trip = make_trip()
    resp = client.post(_travelers_url(trip), json={"role": "full_access"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Either contact_id or contact_snapshot is required"


def test_contact_from_other_agency_is_not_found(client, other_client, make_trip):
    trip = make_trip()
    foreign = other_client.post("/api/contacts", json={"first_name": "Sam"}).json()
    resp = client.post(_travelers_url(trip), json={"contact_id": foreign["id"]})
    assert resp.status_code == 404


def test_single_primary_contact(client, make_trip, add_traveler):
    trip = make_trip()
    primary = add_traveler(trip["id"], "Ana", role="primary_contact")
    assert primary["is_primary_traveler"] is True
    assert client.get(f"/api/trips/{trip['id']}").json()["primary_contact_id"] == primary["contact_id"]

    resp = client.post(
        _travelers_url(trip),
        json={"contact_snapshot": {"firstName": "Ben"}, "role": "primary_contact"},
    )
    assert resp.status_code == 409

    other = add_traveler(trip["id"], "Ben")
    resp = client.patch(f"{_travelers_url(trip)}/{other['id']}", json={"role": "primary_contact"})
    assert resp.status_code == 409

    client.patch(f"{_travelers_url(trip)}/{primary['id']}", json={"role": "full_access"})
    resp = client.patch(f"{_travelers_url(trip)}/{other['id']}", json={"role": "primary_contact"})
    assert resp.status_code == 200
    assert resp.json()["is_primary_traveler"] is True


def test_snapshot_diff_and_reset(client, make_trip, make_contact):
    trip = make_trip()
    contact = make_contact(passport_number="AB123456")
    traveler = client.post(_travelers_url(trip), json={"contact_id": contact["id"]}).json()
    url = f"{_travelers_url(trip)}/{traveler['id']}"

    assert client.get(f"{url}/snapshot/diff").json()["has_changes"] is False

    client.patch(f"/api/contacts/{contact['id']}", json={"passport_number": "ZX987654"})

    assert client.get(url).json()["is_snapshot_stale"] is True
    diff = client.get(f"{url}/snapshot/diff").json()
    assert diff["has_changes"] is True
    assert diff["total_changes"] == 1
    assert diff["summary"] == "1 in Passport"
    assert diff["changes"][0]["old_value"] == "AB123456"
    assert diff["changes"][0]["new_value"] == "ZX987654"

    # The snapshot itself is untouched until reset
    assert client.get(f"{url}/snapshot").json()["contact_snapshot"]["passportNumber"] == "AB123456"

    reset = client.post(f"{url}/snapshot/reset").json()
    assert reset["contact_snapshot"]["passportNumber"] == "ZX987654"
    assert reset["is_snapshot_stale"] is False
    assert client.get(f"{url}/snapshot/diff").json()["has_changes"] is False


def test_travel_readiness(client, make_trip, make_contact):
    trip = make_trip(start_date="2030-05-01", end_date="2030-05-10")
    contact = make_contact(
        date_of_birth="1986-04-12",
        passport_number="AB123456",
        passport_country="CAN",
        passport_expiry="2030-04-01",
    )
    traveler = client.post(_travelers_url(trip), json={"contact_id": contact["id"]}).json()

    readiness = client.get(f"{_travelers_url(trip)}/{traveler['id']}/readiness").json()
    assert readiness["has_issues"] is True
    assert [e["message"] for e in readiness["errors"]] == ["Passport will be expired before trip departure"]


def test_remove_traveler(client, make_trip, add_traveler):
    trip = make_trip()
    first = add_traveler(trip["id"], "Ana")
    add_traveler(trip["id"], "Ben")

    assert client.delete(f"{_travelers_url(trip)}/{first['id']}").status_code == 204
    names = [t["display_name"] for t in client.get(_travelers_url(trip)).json()]
    assert names == ["Ben"]
    assert client.get(f"{_travelers_url(trip)}/{first['id']}").status_code == 404


def test_remove_traveler_survives_split_cleanup_failure(client, make_trip, add_traveler, monkeypatch):
    trip = make_trip()
    traveler = add_traveler(trip["id"], "Ana")
    failing = AsyncMock(side_effect=SQLAlchemyError("split table locked"))
    monkeypatch.setattr(traveler_split_service, "delete_traveler_splits", failing)

    assert client.delete(f"{_travelers_url(trip)}/{traveler['id']}").status_code == 204
    failing.assert_awaited_once()
    assert client.get(_travelers_url(trip)).json() == []
    assert client.get("/api/notifications").json()["unread_count"] == 0
