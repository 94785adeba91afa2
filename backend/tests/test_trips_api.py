import asyncio

from app.database import async_session_factory
from app.models.trip import TripReferenceSequence


def test_health(anon_client):
    resp = anon_client.get("/api/health")
    assert resp.json() == {"status": "ok", "service": "tripdesk"}


def test_requires_authentication(anon_client):
    assert anon_client.get("/api/trips").status_code == 401

    bad = anon_client.get("/api/trips", headers={"Authorization": "Bearer not-a-jwt"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid authentication token"


def test_create_trip_assigns_reference_and_main_itinerary(client, make_trip, main_itinerary):
    trip = make_trip()
    assert trip["reference_number"] == "FIT-2026-000001"
    assert trip["status"] == "draft"
    assert trip["currency"] == "CAD"

    itinerary = main_itinerary(trip["id"])
    assert itinerary["name"] == "Main Itinerary"
    assert [d["title"] for d in itinerary["days"]] == ["Day 1", "Day 2", "Day 3"]
    assert itinerary["days"][2]["date"] == "2026-06-03"


def test_reference_sequence_per_prefix(make_trip):
    assert make_trip()["reference_number"] == "FIT-2026-000001"
    assert make_trip(trip_type="honeymoon")["reference_number"] == "FIT-2026-000002"
    assert make_trip(trip_type="group")["reference_number"] == "GRP-2026-000001"
    assert make_trip(trip_type=None, start_date="2027-01-10", end_date=None)["reference_number"] == "DFT-2027-000001"


def test_reference_continues_existing_sequence(make_trip):
    async def preload():
        async with async_session_factory() as db:
            db.add(TripReferenceSequence(prefix="FIT", year=2026, last_value=41))
            await db.commit()

    asyncio.run(preload())
    assert make_trip()["reference_number"] == "FIT-2026-000042"
    assert make_trip()["reference_number"] == "FIT-2026-000043"


def test_trip_without_dates_has_no_days(make_trip, main_itinerary):
    trip = make_trip(start_date=None, end_date=None)
    assert main_itinerary(trip["id"])["days"] == []


def test_setting_dates_later_generates_days(client, make_trip, main_itinerary):
    trip = make_trip(start_date=None, end_date=None)
    resp = client.patch(
        f"/api/trips/{trip['id']}", json={"start_date": "2026-06-01", "end_date": "2026-06-03"}
    )
    assert resp.status_code == 200

    days = main_itinerary(trip["id"])["days"]
    assert [d["date"] for d in days] == ["2026-06-01", "2026-06-02", "2026-06-03"]
    assert [d["day_number"] for d in days] == [1, 2, 3]
    assert [d["sequence_order"] for d in days] == [1, 2, 3]
    assert days[0]["title"] == "Day 1"


def test_moving_start_earlier_prepends_days(client, make_trip, main_itinerary):
    trip = make_trip()
    client.patch(f"/api/trips/{trip['id']}", json={"start_date": "2026-05-31"})

    days = main_itinerary(trip["id"])["days"]
    assert [d["date"] for d in days] == ["2026-05-31", "2026-06-01", "2026-06-02", "2026-06-03"]
    assert [d["day_number"] for d in days] == [1, 2, 3, 4]
    assert [d["title"] for d in days] == ["Day 1", "Day 2", "Day 3", "Day 4"]


def test_end_date_before_start_date(client):
    resp = client.post(
        "/api/trips",
        json={"name": "Backwards", "start_date": "2026-06-05", "end_date": "2026-06-01"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "End date cannot be before start date"


def test_currency_defaults_to_agency(other_client):
    resp = other_client.post("/api/trips", json={"name": "NYC Weekend"})
    assert resp.json()["currency"] == "USD"


def test_trips_are_scoped_to_agency(client, other_client, make_trip):
    trip = make_trip()
    resp = other_client.get(f"/api/trips/{trip['id']}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Trip not found"
    assert other_client.get(f"/api/trips/{trip['id']}/travelers").status_code == 404
    assert other_client.get("/api/trips").json()["total"] == 0
    assert client.get("/api/trips").json()["total"] == 1


def test_list_trips_filters_by_status(client, make_trip):
    make_trip()
    make_trip(status="quoted")
    resp = client.get("/api/trips", params={"status": "quoted"})
    assert resp.json()["total"] == 1
    assert resp.json()["trips"][0]["status"] == "quoted"


def test_status_transitions(client, make_trip):
    trip = make_trip()
    resp = client.patch(f"/api/trips/{trip['id']}/status", json={"status": "booked"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "booked"

    resp = client.patch(f"/api/trips/{trip['id']}/status", json={"status": "draft"})
    assert resp.status_code == 409
    assert resp.json()["detail"] == (
        "Cannot transition from Booked to Draft. Valid transitions: In Progress, Completed, Cancelled"
    )

    client.patch(f"/api/trips/{trip['id']}/status", json={"status": "completed"})
    resp = client.patch(f"/api/trips/{trip['id']}", json={"status": "draft"})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Cannot transition from Completed to Draft. Completed is a terminal state."


def test_trip_type_change_regenerates_reference_while_draft(client, make_trip):
    trip = make_trip()
    resp = client.patch(f"/api/trips/{trip['id']}", json={"trip_type": "corporate"})
    assert resp.json()["reference_number"] == "MICE-2026-000001"

    client.patch(f"/api/trips/{trip['id']}/status", json={"status": "quoted"})
    resp = client.patch(f"/api/trips/{trip['id']}", json={"trip_type": "group"})
    assert resp.json()["reference_number"] == "MICE-2026-000001"


def test_delete_only_early_stage_trips(client, make_trip):
    booked = make_trip(status="booked")
    resp = client.delete(f"/api/trips/{booked['id']}")
    assert resp.status_code == 409

    draft = make_trip()
    assert client.delete(f"/api/trips/{draft['id']}").status_code == 204
    assert client.get(f"/api/trips/{draft['id']}").status_code == 404


def test_delete_trip_cascades_to_itineraries(client, make_trip, make_activity):
    trip = make_trip()
    make_activity(trip["id"], price_cents=5000)
    assert client.delete(f"/api/trips/{trip['id']}").status_code == 204
    assert client.get(f"/api/trips/{trip['id']}/itineraries").status_code == 404


def test_order_pdf(client, make_trip, make_activity):
    trip = make_trip()
    make_activity(trip["id"], price_cents=125000)
    resp = client.get(f"/api/trips/{trip['id']}/order.pdf")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")
    assert "FIT-2026-000001" in resp.headers["content-disposition"]
