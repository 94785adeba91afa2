NAPLES = {"name": "Naples", "lat": 40.8518, "lng": 14.2681}
POSITANO = {"name": "Positano", "lat": 40.628, "lng": 14.485}


def _url(trip, itinerary=None):
    base = f"/api/trips/{trip['id']}/itineraries"
    return f"{base}/{itinerary['id']}" if itinerary else base


def test_create_alternative_itinerary(client, make_trip):
    trip = make_trip()
    resp = client.post(_url(trip), json={"name": "Budget Option"})
    assert resp.status_code == 201
    alt = resp.json()
    assert alt["is_selected"] is False
    assert alt["sequence_order"] == 2
    assert len(alt["days"]) == 3


def test_select_itinerary_clears_previous(client, make_trip):
    trip = make_trip()
    alt = client.post(_url(trip), json={"name": "Luxury Option"}).json()
    client.post(f"{_url(trip, alt)}/select")

    selected = [i["name"] for i in client.get(_url(trip)).json() if i["is_selected"]]
    assert selected == ["Luxury Option"]


def test_delete_itinerary_rules(client, make_trip, main_itinerary):
    trip = make_trip()
    main = main_itinerary(trip["id"])

    resp = client.delete(_url(trip, main))
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Cannot delete the last itinerary. At least one itinerary is required."

    alt = client.post(_url(trip), json={"name": "Approved Plan", "status": "approved"}).json()
    assert client.delete(_url(trip, alt)).status_code == 409

    assert client.delete(_url(trip, main)).status_code == 204
    remaining = client.get(_url(trip)).json()
    assert [i["name"] for i in remaining] == ["Approved Plan"]
    assert remaining[0]["is_selected"] is True


def test_add_day_numbers_from_trip_start(client, make_trip, main_itinerary):
    trip = make_trip()
    main = main_itinerary(trip["id"])
    resp = client.post(f"{_url(trip, main)}/days", json={"date": "2026-06-05"})
    assert resp.status_code == 201
    day = resp.json()
    assert day["day_number"] == 5
    assert day["title"] == "Day 5"
    assert day["sequence_order"] == 4


def test_manual_location_sets_override(client, make_trip, main_itinerary):
    trip = make_trip()
    main = main_itinerary(trip["id"])
    day = main["days"][1]
    resp = client.patch(f"{_url(trip, main)}/days/{day['id']}", json={"start_location": POSITANO})
    body = resp.json()
    assert body["start_location_name"] == "Positano"
    assert body["start_location_override"] is True
    assert body["end_location_override"] is False


def test_delete_day_leaves_activities_floating(client, make_trip, main_itinerary, make_activity):
    trip = make_trip()
    activity = make_activity(trip["id"], day_index=0)
    main = main_itinerary(trip["id"])
    assert client.delete(f"{_url(trip, main)}/days/{main['days'][0]['id']}").status_code == 204

    resp = client.get(f"/api/trips/{trip['id']}/activities/{activity['id']}")
    assert resp.json()["itinerary_day_id"] is None


def test_delete_day_renumbers_remaining_days(client, make_trip, main_itinerary):
    trip = make_trip()
    main = main_itinerary(trip["id"])
    client.post(f"{_url(trip, main)}/days", json={"title": "Free day"})

    assert client.delete(f"{_url(trip, main)}/days/{main['days'][0]['id']}").status_code == 204

    days = main_itinerary(trip["id"])["days"]
    assert [d["sequence_order"] for d in days] == [1, 2, 3]
    assert [d["day_number"] for d in days] == [2, 3, 4]
    assert days[2]["title"] == "Free day"


def test_cascade_preview_and_apply(client, make_trip, main_itinerary):
    trip = make_trip()
    main = main_itinerary(trip["id"])
    days = main["days"]
    # Day 3 was planned by hand and must not move
    client.patch(f"{_url(trip, main)}/days/{days[2]['id']}", json={"start_location": POSITANO})

    preview = client.post(
        f"{_url(trip, main)}/days/{days[0]['id']}/cascade/preview",
        json={"new_location": NAPLES, "trigger": {"activity_type": "flight", "description": "Arrive NAP"}},
    )
    assert preview.status_code == 200
    body = preview.json()
    assert [d["day_number"] for d in body["affected_days"]] == [1, 2]
    assert body["affected_days"][0]["after"]["end_location"]["name"] == "Naples"

    # Nothing is written by a preview
    assert main_itinerary(trip["id"])["days"][0]["end_location_name"] is None

    applied = client.post(
        f"{_url(trip, main)}/cascade/apply",
        json={"day_ids": [days[0]["id"]], "preview": body},
    )
    assert applied.json()["updated_days"] == 1

    after = main_itinerary(trip["id"])["days"]
    assert after[0]["end_location_name"] == "Naples"
    assert after[0]["end_location_override"] is False
    assert after[1]["start_location_name"] is None
    assert after[2]["start_location_name"] == "Positano"


def test_cascade_requires_location(client, make_trip, main_itinerary):
    trip = make_trip()
    main = main_itinerary(trip["id"])
    resp = client.post(f"{_url(trip, main)}/days/{main['days'][0]['id']}/cascade/preview", json={})
    assert resp.status_code == 422
