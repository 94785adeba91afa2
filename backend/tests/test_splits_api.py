def _splits_url(trip, activity):
    return f"/api/trips/{trip['id']}/activities/{activity['id']}/splits"


def test_equal_split_with_remainder(client, make_trip, make_activity, add_traveler):
    trip = make_trip()
    ana = add_traveler(trip["id"], "Ana")
    ben = add_traveler(trip["id"], "Ben")
    cam = add_traveler(trip["id"], "Cam")
    activity = make_activity(trip["id"], price_cents=10000)

    resp = client.put(_splits_url(trip, activity), json={"split_type": "equal"})
    assert resp.status_code == 200
    body = resp.json()
    amounts = {s["traveler_id"]: s["amount_cents"] for s in body["splits"]}
    assert amounts == {ana["id"]: 3334, ben["id"]: 3333, cam["id"]: 3333}
    assert body["is_complete"] is True
    assert body["missing_travelers"] == []
    assert body["splits"][0]["exchange_rate_to_trip_currency"] is None


def test_custom_split_must_match_total(client, make_trip, make_activity, add_traveler):
    trip = make_trip()
    ana = add_traveler(trip["id"], "Ana")
    ben = add_traveler(trip["id"], "Ben")
    activity = make_activity(trip["id"], price_cents=10000)

    resp = client.put(_splits_url(trip, activity), json={
        "split_type": "custom",
        "splits": [
            {"traveler_id": ana["id"], "amount_cents": 6000},
            {"traveler_id": ben["id"], "amount_cents": 3000},
        ],
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Split amounts (9000 cents) must equal activity total (10000 cents)"

    resp = client.put(_splits_url(trip, activity), json={
        "split_type": "custom",
        "splits": [{"traveler_id": ana["id"], "amount_cents": 10000, "notes": "Ana treats"}],
    })
    body = resp.json()
    assert body["split_type"] == "custom"
    assert body["is_complete"] is False
    assert body["missing_travelers"] == [ben["id"]]


def test_split_needs_travelers(client, make_trip, make_activity):
    trip = make_trip()
    activity = make_activity(trip["id"], price_cents=10000)
    resp = client.put(_splits_url(trip, activity), json={"split_type": "equal"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Trip has no travellers to split costs among"


def test_splits_complete_when_trip_has_no_travelers(client, make_trip, make_activity):
    trip = make_trip()
    activity = make_activity(trip["id"], price_cents=10000)
    body = client.get(_splits_url(trip, activity)).json()
    assert body["splits"] == []
    assert body["missing_travelers"] == []
    assert body["is_complete"] is True


def test_custom_split_checks_total_before_negative_amounts(client, make_trip, make_activity, add_traveler):
    trip = make_trip()
    ana = add_traveler(trip["id"], "Ana")
    ben = add_traveler(trip["id"], "Ben")
    activity = make_activity(trip["id"], price_cents=10000)

    resp = client.put(_splits_url(trip, activity), json={
        "split_type": "custom",
        "splits": [
            {"traveler_id": ana["id"], "amount_cents": 12000},
            {"traveler_id": ben["id"], "amount_cents": -1000},
        ],
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Split amounts (11000 cents) must equal activity total (10000 cents)"

    resp = client.put(_splits_url(trip, activity), json={
        "split_type": "custom",
        "splits": [
            {"traveler_id": ana["id"], "amount_cents": 11000},
            {"traveler_id": ben["id"], "amount_cents": -1000},
        ],
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Split amounts cannot be negative"


def test_custom_split_rejects_repeated_traveler(client, make_trip, make_activity, add_traveler):
    trip = make_trip()
    ana = add_traveler(trip["id"], "Ana")
    activity = make_activity(trip["id"], price_cents=10000)

    resp = client.put(_splits_url(trip, activity), json={
        "split_type": "custom",
        "splits": [
            {"traveler_id": ana["id"], "amount_cents": 5000},
            {"traveler_id": ana["id"], "amount_cents": 5000},
        ],
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == f"Traveller {ana['id']} appears more than once in the split"
    assert client.get(_splits_url(trip, activity)).json()["splits"] == []


def test_floating_activity_cannot_be_split(client, make_trip, make_activity, add_traveler):
    trip = make_trip()
    add_traveler(trip["id"], "Ana")
    activity = make_activity(trip["id"], day_index=None, price_cents=10000)
    assert client.put(_splits_url(trip, activity), json={"split_type": "equal"}).status_code == 404


def test_foreign_currency_split_snapshots_rate(client, make_trip, make_activity, add_traveler):
    trip = make_trip()
    add_traveler(trip["id"], "Ana")
    activity = make_activity(trip["id"], price_cents=10000, currency="EUR")

    split = client.put(_splits_url(trip, activity), json={"split_type": "equal"}).json()["splits"][0]
    assert split["currency"] == "EUR"
    assert float(split["exchange_rate_to_trip_currency"]) == 1.5
    assert split["exchange_rate_snapshot_at"] is not None


def test_removing_traveler_flags_recalculation(client, make_trip, make_activity, add_traveler):
    trip = make_trip()
    ana = add_traveler(trip["id"], "Ana", "Silva")
    add_traveler(trip["id"], "Ben")
    activity = make_activity(trip["id"], price_cents=9000)
    client.put(_splits_url(trip, activity), json={"split_type": "equal"})

    traveler_splits = client.get(f"/api/trips/{trip['id']}/travelers/{ana['id']}/splits").json()
    assert [s["amount_cents"] for s in traveler_splits] == [4500]

    client.delete(f"/api/trips/{trip['id']}/travelers/{ana['id']}")

    remaining = client.get(_splits_url(trip, activity)).json()
    assert len(remaining["splits"]) == 1
    assert remaining["is_complete"] is True

    notifications = client.get("/api/notifications", params={"trip_id": trip["id"]}).json()
    assert notifications["unread_count"] == 1
    note = notifications["notifications"][0]
    assert note["type"] == "split_recalculation_needed"
    assert note["message"] == "Ana was removed from the trip. Cost splits for 1 activity should be recalculated."


def test_delete_activity_splits(client, make_trip, make_activity, add_traveler):
    trip = make_trip()
    add_traveler(trip["id"], "Ana")
    activity = make_activity(trip["id"], price_cents=5000)
    client.put(_splits_url(trip, activity), json={"split_type": "equal"})

    assert client.delete(_splits_url(trip, activity)).status_code == 204
    assert client.get(_splits_url(trip, activity)).json()["splits"] == []
