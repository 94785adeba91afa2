def _price(client, trip, activity, **pricing):
    resp = client.put(f"/api/trips/{trip['id']}/activities/{activity['id']}/pricing", json=pricing)
    assert resp.status_code == 200, resp.text


def _split_equally(client, trip, activity):
    resp = client.put(f"/api/trips/{trip['id']}/activities/{activity['id']}/splits", json={"split_type": "equal"})
    assert resp.status_code == 200, resp.text


def _fee(client, trip, amount_cents, *actions):
    fee = client.post(
        f"/api/trips/{trip['id']}/service-fees", json={"title": "Fee", "amount_cents": amount_cents}
    ).json()
    for action in actions:
        client.post(f"/api/trips/{trip['id']}/service-fees/{fee['id']}/{action}")
    return fee


def test_financial_summary(client, make_trip, make_activity, add_traveler):
    trip = make_trip()
    ana = add_traveler(trip["id"], "Ana", "Silva", role="primary_contact")
    ben = add_traveler(trip["id"], "Ben", "Ito")

    villa = make_activity(trip["id"], name="Villa")
    _price(client, trip, villa, total_price_cents=10000, currency="CAD",
           commission_total_cents=2000, commission_split_percentage="80")
    boat = make_activity(trip["id"], day_index=1, price_cents=10000, currency="EUR", name="Boat")
    make_activity(trip["id"], day_index=None, price_cents=99900, name="Floating Idea")
    _split_equally(client, trip, villa)
    _split_equally(client, trip, boat)

    client.post(
        f"/api/trips/{trip['id']}/activities/{villa['id']}/commissions", json={"commission_amount": "12.50"}
    )

    _fee(client, trip, 25000, "send", "mark-paid")
    _fee(client, trip, 10000)
    _fee(client, trip, 5000, "cancel")

    resp = client.get(f"/api/trips/{trip['id']}/financial-summary")
    assert resp.status_code == 200
    summary = resp.json()
    assert summary["trip_currency"] == "CAD"

    activities = summary["activities_summary"]
    assert activities["total_cents"] == 20000
    assert activities["total_in_trip_currency_cents"] == 25000
    by_name = {a["activity_name"]: a for a in activities["by_activity"]}
    assert set(by_name) == {"Villa", "Boat"}
    assert by_name["Boat"]["total_in_trip_currency_cents"] == 15000
    assert by_name["Boat"]["split_type"] == "equal"

    fees = summary["service_fees_summary"]
    assert fees["total_in_trip_currency_cents"] == 35000
    assert fees["paid_cents"] == 25000
    assert fees["pending_cents"] == 10000
    assert fees["refunded_cents"] == 0
    assert fees["by_status"]["cancelled"] == 5000
    assert fees["count_by_status"] == {
        "draft": 1, "sent": 0, "paid": 1, "partially_refunded": 0, "refunded": 0, "cancelled": 1,
    }

    travelers = {t["traveler_id"]: t for t in summary["traveler_breakdown"]}
    assert travelers[ana["id"]]["traveler_name"] == "Ana Silva"
    assert travelers[ana["id"]]["activity_costs_in_trip_currency_cents"] == 12500
    assert travelers[ana["id"]]["service_fees_in_trip_currency_cents"] == 35000
    assert travelers[ana["id"]]["total_in_trip_currency_cents"] == 47500
    assert travelers[ben["id"]]["activity_costs_cents"] == 10000
    assert travelers[ben["id"]]["total_in_trip_currency_cents"] == 12500

    assert summary["commission_summary"] == {
        "expected_total_cents": 2000,
        "received_total_cents": 1250,
        "pending_total_cents": 750,
    }
    assert summary["grand_total"] == {
        "total_cost_cents": 60000,
        "total_collected_cents": 25000,
        "outstanding_cents": 10000,
    }


def test_refunds_reduce_collected(client, make_trip):
    trip = make_trip()
    fee = _fee(client, trip, 20000, "send", "mark-paid")
    client.post(f"/api/trips/{trip['id']}/service-fees/{fee['id']}/refund", json={"amount_cents": 5000})

    fees = client.get(f"/api/trips/{trip['id']}/financial-summary").json()["service_fees_summary"]
    assert fees["paid_cents"] == 15000
    assert fees["refunded_cents"] == 5000
    assert fees["by_status"]["partially_refunded"] == 20000


def test_empty_trip_summary(client, make_trip):
    trip = make_trip(currency="USD")
    summary = client.get(f"/api/trips/{trip['id']}/financial-summary").json()
    assert summary["trip_currency"] == "USD"
    assert summary["traveler_breakdown"] == []
    assert summary["grand_total"]["total_cost_cents"] == 0


def test_summary_counts_days_of_every_itinerary(client, make_trip, make_activity):
    trip = make_trip()
    make_activity(trip["id"], price_cents=10000, name="Villa")
    alternative = client.post(f"/api/trips/{trip['id']}/itineraries", json={"name": "Rainy Week"}).json()
    resp = client.post(f"/api/trips/{trip['id']}/activities", json={
        "itinerary_id": alternative["id"],
        "itinerary_day_id": alternative["days"][0]["id"],
        "activity_type": "tour",
        "name": "Museum Day",
    })
    museum = resp.json()
    _price(client, trip, museum, total_price_cents=4000, currency="CAD")

    activities = client.get(f"/api/trips/{trip['id']}/financial-summary").json()["activities_summary"]
    assert {a["activity_name"] for a in activities["by_activity"]} == {"Villa", "Museum Day"}
    assert activities["total_in_trip_currency_cents"] == 14000
