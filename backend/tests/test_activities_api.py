from datetime import date, timedelta


def _url(trip, activity=None):
    base = f"/api/trips/{trip['id']}/activities"
    return f"{base}/{activity['id']}" if activity else base


def test_flight_name_generated_and_day_resolved(client, make_trip, main_itinerary):
    trip = make_trip()
    main = main_itinerary(trip["id"])
    resp = client.post(_url(trip), json={
        "itinerary_id": main["id"],
        "activity_type": "flight",
        "start_datetime": "2026-06-02T08:15:00Z",
        "details": {
            "airline": "AC", "flight_number": "894",
            "departure_airport": "YYZ", "arrival_airport": "FCO",
        },
    })
    assert resp.status_code == 201
    activity = resp.json()
    assert activity["name"] == "AC 894 YYZ → FCO"
    assert activity["itinerary_day_id"] == main["days"][1]["id"]
    assert activity["pricing"] is None


def test_activity_outside_trip_dates_is_floating(client, make_trip, main_itinerary):
    trip = make_trip()
    main = main_itinerary(trip["id"])
    resp = client.post(_url(trip), json={
        "itinerary_id": main["id"],
        "activity_type": "lodging",
        "start_datetime": "2026-07-01T15:00:00Z",
        "details": {"property_name": "Le Sirenuse"},
    })
    assert resp.json()["name"] == "Le Sirenuse"
    assert resp.json()["itinerary_day_id"] is None


def test_day_from_another_itinerary_is_rejected(client, make_trip, main_itinerary):
    trip = make_trip()
    main = main_itinerary(trip["id"])
    alt = client.post(f"/api/trips/{trip['id']}/itineraries", json={"name": "Alt"}).json()
    resp = client.post(_url(trip), json={
        "itinerary_id": main["id"],
        "itinerary_day_id": alt["days"][0]["id"],
        "activity_type": "tour",
    })
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Itinerary day not found"


def test_pricing_and_agent_commission(client, make_trip, make_activity):
    trip = make_trip()
    activity = make_activity(trip["id"])
    resp = client.put(f"{_url(trip, activity)}/pricing", json={
        "total_price_cents": 250000,
        "currency": "eur",
        "commission_total_cents": 25001,
        "commission_split_percentage": "70",
    })
    assert resp.status_code == 200
    pricing = resp.json()
    assert pricing["currency"] == "EUR"
    assert pricing["agent_commission_cents"] == 17501

    fetched = client.get(_url(trip, activity)).json()
    assert fetched["pricing"]["total_price_cents"] == 250000


def test_update_activity_moves_to_matching_day(client, make_trip, make_activity, main_itinerary):
    trip = make_trip()
    activity = make_activity(trip["id"], day_index=0)
    resp = client.patch(_url(trip, activity), json={"start_datetime": "2026-06-03T10:00:00Z"})
    assert resp.json()["itinerary_day_id"] == main_itinerary(trip["id"])["days"][2]["id"]


def test_deposit_schedule_and_transactions(client, make_trip, make_activity):
    trip = make_trip()
    activity = make_activity(trip["id"], price_cents=100000)
    resp = client.put(f"{_url(trip, activity)}/payment-schedule", json={
        "schedule_type": "deposit",
        "deposit_type": "percentage",
        "deposit_percentage": "25",
        "deposit_due_date": "2026-01-15",
        "balance_due_date": "2026-04-01",
    })
    assert resp.status_code == 200
    schedule = resp.json()
    items = schedule["items"]
    assert [(i["payment_name"], i["expected_amount_cents"]) for i in items] == [
        ("Deposit", 25000), ("Balance", 75000),
    ]

    deposit = items[0]
    tx_url = f"{_url(trip, activity)}/payment-items/{deposit['id']}/transactions"
    partial = client.post(tx_url, json={"amount_cents": 10000})
    assert partial.status_code == 201
    assert partial.json()["status"] == "partial"

    paid = client.post(tx_url, json={"amount_cents": 15000})
    assert paid.json()["status"] == "paid"
    assert paid.json()["paid_amount_cents"] == 25000

    refund = client.post(tx_url, json={"amount_cents": 5000, "transaction_type": "refund"})
    assert refund.json()["status"] == "partial"


def test_invalid_schedule_is_rejected(client, make_trip, make_activity):
    trip = make_trip()
    activity = make_activity(trip["id"], price_cents=50000)
    resp = client.put(f"{_url(trip, activity)}/payment-schedule", json={
        "schedule_type": "installments",
        "expected_payment_items": [{"payment_name": "Only", "expected_amount_cents": 40000}],
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Sum of installments ($400.00) must equal total price ($500.00)"


def test_schedule_replacement_and_full_payment(client, make_trip, make_activity):
    trip = make_trip()
    activity = make_activity(trip["id"], price_cents=80000)
    client.put(f"{_url(trip, activity)}/payment-schedule", json={
        "schedule_type": "deposit", "deposit_type": "fixed_amount", "deposit_amount_cents": 20000,
    })
    resp = client.put(f"{_url(trip, activity)}/payment-schedule", json={"schedule_type": "full"})
    items = resp.json()["items"]
    assert len(items) == 1
    assert items[0]["payment_name"] == "Full Payment"
    assert items[0]["expected_amount_cents"] == 80000

    assert client.get(f"{_url(trip, activity)}/payment-schedule").json()["schedule_type"] == "full"


def test_booking_status(client, make_trip, make_activity):
    trip = make_trip()
    overdue = make_activity(trip["id"], price_cents=60000, name="Overdue Hotel")
    soon = make_activity(trip["id"], day_index=1, price_cents=30000, name="Boat Day")
    make_activity(trip["id"], day_index=2, price_cents=10000, name="Unscheduled Dinner")
    make_activity(trip["id"], day_index=None, price_cents=99900, name="Floating Idea")

    client.put(f"{_url(trip, overdue)}/payment-schedule", json={
        "schedule_type": "full", "due_date": "2020-01-01",
    })
    upcoming = (date.today() + timedelta(days=3)).isoformat()
    client.put(f"{_url(trip, soon)}/payment-schedule", json={"schedule_type": "full", "due_date": upcoming})

    status = client.get(f"/api/trips/{trip['id']}/booking-status").json()
    summary = status["summary"]
    assert summary["total_activities"] == 3
    assert summary["activities_with_payment_schedule"] == 2
    assert summary["total_expected_cents"] == 100000
    assert summary["total_paid_cents"] == 0
    assert summary["overdue_count"] == 1
    assert summary["upcoming_due_count"] == 1

    assert status["activities"][overdue["id"]]["payment_status"] == "overdue"
    assert status["activities"][soon["id"]]["next_due_date"] == upcoming


def test_package_totals(client, make_trip, make_activity, main_itinerary):
    trip = make_trip()
    package = make_activity(trip["id"], activity_type="package", name="Amalfi Bundle", price_cents=0)
    make_activity(trip["id"], parent_activity_id=package["id"], name="Villa", day_index=None, price_cents=150000)
    make_activity(trip["id"], parent_activity_id=package["id"], name="Transfers", day_index=None, price_cents=20000)
    make_activity(trip["id"], name="Cooking Class", price_cents=12000)

    totals = client.get(f"/api/trips/{trip['id']}/package-totals").json()
    items = {i["name"]: i for i in totals["items"]}
    assert items["Amalfi Bundle"]["component_count"] == 2
    assert items["Amalfi Bundle"]["total_price_cents"] == 170000
    assert totals["totals"]["total_items"] == 2
    assert totals["totals"]["total_packages"] == 1
    assert totals["totals"]["total_price_cents"] == 182000

    # Components follow their package onto its day
    component = next(a for a in client.get(_url(trip)).json() if a["name"] == "Villa")
    assert component["itinerary_day_id"] == main_itinerary(trip["id"])["days"][0]["id"]


def test_delete_package_deletes_components(client, make_trip, make_activity):
    trip = make_trip()
    package = make_activity(trip["id"], activity_type="package", name="Bundle")
    make_activity(trip["id"], parent_activity_id=package["id"], name="Part")
    assert client.delete(_url(trip, package)).status_code == 204
    assert client.get(_url(trip)).json() == []


def test_record_commission(client, make_trip, make_activity):
    trip = make_trip()
    activity = make_activity(trip["id"], price_cents=100000)
    resp = client.post(f"{_url(trip, activity)}/commissions", json={
        "commission_amount": "125.50", "received_date": "2026-07-01",
    })
    assert resp.status_code == 201
    assert resp.json()["commission_amount"] == "125.50"
    assert resp.json()["status"] == "received"
