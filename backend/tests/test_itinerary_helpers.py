import uuid
from datetime import date, datetime
from types import SimpleNamespace

from app.services.geolocation_cascade import compute_cascade, locations_equal
from app.services.itinerary_service import (
    calculate_day_number,
    find_day_for_date,
    is_date_in_trip_range,
    is_date_out_of_trip_range,
    trip_dates,
)

ROME = {"name": "Rome", "lat": 41.9028, "lng": 12.4964}
NAPLES = {"name": "Naples", "lat": 40.8518, "lng": 14.2681}


def _day(seq, start=None, end=None, start_override=False, end_override=False):
    start = start or {}
    end = end or {}
    return SimpleNamespace(
        id=uuid.uuid4(),
        sequence_order=seq,
        day_number=seq,
        date=date(2026, 6, seq),
        start_location_name=start.get("name"),
        start_location_lat=start.get("lat"),
        start_location_lng=start.get("lng"),
        start_location_override=start_override,
        end_location_name=end.get("name"),
        end_location_lat=end.get("lat"),
        end_location_lng=end.get("lng"),
        end_location_override=end_override,
    )


def test_calculate_day_number():
    assert calculate_day_number("2026-06-03", "2026-06-01") == 3
    assert calculate_day_number(datetime(2026, 6, 1, 22, 30), date(2026, 6, 1)) == 1
    assert calculate_day_number("2026-05-31", "2026-06-01") is None
    assert calculate_day_number(None, "2026-06-01") is None


def test_trip_range_checks():
    assert is_date_in_trip_range("2026-06-02", "2026-06-01", "2026-06-03")
    assert not is_date_in_trip_range("2026-06-04", "2026-06-01", "2026-06-03")
    assert is_date_out_of_trip_range("2026-06-04", "2026-06-01", "2026-06-03")
    # An inverted range never flags dates as outside it
    assert not is_date_out_of_trip_range("2026-06-04", "2026-06-05", "2026-06-01")
    assert not is_date_out_of_trip_range("not-a-date", "2026-06-01", "2026-06-03")


def test_trip_dates():
    assert trip_dates(date(2026, 6, 1), date(2026, 6, 3)) == [
        date(2026, 6, 1), date(2026, 6, 2), date(2026, 6, 3),
    ]
    assert trip_dates(date(2026, 6, 1), None) == [date(2026, 6, 1)]
    assert trip_dates(None, date(2026, 6, 3)) == []


def test_find_day_for_date():
    days = [_day(1), _day(2)]
    assert find_day_for_date(datetime(2026, 6, 2, 9, 0), days) is days[1]
    assert find_day_for_date("2026-06-09", days) is None


def test_cascade_moves_trigger_end_and_following_starts():
    days = [_day(1, start=ROME, end=ROME), _day(2, start=ROME), _day(3, start=ROME)]
    preview = compute_cascade(days, days[0].id, NAPLES, {"activity_type": "transportation"})

    affected = preview["affected_days"]
    assert [a["day_id"] for a in affected] == [d.id for d in days]
    assert affected[0]["after"]["end_location"] == NAPLES
    assert affected[0]["after"]["start_location"] == ROME
    assert affected[1]["after"] == {"start_location": NAPLES, "end_location": NAPLES}
    assert preview["trigger"]["activity_type"] == "transportation"


def test_cascade_stops_at_start_override():
    days = [_day(1), _day(2), _day(3, start=ROME, start_override=True), _day(4)]
    preview = compute_cascade(days, days[0].id, NAPLES)
    assert [a["day_number"] for a in preview["affected_days"]] == [1, 2]


def test_cascade_stops_at_day_already_at_location():
    days = [_day(1), _day(2, start=NAPLES), _day(3)]
    preview = compute_cascade(days, days[0].id, NAPLES)
    assert [a["day_number"] for a in preview["affected_days"]] == [1]


def test_cascade_keeps_existing_end_location():
    days = [_day(1), _day(2, end=ROME)]
    preview = compute_cascade(days, days[0].id, NAPLES)
    assert preview["affected_days"][1]["after"] == {"start_location": NAPLES, "end_location": ROME}


def test_cascade_skips_trigger_with_end_override():
    days = [_day(1, end=ROME, end_override=True), _day(2)]
    preview = compute_cascade(days, days[0].id, NAPLES)
    assert [a["day_number"] for a in preview["affected_days"]] == [2]


def test_cascade_unknown_trigger_day_is_empty():
    preview = compute_cascade([_day(1)], uuid.uuid4(), NAPLES)
    assert preview["affected_days"] == []


def test_locations_equal():
    assert locations_equal(None, None)
    assert not locations_equal(ROME, None)
    assert locations_equal(ROME, dict(ROME))
