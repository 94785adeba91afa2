from app.services.activity_naming import (
    generate_cruise_name,
    generate_flight_name,
    resolve_activity_name,
)


def test_flight_name_from_details():
    details = {"airline": "AC", "flight_number": "123", "departure_airport": "YYZ", "arrival_airport": "LHR"}
    assert generate_flight_name(details) == "AC 123 YYZ → LHR"


def test_flight_number_with_airline_prefix_replaces_airline():
    details = {"airline": "AC", "flight_number": "AC856", "departure_airport": "YYZ", "arrival_airport": "LHR"}
    assert generate_flight_name(details) == "AC856 YYZ → LHR"


def test_flight_route_needs_both_airports():
    assert generate_flight_name({"airline": "WS", "departure_airport": "YYC"}) == "WS"
    assert generate_flight_name({}) == "Flight"


def test_placeholder_flight_name_is_regenerated():
    details = {"airline": "AC", "flight_number": "8", "departure_airport": "YVR", "arrival_airport": "HND"}
    assert resolve_activity_name("flight", "Flight", details) == "AC 8 YVR → HND"
    assert resolve_activity_name("flight", "Red-eye to Tokyo", details) == "Red-eye to Tokyo"


def test_cruise_name():
    details = {"cruise_line_name": "Viking", "ship_name": "Viking Sky", "region": "Norwegian Fjords", "nights": 7}
    assert generate_cruise_name(details) == "Viking Viking Sky Norwegian Fjords 7-Night"
    assert generate_cruise_name({}) == "Custom Cruise"


def test_detail_field_names_and_defaults():
    assert resolve_activity_name("lodging", None, {"property_name": " Hotel Santa Caterina "}) == "Hotel Santa Caterina"
    assert resolve_activity_name("lodging", "", {}) == "Hotel Stay"
    assert resolve_activity_name("dining", None, None) == "Restaurant"
    assert resolve_activity_name("tour", "  Capri Boat Day ", {}) == "Capri Boat Day"
