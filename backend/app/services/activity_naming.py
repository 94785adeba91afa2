"""Activity naming — builds display names from type-specific details when none is given."""

ACTIVITY_TYPES = [
    "lodging", "flight", "tour", "transportation", "dining",
    "options", "custom_cruise", "port_info", "package",
]

PRICING_TYPES = ["per_person", "per_room", "flat_rate", "per_night"]

DEFAULT_ACTIVITY_NAMES: dict[str, str] = {
    "flight": "Flight",
    "lodging": "Hotel Stay",
    "transportation": "Transportation",
    "tour": "Tour",
    "options": "Options",
    "custom_cruise": "Custom Cruise",
    "port_info": "Port Information",
    "dining": "Restaurant",
    "package": "Package",
    "custom_tour": "Custom Tour",
}

# Types whose name is simply one detail field
_DETAIL_NAME_FIELDS: dict[str, str] = {
    "lodging": "property_name",
    "dining": "restaurant_name",
    "port_info": "port_name",
    "tour": "tour_name",
}


def default_activity_name(activity_type: str) -> str:
    return DEFAULT_ACTIVITY_NAMES.get(activity_type, "Activity")


def generate_flight_name(details: dict) -> str:
    """e.g. "AC 123 YYZ → LHR". A flight number that already carries the airline code replaces it."""
    airline = (details.get("airline") or "").strip()
    flight_number = (details.get("flight_number") or "").strip()
    departure = (details.get("departure_airport") or "").strip()
    arrival = (details.get("arrival_airport") or "").strip()

    parts: list[str] = []
    if airline:
        parts.append(airline)
    if flight_number:
        if flight_number.startswith(airline):
            parts = [flight_number]
        else:
            parts.append(flight_number)
    if departure and arrival:
        parts.append(f"{departure} → {arrival}")

    return " ".join(parts) if parts else "Flight"


def generate_cruise_name(details: dict) -> str:
    parts: list[str] = []
    for key in ("cruise_line_name", "ship_name"):
        if details.get(key):
            parts.append(details[key])
    if details.get("itinerary_name"):
        parts.append(details["itinerary_name"])
    elif details.get("region"):
        parts.append(details["region"])
    if details.get("nights"):
        parts.append(f"{details['nights']}-Night")

    return " ".join(parts) if parts else "Custom Cruise"


def resolve_activity_name(activity_type: str, name: str | None, details: dict | None) -> str:
    """Return the name to store for an activity.

    An explicit name wins, except the placeholder "Flight" on flights which is
    replaced by a generated one.
    """
    details = details or {}
    name = (name or "").strip()

    if activity_type == "flight":
        if name and name != "Flight":
            return name
        return generate_flight_name(details)

    if name:
        return name

    if activity_type == "custom_cruise":
        return generate_cruise_name(details)

    detail_field = _DETAIL_NAME_FIELDS.get(activity_type)
    if detail_field and (details.get(detail_field) or "").strip():
        return details[detail_field].strip()

    return default_activity_name(activity_type)
