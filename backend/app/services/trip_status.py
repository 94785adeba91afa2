"""Trip lifecycle rules — status transitions, deletion guard, reference-number prefixes."""

TRIP_STATUSES = ["inbound", "draft", "quoted", "booked", "in_progress", "completed", "cancelled"]

TRIP_TYPES = ["leisure", "business", "group", "honeymoon", "corporate", "custom"]

TRIP_STATUS_TRANSITIONS: dict[str, list[str]] = {
    "inbound": ["draft", "quoted", "booked", "cancelled"],
    "draft": ["inbound", "quoted", "booked", "cancelled"],
    "quoted": ["draft", "booked", "cancelled"],
    "booked": ["in_progress", "completed", "cancelled"],
    "in_progress": ["completed", "cancelled"],
    "completed": [],
    "cancelled": [],
}

TERMINAL_STATUSES = {"completed", "cancelled"}

DELETABLE_STATUSES = {"inbound", "draft", "quoted"}

# Reference numbers are regenerated on trip_type change only before quoting
REFERENCE_REGENERATION_STATUSES = {"inbound", "draft"}

REFERENCE_PREFIXES: dict[str, str] = {
    "leisure": "FIT",
    "honeymoon": "FIT",
    "custom": "FIT",
    "group": "GRP",
    "business": "BUS",
    "corporate": "MICE",
}
DEFAULT_REFERENCE_PREFIX = "DFT"

_STATUS_LABELS = {
    "inbound": "Inbound",
    "draft": "Draft",
    "quoted": "Quoted",
    "booked": "Booked",
    "in_progress": "In Progress",
    "completed": "Completed",
    "cancelled": "Cancelled",
}


def format_status_label(status: str) -> str:
    return _STATUS_LABELS.get(status, status)


def can_transition(from_status: str, to_status: str) -> bool:
    if from_status == to_status:
        return True
    return to_status in TRIP_STATUS_TRANSITIONS.get(from_status, [])


def transition_error_message(from_status: str, to_status: str) -> str:
    from_label = format_status_label(from_status)
    to_label = format_status_label(to_status)

    if from_status in TERMINAL_STATUSES:
        return f"Cannot transition from {from_label} to {to_label}. {from_label} is a terminal state."

    valid = TRIP_STATUS_TRANSITIONS.get(from_status, [])
    if not valid:
        return f"Cannot transition from {from_label}. {from_label} is a terminal state."

    valid_labels = ", ".join(format_status_label(s) for s in valid)
    return f"Cannot transition from {from_label} to {to_label}. Valid transitions: {valid_labels}"


def is_deletable(status: str) -> bool:
    return status in DELETABLE_STATUSES


def reference_prefix(trip_type: str | None) -> str:
    return REFERENCE_PREFIXES.get(trip_type or "", DEFAULT_REFERENCE_PREFIX)


def format_reference_number(prefix: str, year: int, sequence: int) -> str:
    """e.g. FIT-2026-000042."""
    return f"{prefix}-{year}-{sequence:06d}"
