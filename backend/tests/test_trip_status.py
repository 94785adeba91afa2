from app.services.trip_status import (
    can_transition,
    format_reference_number,
    format_status_label,
    is_deletable,
    reference_prefix,
    transition_error_message,
)


def test_same_status_is_always_allowed():
    assert can_transition("completed", "completed")
    assert can_transition("draft", "draft")


def test_forward_and_backward_transitions():
    assert can_transition("inbound", "booked")
    assert can_transition("quoted", "draft")
    assert not can_transition("booked", "draft")
    assert not can_transition("cancelled", "draft")


def test_terminal_state_message():
    msg = transition_error_message("completed", "draft")
    assert msg == "Cannot transition from Completed to Draft. Completed is a terminal state."


def test_invalid_transition_lists_valid_targets():
    msg = transition_error_message("booked", "draft")
    assert msg == "Cannot transition from Booked to Draft. Valid transitions: In Progress, Completed, Cancelled"


def test_deletable_statuses():
    assert is_deletable("inbound")
    assert is_deletable("quoted")
    assert not is_deletable("booked")
    assert not is_deletable("in_progress")


def test_reference_prefixes_and_format():
    assert reference_prefix("honeymoon") == "FIT"
    assert reference_prefix("corporate") == "MICE"
    assert reference_prefix(None) == "DFT"
    assert format_reference_number("GRP", 2026, 42) == "GRP-2026-000042"


def test_status_label_falls_back_to_raw_value():
    assert format_status_label("in_progress") == "In Progress"
    assert format_status_label("unknown") == "unknown"
