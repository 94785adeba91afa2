from datetime import date

from app.services.snapshot_diff import (
    category_has_changes,
    compare_snapshots,
    format_field_value,
    get_category_change_count,
    validate_contact_for_travel,
)

TODAY = date(2026, 10, 19)


def test_identical_snapshots_have_no_changes():
    snap = {"firstName": "Ana", "lastName": "Silva", "email": "ana@example.com"}
    diff = compare_snapshots(snap, dict(snap))
    assert not diff.has_changes
    assert diff.total_changes == 0
    assert diff.to_dict()["summary"] == "No changes detected"


def test_changes_are_grouped_by_category():
    old = {"firstName": "Ana", "passportNumber": "X1", "passportExpiry": "2027-01-01"}
    new = {"firstName": "Anna", "passportNumber": "X2", "passportExpiry": "2027-01-01"}
    diff = compare_snapshots(old, new)

    assert diff.total_changes == 2
    assert category_has_changes(diff, "name")
    assert get_category_change_count(diff, "passport") == 1
    assert not category_has_changes(diff, "tsa")
    assert diff.to_dict()["summary"] == "1 in Name, 1 in Passport"


def test_empty_string_and_missing_differ():
    diff = compare_snapshots({"phone": ""}, {})
    assert diff.total_changes == 1
    assert diff.changes[0].label == "Phone"


def test_format_field_value():
    assert format_field_value(None) == "—"
    assert format_field_value("") == "—"
    assert format_field_value("2026-03-05") == "March 5, 2026"
    assert format_field_value("2026-03-05T10:00:00Z") == "March 5, 2026"
    assert format_field_value("aisle") == "aisle"


def test_missing_documents_are_errors():
    result = validate_contact_for_travel({}, today=TODAY)
    fields = [i.field for i in result.errors]
    assert fields == ["dateOfBirth", "passportNumber"]
    assert not result.warnings


def test_passport_expiring_soon_warns():
    contact = {
        "dateOfBirth": "1990-01-01",
        "passportNumber": "AB1",
        "passportCountry": "CAN",
        "passportExpiry": "2027-01-19",
    }
    result = validate_contact_for_travel(contact, today=TODAY)
    assert not result.errors
    assert len(result.warnings) == 1
    assert result.warnings[0].message.startswith("Passport expires in 3 months")


def test_passport_expired_before_departure():
    contact = {
        "dateOfBirth": "1990-01-01",
        "passportNumber": "AB1",
        "passportCountry": "CAN",
        "passportExpiry": "2028-02-01",
    }
    result = validate_contact_for_travel(contact, trip_start_date="2028-03-01", today=TODAY)
    assert [i.message for i in result.errors] == ["Passport will be expired before trip departure"]


def test_passport_without_country_or_expiry():
    contact = {"dateOfBirth": "1990-01-01", "passportNumber": "AB1"}
    result = validate_contact_for_travel(contact, today=TODAY)
    assert [i.field for i in result.errors] == ["passportExpiry"]
    assert [i.field for i in result.warnings] == ["passportCountry"]
