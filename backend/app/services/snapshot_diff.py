"""Snapshot diff — compares a traveler's saved profile copy with the live contact.

Snapshots are stored with camelCase keys (``firstName``, ``passportExpiry``)
so the same field names are used for the diff output.
"""

import calendar
import re
from dataclasses import asdict, dataclass, field
from datetime import date

FIELD_CATEGORIES: dict[str, dict] = {
    "name": {
        "label": "Name",
        "fields": [
            "firstName", "lastName", "legalFirstName", "legalLastName",
            "middleName", "preferredName", "prefix", "suffix",
        ],
    },
    "identity": {"label": "Identity", "fields": ["gender", "pronouns"]},
    "contact": {"label": "Contact Information", "fields": ["email", "phone", "dateOfBirth"]},
    "passport": {
        "label": "Passport",
        "fields": [
            "passportNumber", "passportExpiry", "passportCountry",
            "passportIssueDate", "nationality",
        ],
    },
    "tsa": {"label": "TSA Credentials", "fields": ["redressNumber", "knownTravelerNumber"]},
    "requirements": {
        "label": "Special Requirements",
        "fields": ["dietaryRequirements", "mobilityRequirements"],
    },
    "preferences": {
        "label": "Travel Preferences",
        "fields": ["seatPreference", "cabinPreference", "floorPreference"],
    },
}

FIELD_LABELS: dict[str, str] = {
    "firstName": "First Name",
    "lastName": "Last Name",
    "legalFirstName": "Legal First Name",
    "legalLastName": "Legal Last Name",
    "middleName": "Middle Name",
    "preferredName": "Preferred Name",
    "prefix": "Prefix",
    "suffix": "Suffix",
    "gender": "Gender",
    "pronouns": "Pronouns",
    "email": "Email",
    "phone": "Phone",
    "dateOfBirth": "Date of Birth",
    "passportNumber": "Passport Number",
    "passportExpiry": "Passport Expiry",
    "passportCountry": "Passport Country",
    "passportIssueDate": "Passport Issue Date",
    "nationality": "Nationality",
    "redressNumber": "Redress Number",
    "knownTravelerNumber": "Known Traveler Number",
    "dietaryRequirements": "Dietary Requirements",
    "mobilityRequirements": "Mobility Requirements",
    "seatPreference": "Seat Preference",
    "cabinPreference": "Cabin Preference",
    "floorPreference": "Floor Preference",
}

_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


@dataclass
class FieldChange:
    field: str
    label: str
    old_value: str | None
    new_value: str | None
    category: str


@dataclass
class SnapshotDiff:
    has_changes: bool
    changes: list[FieldChange]
    changes_by_category: dict[str, list[FieldChange]]
    total_changes: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["summary"] = get_change_summary(self)
        return data


@dataclass
class ValidationIssue:
    field: str
    label: str
    message: str
    type: str  # error | warning
    category: str


@dataclass
class ValidationResult:
    has_issues: bool
    issues: list[ValidationIssue] = field(default_factory=list)
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    total_issues: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def compare_snapshots(snapshot: dict, current: dict) -> SnapshotDiff:
    """Compare a saved snapshot with the current contact, field by field.

    Missing keys count as None; any other difference (including "" vs None)
    is a change.
    """
    changes: list[FieldChange] = []
    for category_key, category in FIELD_CATEGORIES.items():
        for field_name in category["fields"]:
            old_value = snapshot.get(field_name)
            new_value = current.get(field_name)
            if old_value != new_value:
                changes.append(
                    FieldChange(
                        field=field_name,
                        label=FIELD_LABELS.get(field_name, field_name),
                        old_value=old_value,
                        new_value=new_value,
                        category=category_key,
                    )
                )

    changes_by_category = {
        key: [c for c in changes if c.category == key] for key in FIELD_CATEGORIES
    }
    return SnapshotDiff(
        has_changes=bool(changes),
        changes=changes,
        changes_by_category=changes_by_category,
        total_changes=len(changes),
    )


def format_field_value(value: str | None) -> str:
    """Human-readable value; ISO dates become "March 5, 2026"."""
    if value is None or value == "":
        return "—"
    match = _DATE_PREFIX.match(value)
    if match:
        try:
            parsed = date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return value
        return f"{calendar.month_name[parsed.month]} {parsed.day}, {parsed.year}"
    return value


def get_change_summary(diff: SnapshotDiff) -> str:
    if not diff.has_changes:
        return "No changes detected"
    parts = [
        f"{len(changes)} in {FIELD_CATEGORIES[key]['label']}"
        for key, changes in diff.changes_by_category.items()
        if changes
    ]
    return ", ".join(parts)


def category_has_changes(diff: SnapshotDiff, category: str) -> bool:
    return len(diff.changes_by_category[category]) > 0


def get_category_change_count(diff: SnapshotDiff, category: str) -> int:
    return len(diff.changes_by_category[category])


def _add_months(d: date, months: int) -> date:
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _parse_date(value) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    match = _DATE_PREFIX.match(str(value))
    if not match:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def _issue(field_name: str, message: str, type_: str, category: str) -> ValidationIssue:
    return ValidationIssue(
        field=field_name,
        label=FIELD_LABELS[field_name],
        message=message,
        type=type_,
        category=category,
    )


def validate_contact_for_travel(
    contact: dict,
    trip_start_date: date | str | None = None,
    today: date | None = None,
) -> ValidationResult:
    """Check a snapshot for missing documents and passport validity."""
    today = today or date.today()
    issues: list[ValidationIssue] = []

    if not contact.get("dateOfBirth"):
        issues.append(_issue(
            "dateOfBirth", "Date of birth is required for travel documentation", "error", "contact",
        ))

    passport_number = contact.get("passportNumber")
    if not passport_number:
        issues.append(_issue(
            "passportNumber", "Passport number is required for international travel", "error", "passport",
        ))

    expiry = _parse_date(contact.get("passportExpiry"))
    if expiry is None and passport_number:
        issues.append(_issue("passportExpiry", "Passport expiry date is required", "error", "passport"))

    if expiry is not None:
        if expiry < today:
            issues.append(_issue("passportExpiry", "Passport has expired", "error", "passport"))
        elif expiry < _add_months(today, 6):
            months = round((expiry - today).days / 30)
            plural = "" if months == 1 else "s"
            issues.append(_issue(
                "passportExpiry",
                f"Passport expires in {months} month{plural}. Many countries require 6 months validity.",
                "warning",
                "passport",
            ))

        trip_start = _parse_date(trip_start_date)
        if trip_start is not None and expiry < trip_start:
            issues.append(_issue(
                "passportExpiry", "Passport will be expired before trip departure", "error", "passport",
            ))

    if not contact.get("passportCountry") and passport_number:
        issues.append(_issue("passportCountry", "Passport issuing country is required", "warning", "passport"))

    errors = [i for i in issues if i.type == "error"]
    warnings = [i for i in issues if i.type == "warning"]
    return ValidationResult(
        has_issues=bool(issues),
        issues=issues,
        errors=errors,
        warnings=warnings,
        total_issues=len(issues),
    )
