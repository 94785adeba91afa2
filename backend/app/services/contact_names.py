"""Name helpers shared by contacts and traveler snapshots."""


def _coalesce(*values):
    return next((v for v in values if v is not None), None)


def display_name(preferred_name: str | None, first_name: str | None, legal_first_name: str | None) -> str:
    """Preferred name, then first name, then legal first name."""
    return _coalesce(preferred_name, first_name, legal_first_name) or "Unknown"


def legal_full_name(
    prefix: str | None,
    legal_first_name: str | None,
    first_name: str | None,
    middle_name: str | None,
    legal_last_name: str | None,
    last_name: str | None,
    suffix: str | None,
) -> str | None:
    """Name as it appears on travel documents, e.g. "Dr. Jane Q Public Jr."."""
    parts = [
        prefix,
        _coalesce(legal_first_name, first_name),
        middle_name,
        _coalesce(legal_last_name, last_name),
        suffix,
    ]
    return " ".join(p for p in parts if p) or None
