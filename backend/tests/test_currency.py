from decimal import Decimal

from app.data.currency import (
    agent_commission_cents,
    convert_cents,
    dollars_to_cents,
    fallback_rate,
    format_cents,
    is_supported,
)
from app.services.contact_names import display_name, legal_full_name
from app.services.traveler_split_service import equal_split_amounts


def test_fallback_cross_rates():
    assert fallback_rate("EUR", "CAD") == Decimal("1.50000000")
    assert fallback_rate("cad", "usd") == Decimal("0.72463768")
    assert fallback_rate("USD", "XYZ") is None


def test_convert_cents_rounds_half_up():
    assert convert_cents(10000, Decimal("1.5")) == 15000
    assert convert_cents(1, Decimal("0.5")) == 1
    assert convert_cents(0, Decimal("1.38")) == 0


def test_format_cents():
    assert format_cents(123450, "CAD") == "CA$1,234.50"
    assert format_cents(-500, "USD") == "-$5.00"
    assert format_cents(100, "XYZ") == "XYZ 1.00"


def test_agent_commission_and_dollars():
    assert agent_commission_cents(10001, Decimal("50")) == 5001
    assert agent_commission_cents(10000, Decimal("100")) == 10000
    assert dollars_to_cents(Decimal("12.345")) == 1235


def test_supported_currencies():
    assert is_supported("cad")
    assert not is_supported("XYZ")


def test_equal_split_remainder_goes_to_first_travelers():
    assert equal_split_amounts(10000, 3) == [3334, 3333, 3333]
    assert equal_split_amounts(10001, 3) == [3334, 3334, 3333]
    assert sum(equal_split_amounts(99999, 7)) == 99999
    assert equal_split_amounts(500, 0) == []


def test_contact_names():
    assert display_name("Max", "Maximilian", None) == "Max"
    assert display_name(None, None, "Johanna") == "Johanna"
    assert display_name(None, None, None) == "Unknown"
    assert legal_full_name("Dr.", "Jane", "Janie", "Q", None, "Public", "Jr.") == "Dr. Jane Q Public Jr."
    assert legal_full_name(None, None, None, None, None, None, None) is None
