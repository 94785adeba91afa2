from decimal import Decimal

from app.schemas.activity import PaymentItemRequest, PaymentScheduleRequest
from app.services.payment_schedule_validation import (
    deposit_amount_cents,
    has_payment_schedule_errors,
    payment_schedule_errors_map,
    validate_payment_schedule,
)


def test_full_schedule_is_always_valid():
    assert validate_payment_schedule(PaymentScheduleRequest(schedule_type="full"), 50000) == []


def test_deposit_requires_type():
    errors = validate_payment_schedule(PaymentScheduleRequest(schedule_type="deposit"), 50000)
    assert [e.field for e in errors] == ["deposit_type"]


def test_deposit_percentage_bounds():
    req = PaymentScheduleRequest(schedule_type="deposit", deposit_type="percentage", deposit_percentage=Decimal("120"))
    assert payment_schedule_errors_map(req, 50000) == {
        "deposit_percentage": "Deposit percentage must be between 0 and 100"
    }


def test_fixed_deposit_cannot_exceed_total():
    req = PaymentScheduleRequest(schedule_type="deposit", deposit_type="fixed_amount", deposit_amount_cents=60000)
    errors = validate_payment_schedule(req, 50000)
    assert errors[0].message == "Deposit amount cannot exceed total price"


def test_installments_must_sum_to_total_within_a_cent():
    items = [
        PaymentItemRequest(payment_name="First", expected_amount_cents=33333),
        PaymentItemRequest(payment_name="Second", expected_amount_cents=33333),
        PaymentItemRequest(payment_name="Third", expected_amount_cents=33333),
    ]
    req = PaymentScheduleRequest(schedule_type="installments", expected_payment_items=items)
    assert not has_payment_schedule_errors(req, 100000)

    errors = validate_payment_schedule(req, 120000)
    assert errors[0].message == "Sum of installments ($999.99) must equal total price ($1200.00)"


def test_installment_items_are_checked_individually():
    items = [PaymentItemRequest(payment_name=" ", expected_amount_cents=0)]
    req = PaymentScheduleRequest(schedule_type="installments", expected_payment_items=items)
    fields = payment_schedule_errors_map(req, 0)
    assert fields["expected_payment_items.0.payment_name"] == "Payment #1 name is required"
    assert fields["expected_payment_items.0.expected_amount_cents"] == "Payment #1 amount must be greater than 0"


def test_guarantee_card_details():
    req = PaymentScheduleRequest(
        schedule_type="guarantee",
        card_holder_name="Maya Okafor",
        card_last4="12a4",
        authorization_code="AUTH1",
        authorization_amount_cents=10000,
    )
    assert payment_schedule_errors_map(req, 0) == {
        "card_last4": "Last 4 digits must be exactly 4 numeric digits"
    }


def test_deposit_amount_rounds_half_up():
    assert deposit_amount_cents(12345, "percentage", Decimal("10"), None) == 1235
    assert deposit_amount_cents(12345, "fixed_amount", None, 5000) == 5000
