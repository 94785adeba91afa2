"""Payment schedule validation — deposit, installment and guarantee rules."""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

SCHEDULE_TYPES = ["full", "deposit", "installments", "guarantee"]
DEPOSIT_TYPES = ["percentage", "fixed_amount"]

_CARD_LAST4 = re.compile(r"^\d{4}$")

# Allowed rounding drift between the installment sum and the total
INSTALLMENT_TOLERANCE_CENTS = 1


@dataclass
class ScheduleError:
    field: str
    message: str


def _blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def _validate_deposit(data, total_price_cents: int, errors: list[ScheduleError]) -> None:
    if not data.deposit_type:
        errors.append(ScheduleError("deposit_type", "Deposit type is required when using deposit schedule"))
        return

    if data.deposit_type == "percentage":
        if data.deposit_percentage is None:
            errors.append(ScheduleError("deposit_percentage", "Deposit percentage is required"))
        elif data.deposit_percentage <= 0 or data.deposit_percentage > 100:
            errors.append(ScheduleError("deposit_percentage", "Deposit percentage must be between 0 and 100"))
    elif data.deposit_type == "fixed_amount":
        if data.deposit_amount_cents is None:
            errors.append(ScheduleError("deposit_amount_cents", "Deposit amount is required"))
        elif data.deposit_amount_cents <= 0:
            errors.append(ScheduleError("deposit_amount_cents", "Deposit amount must be greater than 0"))
        elif data.deposit_amount_cents > total_price_cents:
            errors.append(ScheduleError("deposit_amount_cents", "Deposit amount cannot exceed total price"))


def _validate_installments(data, total_price_cents: int, errors: list[ScheduleError]) -> None:
    items = data.expected_payment_items or []
    if not items:
        errors.append(ScheduleError(
            "expected_payment_items", "At least one payment item is required for installment schedule",
        ))
        return

    for index, item in enumerate(items):
        if _blank(item.payment_name):
            errors.append(ScheduleError(
                f"expected_payment_items.{index}.payment_name", f"Payment #{index + 1} name is required",
            ))
        if item.expected_amount_cents <= 0:
            errors.append(ScheduleError(
                f"expected_payment_items.{index}.expected_amount_cents",
                f"Payment #{index + 1} amount must be greater than 0",
            ))

    installments_total = sum(item.expected_amount_cents for item in items)
    if abs(installments_total - total_price_cents) > INSTALLMENT_TOLERANCE_CENTS:
        errors.append(ScheduleError(
            "expected_payment_items",
            f"Sum of installments (${installments_total / 100:.2f}) must equal "
            f"total price (${total_price_cents / 100:.2f})",
        ))


def _validate_guarantee(data, errors: list[ScheduleError]) -> None:
    if _blank(data.card_holder_name):
        errors.append(ScheduleError("card_holder_name", "Card holder name is required for credit card authorization"))

    if _blank(data.card_last4):
        errors.append(ScheduleError("card_last4", "Last 4 digits of card are required"))
    elif not _CARD_LAST4.match(data.card_last4):
        errors.append(ScheduleError("card_last4", "Last 4 digits must be exactly 4 numeric digits"))

    if _blank(data.authorization_code):
        errors.append(ScheduleError("authorization_code", "Authorization code is required"))

    if data.authorization_amount_cents is None or data.authorization_amount_cents <= 0:
        errors.append(ScheduleError(
            "authorization_amount_cents", "Authorization amount is required and must be greater than 0",
        ))


def validate_payment_schedule(data, total_price_cents: int) -> list[ScheduleError]:
    """Validate a schedule request.

    ``data`` is any object carrying the PaymentScheduleRequest attributes.
    """
    errors: list[ScheduleError] = []
    if data.schedule_type == "deposit":
        _validate_deposit(data, total_price_cents, errors)
    elif data.schedule_type == "installments":
        _validate_installments(data, total_price_cents, errors)
    elif data.schedule_type == "guarantee":
        _validate_guarantee(data, errors)
    return errors


def has_payment_schedule_errors(data, total_price_cents: int) -> bool:
    return len(validate_payment_schedule(data, total_price_cents)) > 0


def payment_schedule_errors_map(data, total_price_cents: int) -> dict[str, str]:
    return {error.field: error.message for error in validate_payment_schedule(data, total_price_cents)}


def deposit_amount_cents(total_price_cents: int, deposit_type: str, percentage: Decimal | None, fixed: int | None) -> int:
    if deposit_type == "percentage":
        return int((Decimal(total_price_cents) * Decimal(percentage) / 100).to_integral_value(rounding=ROUND_HALF_UP))
    return fixed or 0
