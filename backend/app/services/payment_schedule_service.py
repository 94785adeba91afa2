"""Payment schedule service — expected payments per activity, transactions and trip booking status."""

import logging
import uuid
from datetime import date, timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import NotFoundError, ServiceError
from app.models.activity import (
    Activity,
    ExpectedPaymentItem,
    PaymentScheduleConfig,
    PaymentTransaction,
)
from app.services.payment_schedule_validation import deposit_amount_cents, validate_payment_schedule

logger = logging.getLogger(__name__)

UPCOMING_WINDOW_DAYS = 7

# Higher is worse
_STATUS_SEVERITY = {"paid": 0, "pending": 1, "partial": 2, "overdue": 3}


def item_status(paid_cents: int, expected_cents: int) -> str:
    if paid_cents >= expected_cents:
        return "paid"
    if paid_cents > 0:
        return "partial"
    return "pending"


def worst_status(current: str | None, candidate: str | None) -> str | None:
    if candidate is None:
        return current
    if current is None:
        return candidate
    return max(current, candidate, key=lambda s: _STATUS_SEVERITY.get(s, 0))


class PaymentScheduleService:

    def _build_items(self, data, total_price_cents: int) -> list[dict]:
        if data.schedule_type == "full":
            return [{"payment_name": "Full Payment", "expected_amount_cents": total_price_cents,
                     "due_date": data.due_date}]
        if data.schedule_type == "deposit":
            deposit = deposit_amount_cents(
                total_price_cents, data.deposit_type, data.deposit_percentage, data.deposit_amount_cents
            )
            return [
                {"payment_name": "Deposit", "expected_amount_cents": deposit,
                 "due_date": data.deposit_due_date},
                {"payment_name": "Balance", "expected_amount_cents": total_price_cents - deposit,
                 "due_date": data.balance_due_date},
            ]
        if data.schedule_type == "installments":
            return [
                {"payment_name": item.payment_name.strip(), "expected_amount_cents": item.expected_amount_cents,
                 "due_date": item.due_date}
                for item in data.expected_payment_items or []
            ]
        # A guarantee only holds a card authorization
        return []

    async def set_schedule(self, db: AsyncSession, activity: Activity, data) -> Activity:
        """Replace an activity's schedule. ``data`` carries the PaymentScheduleRequest attributes."""
        total_price_cents = activity.pricing.total_price_cents if activity.pricing else 0
        errors = validate_payment_schedule(data, total_price_cents)
        if errors:
            raise ServiceError(errors[0].message)

        config = activity.schedule_config
        if config is None:
            config = PaymentScheduleConfig(activity_id=activity.id)
            db.add(config)
            activity.schedule_config = config

        config.schedule_type = data.schedule_type
        config.deposit_type = data.deposit_type if data.schedule_type == "deposit" else None
        config.deposit_percentage = data.deposit_percentage if data.schedule_type == "deposit" else None
        config.deposit_amount_cents = data.deposit_amount_cents if data.schedule_type == "deposit" else None
        is_guarantee = data.schedule_type == "guarantee"
        config.guarantee_card_holder = data.card_holder_name if is_guarantee else None
        config.guarantee_card_last4 = data.card_last4 if is_guarantee else None
        config.guarantee_authorization_code = data.authorization_code if is_guarantee else None
        config.guarantee_authorization_amount_cents = data.authorization_amount_cents if is_guarantee else None

        await db.execute(delete(ExpectedPaymentItem).where(ExpectedPaymentItem.activity_id == activity.id))
        for index, item in enumerate(self._build_items(data, total_price_cents), start=1):
            db.add(ExpectedPaymentItem(
                activity_id=activity.id,
                payment_name=item["payment_name"],
                expected_amount_cents=item["expected_amount_cents"],
                paid_amount_cents=0,
                due_date=item["due_date"],
                status="pending",
                sequence_order=index,
            ))
        await db.flush()
        logger.info(f"Set {data.schedule_type} payment schedule on activity {activity.id}")
        return activity

    async def get_schedule(self, db: AsyncSession, activity: Activity) -> dict:
        result = await db.execute(
            select(ExpectedPaymentItem)
            .where(ExpectedPaymentItem.activity_id == activity.id)
            .order_by(ExpectedPaymentItem.sequence_order)
        )
        config_result = await db.execute(
            select(PaymentScheduleConfig).where(PaymentScheduleConfig.activity_id == activity.id)
        )
        config = config_result.scalar_one_or_none()
        return {
            "activity_id": activity.id,
            "schedule_type": config.schedule_type if config else "full",
            "total_price_cents": activity.pricing.total_price_cents if activity.pricing else 0,
            "items": list(result.scalars().all()),
        }

    async def get_item(self, db: AsyncSession, activity_id: uuid.UUID, item_id: uuid.UUID) -> ExpectedPaymentItem:
        result = await db.execute(
            select(ExpectedPaymentItem).where(
                ExpectedPaymentItem.id == item_id, ExpectedPaymentItem.activity_id == activity_id
            )
        )
        item = result.scalar_one_or_none()
        if not item:
            raise NotFoundError("Payment item not found")
        return item

    async def record_transaction(
        self, db: AsyncSession, item: ExpectedPaymentItem, transaction_type: str,
        amount_cents: int, transaction_date: date | None = None, notes: str | None = None,
    ) -> ExpectedPaymentItem:
        if amount_cents <= 0:
            raise ServiceError("Transaction amount must be greater than 0")

        db.add(PaymentTransaction(
            expected_payment_item_id=item.id,
            transaction_type=transaction_type,
            amount_cents=amount_cents,
            transaction_date=transaction_date or date.today(),
            notes=notes,
        ))
        signed = -amount_cents if transaction_type == "refund" else amount_cents
        item.paid_amount_cents = (item.paid_amount_cents or 0) + signed
        item.status = item_status(item.paid_amount_cents, item.expected_amount_cents)
        await db.flush()
        logger.info(f"Recorded {transaction_type} of {amount_cents} cents on payment item {item.id}")
        return item

    async def booking_status(self, db: AsyncSession, trip_id: uuid.UUID, today: date | None = None) -> dict:
        """Payment state of every scheduled (day-attached) activity in a trip."""
        today = today or date.today()
        upcoming_limit = today + timedelta(days=UPCOMING_WINDOW_DAYS)

        result = await db.execute(
            select(Activity)
            .options(selectinload(Activity.pricing), selectinload(Activity.payment_items))
            .where(Activity.trip_id == trip_id, Activity.itinerary_day_id.is_not(None))
            .order_by(Activity.sequence_order)
        )
        activities = list(result.scalars().all())

        statuses: dict[str, dict] = {}
        total_expected = total_paid = with_schedule = overdue_count = upcoming_count = 0

        for activity in activities:
            pricing = activity.pricing
            items = activity.payment_items
            has_schedule = len(items) > 0
            expected = paid = 0
            next_due: date | None = None
            status: str | None = None

            if has_schedule:
                with_schedule += 1
                for item in items:
                    expected += item.expected_amount_cents
                    paid += item.paid_amount_cents or 0
                    unpaid = item.status != "paid"
                    if item.due_date:
                        if item.status == "overdue" or (item.due_date < today and unpaid):
                            overdue_count += 1
                            status = "overdue"
                        elif item.due_date <= upcoming_limit and unpaid:
                            upcoming_count += 1
                        if unpaid and (next_due is None or item.due_date < next_due):
                            next_due = item.due_date
                    status = worst_status(status, item.status)
            else:
                expected = pricing.total_price_cents if pricing else 0
                if expected > 0:
                    status = "pending"

            total_expected += expected
            total_paid += paid
            commission = pricing.commission_total_cents if pricing else 0
            statuses[str(activity.id)] = {
                "activity_id": activity.id,
                "payment_status": status,
                "payment_paid_cents": paid,
                "payment_total_cents": expected,
                "payment_remaining_cents": expected - paid,
                "commission_status": "pending" if commission else None,
                "commission_total_cents": commission or 0,
                "has_payment_schedule": has_schedule,
                "next_due_date": next_due,
            }

        return {
            "trip_id": trip_id,
            "activities": statuses,
            "summary": {
                "total_activities": len(activities),
                "activities_with_payment_schedule": with_schedule,
                "total_expected_cents": total_expected,
                "total_paid_cents": total_paid,
                "total_remaining_cents": total_expected - total_paid,
                "overdue_count": overdue_count,
                "upcoming_due_count": upcoming_count,
            },
        }


payment_schedule_service = PaymentScheduleService()
