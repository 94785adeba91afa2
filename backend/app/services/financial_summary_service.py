"""Financial summary service — a trip's costs, fees, per-traveler shares and commission in trip currency.

Stored snapshots win over live rates: a service fee uses its stored
trip-currency amount, then its snapshotted rate, and only then a live
conversion. Splits use their snapshotted rate before a live conversion.
"""

import logging
import uuid
from collections import Counter
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.data.currency import convert_cents, dollars_to_cents
from app.models.activity import Activity, CommissionTracking
from app.models.finance import ServiceFee, TravelerSplit
from app.models.trip import Trip, TripTraveler
from app.services.exchange_rate_service import exchange_rate_service

logger = logging.getLogger(__name__)

FEE_STATUSES = ["draft", "sent", "paid", "partially_refunded", "refunded", "cancelled"]


def traveler_name(snapshot: dict | None) -> str:
    snapshot = snapshot or {}
    return f"{snapshot.get('firstName') or ''} {snapshot.get('lastName') or ''}".strip() or "Unknown"


class FinancialSummaryService:

    async def _convert(self, db: AsyncSession, amount_cents: int, from_currency: str, to_currency: str) -> int:
        if from_currency == to_currency or amount_cents == 0:
            return amount_cents
        conversion = await exchange_rate_service.convert(db, amount_cents, from_currency, to_currency)
        return conversion.converted_amount_cents

    async def _fee_in_trip_currency(self, db: AsyncSession, fee: ServiceFee, trip_currency: str) -> int:
        if fee.currency == trip_currency or fee.amount_cents == 0:
            return fee.amount_cents
        if fee.amount_in_trip_currency_cents:
            return fee.amount_in_trip_currency_cents
        if fee.exchange_rate_to_trip_currency:
            return convert_cents(fee.amount_cents, Decimal(fee.exchange_rate_to_trip_currency))
        logger.warning(f"Service fee {fee.id} has no rate snapshot, using live rate")
        return await self._convert(db, fee.amount_cents, fee.currency, trip_currency)

    async def _split_in_trip_currency(self, db: AsyncSession, split: TravelerSplit, trip_currency: str) -> int:
        if split.currency == trip_currency or split.amount_cents == 0:
            return split.amount_cents
        if split.exchange_rate_to_trip_currency:
            return convert_cents(split.amount_cents, Decimal(split.exchange_rate_to_trip_currency))
        logger.warning(f"Split {split.id} has no rate snapshot, using live rate")
        return await self._convert(db, split.amount_cents, split.currency, trip_currency)

    async def activities_summary(
        self, db: AsyncSession, trip_id: uuid.UUID, trip_currency: str, splits: list[TravelerSplit]
    ) -> dict:
        result = await db.execute(
            select(Activity)
            .options(selectinload(Activity.pricing))
            .where(Activity.trip_id == trip_id, Activity.itinerary_day_id.is_not(None))
            .order_by(Activity.sequence_order, Activity.created_at)
        )
        split_types: dict[uuid.UUID, str] = {}
        for split in splits:
            split_types.setdefault(split.activity_id, split.split_type)

        by_activity = []
        total = total_in_trip = 0
        for activity in result.scalars().all():
            pricing = activity.pricing
            if pricing is None:
                logger.warning(f"Activity {activity.id} has no pricing, counting 0")
            cost = pricing.total_price_cents if pricing else 0
            currency = pricing.currency if pricing else trip_currency
            cost_in_trip = await self._convert(db, cost, currency, trip_currency)

            by_activity.append({
                "activity_id": activity.id,
                "activity_name": activity.name,
                "activity_type": activity.activity_type,
                "total_cost_cents": cost,
                "currency": currency,
                "total_in_trip_currency_cents": cost_in_trip,
                "has_splits": activity.id in split_types,
                "split_type": split_types.get(activity.id),
            })
            total += cost
            total_in_trip += cost_in_trip

        return {
            "total_cents": total,
            "total_in_trip_currency_cents": total_in_trip,
            "by_activity": by_activity,
        }

    async def service_fees_summary(
        self, db: AsyncSession, fees: list[ServiceFee], trip_currency: str
    ) -> dict:
        by_status = {status: 0 for status in FEE_STATUSES}
        counts = Counter()
        total = total_in_trip = paid = pending = refunded = 0

        for fee in fees:
            amount_in_trip = await self._fee_in_trip_currency(db, fee, trip_currency)
            by_status[fee.status] = by_status.get(fee.status, 0) + amount_in_trip
            counts[fee.status] += 1
            if fee.status == "cancelled":
                continue

            total += fee.amount_cents
            total_in_trip += amount_in_trip
            refunded_cents = fee.refunded_amount_cents or 0
            if fee.status == "paid":
                paid += amount_in_trip - refunded_cents
            elif fee.status == "partially_refunded":
                paid += amount_in_trip - refunded_cents
                refunded += refunded_cents
            elif fee.status == "refunded":
                refunded += refunded_cents
            elif fee.status in ("draft", "sent"):
                pending += amount_in_trip

        return {
            "total_cents": total,
            "total_in_trip_currency_cents": total_in_trip,
            "paid_cents": paid,
            "pending_cents": pending,
            "refunded_cents": refunded,
            "by_status": by_status,
            "count_by_status": {status: counts.get(status, 0) for status in FEE_STATUSES},
        }

    async def traveler_breakdown(
        self, db: AsyncSession, trip_id: uuid.UUID, trip_currency: str,
        splits: list[TravelerSplit], fees: list[ServiceFee],
    ) -> list[dict]:
        result = await db.execute(
            select(TripTraveler)
            .where(TripTraveler.trip_id == trip_id)
            .order_by(TripTraveler.sequence_order, TripTraveler.created_at)
        )
        primary_fees = [
            f for f in fees if f.recipient_type == "primary_traveller" and f.status != "cancelled"
        ]

        breakdown = []
        for traveler in result.scalars().all():
            activity_cents = activity_in_trip = 0
            for split in (s for s in splits if s.traveler_id == traveler.id):
                activity_cents += split.amount_cents
                activity_in_trip += await self._split_in_trip_currency(db, split, trip_currency)

            fee_cents = fee_in_trip = 0
            if traveler.is_primary_traveler:
                for fee in primary_fees:
                    fee_cents += fee.amount_cents
                    fee_in_trip += await self._fee_in_trip_currency(db, fee, trip_currency)

            breakdown.append({
                "traveler_id": traveler.id,
                "traveler_name": traveler_name(traveler.contact_snapshot),
                "traveler_type": traveler.traveler_type,
                "is_primary": traveler.is_primary_traveler,
                "activity_costs_cents": activity_cents,
                "activity_costs_in_trip_currency_cents": activity_in_trip,
                "service_fees_cents": fee_cents,
                "service_fees_in_trip_currency_cents": fee_in_trip,
                "total_cents": activity_cents + fee_cents,
                "total_in_trip_currency_cents": activity_in_trip + fee_in_trip,
            })
        return breakdown

    async def commission_summary(self, db: AsyncSession, trip_id: uuid.UUID) -> dict:
        result = await db.execute(
            select(Activity)
            .options(selectinload(Activity.pricing))
            .where(Activity.trip_id == trip_id, Activity.itinerary_day_id.is_not(None))
        )
        activities = list(result.scalars().all())
        expected = sum(a.pricing.commission_total_cents or 0 for a in activities if a.pricing)

        received = 0
        activity_ids = [a.id for a in activities if a.pricing]
        if activity_ids:
            tracking = await db.execute(
                select(CommissionTracking.commission_amount).where(
                    CommissionTracking.activity_id.in_(activity_ids),
                    CommissionTracking.status == "received",
                )
            )
            received = sum(dollars_to_cents(amount) for amount in tracking.scalars().all())

        return {
            "expected_total_cents": expected,
            "received_total_cents": received,
            "pending_total_cents": expected - received,
        }

    async def get_summary(self, db: AsyncSession, trip: Trip) -> dict:
        trip_currency = trip.currency or "CAD"

        splits_result = await db.execute(
            select(TravelerSplit).where(TravelerSplit.trip_id == trip.id).order_by(TravelerSplit.created_at)
        )
        splits = list(splits_result.scalars().all())
        fees_result = await db.execute(
            select(ServiceFee).where(ServiceFee.trip_id == trip.id).order_by(ServiceFee.created_at)
        )
        fees = list(fees_result.scalars().all())

        activities = await self.activities_summary(db, trip.id, trip_currency, splits)
        service_fees = await self.service_fees_summary(db, fees, trip_currency)
        travelers = await self.traveler_breakdown(db, trip.id, trip_currency, splits, fees)
        commission = await self.commission_summary(db, trip.id)

        return {
            "trip_id": trip.id,
            "trip_currency": trip_currency,
            "activities_summary": activities,
            "service_fees_summary": service_fees,
            "traveler_breakdown": travelers,
            "commission_summary": commission,
            "grand_total": {
                "total_cost_cents": (
                    activities["total_in_trip_currency_cents"] + service_fees["total_in_trip_currency_cents"]
                ),
                "total_collected_cents": service_fees["paid_cents"],
                "outstanding_cents": service_fees["pending_cents"],
            },
        }


financial_summary_service = FinancialSummaryService()
