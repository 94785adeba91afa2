"""Traveler split service — allocates an activity's cost across the trip's travelers.

Equal splits give each traveler floor(total / n) cents and hand the leftover
cents, one each, to the first travelers in sequence order, so the split
always sums to the activity total.
"""

import logging
import uuid
from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database import utcnow
from app.exceptions import NotFoundError, ServiceError
from app.models.activity import Activity
from app.models.finance import TravelerSplit
from app.models.trip import Trip, TripTraveler
from app.services.exchange_rate_service import exchange_rate_service

logger = logging.getLogger(__name__)

DEFAULT_TRIP_CURRENCY = "CAD"


def equal_split_amounts(total_cents: int, count: int) -> list[int]:
    """Split ``total_cents`` into ``count`` amounts differing by at most one cent."""
    if count <= 0:
        return []
    base, remainder = divmod(total_cents, count)
    return [base + 1 if i < remainder else base for i in range(count)]


class TravelerSplitService:

    async def _load_activity(self, db: AsyncSession, trip: Trip, activity_id: uuid.UUID) -> Activity:
        result = await db.execute(
            select(Activity)
            .options(selectinload(Activity.pricing))
            .where(Activity.id == activity_id, Activity.trip_id == trip.id)
        )
        activity = result.scalar_one_or_none()
        if not activity:
            raise NotFoundError("Activity not found")
        if activity.itinerary_day_id is None:
            raise NotFoundError("Activity is not scheduled on an itinerary day and cannot be split")
        return activity

    def _activity_cost(self, trip: Trip, activity: Activity) -> tuple[int, str]:
        if activity.pricing is None:
            logger.warning(f"Activity {activity.id} has no pricing, splitting 0 cents")
            return 0, trip.currency or DEFAULT_TRIP_CURRENCY
        return activity.pricing.total_price_cents or 0, activity.pricing.currency

    async def _travelers(self, db: AsyncSession, trip_id: uuid.UUID) -> list[TripTraveler]:
        result = await db.execute(
            select(TripTraveler)
            .where(TripTraveler.trip_id == trip_id)
            .order_by(TripTraveler.sequence_order, TripTraveler.created_at)
        )
        return list(result.scalars().all())

    async def _splits_for_activity(self, db: AsyncSession, activity_id: uuid.UUID) -> list[TravelerSplit]:
        result = await db.execute(
            select(TravelerSplit)
            .where(TravelerSplit.activity_id == activity_id)
            .order_by(TravelerSplit.created_at)
        )
        return list(result.scalars().all())

    async def _rate_snapshot(
        self, db: AsyncSession, from_currency: str, trip_currency: str
    ) -> Decimal | None:
        if from_currency == trip_currency:
            return None
        try:
            quote = await exchange_rate_service.get_rate(db, from_currency, trip_currency)
        except (ServiceError, SQLAlchemyError) as e:
            logger.warning(f"Could not snapshot {from_currency}->{trip_currency} rate for split: {e}")
            return None
        return quote.rate

    async def get_activity_splits(self, db: AsyncSession, trip: Trip, activity_id: uuid.UUID) -> dict:
        activity = await self._load_activity(db, trip, activity_id)
        total_cents, currency = self._activity_cost(trip, activity)
        splits = await self._splits_for_activity(db, activity.id)
        travelers = await self._travelers(db, trip.id)

        covered = {s.traveler_id for s in splits}
        missing = [t.id for t in travelers if t.id not in covered]
        return {
            "activity_id": activity.id,
            "activity_name": activity.name,
            "total_cost_cents": total_cents,
            "currency": currency,
            "split_type": splits[0].split_type if splits else "equal",
            "splits": splits,
            "is_complete": not missing,
            "missing_travelers": missing,
        }

    async def set_activity_splits(
        self, db: AsyncSession, trip: Trip, activity_id: uuid.UUID,
        split_type: str, entries: list[dict] | None = None,
    ) -> dict:
        activity = await self._load_activity(db, trip, activity_id)
        total_cents, currency = self._activity_cost(trip, activity)
        travelers = await self._travelers(db, trip.id)
        if not travelers:
            raise ServiceError("Trip has no travellers to split costs among")

        if split_type == "equal":
            amounts = equal_split_amounts(total_cents, len(travelers))
            allocations = [
                {"traveler_id": t.id, "amount_cents": amount, "notes": None}
                for t, amount in zip(travelers, amounts)
            ]
        else:
            allocations = self._validate_custom(entries or [], travelers, total_cents)

        trip_currency = trip.currency or DEFAULT_TRIP_CURRENCY
        rate = await self._rate_snapshot(db, currency, trip_currency)
        snapshot_at = utcnow() if rate is not None else None

        await db.execute(delete(TravelerSplit).where(TravelerSplit.activity_id == activity.id))
        for allocation in allocations:
            db.add(TravelerSplit(
                trip_id=trip.id,
                activity_id=activity.id,
                traveler_id=allocation["traveler_id"],
                split_type=split_type,
                amount_cents=allocation["amount_cents"],
                currency=currency,
                exchange_rate_to_trip_currency=rate,
                exchange_rate_snapshot_at=snapshot_at,
                notes=allocation.get("notes"),
            ))
        await db.flush()
        logger.info(f"Set {split_type} splits for activity {activity.id} across {len(allocations)} travelers")
        return await self.get_activity_splits(db, trip, activity.id)

    def _validate_custom(
        self, entries: list[dict], travelers: list[TripTraveler], total_cents: int
    ) -> list[dict]:
        if not entries:
            raise ServiceError("Custom splits require at least one traveller amount")

        on_trip = {t.id for t in travelers}
        seen: set[uuid.UUID] = set()
        for entry in entries:
            traveler_id = entry["traveler_id"]
            if traveler_id not in on_trip:
                raise ServiceError(f"Traveller {traveler_id} is not on this trip")
            if traveler_id in seen:
                raise ServiceError(f"Traveller {traveler_id} appears more than once in the split")
            seen.add(traveler_id)

        split_total = sum(entry["amount_cents"] for entry in entries)
        if split_total != total_cents:
            raise ServiceError(
                f"Split amounts ({split_total} cents) must equal activity total ({total_cents} cents)"
            )
        if any(entry["amount_cents"] < 0 for entry in entries):
            raise ServiceError("Split amounts cannot be negative")
        return entries

    async def delete_activity_splits(self, db: AsyncSession, trip: Trip, activity_id: uuid.UUID) -> int:
        activity = await self._load_activity(db, trip, activity_id)
        result = await db.execute(delete(TravelerSplit).where(TravelerSplit.activity_id == activity.id))
        await db.flush()
        return result.rowcount or 0

    async def get_traveler_splits(self, db: AsyncSession, traveler_id: uuid.UUID) -> list[TravelerSplit]:
        result = await db.execute(
            select(TravelerSplit)
            .where(TravelerSplit.traveler_id == traveler_id)
            .order_by(TravelerSplit.created_at)
        )
        return list(result.scalars().all())

    async def delete_traveler_splits(self, db: AsyncSession, traveler_id: uuid.UUID) -> list[uuid.UUID]:
        """Remove every split of a traveler. Returns the affected activity ids."""
        splits = await self.get_traveler_splits(db, traveler_id)
        activity_ids = list(dict.fromkeys(s.activity_id for s in splits))
        if splits:
            await db.execute(delete(TravelerSplit).where(TravelerSplit.traveler_id == traveler_id))
            await db.flush()
        return activity_ids


traveler_split_service = TravelerSplitService()
