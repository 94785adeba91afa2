"""Activity service — bookable activities, their pricing, package totals and commissions."""

import logging
import uuid
from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.data.currency import agent_commission_cents
from app.exceptions import NotFoundError, ServiceError
from app.models.activity import Activity, ActivityPricing, CommissionTracking
from app.models.itinerary import ItineraryDay
from app.models.trip import Trip
from app.services.activity_naming import resolve_activity_name
from app.services.itinerary_service import find_day_for_date, itinerary_service

logger = logging.getLogger(__name__)


@dataclass
class PackageTotal:
    activity_id: uuid.UUID
    name: str
    activity_type: str
    is_booked: bool
    component_count: int = 0
    total_price_cents: int = 0
    taxes_and_fees_cents: int = 0
    commission_total_cents: int = 0
    agent_commission_cents: int = 0
    total_paid_cents: int = 0

    @property
    def total_unpaid_cents(self) -> int:
        return self.total_price_cents - self.total_paid_cents

    def add(self, activity: Activity) -> None:
        pricing = activity.pricing
        if pricing is not None:
            self.total_price_cents += pricing.total_price_cents or 0
            self.taxes_and_fees_cents += pricing.taxes_and_fees_cents or 0
            self.commission_total_cents += pricing.commission_total_cents or 0
            self.agent_commission_cents += agent_commission_cents(
                pricing.commission_total_cents or 0, pricing.commission_split_percentage
            )
        self.total_paid_cents += sum(item.paid_amount_cents or 0 for item in activity.payment_items)

    def to_dict(self) -> dict:
        return {**asdict(self), "total_unpaid_cents": self.total_unpaid_cents}


def _activity_options():
    return (
        selectinload(Activity.pricing),
        selectinload(Activity.schedule_config),
        selectinload(Activity.payment_items),
    )


class ActivityService:

    async def list_activities(
        self, db: AsyncSession, trip_id: uuid.UUID, itinerary_id: uuid.UUID | None = None
    ) -> list[Activity]:
        query = (
            select(Activity)
            .options(selectinload(Activity.pricing))
            .where(Activity.trip_id == trip_id)
            .order_by(Activity.sequence_order, Activity.created_at)
        )
        if itinerary_id:
            query = query.where(Activity.itinerary_id == itinerary_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_activity(self, db: AsyncSession, trip_id: uuid.UUID, activity_id: uuid.UUID) -> Activity:
        result = await db.execute(
            select(Activity)
            .options(*_activity_options())
            .where(Activity.id == activity_id, Activity.trip_id == trip_id)
            .execution_options(populate_existing=True)
        )
        activity = result.scalar_one_or_none()
        if not activity:
            raise NotFoundError("Activity not found")
        return activity

    async def _resolve_day(
        self, db: AsyncSession, itinerary_id: uuid.UUID,
        day_id: uuid.UUID | None, start_datetime,
    ) -> uuid.UUID | None:
        if day_id:
            day = await itinerary_service.get_day(db, itinerary_id, day_id)
            return day.id
        if start_datetime:
            result = await db.execute(select(ItineraryDay).where(ItineraryDay.itinerary_id == itinerary_id))
            day = find_day_for_date(start_datetime, list(result.scalars().all()))
            return day.id if day else None
        return None

    async def create_activity(self, db: AsyncSession, trip: Trip, data: dict) -> Activity:
        itinerary = await itinerary_service.get_itinerary(db, trip.id, data["itinerary_id"])
        day_id = await self._resolve_day(
            db, itinerary.id, data.get("itinerary_day_id"), data.get("start_datetime")
        )

        parent_id = data.get("parent_activity_id")
        if parent_id:
            parent = await self.get_activity(db, trip.id, parent_id)
            if parent.parent_activity_id is not None:
                raise ServiceError("Package components cannot contain other components")
            # Components follow their package onto its day
            day_id = day_id or parent.itinerary_day_id

        sequence_order = data.get("sequence_order")
        if sequence_order is None:
            result = await db.execute(
                select(func.max(Activity.sequence_order)).where(
                    Activity.itinerary_id == itinerary.id,
                    Activity.itinerary_day_id == day_id if day_id else Activity.itinerary_day_id.is_(None),
                )
            )
            sequence_order = (result.scalar() or 0) + 1

        activity = Activity(
            trip_id=trip.id,
            itinerary_id=itinerary.id,
            itinerary_day_id=day_id,
            parent_activity_id=parent_id,
            activity_type=data["activity_type"],
            name=resolve_activity_name(data["activity_type"], data.get("name"), data.get("details")),
            description=data.get("description"),
            sequence_order=sequence_order,
            start_datetime=data.get("start_datetime"),
            end_datetime=data.get("end_datetime"),
            location=data.get("location"),
            status=data.get("status") or "proposed",
            is_booked=data.get("is_booked", False),
            details=data.get("details"),
        )
        db.add(activity)
        await db.flush()
        logger.info(f"Created {activity.activity_type} activity '{activity.name}' on trip {trip.id}")
        return activity

    async def update_activity(self, db: AsyncSession, activity: Activity, changes: dict) -> Activity:
        if "itinerary_day_id" in changes:
            activity.itinerary_day_id = await self._resolve_day(
                db, activity.itinerary_id, changes["itinerary_day_id"], None
            )
        elif changes.get("start_datetime"):
            day_id = await self._resolve_day(db, activity.itinerary_id, None, changes["start_datetime"])
            if day_id:
                activity.itinerary_day_id = day_id

        for field in ("description", "start_datetime", "end_datetime", "location", "details"):
            if field in changes:
                setattr(activity, field, changes[field])
        for field in ("sequence_order", "status", "is_booked"):
            if changes.get(field) is not None:
                setattr(activity, field, changes[field])

        if "name" in changes:
            activity.name = resolve_activity_name(activity.activity_type, changes["name"], activity.details)

        await db.flush()
        return activity

    async def delete_activity(self, db: AsyncSession, activity: Activity) -> None:
        await db.delete(activity)
        await db.flush()
        logger.info(f"Deleted activity {activity.id}")

    async def upsert_pricing(self, db: AsyncSession, activity: Activity, data: dict) -> ActivityPricing:
        for field in ("total_price_cents", "taxes_and_fees_cents", "commission_total_cents"):
            if (data.get(field) or 0) < 0:
                raise ServiceError(f"{field} cannot be negative")
        split = Decimal(data.get("commission_split_percentage", Decimal("100")))
        if split < 0 or split > 100:
            raise ServiceError("Commission split percentage must be between 0 and 100")

        pricing = activity.pricing
        if pricing is None:
            pricing = ActivityPricing(activity_id=activity.id)
            db.add(pricing)
            activity.pricing = pricing

        pricing.pricing_type = data.get("pricing_type") or "per_person"
        pricing.currency = (data.get("currency") or "CAD").upper()
        pricing.total_price_cents = data.get("total_price_cents") or 0
        pricing.taxes_and_fees_cents = data.get("taxes_and_fees_cents") or 0
        pricing.commission_total_cents = data.get("commission_total_cents") or 0
        pricing.commission_split_percentage = split
        pricing.commission_expected_date = data.get("commission_expected_date")
        await db.flush()
        return pricing

    async def package_totals(self, db: AsyncSession, trip_id: uuid.UUID) -> dict:
        """Totals per top-level activity (packages include their components) and for the trip."""
        result = await db.execute(
            select(Activity)
            .options(*_activity_options())
            .where(Activity.trip_id == trip_id)
            .order_by(Activity.sequence_order, Activity.created_at)
        )
        activities = list(result.scalars().all())

        roots: dict[uuid.UUID, PackageTotal] = {}
        for activity in activities:
            if activity.parent_activity_id is None:
                roots[activity.id] = PackageTotal(
                    activity_id=activity.id,
                    name=activity.name,
                    activity_type=activity.activity_type,
                    is_booked=activity.is_booked,
                )
        for activity in activities:
            root = roots.get(activity.parent_activity_id or activity.id)
            if root is None:
                continue
            root.add(activity)
            if activity.parent_activity_id is not None:
                root.component_count += 1

        expected_commission = sum(r.agent_commission_cents for r in roots.values() if r.is_booked)
        pending_commission = sum(r.agent_commission_cents for r in roots.values() if not r.is_booked)
        totals = {
            "total_items": len(roots),
            "total_packages": sum(1 for r in roots.values() if r.activity_type == "package"),
            "total_price_cents": sum(r.total_price_cents for r in roots.values()),
            "taxes_and_fees_cents": sum(r.taxes_and_fees_cents for r in roots.values()),
            "commission_total_cents": sum(r.commission_total_cents for r in roots.values()),
            "agent_commission_cents": sum(r.agent_commission_cents for r in roots.values()),
            "total_paid_cents": sum(r.total_paid_cents for r in roots.values()),
            "expected_commission_cents": expected_commission,
            "pending_commission_cents": pending_commission,
        }
        totals["total_unpaid_cents"] = totals["total_price_cents"] - totals["total_paid_cents"]
        return {
            "trip_id": trip_id,
            "items": [r.to_dict() for r in roots.values()],
            "totals": totals,
        }

    async def record_commission_received(
        self, db: AsyncSession, trip: Trip, activity: Activity,
        commission_amount: Decimal, received_date: date | None = None,
    ) -> CommissionTracking:
        row = CommissionTracking(
            agency_id=trip.agency_id,
            activity_id=activity.id,
            commission_amount=commission_amount,
            status="received",
            received_date=received_date or date.today(),
        )
        db.add(row)
        await db.flush()
        logger.info(f"Recorded commission ${commission_amount} received for activity {activity.id}")
        return row


activity_service = ActivityService()
