"""Itinerary service — itinerary lifecycle, day generation, and trip date helpers."""

import logging
import re
import uuid
from datetime import date, datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import ConflictError, NotFoundError
from app.models.itinerary import Itinerary, ItineraryDay
from app.models.trip import Trip

logger = logging.getLogger(__name__)

DEFAULT_DAY_TITLE = re.compile(r"Day \d+")


def _as_date(value: date | datetime | str | None) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def calculate_day_number(activity_date, trip_start_date) -> int | None:
    """1-based day of the trip, or None when the date falls before the start."""
    activity = _as_date(activity_date)
    start = _as_date(trip_start_date)
    if activity is None or start is None:
        return None
    diff = (activity - start).days
    if diff < 0:
        return None
    return diff + 1


def is_date_in_trip_range(value, trip_start_date, trip_end_date) -> bool:
    d, start, end = _as_date(value), _as_date(trip_start_date), _as_date(trip_end_date)
    if d is None or start is None or end is None:
        return False
    return start <= d <= end


def is_date_out_of_trip_range(value, trip_start_date, trip_end_date) -> bool:
    """True only for a valid range with the date outside it."""
    d, start, end = _as_date(value), _as_date(trip_start_date), _as_date(trip_end_date)
    if d is None or start is None or end is None:
        return False
    if start > end:
        return False
    return d < start or d > end


def find_day_for_date(value, days: list[ItineraryDay]) -> ItineraryDay | None:
    target = _as_date(value)
    if target is None:
        return None
    return next((day for day in days if day.date == target), None)


def trip_dates(start_date: date | None, end_date: date | None) -> list[date]:
    if start_date is None:
        return []
    end_date = end_date or start_date
    return [start_date + timedelta(days=i) for i in range((end_date - start_date).days + 1)]


class ItineraryService:
    """Itineraries for a trip, and the days inside them."""

    async def get_itinerary(
        self, db: AsyncSession, trip_id: uuid.UUID, itinerary_id: uuid.UUID, with_days: bool = False
    ) -> Itinerary:
        query = select(Itinerary).where(Itinerary.id == itinerary_id, Itinerary.trip_id == trip_id)
        if with_days:
            query = query.options(selectinload(Itinerary.days))
        result = await db.execute(query)
        itinerary = result.scalar_one_or_none()
        if not itinerary:
            raise NotFoundError("Itinerary not found")
        return itinerary

    async def get_day(self, db: AsyncSession, itinerary_id: uuid.UUID, day_id: uuid.UUID) -> ItineraryDay:
        result = await db.execute(
            select(ItineraryDay).where(ItineraryDay.id == day_id, ItineraryDay.itinerary_id == itinerary_id)
        )
        day = result.scalar_one_or_none()
        if not day:
            raise NotFoundError("Itinerary day not found")
        return day

    async def create_itinerary(
        self, db: AsyncSession, trip: Trip, name: str, description: str | None = None,
        status: str = "draft", is_selected: bool = False,
    ) -> Itinerary:
        count_result = await db.execute(
            select(func.count(Itinerary.id)).where(Itinerary.trip_id == trip.id)
        )
        existing = count_result.scalar() or 0

        # The first itinerary of a trip is always the selected one
        if existing == 0:
            is_selected = True
        elif is_selected:
            await self._clear_selection(db, trip.id)

        itinerary = Itinerary(
            trip_id=trip.id,
            name=name,
            description=description,
            status=status,
            is_selected=is_selected,
            sequence_order=existing + 1,
        )
        db.add(itinerary)
        await db.flush()

        for i, day_date in enumerate(trip_dates(trip.start_date, trip.end_date), start=1):
            db.add(ItineraryDay(
                itinerary_id=itinerary.id,
                day_number=i,
                date=day_date,
                title=f"Day {i}",
                sequence_order=i,
            ))
        await db.flush()
        logger.info(f"Created itinerary {itinerary.id} for trip {trip.id}")
        return itinerary

    async def _clear_selection(self, db: AsyncSession, trip_id: uuid.UUID) -> None:
        result = await db.execute(
            select(Itinerary).where(Itinerary.trip_id == trip_id, Itinerary.is_selected == True)  # noqa: E712
        )
        for other in result.scalars().all():
            other.is_selected = False

    async def select_itinerary(self, db: AsyncSession, itinerary: Itinerary) -> Itinerary:
        await self._clear_selection(db, itinerary.trip_id)
        itinerary.is_selected = True
        await db.flush()
        return itinerary

    async def delete_itinerary(self, db: AsyncSession, itinerary: Itinerary) -> None:
        if itinerary.status == "approved":
            raise ConflictError("Cannot delete an approved itinerary. Archive it first.")

        count_result = await db.execute(
            select(func.count(Itinerary.id)).where(Itinerary.trip_id == itinerary.trip_id)
        )
        if (count_result.scalar() or 0) <= 1:
            raise ConflictError("Cannot delete the last itinerary. At least one itinerary is required.")

        was_selected = itinerary.is_selected
        trip_id = itinerary.trip_id
        await db.delete(itinerary)
        await db.flush()

        if was_selected:
            result = await db.execute(
                select(Itinerary).where(Itinerary.trip_id == trip_id).order_by(Itinerary.sequence_order).limit(1)
            )
            replacement = result.scalar_one_or_none()
            if replacement:
                replacement.is_selected = True
                await db.flush()

    async def add_day(
        self, db: AsyncSession, trip: Trip, itinerary: Itinerary,
        day_date: date | None = None, title: str | None = None, notes: str | None = None,
    ) -> ItineraryDay:
        result = await db.execute(
            select(func.max(ItineraryDay.sequence_order)).where(ItineraryDay.itinerary_id == itinerary.id)
        )
        sequence = (result.scalar() or 0) + 1

        day_number = calculate_day_number(day_date, trip.start_date) if day_date else None
        day = ItineraryDay(
            itinerary_id=itinerary.id,
            day_number=day_number or sequence,
            date=day_date,
            title=title or f"Day {day_number or sequence}",
            notes=notes,
            sequence_order=sequence,
        )
        db.add(day)
        await db.flush()
        return day

    async def _days_of(self, db: AsyncSession, itinerary_id: uuid.UUID) -> list[ItineraryDay]:
        result = await db.execute(
            select(ItineraryDay)
            .where(ItineraryDay.itinerary_id == itinerary_id)
            .order_by(ItineraryDay.sequence_order)
        )
        return list(result.scalars().all())

    def _reflow(self, trip: Trip, days: list[ItineraryDay]) -> None:
        """Dated days in date order first, undated days after, numbered from 1."""
        ordered = sorted(
            days, key=lambda d: (d.date is None, d.date or date.min, d.sequence_order)
        )
        number = 0
        for position, day in enumerate(ordered, start=1):
            day.sequence_order = position
            number = calculate_day_number(day.date, trip.start_date) or number + 1
            day.day_number = number

    async def sync_days_to_dates(self, db: AsyncSession, trip: Trip) -> int:
        """Add a day for every trip date an itinerary lacks. Returns the number added."""
        result = await db.execute(select(Itinerary).where(Itinerary.trip_id == trip.id))
        added = 0
        for itinerary in result.scalars().all():
            days = await self._days_of(db, itinerary.id)
            existing = {day.date for day in days if day.date}
            for day_date in trip_dates(trip.start_date, trip.end_date):
                if day_date in existing:
                    continue
                day = ItineraryDay(
                    itinerary_id=itinerary.id,
                    date=day_date,
                    sequence_order=len(days) + 1,
                )
                db.add(day)
                days.append(day)
                added += 1
            self._reflow(trip, days)
            for day in days:
                if not day.title or DEFAULT_DAY_TITLE.fullmatch(day.title):
                    day.title = f"Day {day.day_number}"
        await db.flush()
        if added:
            logger.info(f"Added {added} itinerary days for trip {trip.id}")
        return added

    async def delete_day(self, db: AsyncSession, trip: Trip, day: ItineraryDay) -> None:
        itinerary_id = day.itinerary_id
        await db.delete(day)
        await db.flush()
        self._reflow(trip, await self._days_of(db, itinerary_id))
        await db.flush()

    def update_day(self, trip: Trip, day: ItineraryDay, changes: dict) -> ItineraryDay:
        """Apply a partial update. Explicitly set locations become manual overrides."""
        if "date" in changes:
            day.date = changes["date"]
            number = calculate_day_number(day.date, trip.start_date)
            if number:
                day.day_number = number
        for field in ("title", "notes"):
            if field in changes:
                setattr(day, field, changes[field])

        for side in ("start", "end"):
            key = f"{side}_location"
            if key in changes:
                location = changes[key] or {}
                setattr(day, f"{key}_name", location.get("name"))
                setattr(day, f"{key}_lat", location.get("lat"))
                setattr(day, f"{key}_lng", location.get("lng"))
                setattr(day, f"{key}_override", True)
            override_key = f"{key}_override"
            if changes.get(override_key) is not None:
                setattr(day, override_key, changes[override_key])
        return day


itinerary_service = ItineraryService()
