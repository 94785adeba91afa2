"""Trip service — trip lifecycle, status transitions and reference numbers."""

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, NotFoundError, ServiceError
from app.models.agency import Agency
from app.models.contact import Contact
from app.models.trip import Trip, TripReferenceSequence
from app.services.itinerary_service import itinerary_service
from app.services.trip_status import (
    REFERENCE_REGENERATION_STATUSES,
    can_transition,
    format_reference_number,
    is_deletable,
    reference_prefix,
    transition_error_message,
)

logger = logging.getLogger(__name__)

DEFAULT_ITINERARY_NAME = "Main Itinerary"


def _check_dates(start_date: date | None, end_date: date | None) -> None:
    if start_date and end_date and end_date < start_date:
        raise ServiceError("End date cannot be before start date")


class TripService:
    """Agency-scoped trip operations. Callers commit."""

    async def get_trip(self, db: AsyncSession, agency_id: uuid.UUID, trip_id: uuid.UUID) -> Trip:
        result = await db.execute(
            select(Trip).where(Trip.id == trip_id, Trip.agency_id == agency_id)
        )
        trip = result.scalar_one_or_none()
        if not trip:
            raise NotFoundError("Trip not found")
        return trip

    async def next_reference_number(
        self, db: AsyncSession, trip_type: str | None, start_date: date | None
    ) -> str:
        prefix = reference_prefix(trip_type)
        year = start_date.year if start_date else date.today().year

        # Insert-or-increment in one statement
        insert = pg_insert if db.get_bind().dialect.name == "postgresql" else sqlite_insert
        stmt = (
            insert(TripReferenceSequence)
            .values(prefix=prefix, year=year, last_value=1)
            .on_conflict_do_update(
                index_elements=["prefix", "year"],
                set_={"last_value": TripReferenceSequence.last_value + 1},
            )
            .returning(TripReferenceSequence.last_value)
        )
        result = await db.execute(stmt)
        return format_reference_number(prefix, year, result.scalar_one())

    async def _check_contact(self, db: AsyncSession, agency_id: uuid.UUID, contact_id: uuid.UUID) -> None:
        result = await db.execute(
            select(Contact.id).where(Contact.id == contact_id, Contact.agency_id == agency_id)
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Contact not found")

    async def create_trip(
        self, db: AsyncSession, agency_id: uuid.UUID, owner_id: uuid.UUID | None, data: dict
    ) -> Trip:
        _check_dates(data.get("start_date"), data.get("end_date"))

        currency = data.get("currency")
        if not currency:
            agency = await db.get(Agency, agency_id)
            currency = agency.default_currency if agency else "CAD"

        if data.get("primary_contact_id"):
            await self._check_contact(db, agency_id, data["primary_contact_id"])

        trip = Trip(
            agency_id=agency_id,
            owner_id=owner_id,
            name=data["name"],
            description=data.get("description"),
            trip_type=data.get("trip_type"),
            status=data.get("status") or "draft",
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            currency=currency.upper(),
            primary_contact_id=data.get("primary_contact_id"),
        )
        trip.reference_number = await self.next_reference_number(db, trip.trip_type, trip.start_date)
        db.add(trip)
        await db.flush()

        await itinerary_service.create_itinerary(db, trip, DEFAULT_ITINERARY_NAME, is_selected=True)
        logger.info(f"Created trip {trip.reference_number} ({trip.id}) for agency {agency_id}")
        return trip

    def change_status(self, trip: Trip, new_status: str) -> Trip:
        if not can_transition(trip.status, new_status):
            raise ConflictError(transition_error_message(trip.status, new_status))
        if trip.status != new_status:
            logger.info(f"Trip {trip.id} status {trip.status} -> {new_status}")
        trip.status = new_status
        return trip

    async def update_trip(self, db: AsyncSession, trip: Trip, changes: dict) -> Trip:
        _check_dates(
            changes.get("start_date", trip.start_date),
            changes.get("end_date", trip.end_date),
        )

        if changes.get("status"):
            self.change_status(trip, changes["status"])

        dates_changed = any(
            field in changes and changes[field] != getattr(trip, field)
            for field in ("start_date", "end_date")
        )
        type_changed = "trip_type" in changes and changes["trip_type"] != trip.trip_type
        for field in ("name", "description", "trip_type", "start_date", "end_date"):
            if field in changes:
                setattr(trip, field, changes[field])
        if changes.get("currency"):
            trip.currency = changes["currency"].upper()

        if type_changed and trip.status in REFERENCE_REGENERATION_STATUSES:
            old_reference = trip.reference_number
            trip.reference_number = await self.next_reference_number(db, trip.trip_type, trip.start_date)
            logger.info(f"Trip {trip.id} reference {old_reference} -> {trip.reference_number}")

        if dates_changed:
            await itinerary_service.sync_days_to_dates(db, trip)

        await db.flush()
        return trip

    async def delete_trip(self, db: AsyncSession, trip: Trip) -> None:
        if not is_deletable(trip.status):
            raise ConflictError(
                "Cannot delete a trip that is booked, in progress, completed, or cancelled"
            )
        await db.delete(trip)
        await db.flush()
        logger.info(f"Deleted trip {trip.reference_number} ({trip.id})")


trip_service = TripService()
