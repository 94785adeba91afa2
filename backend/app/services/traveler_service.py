"""Traveler service — trip travelers, their contact snapshots and travel readiness."""

import logging
import uuid
from datetime import date, datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.exceptions import ConflictError, NotFoundError, ServiceError
from app.models.contact import Contact
from app.models.trip import Trip, TripTraveler
from app.services.contact_names import display_name, legal_full_name
from app.services.notification_service import notification_service
from app.services.snapshot_diff import compare_snapshots, validate_contact_for_travel
from app.services.traveler_split_service import traveler_split_service

logger = logging.getLogger(__name__)

PRIMARY_CONTACT_ROLE = "primary_contact"

# Snapshot key -> Contact attribute
SNAPSHOT_FIELDS: dict[str, str] = {
    "firstName": "first_name",
    "lastName": "last_name",
    "legalFirstName": "legal_first_name",
    "legalLastName": "legal_last_name",
    "middleName": "middle_name",
    "preferredName": "preferred_name",
    "prefix": "prefix",
    "suffix": "suffix",
    "gender": "gender",
    "pronouns": "pronouns",
    "email": "email",
    "phone": "phone",
    "dateOfBirth": "date_of_birth",
    "passportNumber": "passport_number",
    "passportExpiry": "passport_expiry",
    "passportCountry": "passport_country",
    "passportIssueDate": "passport_issue_date",
    "nationality": "nationality",
    "redressNumber": "redress_number",
    "knownTravelerNumber": "known_traveler_number",
    "dietaryRequirements": "dietary_requirements",
    "mobilityRequirements": "mobility_requirements",
    "seatPreference": "seat_preference",
    "cabinPreference": "cabin_preference",
    "floorPreference": "floor_preference",
}

_DATE_ATTRS = {"date_of_birth", "passport_expiry", "passport_issue_date"}


def _snapshot_value(value):
    if isinstance(value, (date, datetime)):
        return value.isoformat()[:10]
    if isinstance(value, str) and len(value) > 10 and value[4:5] == "-" and value[10:11] == "T":
        return value[:10]
    return value


def map_contact_to_snapshot(contact: Contact) -> dict:
    """Copy a contact into the camelCase snapshot stored on a traveler."""
    snapshot = {key: _snapshot_value(getattr(contact, attr)) for key, attr in SNAPSHOT_FIELDS.items()}
    # Snapshots always carry a usable name
    snapshot["firstName"] = (
        contact.first_name or contact.legal_first_name or contact.preferred_name or "Traveler"
    )
    snapshot["lastName"] = (
        contact.last_name or contact.legal_last_name or contact.preferred_name or "Contact"
    )
    return snapshot


def contact_from_snapshot(agency_id: uuid.UUID, snapshot: dict) -> Contact:
    """Build a lead contact from a snapshot supplied without a contact."""
    values = {}
    for key, attr in SNAPSHOT_FIELDS.items():
        value = snapshot.get(key)
        if value in (None, ""):
            continue
        if attr in _DATE_ATTRS:
            try:
                value = date.fromisoformat(str(value)[:10])
            except ValueError:
                logger.warning(f"Ignoring invalid {key} in traveler snapshot: {value!r}")
                continue
        values[attr] = value
    return Contact(agency_id=agency_id, contact_type="lead", **values)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def snapshot_display_name(snapshot: dict | None) -> str:
    snapshot = snapshot or {}
    return display_name(
        snapshot.get("preferredName"), snapshot.get("firstName"), snapshot.get("legalFirstName")
    )


def build_traveler_response(traveler: TripTraveler, contact: Contact | None = None) -> dict:
    snapshot = traveler.contact_snapshot or {}
    stale = False
    if contact is not None and traveler.snapshot_updated_at is not None:
        stale = _as_utc(contact.updated_at) > _as_utc(traveler.snapshot_updated_at)
    return {
        "id": traveler.id,
        "trip_id": traveler.trip_id,
        "contact_id": traveler.contact_id,
        "role": traveler.role,
        "is_primary_traveler": traveler.is_primary_traveler,
        "traveler_type": traveler.traveler_type,
        "sequence_order": traveler.sequence_order,
        "contact_snapshot": traveler.contact_snapshot,
        "snapshot_updated_at": traveler.snapshot_updated_at,
        "is_snapshot_stale": stale,
        "display_name": snapshot_display_name(snapshot),
        "legal_full_name": legal_full_name(
            snapshot.get("prefix"),
            snapshot.get("legalFirstName"),
            snapshot.get("firstName"),
            snapshot.get("middleName"),
            snapshot.get("legalLastName"),
            snapshot.get("lastName"),
            snapshot.get("suffix"),
        ),
        "created_at": traveler.created_at,
    }


class TravelerService:
    """Travelers on a trip. Every method expects a trip already scoped to the caller's agency."""

    async def list_travelers(self, db: AsyncSession, trip_id: uuid.UUID) -> list[TripTraveler]:
        result = await db.execute(
            select(TripTraveler)
            .where(TripTraveler.trip_id == trip_id)
            .order_by(TripTraveler.sequence_order, TripTraveler.created_at)
        )
        return list(result.scalars().all())

    async def get_traveler(self, db: AsyncSession, trip_id: uuid.UUID, traveler_id: uuid.UUID) -> TripTraveler:
        result = await db.execute(
            select(TripTraveler).where(TripTraveler.id == traveler_id, TripTraveler.trip_id == trip_id)
        )
        traveler = result.scalar_one_or_none()
        if not traveler:
            raise NotFoundError("Traveler not found")
        return traveler

    async def get_contact(self, db: AsyncSession, agency_id: uuid.UUID, contact_id: uuid.UUID) -> Contact:
        result = await db.execute(
            select(Contact).where(Contact.id == contact_id, Contact.agency_id == agency_id)
        )
        contact = result.scalar_one_or_none()
        if not contact:
            raise NotFoundError("Contact not found")
        return contact

    async def contacts_for(self, db: AsyncSession, travelers: list[TripTraveler]) -> dict[uuid.UUID, Contact]:
        ids = {t.contact_id for t in travelers if t.contact_id}
        if not ids:
            return {}
        result = await db.execute(select(Contact).where(Contact.id.in_(ids)))
        return {c.id: c for c in result.scalars().all()}

    async def _ensure_single_primary(
        self, db: AsyncSession, trip_id: uuid.UUID, exclude_id: uuid.UUID | None = None
    ) -> None:
        query = select(TripTraveler.id).where(
            TripTraveler.trip_id == trip_id, TripTraveler.role == PRIMARY_CONTACT_ROLE
        )
        if exclude_id:
            query = query.where(TripTraveler.id != exclude_id)
        result = await db.execute(query)
        if result.first() is not None:
            raise ConflictError(
                "This trip already has a primary contact. "
                "Change the existing primary contact's role first."
            )

    async def add_traveler(self, db: AsyncSession, trip: Trip, data: dict) -> tuple[TripTraveler, Contact]:
        contact_id = data.get("contact_id")
        snapshot_in = data.get("contact_snapshot")
        if not contact_id and not snapshot_in:
            raise ServiceError("Either contact_id or contact_snapshot is required")

        role = data.get("role") or "limited_access"
        if role == PRIMARY_CONTACT_ROLE:
            await self._ensure_single_primary(db, trip.id)

        if contact_id:
            contact = await self.get_contact(db, trip.agency_id, contact_id)
        else:
            contact = contact_from_snapshot(trip.agency_id, snapshot_in)
            db.add(contact)
            await db.flush()
            logger.info(f"Created lead contact {contact.id} from traveler snapshot on trip {trip.id}")

        sequence_order = data.get("sequence_order")
        if sequence_order is None:
            result = await db.execute(
                select(func.max(TripTraveler.sequence_order)).where(TripTraveler.trip_id == trip.id)
            )
            sequence_order = (result.scalar() or 0) + 1

        traveler = TripTraveler(
            trip_id=trip.id,
            contact_id=contact.id,
            role=role,
            is_primary_traveler=role == PRIMARY_CONTACT_ROLE,
            traveler_type=data.get("traveler_type") or "adult",
            sequence_order=sequence_order,
            contact_snapshot=map_contact_to_snapshot(contact),
            snapshot_updated_at=utcnow(),
        )
        db.add(traveler)
        if role == PRIMARY_CONTACT_ROLE:
            trip.primary_contact_id = contact.id
        await db.flush()
        return traveler, contact

    async def update_traveler(
        self, db: AsyncSession, trip: Trip, traveler: TripTraveler, changes: dict
    ) -> TripTraveler:
        new_role = changes.get("role")
        if new_role and new_role != traveler.role:
            if new_role == PRIMARY_CONTACT_ROLE:
                await self._ensure_single_primary(db, trip.id, exclude_id=traveler.id)
                trip.primary_contact_id = traveler.contact_id
            elif traveler.role == PRIMARY_CONTACT_ROLE and trip.primary_contact_id == traveler.contact_id:
                trip.primary_contact_id = None
            traveler.role = new_role
            traveler.is_primary_traveler = new_role == PRIMARY_CONTACT_ROLE

        if changes.get("traveler_type"):
            traveler.traveler_type = changes["traveler_type"]
        if changes.get("sequence_order") is not None:
            traveler.sequence_order = changes["sequence_order"]
        await db.flush()
        return traveler

    async def remove_traveler(self, db: AsyncSession, trip: Trip, traveler: TripTraveler) -> None:
        if traveler.contact_id and trip.primary_contact_id == traveler.contact_id:
            trip.primary_contact_id = None

        name = snapshot_display_name(traveler.contact_snapshot)
        try:
            async with db.begin_nested():
                activity_ids = await traveler_split_service.delete_traveler_splits(db, traveler.id)
                if activity_ids:
                    await notification_service.send_split_recalculation_needed(
                        db, trip.agency_id, trip.id, name, activity_ids
                    )
        except SQLAlchemyError as e:
            logger.warning(f"Split cleanup failed for traveler {traveler.id} on trip {trip.id}: {e}")

        await db.delete(traveler)
        await db.flush()
        logger.info(f"Removed traveler {traveler.id} from trip {trip.id}")

    def get_snapshot(self, traveler: TripTraveler) -> dict:
        if not traveler.contact_snapshot:
            raise NotFoundError("No snapshot found for this traveler")
        return traveler.contact_snapshot

    async def _linked_contact(self, db: AsyncSession, trip: Trip, traveler: TripTraveler) -> Contact:
        if not traveler.contact_id:
            raise ServiceError("Traveler is not linked to a contact")
        return await self.get_contact(db, trip.agency_id, traveler.contact_id)

    async def reset_snapshot(
        self, db: AsyncSession, trip: Trip, traveler: TripTraveler
    ) -> tuple[TripTraveler, Contact]:
        contact = await self._linked_contact(db, trip, traveler)
        traveler.contact_snapshot = map_contact_to_snapshot(contact)
        traveler.snapshot_updated_at = utcnow()
        await db.flush()
        return traveler, contact

    async def snapshot_diff(self, db: AsyncSession, trip: Trip, traveler: TripTraveler) -> dict:
        contact = await self._linked_contact(db, trip, traveler)
        diff = compare_snapshots(traveler.contact_snapshot or {}, map_contact_to_snapshot(contact))
        return {
            "traveler_id": traveler.id,
            "snapshot_updated_at": traveler.snapshot_updated_at,
            "contact_updated_at": contact.updated_at,
            **diff.to_dict(),
        }

    def readiness(self, trip: Trip, traveler: TripTraveler, today: date | None = None) -> dict:
        result = validate_contact_for_travel(traveler.contact_snapshot or {}, trip.start_date, today)
        return {"traveler_id": traveler.id, **result.to_dict()}


traveler_service = TravelerService()
