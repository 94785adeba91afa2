"""Geolocation cascade — propagates a day's new end location forward through the itinerary.

When an activity (typically a flight or lodging) moves the traveler, the trip
continues from the new place: the trigger day ends there and following days
start there, until a day with a manual start override or one that already
starts at the new location.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.models.itinerary import ItineraryDay

logger = logging.getLogger(__name__)


def _location(name, lat, lng) -> dict | None:
    if not name:
        return None
    return {
        "name": name,
        "lat": float(lat) if lat is not None else None,
        "lng": float(lng) if lng is not None else None,
    }


def day_locations(day: ItineraryDay) -> dict:
    return {
        "start_location": _location(day.start_location_name, day.start_location_lat, day.start_location_lng),
        "end_location": _location(day.end_location_name, day.end_location_lat, day.end_location_lng),
    }


def locations_equal(a: dict | None, b: dict | None) -> bool:
    if a is None or b is None:
        return a is None and b is None
    return a["name"] == b["name"] and a["lat"] == b["lat"] and a["lng"] == b["lng"]


def compute_cascade(
    days: list[ItineraryDay],
    trigger_day_id: uuid.UUID,
    new_location: dict,
    trigger: dict | None = None,
) -> dict:
    """Build a cascade preview; nothing is written.

    ``days`` may be in any order, they are walked by ``sequence_order``.
    """
    trigger = trigger or {}
    preview = {
        "trigger_day_id": trigger_day_id,
        "trigger": {
            "activity_id": trigger.get("activity_id"),
            "activity_type": trigger.get("activity_type"),
            "description": trigger.get("description") or "",
        },
        "new_location": new_location,
        "affected_days": [],
    }

    ordered = sorted(days, key=lambda d: d.sequence_order)
    trigger_idx = next((i for i, d in enumerate(ordered) if d.id == trigger_day_id), None)
    if trigger_idx is None:
        return preview

    affected = preview["affected_days"]

    trigger_day = ordered[trigger_idx]
    if not trigger_day.end_location_override:
        before = day_locations(trigger_day)
        affected.append({
            "day_id": trigger_day.id,
            "day_number": trigger_day.day_number,
            "date": trigger_day.date,
            "before": before,
            "after": {**before, "end_location": new_location},
        })

    for day in ordered[trigger_idx + 1:]:
        if day.start_location_override:
            break

        before = day_locations(day)
        if locations_equal(before["start_location"], new_location):
            break

        after = {**before, "start_location": new_location}
        # Nothing else placed the traveler elsewhere, so the day ends where it starts
        if not day.end_location_override and not day.end_location_name:
            after["end_location"] = new_location

        affected.append({
            "day_id": day.id,
            "day_number": day.day_number,
            "date": day.date,
            "before": before,
            "after": after,
        })

    return preview


def _set_location(day: ItineraryDay, side: str, location: dict | None) -> None:
    if location:
        setattr(day, f"{side}_location_name", location["name"])
        setattr(day, f"{side}_location_lat", location["lat"])
        setattr(day, f"{side}_location_lng", location["lng"])
    else:
        setattr(day, f"{side}_location_name", None)
        setattr(day, f"{side}_location_lat", None)
        setattr(day, f"{side}_location_lng", None)


class GeolocationCascadeService:
    """Loads itinerary days and applies approved cascade changes."""

    async def preview(
        self, db: AsyncSession, itinerary_id: uuid.UUID, trigger_day_id: uuid.UUID,
        new_location: dict, trigger: dict | None = None,
    ) -> dict:
        result = await db.execute(
            select(ItineraryDay)
            .where(ItineraryDay.itinerary_id == itinerary_id)
            .order_by(ItineraryDay.sequence_order)
        )
        days = list(result.scalars().all())
        return compute_cascade(days, trigger_day_id, new_location, trigger)

    async def apply(
        self, db: AsyncSession, itinerary_id: uuid.UUID, day_ids: list[uuid.UUID], preview: dict
    ) -> int:
        """Write the approved days of a preview. Returns how many days were updated."""
        approved = set(day_ids)
        selected = [ad for ad in preview["affected_days"] if ad["day_id"] in approved]
        if not selected:
            return 0

        result = await db.execute(
            select(ItineraryDay).where(
                ItineraryDay.itinerary_id == itinerary_id,
                ItineraryDay.id.in_([ad["day_id"] for ad in selected]),
            )
        )
        days = {d.id: d for d in result.scalars().all()}

        updated = 0
        for ad in selected:
            day = days.get(ad["day_id"])
            if day is None:
                continue
            for side in ("start", "end"):
                key = f"{side}_location"
                if not locations_equal(ad["after"].get(key), ad["before"].get(key)):
                    _set_location(day, side, ad["after"].get(key))
            day.updated_at = utcnow()
            updated += 1

        await db.flush()
        logger.info(f"Applied cascade to {updated} days in itinerary {itinerary_id}")
        return updated


geolocation_cascade_service = GeolocationCascadeService()
