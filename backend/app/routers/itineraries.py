"""Itineraries router — itineraries, their days, and the geolocation cascade."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_agency_trip
from app.models.itinerary import Itinerary
from app.models.trip import Trip
from app.schemas.itinerary import (
    CascadeApplyRequest,
    CascadePreviewRequest,
    CascadePreviewResponse,
    CreateDayRequest,
    CreateItineraryRequest,
    DayResponse,
    ItineraryDetailResponse,
    ItineraryResponse,
    UpdateDayRequest,
    UpdateItineraryRequest,
)
from app.services.geolocation_cascade import geolocation_cascade_service
from app.services.itinerary_service import itinerary_service

router = APIRouter()


@router.get("", response_model=list[ItineraryResponse])
async def list_itineraries(
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Itinerary).where(Itinerary.trip_id == trip.id).order_by(Itinerary.sequence_order)
    )
    return [ItineraryResponse.model_validate(i) for i in result.scalars().all()]


@router.post("", status_code=201, response_model=ItineraryDetailResponse)
async def create_itinerary(
    req: CreateItineraryRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Create an itinerary with one day per date of the trip."""
    itinerary = await itinerary_service.create_itinerary(
        db, trip, req.name, req.description, req.status, req.is_selected
    )
    await db.commit()
    itinerary = await itinerary_service.get_itinerary(db, trip.id, itinerary.id, with_days=True)
    return ItineraryDetailResponse.model_validate(itinerary)


@router.get("/{itinerary_id}", response_model=ItineraryDetailResponse)
async def get_itinerary(
    itinerary_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    itinerary = await itinerary_service.get_itinerary(db, trip.id, itinerary_id, with_days=True)
    return ItineraryDetailResponse.model_validate(itinerary)


@router.patch("/{itinerary_id}", response_model=ItineraryResponse)
async def update_itinerary(
    itinerary_id: uuid.UUID,
    req: UpdateItineraryRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    itinerary = await itinerary_service.get_itinerary(db, trip.id, itinerary_id)
    changes = req.model_dump(exclude_unset=True)
    if "description" in changes:
        itinerary.description = changes["description"]
    for field in ("name", "status", "sequence_order"):
        if changes.get(field) is not None:
            setattr(itinerary, field, changes[field])
    await db.commit()
    return ItineraryResponse.model_validate(itinerary)


@router.delete("/{itinerary_id}", status_code=204)
async def delete_itinerary(
    itinerary_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Delete an itinerary. Approved and last itineraries cannot be deleted."""
    itinerary = await itinerary_service.get_itinerary(db, trip.id, itinerary_id)
    await itinerary_service.delete_itinerary(db, itinerary)
    await db.commit()


@router.post("/{itinerary_id}/select", response_model=ItineraryResponse)
async def select_itinerary(
    itinerary_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Make this the trip's selected itinerary."""
    itinerary = await itinerary_service.get_itinerary(db, trip.id, itinerary_id)
    await itinerary_service.select_itinerary(db, itinerary)
    await db.commit()
    return ItineraryResponse.model_validate(itinerary)


@router.post("/{itinerary_id}/days", status_code=201, response_model=DayResponse)
async def add_day(
    itinerary_id: uuid.UUID,
    req: CreateDayRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    itinerary = await itinerary_service.get_itinerary(db, trip.id, itinerary_id)
    day = await itinerary_service.add_day(db, trip, itinerary, req.date, req.title, req.notes)
    await db.commit()
    return DayResponse.model_validate(day)


@router.patch("/{itinerary_id}/days/{day_id}", response_model=DayResponse)
async def update_day(
    itinerary_id: uuid.UUID,
    day_id: uuid.UUID,
    req: UpdateDayRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Update a day. Locations set here become manual overrides that stop the cascade."""
    itinerary = await itinerary_service.get_itinerary(db, trip.id, itinerary_id)
    day = await itinerary_service.get_day(db, itinerary.id, day_id)
    itinerary_service.update_day(trip, day, req.model_dump(exclude_unset=True))
    await db.commit()
    return DayResponse.model_validate(day)


@router.delete("/{itinerary_id}/days/{day_id}", status_code=204)
async def delete_day(
    itinerary_id: uuid.UUID,
    day_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Delete a day and renumber the rest. Its activities become floating."""
    itinerary = await itinerary_service.get_itinerary(db, trip.id, itinerary_id)
    day = await itinerary_service.get_day(db, itinerary.id, day_id)
    await itinerary_service.delete_day(db, trip, day)
    await db.commit()


@router.post("/{itinerary_id}/days/{day_id}/cascade/preview", response_model=CascadePreviewResponse)
async def preview_cascade(
    itinerary_id: uuid.UUID,
    day_id: uuid.UUID,
    req: CascadePreviewRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Show which days would move to the new location. Nothing is written."""
    itinerary = await itinerary_service.get_itinerary(db, trip.id, itinerary_id)
    day = await itinerary_service.get_day(db, itinerary.id, day_id)
    return await geolocation_cascade_service.preview(
        db, itinerary.id, day.id, req.new_location.model_dump(), req.trigger.model_dump()
    )


@router.post("/{itinerary_id}/cascade/apply")
async def apply_cascade(
    itinerary_id: uuid.UUID,
    req: CascadeApplyRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Write the approved days of a cascade preview."""
    itinerary = await itinerary_service.get_itinerary(db, trip.id, itinerary_id)
    updated = await geolocation_cascade_service.apply(
        db, itinerary.id, req.day_ids, req.preview.model_dump()
    )
    await db.commit()
    return {"itinerary_id": itinerary.id, "updated_days": updated}
