"""Trip travelers router — travelers, snapshots, readiness and their cost splits."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_agency_trip
from app.models.trip import Trip
from app.schemas.finance import SplitResponse
from app.schemas.traveler import CreateTravelerRequest, TravelerResponse, UpdateTravelerRequest
from app.services.traveler_service import build_traveler_response, traveler_service
from app.services.traveler_split_service import traveler_split_service

router = APIRouter()


async def _response(db: AsyncSession, traveler, contact=None) -> TravelerResponse:
    if contact is None and traveler.contact_id:
        contact = (await traveler_service.contacts_for(db, [traveler])).get(traveler.contact_id)
    return TravelerResponse(**build_traveler_response(traveler, contact))


@router.get("", response_model=list[TravelerResponse])
async def list_travelers(
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    travelers = await traveler_service.list_travelers(db, trip.id)
    contacts = await traveler_service.contacts_for(db, travelers)
    return [
        TravelerResponse(**build_traveler_response(t, contacts.get(t.contact_id)))
        for t in travelers
    ]


@router.post("", status_code=201, response_model=TravelerResponse)
async def add_traveler(
    req: CreateTravelerRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Add a traveler from an existing contact, or from a snapshot (creates a lead contact)."""
    traveler, contact = await traveler_service.add_traveler(db, trip, req.model_dump())
    await db.commit()
    return await _response(db, traveler, contact)


@router.get("/{traveler_id}", response_model=TravelerResponse)
async def get_traveler(
    traveler_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    traveler = await traveler_service.get_traveler(db, trip.id, traveler_id)
    return await _response(db, traveler)


@router.patch("/{traveler_id}", response_model=TravelerResponse)
async def update_traveler(
    traveler_id: uuid.UUID,
    req: UpdateTravelerRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    traveler = await traveler_service.get_traveler(db, trip.id, traveler_id)
    traveler = await traveler_service.update_traveler(db, trip, traveler, req.model_dump(exclude_unset=True))
    await db.commit()
    return await _response(db, traveler)


@router.delete("/{traveler_id}", status_code=204)
async def remove_traveler(
    traveler_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Remove a traveler. Their cost splits are deleted and staff are notified to recalculate."""
    traveler = await traveler_service.get_traveler(db, trip.id, traveler_id)
    await traveler_service.remove_traveler(db, trip, traveler)
    await db.commit()


@router.get("/{traveler_id}/snapshot")
async def get_snapshot(
    traveler_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    traveler = await traveler_service.get_traveler(db, trip.id, traveler_id)
    return {
        "traveler_id": traveler.id,
        "contact_snapshot": traveler_service.get_snapshot(traveler),
        "snapshot_updated_at": traveler.snapshot_updated_at,
    }


@router.post("/{traveler_id}/snapshot/reset", response_model=TravelerResponse)
async def reset_snapshot(
    traveler_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Re-copy the traveler's snapshot from the live contact."""
    traveler = await traveler_service.get_traveler(db, trip.id, traveler_id)
    traveler, contact = await traveler_service.reset_snapshot(db, trip, traveler)
    await db.commit()
    return await _response(db, traveler, contact)


@router.get("/{traveler_id}/snapshot/diff")
async def get_snapshot_diff(
    traveler_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    traveler = await traveler_service.get_traveler(db, trip.id, traveler_id)
    return await traveler_service.snapshot_diff(db, trip, traveler)


@router.get("/{traveler_id}/readiness")
async def get_travel_readiness(
    traveler_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Document checks (date of birth, passport validity) against the trip start date."""
    traveler = await traveler_service.get_traveler(db, trip.id, traveler_id)
    return traveler_service.readiness(trip, traveler)


@router.get("/{traveler_id}/splits", response_model=list[SplitResponse])
async def get_traveler_splits(
    traveler_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    traveler = await traveler_service.get_traveler(db, trip.id, traveler_id)
    splits = await traveler_split_service.get_traveler_splits(db, traveler.id)
    return [SplitResponse.model_validate(s) for s in splits]
