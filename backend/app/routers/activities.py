"""Activities router — activities, pricing, payment schedules, commissions and cost splits."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_agency_trip
from app.models.trip import Trip
from app.schemas.activity import (
    ActivityResponse,
    CommissionReceivedRequest,
    CreateActivityRequest,
    CreateTransactionRequest,
    PaymentItemResponse,
    PaymentScheduleRequest,
    PaymentScheduleResponse,
    PricingRequest,
    PricingResponse,
    UpdateActivityRequest,
)
from app.schemas.finance import ActivitySplitsResponse, SetSplitsRequest
from app.services.activity_service import activity_service
from app.services.payment_schedule_service import payment_schedule_service
from app.services.traveler_split_service import traveler_split_service

router = APIRouter()


@router.get("", response_model=list[ActivityResponse])
async def list_activities(
    itinerary_id: uuid.UUID | None = Query(None),
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    activities = await activity_service.list_activities(db, trip.id, itinerary_id)
    return [ActivityResponse.model_validate(a) for a in activities]


@router.post("", status_code=201, response_model=ActivityResponse)
async def create_activity(
    req: CreateActivityRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Create an activity. A blank name is generated from the activity details."""
    activity = await activity_service.create_activity(db, trip, req.model_dump())
    await db.commit()
    activity = await activity_service.get_activity(db, trip.id, activity.id)
    return ActivityResponse.model_validate(activity)


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_activity(
    activity_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    activity = await activity_service.get_activity(db, trip.id, activity_id)
    return ActivityResponse.model_validate(activity)


@router.patch("/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: uuid.UUID,
    req: UpdateActivityRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    activity = await activity_service.get_activity(db, trip.id, activity_id)
    await activity_service.update_activity(db, activity, req.model_dump(exclude_unset=True))
    await db.commit()
    activity = await activity_service.get_activity(db, trip.id, activity_id)
    return ActivityResponse.model_validate(activity)


@router.delete("/{activity_id}", status_code=204)
async def delete_activity(
    activity_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Delete an activity. Package components are deleted with their package."""
    activity = await activity_service.get_activity(db, trip.id, activity_id)
    await activity_service.delete_activity(db, activity)
    await db.commit()


@router.put("/{activity_id}/pricing", response_model=PricingResponse)
async def set_pricing(
    activity_id: uuid.UUID,
    req: PricingRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    activity = await activity_service.get_activity(db, trip.id, activity_id)
    pricing = await activity_service.upsert_pricing(db, activity, req.model_dump())
    await db.commit()
    return PricingResponse.model_validate(pricing)


@router.get("/{activity_id}/payment-schedule", response_model=PaymentScheduleResponse)
async def get_payment_schedule(
    activity_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    activity = await activity_service.get_activity(db, trip.id, activity_id)
    return await payment_schedule_service.get_schedule(db, activity)


@router.put("/{activity_id}/payment-schedule", response_model=PaymentScheduleResponse)
async def set_payment_schedule(
    activity_id: uuid.UUID,
    req: PaymentScheduleRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Replace the activity's payment schedule and its expected payment items."""
    activity = await activity_service.get_activity(db, trip.id, activity_id)
    await payment_schedule_service.set_schedule(db, activity, req)
    await db.commit()
    return await payment_schedule_service.get_schedule(db, activity)


@router.post(
    "/{activity_id}/payment-items/{item_id}/transactions",
    status_code=201,
    response_model=PaymentItemResponse,
)
async def record_transaction(
    activity_id: uuid.UUID,
    item_id: uuid.UUID,
    req: CreateTransactionRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Record a payment or refund against an expected payment item."""
    activity = await activity_service.get_activity(db, trip.id, activity_id)
    item = await payment_schedule_service.get_item(db, activity.id, item_id)
    item = await payment_schedule_service.record_transaction(
        db, item, req.transaction_type, req.amount_cents, req.transaction_date, req.notes
    )
    await db.commit()
    return PaymentItemResponse.model_validate(item)


@router.post("/{activity_id}/commissions", status_code=201)
async def record_commission_received(
    activity_id: uuid.UUID,
    req: CommissionReceivedRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    activity = await activity_service.get_activity(db, trip.id, activity_id)
    row = await activity_service.record_commission_received(
        db, trip, activity, req.commission_amount, req.received_date
    )
    await db.commit()
    return {
        "id": row.id,
        "activity_id": row.activity_id,
        "commission_amount": str(row.commission_amount),
        "status": row.status,
        "received_date": row.received_date,
    }


@router.get("/{activity_id}/splits", response_model=ActivitySplitsResponse)
async def get_activity_splits(
    activity_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    return await traveler_split_service.get_activity_splits(db, trip, activity_id)


@router.put("/{activity_id}/splits", response_model=ActivitySplitsResponse)
async def set_activity_splits(
    activity_id: uuid.UUID,
    req: SetSplitsRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Split the activity cost equally, or by custom amounts that sum to the total."""
    entries = [s.model_dump() for s in req.splits] if req.splits else None
    splits = await traveler_split_service.set_activity_splits(db, trip, activity_id, req.split_type, entries)
    await db.commit()
    return splits


@router.delete("/{activity_id}/splits", status_code=204)
async def delete_activity_splits(
    activity_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    await traveler_split_service.delete_activity_splits(db, trip, activity_id)
    await db.commit()
