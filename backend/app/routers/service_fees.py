import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_agency_trip
from app.models.trip import Trip
from app.schemas.finance import (
    CreateServiceFeeRequest,
    RefundServiceFeeRequest,
    ServiceFeeResponse,
    UpdateServiceFeeRequest,
)
from app.services.service_fee_service import service_fee_service

router = APIRouter()


@router.get("", response_model=list[ServiceFeeResponse])
async def list_service_fees(
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    fees = await service_fee_service.list_fees(db, trip.id)
    return [ServiceFeeResponse.model_validate(f) for f in fees]


@router.post("", status_code=201, response_model=ServiceFeeResponse)
async def create_service_fee(
    req: CreateServiceFeeRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Create a draft fee. Foreign-currency fees store the rate to the trip currency."""
    fee = await service_fee_service.create_fee(db, trip, req.model_dump())
    await db.commit()
    return ServiceFeeResponse.model_validate(fee)


@router.get("/{fee_id}", response_model=ServiceFeeResponse)
async def get_service_fee(
    fee_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    return ServiceFeeResponse.model_validate(await service_fee_service.get_fee(db, trip.id, fee_id))


@router.patch("/{fee_id}", response_model=ServiceFeeResponse)
async def update_service_fee(
    fee_id: uuid.UUID,
    req: UpdateServiceFeeRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    fee = await service_fee_service.get_fee(db, trip.id, fee_id)
    fee = await service_fee_service.update_fee(db, trip, fee, req.model_dump(exclude_unset=True))
    await db.commit()
    return ServiceFeeResponse.model_validate(fee)


@router.delete("/{fee_id}", status_code=204)
async def delete_service_fee(
    fee_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    fee = await service_fee_service.get_fee(db, trip.id, fee_id)
    await service_fee_service.delete_fee(db, fee)
    await db.commit()


@router.post("/{fee_id}/send", response_model=ServiceFeeResponse)
async def send_service_fee(
    fee_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    fee = await service_fee_service.get_fee(db, trip.id, fee_id)
    fee = await service_fee_service.send_fee(db, fee)
    await db.commit()
    return ServiceFeeResponse.model_validate(fee)


@router.post("/{fee_id}/mark-paid", response_model=ServiceFeeResponse)
async def mark_service_fee_paid(
    fee_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    fee = await service_fee_service.get_fee(db, trip.id, fee_id)
    fee = await service_fee_service.mark_paid(db, fee)
    await db.commit()
    return ServiceFeeResponse.model_validate(fee)


@router.post("/{fee_id}/refund", response_model=ServiceFeeResponse)
async def refund_service_fee(
    fee_id: uuid.UUID,
    req: RefundServiceFeeRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Refund all of the remaining balance, or part of it when amount_cents is given."""
    fee = await service_fee_service.get_fee(db, trip.id, fee_id)
    fee = await service_fee_service.refund_fee(db, fee, req.amount_cents, req.reason)
    await db.commit()
    return ServiceFeeResponse.model_validate(fee)


@router.post("/{fee_id}/cancel", response_model=ServiceFeeResponse)
async def cancel_service_fee(
    fee_id: uuid.UUID,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    fee = await service_fee_service.get_fee(db, trip.id, fee_id)
    fee = await service_fee_service.cancel_fee(db, fee)
    await db.commit()
    return ServiceFeeResponse.model_validate(fee)
