from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_agency_trip, get_current_user
from app.models.agency import User
from app.models.trip import Trip
from app.schemas.trip import CreateTripRequest, TripResponse, TripStatusRequest, TripStatus, UpdateTripRequest
from app.services.activity_service import activity_service
from app.services.export_service import export_service
from app.services.financial_summary_service import financial_summary_service
from app.services.payment_schedule_service import payment_schedule_service
from app.services.trip_service import trip_service

router = APIRouter()


@router.post("", status_code=201, response_model=TripResponse)
async def create_trip(
    req: CreateTripRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create a trip with its reference number and a selected "Main Itinerary"."""
    trip = await trip_service.create_trip(db, user.agency_id, user.id, req.model_dump())
    await db.commit()
    return TripResponse.model_validate(trip)


@router.get("")
async def list_trips(
    status: TripStatus | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List the agency's trips, newest first."""
    query = select(Trip).where(Trip.agency_id == user.agency_id)
    if status:
        query = query.where(Trip.status == status)

    total_result = await db.execute(select(func.count()).select_from(query.subquery()))
    result = await db.execute(
        query.order_by(Trip.created_at.desc()).offset((page - 1) * limit).limit(limit)
    )
    return {
        "trips": [TripResponse.model_validate(t) for t in result.scalars().all()],
        "total": total_result.scalar() or 0,
        "page": page,
        "limit": limit,
    }


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(trip: Trip = Depends(get_agency_trip)):
    return TripResponse.model_validate(trip)


@router.patch("/{trip_id}", response_model=TripResponse)
async def update_trip(
    req: UpdateTripRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Partial update. Status changes are checked against the allowed transitions."""
    trip = await trip_service.update_trip(db, trip, req.model_dump(exclude_unset=True))
    await db.commit()
    return TripResponse.model_validate(trip)


@router.patch("/{trip_id}/status", response_model=TripResponse)
async def change_trip_status(
    req: TripStatusRequest,
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    trip_service.change_status(trip, req.status)
    await db.commit()
    return TripResponse.model_validate(trip)


@router.delete("/{trip_id}", status_code=204)
async def delete_trip(
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Delete an inbound, draft or quoted trip."""
    await trip_service.delete_trip(db, trip)
    await db.commit()


@router.get("/{trip_id}/booking-status")
async def get_booking_status(
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Payment state of every scheduled activity, with a trip summary."""
    return await payment_schedule_service.booking_status(db, trip.id)


@router.get("/{trip_id}/package-totals")
async def get_package_totals(
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    return await activity_service.package_totals(db, trip.id)


@router.get("/{trip_id}/financial-summary")
async def get_financial_summary(
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Costs, service fees, per-traveler shares and commission in the trip currency."""
    summary = await financial_summary_service.get_summary(db, trip)
    # Live conversions may have stored new rates
    await db.commit()
    return summary


@router.get("/{trip_id}/order.pdf")
async def download_trip_order(
    trip: Trip = Depends(get_agency_trip),
    db: AsyncSession = Depends(get_db),
):
    """Trip order document as PDF."""
    pdf_bytes = await export_service.generate_trip_order_pdf(db, trip)
    await db.commit()
    filename = f"trip-order-{trip.reference_number or trip.id}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
