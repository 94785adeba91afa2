"""Service fee service — agency fees invoiced to the client and their payment lifecycle."""

import logging
import uuid
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.data.currency import convert_cents
from app.database import utcnow
from app.exceptions import ConflictError, NotFoundError, ServiceError
from app.models.finance import ServiceFee
from app.models.trip import Trip, TripTraveler
from app.services.exchange_rate_service import exchange_rate_service
from app.services.notification_service import notification_service

logger = logging.getLogger(__name__)

VALID_TRANSITIONS: dict[str, list[str]] = {
    "draft": ["sent", "cancelled"],
    "sent": ["paid", "cancelled"],
    "paid": ["partially_refunded", "refunded"],
    "partially_refunded": ["refunded"],
    "refunded": [],
    "cancelled": [],
}

REFUNDABLE_STATUSES = {"paid", "partially_refunded"}


def check_transition(from_status: str, to_status: str) -> None:
    allowed = VALID_TRANSITIONS.get(from_status, [])
    if to_status not in allowed:
        raise ConflictError(
            f"Cannot transition from {from_status} to {to_status}. "
            f"Valid transitions: {', '.join(allowed) or 'none'}"
        )


def remaining_refundable_cents(fee: ServiceFee) -> int:
    return fee.amount_cents - (fee.refunded_amount_cents or 0)


class ServiceFeeService:

    async def list_fees(self, db: AsyncSession, trip_id: uuid.UUID) -> list[ServiceFee]:
        result = await db.execute(
            select(ServiceFee).where(ServiceFee.trip_id == trip_id).order_by(ServiceFee.created_at)
        )
        return list(result.scalars().all())

    async def get_fee(self, db: AsyncSession, trip_id: uuid.UUID, fee_id: uuid.UUID) -> ServiceFee:
        result = await db.execute(
            select(ServiceFee).where(ServiceFee.id == fee_id, ServiceFee.trip_id == trip_id)
        )
        fee = result.scalar_one_or_none()
        if not fee:
            raise NotFoundError("Service fee not found")
        return fee

    async def _check_recipient(self, db: AsyncSession, trip: Trip, fee: ServiceFee) -> None:
        if fee.recipient_type == "traveller":
            if not fee.recipient_traveler_id:
                raise ServiceError("recipient_traveler_id is required when the recipient is a traveller")
            result = await db.execute(
                select(TripTraveler.id).where(
                    TripTraveler.id == fee.recipient_traveler_id, TripTraveler.trip_id == trip.id
                )
            )
            if result.scalar_one_or_none() is None:
                raise ServiceError(f"Traveller {fee.recipient_traveler_id} is not on this trip")
        else:
            fee.recipient_traveler_id = None

    async def _snapshot_trip_currency(self, db: AsyncSession, trip: Trip, fee: ServiceFee) -> None:
        """Store the rate and trip-currency amount when the fee is in a foreign currency."""
        trip_currency = trip.currency or "CAD"
        if fee.currency == trip_currency:
            fee.exchange_rate_to_trip_currency = None
            fee.amount_in_trip_currency_cents = fee.amount_cents
            return
        try:
            quote = await exchange_rate_service.get_rate(db, fee.currency, trip_currency)
        except (ServiceError, SQLAlchemyError) as e:
            logger.warning(f"Could not snapshot {fee.currency}->{trip_currency} rate for service fee: {e}")
            fee.exchange_rate_to_trip_currency = None
            fee.amount_in_trip_currency_cents = None
            return
        fee.exchange_rate_to_trip_currency = quote.rate
        fee.amount_in_trip_currency_cents = convert_cents(fee.amount_cents, Decimal(quote.rate))

    async def create_fee(self, db: AsyncSession, trip: Trip, data: dict) -> ServiceFee:
        fee = ServiceFee(
            agency_id=trip.agency_id,
            trip_id=trip.id,
            recipient_type=data.get("recipient_type") or "primary_traveller",
            recipient_traveler_id=data.get("recipient_traveler_id"),
            title=data["title"],
            description=data.get("description"),
            amount_cents=data["amount_cents"],
            currency=(data.get("currency") or trip.currency or "CAD").upper(),
            due_date=data.get("due_date"),
            status="draft",
            refunded_amount_cents=0,
        )
        await self._check_recipient(db, trip, fee)
        await self._snapshot_trip_currency(db, trip, fee)
        db.add(fee)
        await db.flush()
        logger.info(f"Created service fee {fee.id} on trip {trip.id}")
        return fee

    async def update_fee(self, db: AsyncSession, trip: Trip, fee: ServiceFee, changes: dict) -> ServiceFee:
        if fee.status != "draft":
            raise ConflictError("Only draft service fees can be edited")

        for field in ("title", "amount_cents", "recipient_type"):
            if changes.get(field) is not None:
                setattr(fee, field, changes[field])
        for field in ("description", "due_date", "recipient_traveler_id"):
            if field in changes:
                setattr(fee, field, changes[field])
        if changes.get("currency"):
            fee.currency = changes["currency"].upper()

        await self._check_recipient(db, trip, fee)
        await self._snapshot_trip_currency(db, trip, fee)
        await db.flush()
        return fee

    async def delete_fee(self, db: AsyncSession, fee: ServiceFee) -> None:
        if fee.status != "draft":
            raise ConflictError("Only draft service fees can be deleted")
        await db.delete(fee)
        await db.flush()

    async def send_fee(self, db: AsyncSession, fee: ServiceFee) -> ServiceFee:
        check_transition(fee.status, "sent")
        fee.status = "sent"
        fee.sent_at = utcnow()
        await db.flush()
        return fee

    async def mark_paid(self, db: AsyncSession, fee: ServiceFee) -> ServiceFee:
        check_transition(fee.status, "paid")
        fee.status = "paid"
        fee.paid_at = utcnow()
        await notification_service.send_service_fee_paid(db, fee)
        await db.flush()
        logger.info(f"Service fee {fee.id} marked paid")
        return fee

    async def refund_fee(
        self, db: AsyncSession, fee: ServiceFee, amount_cents: int | None = None, reason: str | None = None
    ) -> ServiceFee:
        if fee.status not in REFUNDABLE_STATUSES:
            raise ConflictError("Only paid service fees can be refunded")

        remaining = remaining_refundable_cents(fee)
        refund = remaining if amount_cents is None else amount_cents
        if refund <= 0:
            raise ServiceError("Refund amount must be greater than zero")
        if refund > remaining:
            raise ServiceError(f"Refund amount ({refund} cents) exceeds remaining balance ({remaining} cents)")

        new_status = "refunded" if refund == remaining else "partially_refunded"
        if new_status != fee.status:
            check_transition(fee.status, new_status)

        fee.refunded_amount_cents = (fee.refunded_amount_cents or 0) + refund
        fee.status = new_status
        fee.refunded_at = utcnow()
        if reason:
            fee.refund_reason = reason
        await notification_service.send_service_fee_refunded(db, fee, refund)
        await db.flush()
        logger.info(f"Refunded {refund} cents on service fee {fee.id} ({new_status})")
        return fee

    async def cancel_fee(self, db: AsyncSession, fee: ServiceFee) -> ServiceFee:
        check_transition(fee.status, "cancelled")
        fee.status = "cancelled"
        fee.cancelled_at = utcnow()
        await db.flush()
        return fee


service_fee_service = ServiceFeeService()
