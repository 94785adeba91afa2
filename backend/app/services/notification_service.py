"""Notification service — creates and lists in-app notifications for agency staff."""

import logging
import uuid

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.data.currency import format_cents
from app.exceptions import NotFoundError
from app.models.finance import ServiceFee
from app.models.notification import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    """Creates and reads agency notifications; callers own the transaction."""

    async def send_split_recalculation_needed(
        self, db: AsyncSession, agency_id: uuid.UUID, trip_id: uuid.UUID,
        traveler_name: str, activity_ids: list[uuid.UUID],
    ) -> Notification:
        count = len(activity_ids)
        plural = "activity" if count == 1 else "activities"
        return await self._create(
            db,
            agency_id=agency_id,
            trip_id=trip_id,
            type="split_recalculation_needed",
            title="Cost splits need review",
            message=(
                f"{traveler_name} was removed from the trip. "
                f"Cost splits for {count} {plural} should be recalculated."
            ),
            reference_type="trip",
            reference_id=trip_id,
        )

    async def send_service_fee_paid(self, db: AsyncSession, fee: ServiceFee) -> Notification:
        return await self._create(
            db,
            agency_id=fee.agency_id,
            trip_id=fee.trip_id,
            type="service_fee_paid",
            title="Service fee paid",
            message=f"'{fee.title}' was paid ({format_cents(fee.amount_cents, fee.currency)}).",
            reference_type="service_fee",
            reference_id=fee.id,
        )

    async def send_service_fee_refunded(
        self, db: AsyncSession, fee: ServiceFee, refund_cents: int
    ) -> Notification:
        return await self._create(
            db,
            agency_id=fee.agency_id,
            trip_id=fee.trip_id,
            type="service_fee_refunded",
            title="Service fee refunded",
            message=f"{format_cents(refund_cents, fee.currency)} refunded on '{fee.title}'.",
            reference_type="service_fee",
            reference_id=fee.id,
        )

    async def _create(
        self, db: AsyncSession, agency_id: uuid.UUID, type: str,
        title: str, message: str, trip_id: uuid.UUID | None = None,
        user_id: uuid.UUID | None = None, reference_type: str | None = None,
        reference_id: uuid.UUID | None = None,
    ) -> Notification:
        notification = Notification(
            agency_id=agency_id,
            trip_id=trip_id,
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            reference_type=reference_type,
            reference_id=reference_id,
        )
        db.add(notification)
        logger.debug(f"Notification queued: {type} for trip {trip_id}")
        return notification

    async def list_for_agency(
        self, db: AsyncSession, agency_id: uuid.UUID, is_read: bool | None = None,
        trip_id: uuid.UUID | None = None, limit: int = 20,
    ) -> list[Notification]:
        query = select(Notification).where(Notification.agency_id == agency_id)
        if is_read is not None:
            query = query.where(Notification.is_read == is_read)
        if trip_id:
            query = query.where(Notification.trip_id == trip_id)
        result = await db.execute(query.order_by(Notification.created_at.desc()).limit(limit))
        return list(result.scalars().all())

    async def unread_count(self, db: AsyncSession, agency_id: uuid.UUID) -> int:
        result = await db.execute(
            select(func.count(Notification.id)).where(
                Notification.agency_id == agency_id, Notification.is_read.is_(False)
            )
        )
        return result.scalar() or 0

    async def mark_read(self, db: AsyncSession, agency_id: uuid.UUID, notification_id: uuid.UUID) -> Notification:
        result = await db.execute(
            select(Notification).where(
                Notification.id == notification_id, Notification.agency_id == agency_id
            )
        )
        notification = result.scalar_one_or_none()
        if not notification:
            raise NotFoundError("Notification not found")
        notification.is_read = True
        await db.flush()
        return notification

    async def mark_all_read(self, db: AsyncSession, agency_id: uuid.UUID) -> int:
        result = await db.execute(
            update(Notification)
            .where(Notification.agency_id == agency_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        return result.rowcount or 0


notification_service = NotificationService()
