"""Notifications router — staff notifications for the caller's agency."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user
from app.models.agency import User
from app.schemas.notification import NotificationListResponse, NotificationResponse
from app.services.notification_service import notification_service

router = APIRouter()


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    is_read: bool | None = Query(None),
    trip_id: uuid.UUID | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Newest first. ``unread_count`` covers the whole agency, not just this page."""
    notifications = await notification_service.list_for_agency(
        db, user.agency_id, is_read=is_read, trip_id=trip_id, limit=limit
    )
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        unread_count=await notification_service.unread_count(db, user.agency_id),
    )


@router.put("/read-all")
async def mark_all_read(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    updated = await notification_service.mark_all_read(db, user.agency_id)
    await db.commit()
    return {"ok": True, "updated": updated}


@router.put("/{notification_id}/read")
async def mark_read(
    notification_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    await notification_service.mark_read(db, user.agency_id, notification_id)
    await db.commit()
    return {"ok": True}
