import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user
from app.models.agency import User
from app.models.contact import Contact
from app.schemas.contact import ContactResponse, CreateContactRequest, UpdateContactRequest

router = APIRouter()


async def _get_contact(db: AsyncSession, user: User, contact_id: uuid.UUID) -> Contact:
    result = await db.execute(
        select(Contact).where(Contact.id == contact_id, Contact.agency_id == user.agency_id)
    )
    contact = result.scalar_one_or_none()
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


@router.get("")
async def list_contacts(
    q: str | None = Query(None, description="Matches name or email"),
    contact_type: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List the agency's contacts."""
    query = select(Contact).where(Contact.agency_id == user.agency_id)
    if contact_type:
        query = query.where(Contact.contact_type == contact_type)
    if q:
        pattern = f"%{q.lower()}%"
        query = query.where(or_(
            func.lower(Contact.first_name).like(pattern),
            func.lower(Contact.last_name).like(pattern),
            func.lower(Contact.preferred_name).like(pattern),
            func.lower(Contact.email).like(pattern),
        ))

    total_result = await db.execute(select(func.count()).select_from(query.subquery()))
    result = await db.execute(
        query.order_by(Contact.last_name, Contact.first_name, Contact.created_at)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return {
        "contacts": [ContactResponse.model_validate(c) for c in result.scalars().all()],
        "total": total_result.scalar() or 0,
        "page": page,
        "limit": limit,
    }


@router.post("", status_code=201, response_model=ContactResponse)
async def create_contact(
    req: CreateContactRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    contact = Contact(agency_id=user.agency_id, **req.model_dump())
    db.add(contact)
    await db.commit()
    return ContactResponse.model_validate(contact)


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ContactResponse.model_validate(await _get_contact(db, user, contact_id))


@router.patch("/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: uuid.UUID,
    req: UpdateContactRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Partial update. Trip travelers keep their snapshot until it is reset."""
    contact = await _get_contact(db, user, contact_id)
    for field, value in req.model_dump(exclude_unset=True).items():
        if field == "contact_type" and value is None:
            continue
        setattr(contact, field, value)
    await db.commit()
    return ContactResponse.model_validate(contact)


@router.delete("/{contact_id}", status_code=204)
async def delete_contact(
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    contact = await _get_contact(db, user, contact_id)
    await db.delete(contact)
    await db.commit()
