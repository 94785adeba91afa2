"""Seed script for the TripDesk development database."""

import asyncio
import logging
from datetime import date

from sqlalchemy import select

from app.database import async_session_factory
from app.models.agency import Agency, User
from app.models.contact import Contact

logger = logging.getLogger(__name__)

AGENCY = {"name": "Northern Lights Travel", "default_currency": "CAD"}

USERS = [
    {"email": "agent@tripdesk.dev", "first_name": "Avery", "last_name": "Chen", "role": "agent"},
    {"email": "admin@tripdesk.dev", "first_name": "Admin", "last_name": "User", "role": "admin"},
]

CONTACTS = [
    {
        "first_name": "Maya",
        "last_name": "Okafor",
        "email": "maya.okafor@example.com",
        "phone": "+1 416 555 0142",
        "date_of_birth": date(1986, 4, 12),
        "passport_number": "AB123456",
        "passport_expiry": date(2031, 8, 30),
        "passport_country": "CAN",
        "nationality": "CAN",
        "seat_preference": "aisle",
    },
    {
        "first_name": "Luca",
        "last_name": "Moretti",
        "email": "luca.moretti@example.com",
        "date_of_birth": date(1990, 11, 3),
        "dietary_requirements": "Vegetarian",
    },
]


async def seed():
    async with async_session_factory() as db:
        result = await db.execute(select(User).limit(1))
        if result.scalar_one_or_none():
            logger.info("Database already seeded. Skipping.")
            return

        agency = Agency(**AGENCY)
        db.add(agency)
        await db.flush()  # get agency.id

        for u in USERS:
            db.add(User(agency_id=agency.id, **u))
        for c in CONTACTS:
            db.add(Contact(agency_id=agency.id, contact_type="client", **c))

        await db.commit()
        logger.info(
            f"Seeded agency '{agency.name}' with {len(USERS)} users and {len(CONTACTS)} contacts"
        )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
