import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, utcnow


class Contact(Base):
    __tablename__ = "contacts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    agency_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("agencies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    contact_type: Mapped[str] = mapped_column(String(20), default="client")

    # Name
    first_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    legal_first_name: Mapped[str | None] = mapped_column(String(100))
    legal_last_name: Mapped[str | None] = mapped_column(String(100))
    middle_name: Mapped[str | None] = mapped_column(String(100))
    preferred_name: Mapped[str | None] = mapped_column(String(100))
    prefix: Mapped[str | None] = mapped_column(String(20))
    suffix: Mapped[str | None] = mapped_column(String(20))

    # Identity
    gender: Mapped[str | None] = mapped_column(String(30))
    pronouns: Mapped[str | None] = mapped_column(String(30))

    # Contact details
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    date_of_birth: Mapped[date | None] = mapped_column(Date)

    # Passport
    passport_number: Mapped[str | None] = mapped_column(String(50))
    passport_expiry: Mapped[date | None] = mapped_column(Date)
    passport_country: Mapped[str | None] = mapped_column(String(3))
    passport_issue_date: Mapped[date | None] = mapped_column(Date)
    nationality: Mapped[str | None] = mapped_column(String(3))

    # TSA
    redress_number: Mapped[str | None] = mapped_column(String(50))
    known_traveler_number: Mapped[str | None] = mapped_column(String(50))

    # Requirements & preferences
    dietary_requirements: Mapped[str | None] = mapped_column(Text)
    mobility_requirements: Mapped[str | None] = mapped_column(Text)
    seat_preference: Mapped[str | None] = mapped_column(String(30))
    cabin_preference: Mapped[str | None] = mapped_column(String(30))
    floor_preference: Mapped[str | None] = mapped_column(String(30))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
