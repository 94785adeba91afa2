import uuid
from datetime import date as date_type, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, utcnow


class Itinerary(Base):
    __tablename__ = "itineraries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default="draft")
    is_selected: Mapped[bool] = mapped_column(Boolean, default=False)
    sequence_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    days: Mapped[list["ItineraryDay"]] = relationship(
        back_populates="itinerary", cascade="all, delete-orphan", passive_deletes=True,
        order_by="ItineraryDay.sequence_order",
    )


class ItineraryDay(Base):
    __tablename__ = "itinerary_days"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    itinerary_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("itineraries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_number: Mapped[int | None] = mapped_column(Integer)
    date: Mapped[date_type | None] = mapped_column(Date)
    title: Mapped[str | None] = mapped_column(String(255))
    notes: Mapped[str | None] = mapped_column(Text)
    sequence_order: Mapped[int] = mapped_column(Integer, default=0)

    # Where the day starts and ends; overrides stop the geolocation cascade
    start_location_name: Mapped[str | None] = mapped_column(String(255))
    start_location_lat: Mapped[Decimal | None] = mapped_column(Numeric(9, 6))
    start_location_lng: Mapped[Decimal | None] = mapped_column(Numeric(9, 6))
    start_location_override: Mapped[bool] = mapped_column(Boolean, default=False)
    end_location_name: Mapped[str | None] = mapped_column(String(255))
    end_location_lat: Mapped[Decimal | None] = mapped_column(Numeric(9, 6))
    end_location_lng: Mapped[Decimal | None] = mapped_column(Numeric(9, 6))
    end_location_override: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    itinerary: Mapped["Itinerary"] = relationship(back_populates="days")
