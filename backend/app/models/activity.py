import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, JSONType, utcnow


class Activity(Base):
    __tablename__ = "activities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True
    )
    itinerary_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("itineraries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # NULL day = floating activity (not yet scheduled)
    itinerary_day_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("itinerary_days.id", ondelete="SET NULL"), index=True
    )
    parent_activity_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("activities.id", ondelete="CASCADE")
    )
    activity_type: Mapped[str] = mapped_column(String(30), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    sequence_order: Mapped[int] = mapped_column(Integer, default=0)
    start_datetime: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    end_datetime: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    location: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(20), default="proposed")
    is_booked: Mapped[bool] = mapped_column(Boolean, default=False)
    details: Mapped[dict | None] = mapped_column(JSONType)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    pricing: Mapped["ActivityPricing | None"] = relationship(
        back_populates="activity", cascade="all, delete-orphan", passive_deletes=True, uselist=False
    )
    schedule_config: Mapped["PaymentScheduleConfig | None"] = relationship(
        cascade="all, delete-orphan", passive_deletes=True, uselist=False
    )
    payment_items: Mapped[list["ExpectedPaymentItem"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True, order_by="ExpectedPaymentItem.sequence_order"
    )


class ActivityPricing(Base):
    __tablename__ = "activity_pricing"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    activity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("activities.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    pricing_type: Mapped[str] = mapped_column(String(20), default="per_person")
    currency: Mapped[str] = mapped_column(String(3), default="CAD")
    total_price_cents: Mapped[int] = mapped_column(Integer, default=0)
    taxes_and_fees_cents: Mapped[int] = mapped_column(Integer, default=0)
    commission_total_cents: Mapped[int] = mapped_column(Integer, default=0)
    commission_split_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("100"))
    commission_expected_date: Mapped[date | None] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    activity: Mapped["Activity"] = relationship(back_populates="pricing")


class PaymentScheduleConfig(Base):
    __tablename__ = "payment_schedule_configs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    activity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("activities.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    schedule_type: Mapped[str] = mapped_column(String(20), default="full")
    deposit_type: Mapped[str | None] = mapped_column(String(20))
    deposit_percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2))
    deposit_amount_cents: Mapped[int | None] = mapped_column(Integer)
    guarantee_card_holder: Mapped[str | None] = mapped_column(String(255))
    guarantee_card_last4: Mapped[str | None] = mapped_column(String(4))
    guarantee_authorization_code: Mapped[str | None] = mapped_column(String(50))
    guarantee_authorization_amount_cents: Mapped[int | None] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class ExpectedPaymentItem(Base):
    __tablename__ = "expected_payment_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    activity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    payment_name: Mapped[str] = mapped_column(String(100), nullable=False)
    expected_amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    # Net of refunds, maintained as transactions are recorded
    paid_amount_cents: Mapped[int] = mapped_column(Integer, default=0)
    due_date: Mapped[date | None] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(20), default="pending")
    sequence_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    transactions: Mapped[list["PaymentTransaction"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True, order_by="PaymentTransaction.transaction_date"
    )


class PaymentTransaction(Base):
    __tablename__ = "payment_transactions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    expected_payment_item_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("expected_payment_items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    transaction_type: Mapped[str] = mapped_column(String(10), default="payment")
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class CommissionTracking(Base):
    __tablename__ = "commission_tracking"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    agency_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("agencies.id", ondelete="CASCADE"), nullable=False
    )
    activity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Stored in dollars, unlike the cents columns elsewhere
    commission_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="expected")
    received_date: Mapped[date | None] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
