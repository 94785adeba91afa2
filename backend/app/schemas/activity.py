import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, computed_field

from app.data.currency import agent_commission_cents as agent_share_cents

ActivityType = Literal[
    "lodging", "flight", "tour", "transportation", "dining",
    "options", "custom_cruise", "port_info", "package",
]
PricingType = Literal["per_person", "per_room", "flat_rate", "per_night"]
ActivityStatus = Literal["proposed", "confirmed", "cancelled"]


class CreateActivityRequest(BaseModel):
    itinerary_id: uuid.UUID
    itinerary_day_id: uuid.UUID | None = None
    parent_activity_id: uuid.UUID | None = None
    activity_type: ActivityType
    name: str | None = None
    description: str | None = None
    sequence_order: int | None = None
    start_datetime: datetime | None = None
    end_datetime: datetime | None = None
    location: str | None = None
    status: ActivityStatus = "proposed"
    is_booked: bool = False
    details: dict | None = None


class UpdateActivityRequest(BaseModel):
    itinerary_day_id: uuid.UUID | None = None
    name: str | None = None
    description: str | None = None
    sequence_order: int | None = None
    start_datetime: datetime | None = None
    end_datetime: datetime | None = None
    location: str | None = None
    status: ActivityStatus | None = None
    is_booked: bool | None = None
    details: dict | None = None


class PricingRequest(BaseModel):
    pricing_type: PricingType = "per_person"
    currency: str = Field("CAD", min_length=3, max_length=3)
    total_price_cents: int = Field(0, ge=0)
    taxes_and_fees_cents: int = Field(0, ge=0)
    commission_total_cents: int = Field(0, ge=0)
    commission_split_percentage: Decimal = Field(Decimal("100"), ge=0, le=100)
    commission_expected_date: date | None = None


class PricingResponse(BaseModel):
    pricing_type: str
    currency: str
    total_price_cents: int
    taxes_and_fees_cents: int
    commission_total_cents: int
    commission_split_percentage: Decimal
    commission_expected_date: date | None

    @computed_field
    @property
    def agent_commission_cents(self) -> int:
        return agent_share_cents(self.commission_total_cents, self.commission_split_percentage)

    model_config = {"from_attributes": True}


class ActivityResponse(BaseModel):
    id: uuid.UUID
    trip_id: uuid.UUID
    itinerary_id: uuid.UUID
    itinerary_day_id: uuid.UUID | None
    parent_activity_id: uuid.UUID | None
    activity_type: str
    name: str
    description: str | None
    sequence_order: int
    start_datetime: datetime | None
    end_datetime: datetime | None
    location: str | None
    status: str
    is_booked: bool
    details: dict | None
    pricing: PricingResponse | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PaymentItemRequest(BaseModel):
    payment_name: str
    expected_amount_cents: int
    due_date: date | None = None


class PaymentScheduleRequest(BaseModel):
    schedule_type: Literal["full", "deposit", "installments", "guarantee"]
    due_date: date | None = None
    deposit_type: Literal["percentage", "fixed_amount"] | None = None
    deposit_percentage: Decimal | None = None
    deposit_amount_cents: int | None = None
    deposit_due_date: date | None = None
    balance_due_date: date | None = None
    expected_payment_items: list[PaymentItemRequest] | None = None
    card_holder_name: str | None = None
    card_last4: str | None = None
    authorization_code: str | None = None
    authorization_amount_cents: int | None = None


class PaymentItemResponse(BaseModel):
    id: uuid.UUID
    payment_name: str
    expected_amount_cents: int
    paid_amount_cents: int
    due_date: date | None
    status: str
    sequence_order: int

    model_config = {"from_attributes": True}


class PaymentScheduleResponse(BaseModel):
    activity_id: uuid.UUID
    schedule_type: str
    total_price_cents: int
    items: list[PaymentItemResponse]


class CreateTransactionRequest(BaseModel):
    transaction_type: Literal["payment", "refund"] = "payment"
    amount_cents: int = Field(..., gt=0)
    transaction_date: date | None = None
    notes: str | None = None


class CommissionReceivedRequest(BaseModel):
    commission_amount: Decimal = Field(..., gt=0, description="Amount in dollars")
    received_date: date | None = None
