import uuid
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class SplitEntry(BaseModel):
    traveler_id: uuid.UUID
    amount_cents: int
    notes: str | None = None


class SetSplitsRequest(BaseModel):
    split_type: Literal["equal", "custom"]
    splits: list[SplitEntry] | None = None


class SplitResponse(BaseModel):
    id: uuid.UUID
    activity_id: uuid.UUID
    traveler_id: uuid.UUID
    split_type: str
    amount_cents: int
    currency: str
    exchange_rate_to_trip_currency: Decimal | None
    exchange_rate_snapshot_at: datetime | None
    notes: str | None

    model_config = {"from_attributes": True}


class ActivitySplitsResponse(BaseModel):
    activity_id: uuid.UUID
    activity_name: str
    total_cost_cents: int
    currency: str
    split_type: str
    splits: list[SplitResponse]
    is_complete: bool
    missing_travelers: list[uuid.UUID]


class CreateServiceFeeRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    amount_cents: int = Field(..., gt=0)
    currency: str | None = Field(None, min_length=3, max_length=3)
    recipient_type: Literal["primary_traveller", "traveller"] = "primary_traveller"
    recipient_traveler_id: uuid.UUID | None = None
    due_date: date_type | None = None


class UpdateServiceFeeRequest(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    amount_cents: int | None = Field(None, gt=0)
    currency: str | None = Field(None, min_length=3, max_length=3)
    recipient_type: Literal["primary_traveller", "traveller"] | None = None
    recipient_traveler_id: uuid.UUID | None = None
    due_date: date_type | None = None


class RefundServiceFeeRequest(BaseModel):
    amount_cents: int | None = None
    reason: str | None = None


class ServiceFeeResponse(BaseModel):
    id: uuid.UUID
    trip_id: uuid.UUID
    recipient_type: str
    recipient_traveler_id: uuid.UUID | None
    title: str
    description: str | None
    amount_cents: int
    currency: str
    exchange_rate_to_trip_currency: Decimal | None
    amount_in_trip_currency_cents: int | None
    status: str
    due_date: date_type | None
    sent_at: datetime | None
    paid_at: datetime | None
    refunded_amount_cents: int
    refund_reason: str | None
    refunded_at: datetime | None
    cancelled_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ExchangeRateResponse(BaseModel):
    from_currency: str
    to_currency: str
    rate: str
    rate_date: date_type
    source: str


class ConvertRequest(BaseModel):
    amount_cents: int
    from_currency: str = Field(..., min_length=3, max_length=3)
    to_currency: str = Field(..., min_length=3, max_length=3)
    date: date_type | None = None


class ConvertResponse(BaseModel):
    original_amount_cents: int
    converted_amount_cents: int
    from_currency: str
    to_currency: str
    rate: str
    rate_date: date_type
    source: str
