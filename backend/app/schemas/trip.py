import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

TripStatus = Literal["inbound", "draft", "quoted", "booked", "in_progress", "completed", "cancelled"]
TripType = Literal["leisure", "business", "group", "honeymoon", "corporate", "custom"]


class CreateTripRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    trip_type: TripType | None = None
    status: TripStatus = "draft"
    start_date: date | None = None
    end_date: date | None = None
    currency: str | None = Field(None, min_length=3, max_length=3)
    primary_contact_id: uuid.UUID | None = None


class UpdateTripRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    trip_type: TripType | None = None
    status: TripStatus | None = None
    start_date: date | None = None
    end_date: date | None = None
    currency: str | None = Field(None, min_length=3, max_length=3)


class TripStatusRequest(BaseModel):
    status: TripStatus


class TripResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None
    reference_number: str | None
    trip_type: str | None
    status: str
    start_date: date | None
    end_date: date | None
    currency: str
    primary_contact_id: uuid.UUID | None
    owner_id: uuid.UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
