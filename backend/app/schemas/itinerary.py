import uuid
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

ItineraryStatus = Literal["draft", "proposing", "approved", "archived"]


class CreateItineraryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: ItineraryStatus = "draft"
    is_selected: bool = False


class UpdateItineraryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: ItineraryStatus | None = None
    sequence_order: int | None = None


class Location(BaseModel):
    name: str | None = None
    lat: float | None = None
    lng: float | None = None


class GeoLocation(BaseModel):
    name: str
    lat: float
    lng: float


class CreateDayRequest(BaseModel):
    date: date_type | None = None
    title: str | None = None
    notes: str | None = None


class UpdateDayRequest(BaseModel):
    date: date_type | None = None
    title: str | None = None
    notes: str | None = None
    start_location: Location | None = None
    end_location: Location | None = None
    start_location_override: bool | None = None
    end_location_override: bool | None = None


class DayResponse(BaseModel):
    id: uuid.UUID
    itinerary_id: uuid.UUID
    day_number: int | None
    date: date_type | None
    title: str | None
    notes: str | None
    sequence_order: int
    start_location_name: str | None
    start_location_lat: Decimal | None
    start_location_lng: Decimal | None
    start_location_override: bool
    end_location_name: str | None
    end_location_lat: Decimal | None
    end_location_lng: Decimal | None
    end_location_override: bool

    model_config = {"from_attributes": True}


class ItineraryResponse(BaseModel):
    id: uuid.UUID
    trip_id: uuid.UUID
    name: str
    description: str | None
    status: str
    is_selected: bool
    sequence_order: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ItineraryDetailResponse(ItineraryResponse):
    days: list[DayResponse]


class CascadeTrigger(BaseModel):
    activity_id: uuid.UUID | None = None
    activity_type: str | None = None
    description: str = ""


class CascadePreviewRequest(BaseModel):
    new_location: GeoLocation
    trigger: CascadeTrigger = CascadeTrigger()


class DayLocations(BaseModel):
    start_location: GeoLocation | None = None
    end_location: GeoLocation | None = None


class AffectedDay(BaseModel):
    day_id: uuid.UUID
    day_number: int | None
    date: date_type | None
    before: DayLocations
    after: DayLocations


class CascadePreviewResponse(BaseModel):
    trigger_day_id: uuid.UUID
    trigger: CascadeTrigger
    new_location: GeoLocation
    affected_days: list[AffectedDay]


class CascadeApplyRequest(BaseModel):
    day_ids: list[uuid.UUID]
    preview: CascadePreviewResponse
