import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel

TravelerRole = Literal["primary_contact", "full_access", "limited_access"]
TravelerType = Literal["adult", "child", "infant"]


class CreateTravelerRequest(BaseModel):
    contact_id: uuid.UUID | None = None
    # camelCase keys, same shape as stored snapshots
    contact_snapshot: dict | None = None
    role: TravelerRole = "limited_access"
    traveler_type: TravelerType = "adult"
    sequence_order: int | None = None


class UpdateTravelerRequest(BaseModel):
    role: TravelerRole | None = None
    traveler_type: TravelerType | None = None
    sequence_order: int | None = None


class TravelerResponse(BaseModel):
    id: uuid.UUID
    trip_id: uuid.UUID
    contact_id: uuid.UUID | None
    role: str
    is_primary_traveler: bool
    traveler_type: str
    sequence_order: int
    contact_snapshot: dict | None
    snapshot_updated_at: datetime | None
    is_snapshot_stale: bool = False
    display_name: str
    legal_full_name: str | None
    created_at: datetime
