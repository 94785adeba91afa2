import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, computed_field

from app.services.contact_names import display_name, legal_full_name


class ContactFields(BaseModel):
    contact_type: Literal["lead", "client"] = "client"
    first_name: str | None = None
    last_name: str | None = None
    legal_first_name: str | None = None
    legal_last_name: str | None = None
    middle_name: str | None = None
    preferred_name: str | None = None
    prefix: str | None = None
    suffix: str | None = None
    gender: str | None = None
    pronouns: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    date_of_birth: date | None = None
    passport_number: str | None = None
    passport_expiry: date | None = None
    passport_country: str | None = None
    passport_issue_date: date | None = None
    nationality: str | None = None
    redress_number: str | None = None
    known_traveler_number: str | None = None
    dietary_requirements: str | None = None
    mobility_requirements: str | None = None
    seat_preference: str | None = None
    cabin_preference: str | None = None
    floor_preference: str | None = None


class CreateContactRequest(ContactFields):
    pass


class UpdateContactRequest(ContactFields):
    contact_type: Literal["lead", "client"] | None = None


class ContactResponse(ContactFields):
    id: uuid.UUID
    email: str | None = None
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def display_name(self) -> str:
        return display_name(self.preferred_name, self.first_name, self.legal_first_name)

    @computed_field
    @property
    def legal_full_name(self) -> str | None:
        return legal_full_name(
            self.prefix, self.legal_first_name, self.first_name, self.middle_name,
            self.legal_last_name, self.last_name, self.suffix,
        )

    model_config = {"from_attributes": True}
