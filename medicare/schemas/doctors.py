"""Doctor schemas for record validation."""

from enum import Enum

from pydantic import Field, field_validator

from medicare.schemas.common import FormModel, RecordModel, blank_to_none, validate_phone

# Offered by the doctor form; specialization itself stays free text.
SPECIALIZATIONS = (
    "Cardiology",
    "Dermatology",
    "General Medicine",
    "Gynecology",
    "Neurology",
    "Oncology",
    "Orthopedics",
    "Pediatrics",
    "Psychiatry",
    "Radiology",
)


class Availability(str, Enum):
    """Doctor availability enumeration."""

    AVAILABLE = "Available"
    BUSY = "Busy"
    ON_LEAVE = "On Leave"


class DoctorCreate(FormModel):
    """Schema for registering a doctor."""

    name: str = Field(..., min_length=1, max_length=200)
    specialization: str = Field(..., min_length=1, max_length=200)
    availability: Availability = Availability.AVAILABLE
    experience: int | None = Field(None, ge=0, le=80)
    phone: str | None = None

    @field_validator("experience", "phone", mode="before")
    @classmethod
    def blank_optional(cls, v):
        return blank_to_none(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        """Validate phone number format."""
        return validate_phone(v)


class DoctorUpdate(FormModel):
    """Schema for editing a doctor; unset fields keep their values."""

    name: str | None = Field(None, min_length=1, max_length=200)
    specialization: str | None = Field(None, min_length=1, max_length=200)
    availability: Availability | None = None
    experience: int | None = Field(None, ge=0, le=80)
    phone: str | None = None

    @field_validator("experience", "phone", mode="before")
    @classmethod
    def blank_optional(cls, v):
        return blank_to_none(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return validate_phone(v)


class Doctor(RecordModel):
    """Stored doctor record."""

    id: str
    name: str = Field(..., min_length=1)
    specialization: str = ""
    availability: Availability = Availability.AVAILABLE
    experience: int | None = Field(None, ge=0)
    phone: str | None = None

    @field_validator("experience", "phone", mode="before")
    @classmethod
    def blank_optional(cls, v):
        return blank_to_none(v)
