"""Patient schemas for record validation."""

from datetime import date
from enum import Enum

from pydantic import Field, field_validator

from medicare.schemas.common import FormModel, RecordModel, blank_to_none, validate_phone

MIN_AGE = 1
MAX_AGE = 120


class Gender(str, Enum):
    """Patient gender enumeration."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class BloodGroup(str, Enum):
    """ABO/Rh blood group enumeration."""

    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"


class PatientStatus(str, Enum):
    """Patient status filter values. Every stored patient counts as active."""

    ACTIVE = "active"


class PatientFields(FormModel):
    """Fields shared by patient create payloads."""

    name: str = Field(..., min_length=1, max_length=200)
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    gender: Gender
    phone: str
    disease: str = Field(..., min_length=1, max_length=500)
    admission_date: date
    blood_group: BloodGroup | None = None
    notes: str = Field(default="", max_length=2000)

    @field_validator("blood_group", mode="before")
    @classmethod
    def blank_blood_group(cls, v):
        return blank_to_none(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        """Validate phone number format."""
        return validate_phone(v)


class PatientCreate(PatientFields):
    """Schema for registering a new patient."""


class PatientUpdate(FormModel):
    """Schema for editing a patient; unset fields keep their values."""

    name: str | None = Field(None, min_length=1, max_length=200)
    age: int | None = Field(None, ge=MIN_AGE, le=MAX_AGE)
    gender: Gender | None = None
    phone: str | None = None
    disease: str | None = Field(None, min_length=1, max_length=500)
    admission_date: date | None = None
    blood_group: BloodGroup | None = None
    notes: str | None = Field(None, max_length=2000)

    @field_validator("blood_group", mode="before")
    @classmethod
    def blank_blood_group(cls, v):
        return blank_to_none(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return validate_phone(v)


class Patient(RecordModel):
    """Stored patient record."""

    id: str
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    gender: Gender
    phone: str
    disease: str = ""
    admission_date: date
    blood_group: BloodGroup | None = None
    notes: str = ""

    @field_validator("blood_group", mode="before")
    @classmethod
    def blank_blood_group(cls, v):
        return blank_to_none(v)

    @field_validator("notes", "disease", mode="before")
    @classmethod
    def none_to_blank(cls, v):
        return "" if v is None else v
