"""Appointment schemas for record validation."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field, field_serializer, field_validator

from medicare.schemas.common import FormModel, RecordModel


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Allowed status changes; completed and cancelled are terminal.
STATUS_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: frozenset(
        {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


def can_transition(current: AppointmentStatus, target: AppointmentStatus) -> bool:
    """Check whether an appointment may move from current to target status."""
    return current == target or target in STATUS_TRANSITIONS[current]


def truncate_to_minute(value: dt.time | None) -> dt.time | None:
    """Appointments are booked to the minute."""
    if value is None:
        return value
    return value.replace(second=0, microsecond=0)


class AppointmentCreate(FormModel):
    """Schema for booking an appointment."""

    patient_id: str = Field(..., min_length=1)
    doctor_id: str = Field(..., min_length=1)
    date: dt.date
    time: dt.time
    reason: str = Field(..., min_length=1, max_length=500)

    @field_validator("time")
    @classmethod
    def minute_precision(cls, v):
        return truncate_to_minute(v)


class AppointmentUpdate(FormModel):
    """Schema for editing an appointment; unset fields keep their values."""

    patient_id: str | None = Field(None, min_length=1)
    doctor_id: str | None = Field(None, min_length=1)
    date: dt.date | None = None
    time: dt.time | None = None
    reason: str | None = Field(None, min_length=1, max_length=500)
    status: AppointmentStatus | None = None

    @field_validator("time")
    @classmethod
    def minute_precision(cls, v):
        return truncate_to_minute(v)


class Appointment(RecordModel):
    """Stored appointment record."""

    id: str
    patient_id: str
    doctor_id: str
    date: dt.date
    time: dt.time
    reason: str = ""
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    @field_validator("time")
    @classmethod
    def minute_precision(cls, v):
        return truncate_to_minute(v)

    @field_serializer("time", when_used="json")
    def serialize_time(self, value: dt.time) -> str:
        """Serialize time as HH:MM."""
        return value.strftime("%H:%M")


class AppointmentDetail(BaseModel):
    """Appointment joined with display names of its patient and doctor."""

    id: str
    patient_id: str
    doctor_id: str
    patient_name: str
    doctor_name: str
    doctor_specialization: str | None = None
    date: dt.date
    time: dt.time
    reason: str
    status: AppointmentStatus
