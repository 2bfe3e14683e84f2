"""Query and result schemas for the filter -> sort -> paginate pipeline."""

import math
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from medicare.schemas.appointments import AppointmentStatus
from medicare.schemas.doctors import Availability
from medicare.schemas.patients import Gender, PatientStatus

RecordT = TypeVar("RecordT")

MAX_PAGE_SIZE = 100


class SortDirection(str, Enum):
    """Sort direction enumeration."""

    ASC = "asc"
    DESC = "desc"


class SortSpec(BaseModel):
    """Single-column sort."""

    model_config = ConfigDict(frozen=True)

    column: str = Field(..., min_length=1)
    direction: SortDirection = SortDirection.ASC

    def toggled(self, column: str) -> "SortSpec":
        """Same column flips direction; another column starts ascending."""
        if column == self.column:
            direction = SortDirection.DESC if self.direction == SortDirection.ASC else SortDirection.ASC
            return SortSpec(column=column, direction=direction)
        return SortSpec(column=column)


class PageSpec(BaseModel):
    """1-indexed page request."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE)


class PatientFilters(BaseModel):
    """Patient table filters."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    search: str = ""
    gender: Gender | None = None
    status: PatientStatus | None = None


class DoctorFilters(BaseModel):
    """Doctor grid filters."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    search: str = ""
    availability: Availability | None = None
    specialization: str | None = None


class AppointmentFilters(BaseModel):
    """Appointment table filters."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    search: str = ""
    status: AppointmentStatus | None = None


class EmptyState(str, Enum):
    """Why a view has nothing to show."""

    NO_RECORDS = "no_records"
    NO_MATCHES = "no_matches"
    PAGE_OUT_OF_RANGE = "page_out_of_range"


class ViewResult(BaseModel, Generic[RecordT]):
    """The slice to display plus the counts pagination controls need."""

    model_config = ConfigDict(frozen=True)

    items: list[RecordT]
    total: int
    page: int = 1
    page_size: int | None = None
    empty_state: EmptyState | None = None

    @property
    def total_pages(self) -> int:
        if not self.page_size:
            return 1
        return max(1, math.ceil(self.total / self.page_size))

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def show_pagination(self) -> bool:
        return self.total_pages > 1

    @property
    def is_empty(self) -> bool:
        return not self.items
