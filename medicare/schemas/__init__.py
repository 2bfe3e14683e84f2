"""Record, query and result schemas."""

from medicare.schemas.appointments import (
    Appointment,
    AppointmentCreate,
    AppointmentDetail,
    AppointmentStatus,
    AppointmentUpdate,
)
from medicare.schemas.common import RecordKind
from medicare.schemas.doctors import Availability, Doctor, DoctorCreate, DoctorUpdate
from medicare.schemas.patients import (
    BloodGroup,
    Gender,
    Patient,
    PatientCreate,
    PatientStatus,
    PatientUpdate,
)
from medicare.schemas.views import (
    AppointmentFilters,
    DoctorFilters,
    EmptyState,
    PageSpec,
    PatientFilters,
    SortDirection,
    SortSpec,
    ViewResult,
)

__all__ = [
    "Appointment",
    "AppointmentCreate",
    "AppointmentDetail",
    "AppointmentFilters",
    "AppointmentStatus",
    "AppointmentUpdate",
    "Availability",
    "BloodGroup",
    "Doctor",
    "DoctorCreate",
    "DoctorFilters",
    "DoctorUpdate",
    "EmptyState",
    "Gender",
    "PageSpec",
    "Patient",
    "PatientCreate",
    "PatientFilters",
    "PatientStatus",
    "PatientUpdate",
    "RecordKind",
    "SortDirection",
    "SortSpec",
    "ViewResult",
]
