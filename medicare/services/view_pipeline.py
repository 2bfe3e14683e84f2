"""Filter -> sort -> paginate pipeline deriving displayable views."""

import datetime as dt
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from medicare.core.exceptions import ValidationException
from medicare.schemas.appointments import Appointment
from medicare.schemas.common import RecordKind
from medicare.schemas.doctors import Doctor
from medicare.schemas.patients import Patient
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
from medicare.services.repository import RecordRepository
from medicare.services.resolver import CrossReferenceResolver

Predicate = Callable[[Any], bool]
SortValue = Callable[[Any, str], Any]

PATIENT_SORT_COLUMNS = frozenset(Patient.model_fields)
DOCTOR_SORT_COLUMNS = frozenset(Doctor.model_fields)
APPOINTMENT_SORT_COLUMNS = frozenset(Appointment.model_fields) | {"patient", "doctor"}


def sort_text(value: Any) -> str:
    """Case-insensitive string form a column sorts by."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    elif isinstance(value, dt.time):
        value = value.strftime("%H:%M")
    elif isinstance(value, dt.date):
        value = value.isoformat()
    return str(value).lower()


def _attribute(record: Any, column: str) -> Any:
    return getattr(record, column, None)


def _contains(term: str, *values: str | None) -> bool:
    return any(term in (value or "").lower() for value in values)


def derive_view(
    records: Iterable[Any],
    predicate: Predicate | None = None,
    sort: SortSpec | None = None,
    page: PageSpec | None = None,
    sort_value: SortValue = _attribute,
) -> ViewResult:
    """
    Derive the slice to display from a collection.

    Filtering keeps collection order; sorting is stable, so ties keep
    insertion order in either direction. With no page spec every match is
    returned.

    Args:
        records: Collection in insertion order; never mutated
        predicate: Filter; None keeps everything
        sort: Sort column and direction; None keeps collection order
        page: Page request; None disables pagination
        sort_value: Extracts a record's value for a sort column

    Returns:
        View result; an empty match set yields the same result whatever
        page was requested
    """
    records = tuple(records)
    matches = [record for record in records if predicate is None or predicate(record)]

    if sort is not None:
        matches.sort(
            key=lambda record: sort_text(sort_value(record, sort.column)),
            reverse=sort.direction == SortDirection.DESC,
        )

    page_size = page.page_size if page else None
    total = len(matches)

    if total == 0:
        return ViewResult(
            items=[],
            total=0,
            page=1,
            page_size=page_size,
            empty_state=EmptyState.NO_RECORDS if not records else EmptyState.NO_MATCHES,
        )

    if page is None:
        return ViewResult(items=matches, total=total)

    start = (page.page - 1) * page.page_size
    items = matches[start : start + page.page_size]
    return ViewResult(
        items=items,
        total=total,
        page=page.page,
        page_size=page_size,
        empty_state=None if items else EmptyState.PAGE_OUT_OF_RANGE,
    )


def patient_predicate(filters: PatientFilters) -> Predicate:
    """Search name/phone/disease, match gender; every patient is active."""
    term = filters.search.lower()

    def matches(patient: Patient) -> bool:
        if term and not _contains(term, patient.name, patient.phone, patient.disease):
            return False
        if filters.gender is not None and patient.gender != filters.gender:
            return False
        return True

    return matches


def doctor_predicate(filters: DoctorFilters) -> Predicate:
    """Search name/specialization, match availability and specialization."""
    term = filters.search.lower()

    def matches(doctor: Doctor) -> bool:
        if term and not _contains(term, doctor.name, doctor.specialization):
            return False
        if filters.availability is not None and doctor.availability != filters.availability:
            return False
        if filters.specialization and doctor.specialization != filters.specialization:
            return False
        return True

    return matches


def appointment_predicate(
    filters: AppointmentFilters,
    resolver: CrossReferenceResolver,
) -> Predicate:
    """Search resolved patient/doctor names and reason, match status."""
    term = filters.search.lower()

    def matches(appointment: Appointment) -> bool:
        if term and not _contains(
            term,
            resolver.patient_name(appointment.patient_id, default=""),
            resolver.doctor_name(appointment.doctor_id, default=""),
            appointment.reason,
        ):
            return False
        if filters.status is not None and appointment.status != filters.status:
            return False
        return True

    return matches


def _check_sort(sort: SortSpec | None, columns: frozenset[str]) -> None:
    if sort is not None and sort.column not in columns:
        raise ValidationException(
            "Unknown sort column",
            errors={"sort": f"Cannot sort by {sort.column}"},
        )


class ViewPipeline:
    """Per-collection views over a repository; read-only."""

    def __init__(self, repository: RecordRepository, resolver: CrossReferenceResolver):
        """Initialize pipeline with repository and resolver."""
        self.repository = repository
        self.resolver = resolver

    def patients(
        self,
        filters: PatientFilters | None = None,
        sort: SortSpec | None = None,
        page: PageSpec | None = None,
    ) -> ViewResult:
        _check_sort(sort, PATIENT_SORT_COLUMNS)
        return derive_view(
            self.repository.list(RecordKind.PATIENTS),
            patient_predicate(filters or PatientFilters()),
            sort,
            page,
        )

    def doctors(
        self,
        filters: DoctorFilters | None = None,
        sort: SortSpec | None = None,
        page: PageSpec | None = None,
    ) -> ViewResult:
        _check_sort(sort, DOCTOR_SORT_COLUMNS)
        return derive_view(
            self.repository.list(RecordKind.DOCTORS),
            doctor_predicate(filters or DoctorFilters()),
            sort,
            page,
        )

    def appointments(
        self,
        filters: AppointmentFilters | None = None,
        sort: SortSpec | None = None,
        page: PageSpec | None = None,
    ) -> ViewResult:
        """Appointments; also sortable by resolved "patient" and "doctor" names."""
        _check_sort(sort, APPOINTMENT_SORT_COLUMNS)
        return derive_view(
            self.repository.list(RecordKind.APPOINTMENTS),
            appointment_predicate(filters or AppointmentFilters(), self.resolver),
            sort,
            page,
            sort_value=self._appointment_value,
        )

    def _appointment_value(self, appointment: Appointment, column: str) -> Any:
        if column == "patient":
            return self.resolver.patient_name(appointment.patient_id, default="")
        if column == "doctor":
            return self.resolver.doctor_name(appointment.doctor_id, default="")
        return getattr(appointment, column, None)
