"""Application entry point wiring the records core together."""

from collections.abc import Callable, Mapping
from typing import Any

import structlog
from pydantic import BaseModel

from medicare.config import Settings, get_settings
from medicare.core.exceptions import AppException, BadRequestException, NotFoundException
from medicare.core.logging import configure_logging
from medicare.core.storage import PersistentStore, get_store
from medicare.schemas.appointments import Appointment
from medicare.schemas.common import RecordKind
from medicare.schemas.notifications import PendingConfirmation
from medicare.schemas.views import (
    AppointmentFilters,
    DoctorFilters,
    PatientFilters,
    SortSpec,
    ViewResult,
)
from medicare.seeders import seed_demo_data
from medicare.services.appointment_service import AppointmentService
from medicare.services.confirmation_service import ConfirmationService
from medicare.services.dashboard_service import DashboardService
from medicare.services.notification_service import NotificationService
from medicare.services.repository import RecordRepository
from medicare.services.resolver import CrossReferenceResolver
from medicare.services.theme_service import ThemeService
from medicare.services.view_pipeline import (
    APPOINTMENT_SORT_COLUMNS,
    DOCTOR_SORT_COLUMNS,
    PATIENT_SORT_COLUMNS,
    ViewPipeline,
)
from medicare.services.view_state import ViewState

logger = structlog.get_logger(__name__)


class HospitalApp:
    """
    Composition root for one session.

    Owns the repository and every service built on it; the presentation
    layer holds a reference to this object instead of touching globals.
    Action methods follow the screens: they queue notices on success and
    route destructive actions through the confirmation gate.
    """

    def __init__(self, settings: Settings | None = None, store: PersistentStore | None = None):
        """Build the object graph; call start() to load state."""
        self.settings = settings or get_settings()
        self.store = store if store is not None else get_store(self.settings)
        prefix = self.settings.storage_key_prefix

        self.notifications = NotificationService()
        self.confirmations = ConfirmationService()
        self.repository = RecordRepository(
            self.store,
            key_prefix=prefix,
            notifications=self.notifications,
        )
        self.resolver = CrossReferenceResolver(self.repository)
        self.pipeline = ViewPipeline(self.repository, self.resolver)
        self.appointments = AppointmentService(self.repository)
        self.dashboard = DashboardService(
            self.repository,
            self.resolver,
            available_beds=self.settings.available_beds,
        )
        self.theme = ThemeService(
            self.store,
            key=f"{prefix}theme",
            notifications=self.notifications,
        )

        self.patient_state = ViewState(
            PatientFilters(),
            sort=SortSpec(column="name"),
            page_size=self.settings.patient_page_size,
            columns=PATIENT_SORT_COLUMNS,
        )
        self.doctor_state = ViewState(DoctorFilters(), columns=DOCTOR_SORT_COLUMNS)
        self.appointment_state = ViewState(AppointmentFilters(), columns=APPOINTMENT_SORT_COLUMNS)

    def start(self) -> None:
        """Load persisted state and seed demo records on first run."""
        logger.info("application_startup", environment=self.settings.environment)
        self.repository.load()
        self.theme.load()

        if self.settings.seed_demo_data:
            stats = seed_demo_data(self.repository)
            if any(stats.values()):
                logger.info("demo_data_seeded", **stats)

    # ----- Views -----------------------------------------------------------

    def patient_view(self) -> ViewResult:
        return self.pipeline.patients(**self.patient_state.query())

    def doctor_view(self) -> ViewResult:
        return self.pipeline.doctors(**self.doctor_state.query())

    def appointment_view(self) -> ViewResult:
        return self.pipeline.appointments(**self.appointment_state.query())

    # ----- Patients --------------------------------------------------------

    def save_patient(
        self,
        data: Mapping[str, Any] | BaseModel,
        patient_id: str | None = None,
    ) -> str:
        """
        Register a new patient or edit an existing one.

        Args:
            data: Form fields; partial when editing
            patient_id: Patient being edited, or None to register

        Returns:
            Patient ID
        """
        if patient_id:
            patient = self.repository.update(RecordKind.PATIENTS, patient_id, data)
            self.notifications.success("Patient updated", f"{patient.name}'s record has been updated.")
            return patient.id

        patient_id = self.repository.create(RecordKind.PATIENTS, data)
        patient = self.repository.get(RecordKind.PATIENTS, patient_id)
        self.notifications.success("Patient added", f"{patient.name} has been registered.")
        return patient_id

    def request_delete_patient(self, patient_id: str) -> PendingConfirmation:
        patient = self._require(RecordKind.PATIENTS, patient_id)
        return self.confirmations.request(
            f"Delete {patient.name}? All associated appointments will be affected.",
            self._deleter(RecordKind.PATIENTS, patient_id, "Patient deleted"),
        )

    # ----- Doctors ---------------------------------------------------------

    def save_doctor(
        self,
        data: Mapping[str, Any] | BaseModel,
        doctor_id: str | None = None,
    ) -> str:
        """Register a new doctor or edit an existing one."""
        if doctor_id:
            doctor = self.repository.update(RecordKind.DOCTORS, doctor_id, data)
            self.notifications.success("Doctor updated", f"{doctor.name}'s profile has been updated.")
            return doctor.id

        doctor_id = self.repository.create(RecordKind.DOCTORS, data)
        doctor = self.repository.get(RecordKind.DOCTORS, doctor_id)
        self.notifications.success("Doctor added", f"{doctor.name} has been registered.")
        return doctor_id

    def request_delete_doctor(self, doctor_id: str) -> PendingConfirmation:
        doctor = self._require(RecordKind.DOCTORS, doctor_id)
        return self.confirmations.request(
            f"Delete {doctor.name}? Their appointments will remain but won't be linked.",
            self._deleter(RecordKind.DOCTORS, doctor_id, "Doctor deleted"),
        )

    # ----- Appointments ----------------------------------------------------

    def book_appointment(self, data: Mapping[str, Any] | BaseModel) -> Appointment:
        """
        Book an appointment and announce it.

        Raises:
            BadRequestException: If no patient or no doctor is registered
            ValidationException: If the booking data is invalid
        """
        try:
            appointment = self.appointments.book(data)
        except BadRequestException as e:
            title, _, detail = e.message.partition(". ")
            self.notifications.warning(title, detail)
            raise

        patient_name = self.resolver.patient_name(appointment.patient_id, default="patient")
        self.notifications.success(
            "Appointment booked",
            f"Scheduled for {patient_name} on {appointment.date:%d %b %Y} "
            f"at {appointment.time:%H:%M}.",
        )
        return appointment

    def request_complete_appointment(self, appointment_id: str) -> PendingConfirmation:
        self._require(RecordKind.APPOINTMENTS, appointment_id)

        def complete() -> Appointment:
            appointment = self.appointments.complete(appointment_id)
            self.notifications.success("Appointment completed")
            return appointment

        return self.confirmations.request("Mark this appointment as completed?", complete)

    def request_cancel_appointment(self, appointment_id: str) -> PendingConfirmation:
        self._require(RecordKind.APPOINTMENTS, appointment_id)

        def cancel() -> Appointment:
            appointment = self.appointments.cancel(appointment_id)
            self.notifications.warning("Appointment cancelled")
            return appointment

        return self.confirmations.request("Cancel this appointment?", cancel)

    def request_delete_appointment(self, appointment_id: str) -> PendingConfirmation:
        self._require(RecordKind.APPOINTMENTS, appointment_id)
        return self.confirmations.request(
            "Permanently delete this appointment record?",
            self._deleter(RecordKind.APPOINTMENTS, appointment_id, "Appointment deleted"),
        )

    # ----- Confirmation / theme --------------------------------------------

    def confirm(self, token: str) -> Any:
        """
        Run the pending destructive action.

        Failures are reported as an error notice and re-raised; state is
        left as it was.
        """
        try:
            return self.confirmations.confirm(token)
        except AppException as e:
            self.notifications.error("Action failed", e.message)
            raise

    def dismiss(self, token: str) -> None:
        self.confirmations.dismiss(token)

    def toggle_theme(self) -> str:
        return self.theme.toggle()

    # ----- Helpers ---------------------------------------------------------

    def _require(self, kind: RecordKind, record_id: str) -> Any:
        record = self.repository.get(kind, record_id)
        if record is None:
            raise NotFoundException(f"{kind.value.rstrip('s').capitalize()} {record_id} not found")
        return record

    def _deleter(self, kind: RecordKind, record_id: str, title: str) -> Callable[[], Any]:
        def delete() -> Any:
            removed = self.repository.delete(kind, record_id)
            self.notifications.info(title)
            return removed

        return delete


def create_app(
    settings: Settings | None = None,
    store: PersistentStore | None = None,
) -> HospitalApp:
    """
    Configure logging and start an application session.

    Args:
        settings: Settings; defaults to environment-driven settings
        store: Store override; defaults to the configured backend

    Returns:
        Started application
    """
    settings = settings or get_settings()
    configure_logging(settings)
    app = HospitalApp(settings, store)
    app.start()
    return app
