"""Best-effort lookup of appointment cross-references."""

from medicare.schemas.appointments import Appointment, AppointmentDetail
from medicare.schemas.common import RecordKind
from medicare.services.repository import RecordRepository

UNKNOWN = "Unknown"


class CrossReferenceResolver:
    """Resolve patient/doctor ids to display names without ever failing."""

    def __init__(self, repository: RecordRepository):
        """Initialize resolver over a repository."""
        self.repository = repository

    def patient_name(self, patient_id: str, default: str = UNKNOWN) -> str:
        patient = self.repository.get(RecordKind.PATIENTS, patient_id)
        return patient.name if patient else default

    def doctor_name(self, doctor_id: str, default: str = UNKNOWN) -> str:
        doctor = self.repository.get(RecordKind.DOCTORS, doctor_id)
        return doctor.name if doctor else default

    def describe(self, appointment: Appointment) -> AppointmentDetail:
        """
        Join an appointment with its patient and doctor names.

        Args:
            appointment: Stored appointment

        Returns:
            Appointment detail; missing references show as "Unknown"
        """
        doctor = self.repository.get(RecordKind.DOCTORS, appointment.doctor_id)
        return AppointmentDetail(
            id=appointment.id,
            patient_id=appointment.patient_id,
            doctor_id=appointment.doctor_id,
            patient_name=self.patient_name(appointment.patient_id),
            doctor_name=doctor.name if doctor else UNKNOWN,
            doctor_specialization=doctor.specialization if doctor else None,
            date=appointment.date,
            time=appointment.time,
            reason=appointment.reason,
            status=appointment.status,
        )

    def patient_history(self, patient_id: str) -> list[AppointmentDetail]:
        """Described appointments of a patient in booking order."""
        return [
            self.describe(appointment)
            for appointment in self.repository.appointments_for_patient(patient_id)
        ]
