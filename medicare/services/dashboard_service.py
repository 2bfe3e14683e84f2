"""Dashboard summaries and global search."""

from datetime import date

from medicare.schemas.appointments import AppointmentDetail, AppointmentStatus
from medicare.schemas.common import RecordKind
from medicare.schemas.dashboard import Badges, DashboardStats, SearchResult
from medicare.schemas.doctors import Availability, Doctor
from medicare.schemas.patients import Patient
from medicare.services.repository import RecordRepository
from medicare.services.resolver import CrossReferenceResolver


class DashboardService:
    """Read-only summaries over the repository."""

    def __init__(
        self,
        repository: RecordRepository,
        resolver: CrossReferenceResolver,
        available_beds: int = 15,
    ):
        """Initialize service with repository and resolver."""
        self.repository = repository
        self.resolver = resolver
        self.available_beds = available_beds

    def stats(self, today: date | None = None) -> DashboardStats:
        today = today or date.today()
        doctors = self.repository.list(RecordKind.DOCTORS)
        appointments = self.repository.list(RecordKind.APPOINTMENTS)
        return DashboardStats(
            total_patients=self.repository.count(RecordKind.PATIENTS),
            doctors_on_duty=sum(1 for d in doctors if d.availability == Availability.AVAILABLE),
            appointments_today=sum(
                1
                for a in appointments
                if a.date == today and a.status == AppointmentStatus.SCHEDULED
            ),
            available_beds=self.available_beds,
        )

    def recent_patients(self, limit: int = 4) -> list[Patient]:
        """Most recently added patients, newest first."""
        patients = self.repository.list(RecordKind.PATIENTS)
        return list(reversed(patients))[:limit]

    def active_appointments(self, limit: int = 4) -> list[AppointmentDetail]:
        """Most recently booked scheduled appointments, newest first."""
        scheduled = [
            a
            for a in self.repository.list(RecordKind.APPOINTMENTS)
            if a.status == AppointmentStatus.SCHEDULED
        ]
        latest = scheduled[-limit:] if limit > 0 else []
        return [self.resolver.describe(a) for a in reversed(latest)]

    def doctor_status(self, limit: int = 4) -> list[Doctor]:
        """First doctors on record with their availability, in insertion order."""
        if limit <= 0:
            return []
        return list(self.repository.list(RecordKind.DOCTORS)[:limit])

    def badges(self) -> Badges:
        return Badges(
            patients=self.repository.count(RecordKind.PATIENTS),
            doctors=self.repository.count(RecordKind.DOCTORS),
            scheduled_appointments=sum(
                1
                for a in self.repository.list(RecordKind.APPOINTMENTS)
                if a.status == AppointmentStatus.SCHEDULED
            ),
        )

    def search(self, term: str, limit: int = 8) -> list[SearchResult]:
        """
        Search all collections at once.

        Patients match on name or disease, doctors on name or
        specialization, appointments on patient name or reason.

        Args:
            term: Case-insensitive search text; blank returns nothing
            limit: Maximum number of results

        Returns:
            Results grouped patients, doctors, appointments
        """
        needle = term.strip().lower()
        if not needle:
            return []

        results: list[SearchResult] = []

        for p in self.repository.list(RecordKind.PATIENTS):
            if needle in p.name.lower() or needle in p.disease.lower():
                results.append(
                    SearchResult(kind=RecordKind.PATIENTS, id=p.id, name=p.name, subtitle=p.disease)
                )

        for d in self.repository.list(RecordKind.DOCTORS):
            if needle in d.name.lower() or needle in d.specialization.lower():
                results.append(
                    SearchResult(
                        kind=RecordKind.DOCTORS, id=d.id, name=d.name, subtitle=d.specialization
                    )
                )

        for a in self.repository.list(RecordKind.APPOINTMENTS):
            patient_name = self.resolver.patient_name(a.patient_id, default="")
            if needle in patient_name.lower() or needle in a.reason.lower():
                results.append(
                    SearchResult(
                        kind=RecordKind.APPOINTMENTS, id=a.id, name=patient_name, subtitle=a.reason
                    )
                )

        return results[:limit]
