"""Appointment service for booking and status changes."""

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel

from medicare.core.exceptions import BadRequestException, ConflictException
from medicare.schemas.appointments import Appointment, AppointmentStatus
from medicare.schemas.common import RecordKind
from medicare.services.repository import RecordRepository

logger = structlog.get_logger(__name__)


class AppointmentService:
    """Service for managing appointments."""

    def __init__(self, repository: RecordRepository):
        """Initialize service with repository."""
        self.repository = repository

    def ensure_bookable(self) -> None:
        """
        Check that at least one patient and one doctor exist.

        Raises:
            BadRequestException: If either collection is empty
        """
        if not self.repository.count(RecordKind.PATIENTS):
            raise BadRequestException(
                "No patients registered. Please add a patient first before booking an appointment."
            )
        if not self.repository.count(RecordKind.DOCTORS):
            raise BadRequestException(
                "No doctors registered. Please add a doctor first before booking an appointment."
            )

    def book(self, data: Mapping[str, Any] | BaseModel) -> Appointment:
        """
        Book a new appointment with status scheduled.

        Args:
            data: Appointment creation data

        Returns:
            Created appointment

        Raises:
            BadRequestException: If no patient or no doctor exists
            ValidationException: If the data is invalid
        """
        self.ensure_bookable()
        appointment_id = self.repository.create(RecordKind.APPOINTMENTS, data)
        return self.repository.get(RecordKind.APPOINTMENTS, appointment_id)

    def complete(self, appointment_id: str) -> Appointment:
        return self._transition(appointment_id, AppointmentStatus.COMPLETED)

    def cancel(self, appointment_id: str) -> Appointment:
        return self._transition(appointment_id, AppointmentStatus.CANCELLED)

    def _transition(self, appointment_id: str, target: AppointmentStatus) -> Appointment:
        """
        Move a scheduled appointment to a terminal status.

        Raises:
            NotFoundException: If appointment not found
            ConflictException: If the appointment is no longer scheduled
        """
        current = self.repository.get(RecordKind.APPOINTMENTS, appointment_id)
        if current is not None and current.status != AppointmentStatus.SCHEDULED:
            logger.warning(
                "appointment_transition_rejected",
                appointment_id=appointment_id,
                status=current.status.value,
                target=target.value,
            )
            raise ConflictException(f"Appointment is already {current.status.value}")

        return self.repository.update(
            RecordKind.APPOINTMENTS,
            appointment_id,
            {"status": target},
        )

    def patient_options(self) -> list[tuple[str, str]]:
        """(id, label) pairs for the patient dropdown."""
        return [(p.id, p.name) for p in self.repository.list(RecordKind.PATIENTS)]

    def doctor_options(self) -> list[tuple[str, str]]:
        """(id, label) pairs for the doctor dropdown."""
        return [
            (d.id, f"{d.name} — {d.specialization}")
            for d in self.repository.list(RecordKind.DOCTORS)
        ]
