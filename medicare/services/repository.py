"""Record repository owning the patient, doctor and appointment collections."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from medicare.core.exceptions import (
    ConflictException,
    NotFoundException,
    StorageException,
    ValidationException,
)
from medicare.core.ids import IdGenerator
from medicare.core.storage import PersistentStore
from medicare.schemas.appointments import (
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
    AppointmentUpdate,
    can_transition,
)
from medicare.schemas.common import FormModel, RecordKind, RecordModel
from medicare.schemas.doctors import Doctor, DoctorCreate, DoctorUpdate
from medicare.schemas.patients import Patient, PatientCreate, PatientUpdate
from medicare.services.notification_service import NotificationService

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class _Collection:
    record: type[RecordModel]
    create: type[FormModel]
    update: type[FormModel]
    id_prefix: str
    label: str
    adapter: TypeAdapter = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "adapter", TypeAdapter(list[self.record]))


_COLLECTIONS: dict[RecordKind, _Collection] = {
    RecordKind.PATIENTS: _Collection(Patient, PatientCreate, PatientUpdate, "p", "Patient"),
    RecordKind.DOCTORS: _Collection(Doctor, DoctorCreate, DoctorUpdate, "d", "Doctor"),
    RecordKind.APPOINTMENTS: _Collection(
        Appointment, AppointmentCreate, AppointmentUpdate, "a", "Appointment"
    ),
}


class RecordRepository:
    """
    Sole owner and mutator of the three record collections.

    Collections keep insertion order. Records are immutable; updates swap in
    a re-validated copy at the same position. Every mutation writes the
    affected collections to the store before returning. A failed write is
    logged and reported through the notification service, and the in-memory
    state stays authoritative for the rest of the session.
    """

    def __init__(
        self,
        store: PersistentStore,
        key_prefix: str = "mc_",
        notifications: NotificationService | None = None,
    ):
        """Initialize repository over a store."""
        self.store = store
        self.key_prefix = key_prefix
        self.notifications = notifications
        self.last_storage_error: StorageException | None = None
        self._records: dict[RecordKind, list[Any]] = {kind: [] for kind in RecordKind}
        self._ids = {kind: IdGenerator(spec.id_prefix) for kind, spec in _COLLECTIONS.items()}

    def storage_key(self, kind: RecordKind) -> str:
        """Store key holding a collection."""
        return f"{self.key_prefix}{RecordKind(kind).value}"

    # ----- Loading / persistence -------------------------------------------

    def load(self) -> None:
        """Read every collection from the store, replacing in-memory state."""
        for kind in RecordKind:
            self._records[kind] = self._read(kind)
            self._ids[kind].reseed(record.id for record in self._records[kind])

        logger.info(
            "records_loaded",
            patients=len(self._records[RecordKind.PATIENTS]),
            doctors=len(self._records[RecordKind.DOCTORS]),
            appointments=len(self._records[RecordKind.APPOINTMENTS]),
        )

    def _read(self, kind: RecordKind) -> list[Any]:
        key = self.storage_key(kind)
        try:
            raw = self.store.load(key)
        except StorageException as e:
            logger.warning("records_load_failed", key=key, error=e.message)
            if self.notifications:
                self.notifications.warning("Could not load saved records", e.message)
            return []

        if raw is None:
            return []

        try:
            return list(_COLLECTIONS[kind].adapter.validate_json(raw))
        except ValidationError as e:
            logger.warning("records_decode_failed", key=key, error_count=e.error_count())
            return []

    def _persist(self, *kinds: RecordKind) -> None:
        self.last_storage_error = None
        for kind in kinds:
            key = self.storage_key(kind)
            payload = _COLLECTIONS[kind].adapter.dump_json(self._records[kind], by_alias=True)
            try:
                self.store.save(key, payload)
            except StorageException as e:
                self.last_storage_error = e
                logger.error("records_persist_failed", key=key, error=e.message)
                if self.notifications:
                    self.notifications.error("Changes not saved", e.message)

    # ----- Queries ---------------------------------------------------------

    def list(self, kind: RecordKind) -> tuple[Any, ...]:
        """All records of a kind in insertion order."""
        return tuple(self._records[RecordKind(kind)])

    def get(self, kind: RecordKind, record_id: str) -> Any | None:
        """Record by id, or None."""
        for record in self._records[RecordKind(kind)]:
            if record.id == record_id:
                return record
        return None

    def exists(self, kind: RecordKind, record_id: str) -> bool:
        return self.get(kind, record_id) is not None

    def count(self, kind: RecordKind) -> int:
        return len(self._records[RecordKind(kind)])

    def appointments_for_patient(self, patient_id: str) -> tuple[Appointment, ...]:
        """Appointments referencing a patient, in insertion order."""
        return tuple(
            appointment
            for appointment in self._records[RecordKind.APPOINTMENTS]
            if appointment.patient_id == patient_id
        )

    def _index_of(self, kind: RecordKind, record_id: str) -> int:
        for index, record in enumerate(self._records[kind]):
            if record.id == record_id:
                return index
        raise NotFoundException(f"{_COLLECTIONS[kind].label} {record_id} not found")

    # ----- Mutations -------------------------------------------------------

    def create(self, kind: RecordKind, data: Mapping[str, Any] | BaseModel) -> str:
        """
        Validate and append a new record.

        Args:
            kind: Target collection
            data: Create payload (snake_case or camelCase keys)

        Returns:
            The generated id

        Raises:
            ValidationException: If the payload is invalid or, for
                appointments, references a missing patient or doctor
        """
        kind = RecordKind(kind)
        spec = _COLLECTIONS[kind]
        values = _validate(spec.create, data).model_dump()

        if kind is RecordKind.APPOINTMENTS:
            self._check_references(values.get("patient_id"), values.get("doctor_id"))
            values["status"] = AppointmentStatus.SCHEDULED

        record_id = self._ids[kind].next_id()
        record = spec.record.model_validate({**values, "id": record_id})
        self._records[kind].append(record)
        self._persist(kind)

        logger.info("record_created", kind=kind.value, record_id=record_id)
        return record_id

    def update(
        self,
        kind: RecordKind,
        record_id: str,
        data: Mapping[str, Any] | BaseModel,
    ) -> Any:
        """
        Merge partial fields into an existing record.

        Args:
            kind: Target collection
            record_id: Record id
            data: Fields to change; omitted fields keep their values

        Returns:
            The updated record

        Raises:
            NotFoundException: If no record has this id
            ValidationException: If the merged record is invalid
            ConflictException: If an appointment status change is not allowed
        """
        kind = RecordKind(kind)
        spec = _COLLECTIONS[kind]
        index = self._index_of(kind, record_id)
        current = self._records[kind][index]
        changes = _validate(spec.update, data).model_dump(exclude_unset=True)

        if kind is RecordKind.APPOINTMENTS:
            self._check_appointment_changes(current, changes)

        try:
            updated = spec.record.model_validate({**current.model_dump(), **changes, "id": current.id})
        except ValidationError as e:
            raise ValidationException.from_validation_error(e) from e

        self._records[kind][index] = updated
        self._persist(kind)

        logger.info("record_updated", kind=kind.value, record_id=record_id, fields=sorted(changes))
        return updated

    def delete(self, kind: RecordKind, record_id: str) -> Any:
        """
        Remove a record.

        Deleting a patient also removes every appointment referencing it.
        Doctors and appointments are removed alone; appointments keep
        pointing at a deleted doctor.

        Args:
            kind: Target collection
            record_id: Record id

        Returns:
            The removed record

        Raises:
            NotFoundException: If no record has this id
        """
        kind = RecordKind(kind)
        index = self._index_of(kind, record_id)
        records = self._records[kind]
        removed = records[index]

        if kind is RecordKind.PATIENTS:
            appointments = self._records[RecordKind.APPOINTMENTS]
            kept = [a for a in appointments if a.patient_id != record_id]
            self._records[RecordKind.PATIENTS] = records[:index] + records[index + 1 :]
            self._records[RecordKind.APPOINTMENTS] = kept
            self._persist(RecordKind.PATIENTS, RecordKind.APPOINTMENTS)
            logger.info(
                "record_deleted",
                kind=kind.value,
                record_id=record_id,
                cascaded_appointments=len(appointments) - len(kept),
            )
            return removed

        self._records[kind] = records[:index] + records[index + 1 :]
        self._persist(kind)
        logger.info("record_deleted", kind=kind.value, record_id=record_id)
        return removed

    # ----- Integrity checks ------------------------------------------------

    def _check_references(self, patient_id: str | None, doctor_id: str | None) -> None:
        errors: dict[str, str] = {}
        if patient_id is not None and not self.exists(RecordKind.PATIENTS, patient_id):
            errors["patient_id"] = f"Unknown patient {patient_id}"
        if doctor_id is not None and not self.exists(RecordKind.DOCTORS, doctor_id):
            errors["doctor_id"] = f"Unknown doctor {doctor_id}"
        if errors:
            raise ValidationException("Validation failed", errors=errors)

    def _check_appointment_changes(self, current: Appointment, changes: dict[str, Any]) -> None:
        target = changes.get("status")
        if target is not None and not can_transition(current.status, target):
            raise ConflictException(
                f"Cannot change appointment status from {current.status.value} to {target.value}"
            )
        self._check_references(changes.get("patient_id"), changes.get("doctor_id"))


def _validate(schema: type[FormModel], data: Mapping[str, Any] | BaseModel) -> FormModel:
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ValidationException.from_validation_error(e) from e
