from datetime import date

import pytest

from medicare.config import Settings
from medicare.core.storage import MemoryStore
from medicare.schemas.common import RecordKind
from medicare.seeders import seed_demo_data
from medicare.services.notification_service import NotificationService
from medicare.services.repository import RecordRepository
from medicare.services.resolver import CrossReferenceResolver
from medicare.services.view_pipeline import ViewPipeline

# Date the demo appointments count as "today"
DEMO_TODAY = date(2026, 3, 1)


@pytest.fixture
def settings() -> Settings:
    """Settings for an in-memory session without demo data."""
    return Settings(
        storage_backend="memory",
        seed_demo_data=False,
        log_format="console",
    )


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def notifications() -> NotificationService:
    return NotificationService()


@pytest.fixture
def repository(store: MemoryStore, notifications: NotificationService) -> RecordRepository:
    """Empty repository over an in-memory store."""
    return RecordRepository(store, notifications=notifications)


@pytest.fixture
def resolver(repository: RecordRepository) -> CrossReferenceResolver:
    return CrossReferenceResolver(repository)


@pytest.fixture
def pipeline(repository: RecordRepository, resolver: CrossReferenceResolver) -> ViewPipeline:
    return ViewPipeline(repository, resolver)


@pytest.fixture
def seeded_repository(repository: RecordRepository) -> RecordRepository:
    """Repository holding the demo doctors, patients and appointments."""
    seed_demo_data(repository, today=DEMO_TODAY)
    return repository


@pytest.fixture
def sample_patient_data() -> dict:
    """Sample patient form data for testing."""
    return {
        "name": "Rohan Desai",
        "age": 52,
        "gender": "Male",
        "phone": "+91 99001 22222",
        "disease": "Type 2 Diabetes",
        "admission_date": "2026-02-05",
        "blood_group": "O+",
    }


@pytest.fixture
def sample_doctor_data() -> dict:
    """Sample doctor form data for testing."""
    return {
        "name": "Dr. Arjun Mehra",
        "specialization": "Cardiology",
        "availability": "Available",
        "experience": 12,
        "phone": "+91 98765 11111",
    }


@pytest.fixture
def patient_id(repository: RecordRepository, sample_patient_data: dict) -> str:
    return repository.create(RecordKind.PATIENTS, sample_patient_data)


@pytest.fixture
def doctor_id(repository: RecordRepository, sample_doctor_data: dict) -> str:
    return repository.create(RecordKind.DOCTORS, sample_doctor_data)


@pytest.fixture
def sample_appointment_data(patient_id: str, doctor_id: str) -> dict:
    """Sample appointment booking data referencing existing records."""
    return {
        "patient_id": patient_id,
        "doctor_id": doctor_id,
        "date": "2026-03-01",
        "time": "09:30",
        "reason": "Routine blood pressure checkup",
    }


@pytest.fixture
def make_patient(repository: RecordRepository, sample_patient_data: dict):
    """Factory creating a patient with overridden fields."""

    def _make(**overrides) -> str:
        return repository.create(RecordKind.PATIENTS, {**sample_patient_data, **overrides})

    return _make


@pytest.fixture
def make_doctor(repository: RecordRepository, sample_doctor_data: dict):
    """Factory creating a doctor with overridden fields."""

    def _make(**overrides) -> str:
        return repository.create(RecordKind.DOCTORS, {**sample_doctor_data, **overrides})

    return _make


@pytest.fixture
def demo_today() -> date:
    return DEMO_TODAY
