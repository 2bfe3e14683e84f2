"""Dashboard and global search schemas."""

from pydantic import BaseModel

from medicare.schemas.common import RecordKind


class DashboardStats(BaseModel):
    """Headline counters."""

    total_patients: int
    doctors_on_duty: int
    appointments_today: int
    available_beds: int


class Badges(BaseModel):
    """Navigation badge counts."""

    patients: int
    doctors: int
    scheduled_appointments: int


class SearchResult(BaseModel):
    """One global search hit."""

    kind: RecordKind
    id: str
    name: str
    subtitle: str = ""
