"""Notice and confirmation schemas."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class NoticeLevel(str, Enum):
    """Notice severity enumeration."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notice(BaseModel):
    """A user-facing notification (toast)."""

    title: str
    message: str = ""
    level: NoticeLevel = NoticeLevel.SUCCESS
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class PendingConfirmation(BaseModel):
    """A destructive action awaiting user confirmation."""

    token: str
    message: str
