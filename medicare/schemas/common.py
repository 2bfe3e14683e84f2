"""Shared schema helpers."""

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

PHONE_PATTERN = re.compile(r"^[\d\s+\-()]{7,15}$")


class RecordKind(str, Enum):
    """Record collections owned by the repository."""

    PATIENTS = "patients"
    DOCTORS = "doctors"
    APPOINTMENTS = "appointments"


class RecordModel(BaseModel):
    """Stored record: immutable, camelCase on disk, ignores unknown keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


class FormModel(BaseModel):
    """Create/update payload: accepts snake_case or camelCase, rejects unknown keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


def validate_phone(v: str | None) -> str | None:
    """Validate phone number format."""
    if v is None:
        return v
    if not PHONE_PATTERN.match(v):
        raise ValueError("Enter a valid phone number")
    return v


def blank_to_none(v: Any) -> Any:
    """Treat empty form values as missing."""
    if isinstance(v, str) and not v.strip():
        return None
    return v
