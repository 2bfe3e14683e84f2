"""Tests for application settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from medicare.config import Settings
from medicare.schemas.views import MAX_PAGE_SIZE


def test_defaults(monkeypatch):
    """Test default settings with no environment overrides."""
    for name in ("STORAGE_BACKEND", "PATIENT_PAGE_SIZE", "AVAILABLE_BEDS", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.storage_backend == "file"
    assert settings.storage_key_prefix == "mc_"
    assert settings.patient_page_size == 10
    assert settings.available_beds == 15
    assert settings.is_development


def test_environment_overrides(monkeypatch, tmp_path):
    """Test reading settings from environment variables."""
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PATIENT_PAGE_SIZE", "25")
    monkeypatch.setenv("SEED_DEMO_DATA", "false")
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = Settings(_env_file=None)

    assert settings.storage_backend == "redis"
    assert settings.data_dir == Path(tmp_path)
    assert settings.patient_page_size == 25
    assert settings.seed_demo_data is False
    assert settings.is_production


def test_patient_page_size_is_bounded():
    """Test that the patient page size cannot exceed what a page request allows."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, patient_page_size=MAX_PAGE_SIZE + 1)

    assert Settings(_env_file=None, patient_page_size=MAX_PAGE_SIZE).patient_page_size == 100


def test_env_file_is_read(monkeypatch, tmp_path):
    """Test loading settings from a .env file."""
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    monkeypatch.delenv("AVAILABLE_BEDS", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("STORAGE_BACKEND=memory\nAVAILABLE_BEDS=20\n")

    settings = Settings(_env_file=env_file)

    assert settings.storage_backend == "memory"
    assert settings.available_beds == 20
