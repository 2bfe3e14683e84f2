"""Tests for the theme preference."""

from unittest.mock import MagicMock

from medicare.core.exceptions import StorageException
from medicare.core.storage import MemoryStore
from medicare.services.notification_service import NotificationService
from medicare.services.theme_service import ThemeService


def test_defaults_to_dark():
    theme = ThemeService(MemoryStore())

    assert theme.load() == "dark"


def test_loads_stored_light_theme():
    theme = ThemeService(MemoryStore({"mc_theme": b"light"}))

    assert theme.load() == "light"


def test_unrecognised_value_loads_dark():
    theme = ThemeService(MemoryStore({"mc_theme": b"sepia"}))

    assert theme.load() == "dark"


def test_toggle_persists():
    """Test that toggling writes the new theme."""
    store = MemoryStore()
    theme = ThemeService(store)
    theme.load()

    assert theme.toggle() == "light"
    assert store.data["mc_theme"] == b"light"
    assert theme.toggle() == "dark"
    assert store.data["mc_theme"] == b"dark"


def test_toggle_save_failure_is_reported():
    """Test that a failed save keeps the new theme and queues an error."""
    store = MagicMock()
    store.load.return_value = None
    store.save.side_effect = StorageException("read-only", key="mc_theme")
    notifications = NotificationService()
    theme = ThemeService(store, notifications=notifications)
    theme.load()

    assert theme.toggle() == "light"
    assert [n.title for n in notifications.drain()] == ["Theme not saved"]
