"""Persisted dark/light theme flag."""

import structlog

from medicare.core.exceptions import StorageException
from medicare.core.storage import PersistentStore
from medicare.services.notification_service import NotificationService

logger = structlog.get_logger(__name__)

DARK = "dark"
LIGHT = "light"


class ThemeService:
    """Theme preference; dark unless "light" was stored."""

    def __init__(
        self,
        store: PersistentStore,
        key: str = "mc_theme",
        notifications: NotificationService | None = None,
    ):
        """Initialize service with store and key."""
        self.store = store
        self.key = key
        self.notifications = notifications
        self.is_dark = True

    @property
    def theme(self) -> str:
        return DARK if self.is_dark else LIGHT

    def load(self) -> str:
        try:
            raw = self.store.load(self.key)
        except StorageException as e:
            logger.warning("theme_load_failed", error=e.message)
            raw = None
        self.is_dark = raw is None or raw.decode("utf-8", errors="replace").strip() != LIGHT
        return self.theme

    def toggle(self) -> str:
        self.is_dark = not self.is_dark
        self._save()
        return self.theme

    def _save(self) -> None:
        try:
            self.store.save(self.key, self.theme.encode("utf-8"))
        except StorageException as e:
            logger.error("theme_persist_failed", error=e.message)
            if self.notifications:
                self.notifications.error("Theme not saved", e.message)
