"""Notification service queueing user-facing notices."""

import structlog

from medicare.schemas.notifications import Notice, NoticeLevel

logger = structlog.get_logger(__name__)


class NotificationService:
    """Service collecting notices for the presentation layer to display."""

    def __init__(self) -> None:
        """Initialize an empty notice queue."""
        self._queue: list[Notice] = []

    def push(
        self,
        title: str,
        message: str = "",
        level: NoticeLevel = NoticeLevel.SUCCESS,
    ) -> Notice:
        """
        Queue a notice.

        Args:
            title: Short headline
            message: Optional detail line
            level: Notice severity

        Returns:
            The queued notice
        """
        notice = Notice(title=title, message=message, level=level)
        self._queue.append(notice)
        logger.debug("notice_queued", title=title, level=level.value)
        return notice

    def success(self, title: str, message: str = "") -> Notice:
        return self.push(title, message, NoticeLevel.SUCCESS)

    def info(self, title: str, message: str = "") -> Notice:
        return self.push(title, message, NoticeLevel.INFO)

    def warning(self, title: str, message: str = "") -> Notice:
        return self.push(title, message, NoticeLevel.WARNING)

    def error(self, title: str, message: str = "") -> Notice:
        return self.push(title, message, NoticeLevel.ERROR)

    @property
    def pending(self) -> list[Notice]:
        """Notices not yet drained."""
        return list(self._queue)

    def drain(self) -> list[Notice]:
        """Return and clear all queued notices."""
        notices, self._queue = self._queue, []
        return notices
