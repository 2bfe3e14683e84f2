"""Confirmation gate for destructive actions."""

from collections.abc import Callable
from typing import Any
from uuid import uuid4

import structlog

from medicare.core.exceptions import NotFoundException
from medicare.schemas.notifications import PendingConfirmation

logger = structlog.get_logger(__name__)


class ConfirmationService:
    """
    Hold one action until the user confirms it.

    A new request replaces any earlier pending one, like a single confirm
    dialog. Nothing runs until ``confirm`` is called with the current token.
    """

    def __init__(self) -> None:
        """Initialize with nothing pending."""
        self._pending: PendingConfirmation | None = None
        self._action: Callable[[], Any] | None = None

    @property
    def pending(self) -> PendingConfirmation | None:
        return self._pending

    def request(self, message: str, action: Callable[[], Any]) -> PendingConfirmation:
        if self._pending is not None:
            logger.debug("confirmation_replaced", token=self._pending.token)
        self._pending = PendingConfirmation(token=uuid4().hex, message=message)
        self._action = action
        return self._pending

    def confirm(self, token: str) -> Any:
        """
        Run the pending action.

        Args:
            token: Token of the pending confirmation

        Returns:
            Whatever the action returns

        Raises:
            NotFoundException: If nothing is pending under this token
        """
        action = self._take(token)
        return action()

    def dismiss(self, token: str) -> None:
        self._take(token)

    def _take(self, token: str) -> Callable[[], Any]:
        if self._pending is None or self._pending.token != token or self._action is None:
            raise NotFoundException("No pending confirmation")
        action = self._action
        self._pending = None
        self._action = None
        return action
