"""Notifier that writes user feedback to the log."""

import logging

from contactbook.application.dto import Notification, Severity

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Destructive notifications at WARNING, everything else at INFO.
    Keeps the last notifications so an HTTP layer can return them.
    """

    def __init__(self, keep: int = 20) -> None:
        self._keep = keep
        self.recent: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        level = (
            logging.WARNING
            if notification.severity is Severity.DESTRUCTIVE
            else logging.INFO
        )
        logger.log(level, "%s: %s", notification.title, notification.description)
        self.recent.append(notification)
        del self.recent[: -self._keep]
