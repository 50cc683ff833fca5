"""
Notification sinks for user-facing generation failures.
"""

import logging

from services.interfaces import INotificationSink

logger = logging.getLogger("teamgen.notifications")


class LoggingNotificationSink(INotificationSink):
    """Default sink: failures go to the application log."""

    def notify_error(self, message: str, code: str | None = None) -> None:
        logger.warning(f"{message} (code={code})" if code else message)


class CollectingNotificationSink(INotificationSink):
    """Keeps messages in memory; used by the lab CLI and tests."""

    def __init__(self):
        self.messages: list[tuple[str, str | None]] = []

    def notify_error(self, message: str, code: str | None = None) -> None:
        self.messages.append((message, code))

    def clear(self) -> None:
        self.messages.clear()
