"""User-facing notification sink used by the services."""

import logging
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

Severity = Literal["information", "warning", "error"]


class Notifier(Protocol):
    """Anything that can show the user a short message.

    Textual's ``App.notify`` matches this signature, so the running app is
    passed in directly.
    """

    def notify(self, message: str, *, title: str = "", severity: Severity = "information") -> None:
        ...


class LoggingNotifier:
    """Notifier for headless use: messages go to the log and are kept for inspection."""

    _LEVELS = {"information": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR}

    def __init__(self) -> None:
        self.messages: list[tuple[Severity, str, str]] = []

    def notify(self, message: str, *, title: str = "", severity: Severity = "information") -> None:
        self.messages.append((severity, title, message))
        logger.log(self._LEVELS.get(severity, logging.INFO), "%s: %s", title or severity, message)
