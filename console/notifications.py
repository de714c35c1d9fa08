from __future__ import annotations

import logging
from typing import List, Protocol, Tuple


class Notifier(Protocol):
    """User-facing success/error messages (toasts in the web console)."""

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class LoggingNotifier:
    def __init__(self, logger_name: str = "access_console.notify") -> None:
        self._logger = logging.getLogger(logger_name)

    def success(self, message: str) -> None:
        self._logger.info(message)

    def error(self, message: str) -> None:
        self._logger.error(message)


class RecordingNotifier:
    """Keeps every message in order; handy for tests and the CLI."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of_kind(self, kind: str) -> List[str]:
        return [message for level, message in self.messages if level == kind]
