from __future__ import annotations

from typing import Optional


class ConsoleError(Exception):
    """Base class for recoverable console failures."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class LoadFailure(ConsoleError):
    """The directory fetch failed or came back with success=false."""


class ToggleError(ConsoleError):
    pass


class ToggleRejected(ToggleError):
    """The endpoint refused a malformed toggle payload (HTTP 400)."""


class ToggleTransportFailure(ToggleError):
    """The toggle call failed in transit, timed out, or the endpoint reported an error."""
