"""Advisory warning sinks.

The server never prints. Advisory warnings (for example a pluralized model
name that was corrected) go to an injected Reporter; the default drops them.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Reporter(Protocol):
    """Receives advisory warnings."""

    def warn(self, message: str) -> None: ...


class NullReporter:
    """Discards every warning."""

    def warn(self, message: str) -> None:
        pass


class LoggingReporter:
    """Forwards warnings to a logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def warn(self, message: str) -> None:
        self._logger.warning(message)


class CapturingReporter:
    """Keeps warnings in memory, for tests and the CLI."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()
