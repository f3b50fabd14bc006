"""Collection of conversion log messages."""

from __future__ import annotations


class ConversionError(Exception):
    """Raised when a file cannot be read, written or converted."""


class Logger:
    """Collects log messages in the order they were produced.

    An optional context string is put in front of every message.
    """

    def __init__(self) -> None:
        self._messages: list[str] = []
        self._context = ""

    def error(self, message: str) -> None:
        """Log an error message."""
        self._add(f"ERROR: {message}")

    def warn(self, message: str) -> None:
        """Log a warning message."""
        self._add(f"Warning: {message}")

    def info(self, message: str) -> None:
        """Log an informational message."""
        self._add(message)

    def messages(self) -> list[str]:
        """Return a copy of all messages logged so far."""
        return list(self._messages)

    def set_context(self, context: str) -> None:
        """Set the context shown before every following message; empty clears it."""
        self._context = context

    def _add(self, message: str) -> None:
        if self._context:
            self._messages.append(f"{self._context}: {message}")
        else:
            self._messages.append(message)