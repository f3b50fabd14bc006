"""Data model of a message file."""

from __future__ import annotations

from dataclasses import dataclass, field

from .messageentry import MessageEntry


@dataclass
class MessageFile:
    """A named list of message entries with the size of its index."""

    name: str = ""
    total_entries: int = 0
    entries: list[MessageEntry] = field(default_factory=list)

    def max_entry_id(self) -> int:
        """Highest entry ID in use, or 0 when there are no entries."""
        return max((entry.id for entry in self.entries), default=0)