"""Data model of a text (strings) file."""

from __future__ import annotations

from dataclasses import dataclass, field

from .textgroup import TextGroup


@dataclass
class TextFile:
    """A named collection of string groups.

    ``index_with_counts`` records whether the index stores the number of
    strings of each group rather than just a used flag.
    """

    name: str = ""
    groups: list[TextGroup] = field(default_factory=list)
    index_with_counts: bool = False

    def max_group_id(self) -> int:
        """Highest group ID in use, or 0 when there are no groups."""
        return max((group.id for group in self.groups), default=0)

    def total_strings(self) -> int:
        """Number of strings in all groups."""
        return sum(len(group) for group in self.groups)

    def total_words(self) -> int:
        """Number of words in all strings of all groups."""
        return sum(group.total_words() for group in self.groups)