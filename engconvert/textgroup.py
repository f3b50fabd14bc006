"""A group of related strings within a text file."""

from __future__ import annotations

from dataclasses import dataclass, field


def _is_word_char(char: str, in_word: bool) -> bool:
    if char.isalpha():
        return True
    return in_word and char != " "


def count_words(text: str) -> int:
    """Count words: a word starts at a letter and runs until a space."""
    words = 0
    in_word = False
    for char in text:
        if _is_word_char(char, in_word):
            if not in_word:
                in_word = True
                words += 1
        else:
            in_word = False
    return words


@dataclass
class TextGroup:
    """Strings sharing one index entry, with the offset they came from."""

    id: int
    file_offset: int = -1
    strings: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.strings)

    def add(self, string: str) -> None:
        """Append a string to the group."""
        self.strings.append(string)

    def total_words(self) -> int:
        """Total number of words in all strings of the group."""
        return sum(count_words(s) for s in self.strings)