"""Text codecs used for the strings stored in ENG files."""

from __future__ import annotations

import codecs
from dataclasses import dataclass

from .logger import ConversionError, Logger

_UNAVAILABLE = frozenset({"c3-tc", "c3-sc"})


@dataclass(frozen=True)
class StandardCodec:
    """A codec backed by one of Python's registered text encodings.

    Undecodable bytes and unencodable characters are replaced rather than
    rejected.
    """

    name: str

    def decode(self, data: bytes) -> str:
        """Decode raw file bytes into text."""
        return bytes(data).decode(self.name, errors="replace")

    def encode(self, text: str) -> bytes:
        """Encode text into raw file bytes."""
        return text.encode(self.name, errors="replace")


def make_codec(encoding: str, logger: Logger) -> StandardCodec:
    """Return the codec for an encoding name such as 'Windows-1252'.

    Raises ConversionError when the encoding is not available.
    """
    if encoding in _UNAVAILABLE:
        message = f"Encoding not supported: {encoding}"
        logger.error(message)
        raise ConversionError(message)
    try:
        info = codecs.lookup(encoding)
    except LookupError as exc:
        message = f"Unknown encoding: {encoding}"
        logger.error(message)
        raise ConversionError(message) from exc
    return StandardCodec(info.name)