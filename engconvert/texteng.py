"""Reading and writing text files in the binary ENG format."""

from __future__ import annotations

import struct

from .encoding import StandardCodec, make_codec
from .logger import Logger
from .textfile import TextFile
from .textgroup import TextGroup

MAX_INDEX_ENTRIES = 1000
"""Number of index entries in every text file."""

MAX_DATA_SIZE = 1_000_000
"""Largest data part that is read; the original files hold about 250 kB."""

NAME_SIZE = 16

_COUNTS = struct.Struct("<3i")
_INDEX = struct.Struct("<2i")

HEADER_SIZE = NAME_SIZE + _COUNTS.size + MAX_INDEX_ENTRIES * _INDEX.size
"""Size of the fixed part before the string data."""


def _decode_name(raw: bytes, codec: StandardCodec) -> str:
    end = raw.find(b"\0")
    if end >= 0:
        raw = raw[:end]
    return codec.decode(raw)


def _trimmed_size(raw: bytes) -> int:
    """Length of the data with duplicate trailing NUL bytes removed."""
    size = len(raw)
    while size > 1 and raw[size - 1] == 0 and raw[size - 2] == 0:
        size -= 1
    return size


def _read_strings(
    groups: list[TextGroup],
    buffer: bytes,
    size: int,
    codec: StandardCodec,
    logger: Logger,
) -> None:
    followers: list[TextGroup | None] = [*groups[1:], None]
    for group, following in zip(groups, followers):
        start = group.file_offset
        end = following.file_offset if following is not None else size
        if start > size or end > size or start > end or start < 0:
            logger.error(f"Invalid data offset for group {group.id}: {start}-{end}")
            break
        while start < end:
            # zero bytes between strings were inserted by later patches
            while start < end and buffer[start] == 0:
                start += 1
            terminator = buffer.index(0, start)
            group.add(codec.decode(buffer[start:terminator]))
            start = terminator + 1


def read_text_eng(data: bytes, encoding: str, logger: Logger) -> TextFile:
    """Parse the bytes of an ENG text file.

    Raises ConversionError when the encoding is unavailable. Problems in the
    data itself are reported through the logger.
    """
    codec = make_codec(encoding, logger)
    data = bytes(data)
    header = data[:HEADER_SIZE].ljust(HEADER_SIZE, b"\0")

    textfile = TextFile(name=_decode_name(header[:NAME_SIZE], codec))
    # the stored counts are recalculated when writing, so they are skipped
    index = header[NAME_SIZE + _COUNTS.size:]
    for group_id, (offset, used) in enumerate(_INDEX.iter_unpack(index)):
        if used:
            textfile.groups.append(TextGroup(group_id, offset))
            if used > 1:
                textfile.index_with_counts = True

    remaining = data[HEADER_SIZE:]
    if len(remaining) > MAX_DATA_SIZE:
        logger.warn("Data part of the file is too large, max supported is 1 MB")
    raw = remaining[:MAX_DATA_SIZE]
    size = _trimmed_size(raw)
    _read_strings(textfile.groups, raw + b"\0", size, codec, logger)
    return textfile


def _empty_entries(last_written: int, next_index: int, offset: int) -> bytes:
    count = max(0, next_index - last_written - 1)
    return _INDEX.pack(offset, 0) * count


def write_text_eng(textfile: TextFile, encoding: str, logger: Logger) -> bytes:
    """Serialise a text file into ENG bytes, groups ordered by ID.

    Raises ConversionError when the encoding is unavailable.
    """
    codec = make_codec(encoding, logger)
    groups = sorted(textfile.groups, key=lambda group: group.id)

    name = codec.encode(textfile.name)
    if len(name) > NAME_SIZE:
        logger.warn(
            f"Name '{textfile.name}' is longer than 16 characters and will be truncated"
        )
    out = bytearray(name[:NAME_SIZE].ljust(NAME_SIZE, b"\0"))
    out += _COUNTS.pack(
        textfile.max_group_id() + 1,
        textfile.total_strings(),
        textfile.total_words(),
    )

    text = bytearray()
    last_written = -1
    for group in groups:
        out += _empty_entries(last_written, group.id, len(text))
        last_written = group.id
        used = len(group) if textfile.index_with_counts else 1
        out += _INDEX.pack(len(text), used)
        for string in group.strings:
            text += codec.encode(string)
            text.append(0)
    out += _empty_entries(last_written, MAX_INDEX_ENTRIES, 0)
    text.append(0)
    out += text
    if len(text) % 2:
        out.append(0)
    return bytes(out)