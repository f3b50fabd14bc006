"""Reading and writing message files in the binary ENG format."""

from __future__ import annotations

import struct

from .encoding import StandardCodec, make_codec
from .logger import ConversionError, Logger
from .messageentry import (
    Dialog,
    Image,
    MessageEntry,
    MessageString,
    StringWithPosition,
)
from .messagefile import MessageFile

MAX_DATA_SIZE = 1_000_000
"""Largest data part that is read; the original files hold about 520 kB."""

NAME_SIZE = 16

_HEADER = struct.Struct(f"<{NAME_SIZE}s2i")
_ENTRY = struct.Struct("<2h2x4h3h3h2h2h4x2h14x2i4x3i")
ENTRY_SIZE = _ENTRY.size
"""Size of one index entry."""

_TEXT_PREFIX = 16
"""Zero bytes in front of the data so that every string offset is non-zero."""


def _int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _int32(value: int) -> int:
    return ((value + 0x8000_0000) & 0xFFFF_FFFF) - 0x8000_0000


def _decode_name(raw: bytes, codec: StandardCodec) -> str:
    end = raw.find(b"\0")
    if end >= 0:
        raw = raw[:end]
    return codec.decode(raw)


def _trimmed_size(raw: bytes) -> int:
    size = len(raw)
    while size > 1 and raw[size - 1] == 0 and raw[size - 2] == 0:
        size -= 1
    return size


def _entry_from_fields(entry_id: int, fields: tuple[int, ...]) -> MessageEntry:
    (
        kind, subtype,
        dx, dy, width, height,
        g1, x1, y1,
        g2, x2, y2,
        tx, ty, sx, sy, vx, vy,
        urgent, video_offset, title_offset, subtitle_offset, content_offset,
    ) = fields
    return MessageEntry(
        id=entry_id,
        type=kind,
        subtype=subtype,
        dialog=Dialog(dx, dy, width, height),
        image=Image(g1, x1, y1),
        image2=Image(g2, x2, y2),
        urgent=bool(urgent),
        title=StringWithPosition(offset=title_offset, x=tx, y=ty),
        subtitle=StringWithPosition(offset=subtitle_offset, x=sx, y=sy),
        video=StringWithPosition(offset=video_offset, x=vx, y=vy),
        content=MessageString(offset=content_offset),
    )


def _read_string(
    target: MessageString,
    buffer: bytes,
    size: int,
    entry_id: int,
    field_name: str,
    codec: StandardCodec,
    logger: Logger,
) -> bool:
    offset = target.offset
    if not offset:
        return True
    if offset < 0 or offset > size:
        logger.error(
            f"Invalid data offset {offset} for {field_name} text in entry {entry_id}"
        )
        return False
    end = buffer.index(0, offset)
    target.text = codec.decode(buffer[offset:end])
    return True


def read_message_eng(data: bytes, encoding: str, logger: Logger) -> MessageFile:
    """Parse the bytes of an ENG message file.

    Entries with no content are left out. Raises ConversionError when the
    encoding is unavailable or a string offset points outside the data.
    """
    codec = make_codec(encoding, logger)
    data = bytes(data)
    name_raw, total, _used = _HEADER.unpack(
        data[: _HEADER.size].ljust(_HEADER.size, b"\0")
    )
    messagefile = MessageFile(name=_decode_name(name_raw, codec), total_entries=total)

    count = max(total, 0)
    table_end = _HEADER.size + count * ENTRY_SIZE
    table = data[_HEADER.size:table_end]
    # entries past the end of the data read as zero, which makes them empty
    available = min(count, -(-len(table) // ENTRY_SIZE))
    table = table.ljust(available * ENTRY_SIZE, b"\0")
    for entry_id, fields in enumerate(_ENTRY.iter_unpack(table)):
        entry = _entry_from_fields(entry_id, fields)
        if not entry.is_empty():
            messagefile.entries.append(entry)

    remaining = data[table_end:]
    if len(remaining) > MAX_DATA_SIZE:
        logger.warn("Data part of the file is too large, max supported is 1 MB")
    raw = remaining[:MAX_DATA_SIZE]
    size = _trimmed_size(raw)
    buffer = raw + b"\0"

    ok = True
    for entry in messagefile.entries:
        for field_name, target in (
            ("video", entry.video),
            ("title", entry.title),
            ("subtitle", entry.subtitle),
            ("content", entry.content),
        ):
            ok &= _read_string(target, buffer, size, entry.id, field_name, codec, logger)
    if not ok:
        raise ConversionError("Message file contains invalid data offsets")
    return messagefile


def _store_string(string: MessageString, text: bytearray, codec: StandardCodec) -> int:
    if not string.text:
        return 0
    offset = len(text)
    text += codec.encode(string.text)
    text.append(0)
    return offset


def _empty_entries(last_written: int, next_index: int) -> bytes:
    return bytes(ENTRY_SIZE * max(0, next_index - last_written - 1))


def _pack_entry(entry: MessageEntry, text: bytearray, codec: StandardCodec) -> bytes:
    video_offset = _store_string(entry.video, text, codec)
    title_offset = _store_string(entry.title, text, codec)
    subtitle_offset = _store_string(entry.subtitle, text, codec)
    content_offset = _store_string(entry.content, text, codec)
    d, i1, i2 = entry.dialog, entry.image, entry.image2
    shorts = [
        entry.type, entry.subtype,
        d.x, d.y, d.width, d.height,
        i1.graphic, i1.x, i1.y,
        i2.graphic, i2.x, i2.y,
        entry.title.x, entry.title.y,
        entry.subtitle.x, entry.subtitle.y,
        entry.video.x, entry.video.y,
    ]
    ints = [
        1 if entry.urgent else 0,
        video_offset, title_offset, subtitle_offset, content_offset,
    ]
    return _ENTRY.pack(*map(_int16, shorts), *map(_int32, ints))


def write_message_eng(messagefile: MessageFile, encoding: str, logger: Logger) -> bytes:
    """Serialise a message file into ENG bytes, entries ordered by ID.

    Raises ConversionError when the encoding is unavailable.
    """
    codec = make_codec(encoding, logger)
    entries = sorted(messagefile.entries, key=lambda entry: entry.id)

    name = codec.encode(messagefile.name)
    if len(name) > NAME_SIZE:
        logger.warn(
            f"Name '{messagefile.name}' is longer than 16 characters and will be truncated"
        )
    out = bytearray(
        _HEADER.pack(
            name[:NAME_SIZE],
            _int32(messagefile.total_entries),
            _int32(messagefile.max_entry_id() + 1),
        )
    )

    text = bytearray(_TEXT_PREFIX)
    last_written = -1
    for entry in entries:
        out += _empty_entries(last_written, entry.id)
        last_written = entry.id
        out += _pack_entry(entry, text, codec)
    out += _empty_entries(last_written, messagefile.total_entries)
    text.append(0)
    out += text
    return bytes(out)