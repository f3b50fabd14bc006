"""Detection of file types and conversion between ENG and XML files."""

from __future__ import annotations

import os
import struct
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path

from .logger import ConversionError, Logger
from .messageeng import read_message_eng, write_message_eng
from .messagexml import read_message_xml, write_message_xml
from .texteng import read_text_eng, write_text_eng
from .textxml import read_text_xml, write_text_xml

StrPath = str | os.PathLike


class FileType(Enum):
    """Kind of language file."""

    MESSAGE = "message"
    TEXT = "text"
    UNKNOWN = "unknown"


_NAME_SIZE = 16
_PROBE_SKIP = 8000
_SIGNED = struct.Struct("<i")
_UNSIGNED = struct.Struct("<I")

_XML_ROOTS = {"strings": FileType.TEXT, "messages": FileType.MESSAGE}


def _read_int(data: bytes, offset: int, layout: struct.Struct) -> int:
    chunk = data[offset:offset + layout.size]
    if len(chunk) < layout.size:
        return 0
    return layout.unpack(chunk)[0]


def detect_eng_file_type(data: bytes) -> FileType:
    """Guess whether ENG bytes hold a text file or a message file."""
    data = bytes(data)
    first = _read_int(data, _NAME_SIZE, _SIGNED)
    second = _read_int(data, _NAME_SIZE + 4, _SIGNED)
    if first in (400, 1000) and first >= second:
        # total entries followed by used entries
        return FileType.MESSAGE
    if first <= 400 and first <= second:
        # used groups followed by the total number of strings
        return FileType.TEXT
    probe = _NAME_SIZE + 8 + _PROBE_SKIP
    zero = _read_int(data, probe, _UNSIGNED)
    nonzero = _read_int(data, probe + 4, _UNSIGNED)
    if zero == 0 and nonzero != 0:
        return FileType.TEXT
    return FileType.UNKNOWN


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def detect_xml_file_type(data: bytes) -> FileType:
    """Guess the kind of an XML file from its <strings> or <messages> elements.

    The last such element seen wins; scanning stops at the first XML error.
    """
    parser = ET.XMLPullParser(events=("start",))
    file_type = FileType.UNKNOWN
    try:
        parser.feed(bytes(data))
        for _event, element in parser.read_events():
            file_type = _XML_ROOTS.get(_local_name(element.tag), file_type)
        parser.close()
    except ET.ParseError:
        pass
    return file_type


def _read_input(path: StrPath, logger: Logger) -> bytes | None:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        logger.error(f"Unable to open input file: {exc.strerror or exc}")
        return None


def _write_output(path: StrPath, data: bytes, kind: str, logger: Logger) -> None:
    try:
        Path(path).write_bytes(data)
    except OSError as exc:
        message = f"Unable to open {kind} file for writing: {exc.strerror or exc}"
        logger.error(message)
        raise ConversionError(message) from exc


def _unknown_type(logger: Logger) -> ConversionError:
    message = "Unknown input file type"
    logger.error(message)
    return ConversionError(message)


def _log_type(file_type: FileType, logger: Logger) -> None:
    logger.info(f"Determined file type: {file_type.value}")


def convert_eng_to_xml(
    input_path: StrPath, output_path: StrPath, encoding: str, logger: Logger
) -> None:
    """Convert an ENG file to XML.

    Raises ConversionError, after logging the reason, on failure.
    """
    data = _read_input(input_path, logger)
    file_type = detect_eng_file_type(data) if data is not None else FileType.UNKNOWN
    if file_type is FileType.TEXT:
        _log_type(file_type, logger)
        output = write_text_xml(read_text_eng(data, encoding, logger))
    elif file_type is FileType.MESSAGE:
        _log_type(file_type, logger)
        output = write_message_xml(read_message_eng(data, encoding, logger))
    else:
        raise _unknown_type(logger)
    _write_output(output_path, output, "XML", logger)


def convert_xml_to_eng(
    input_path: StrPath, output_path: StrPath, encoding: str, logger: Logger
) -> None:
    """Convert an XML file to ENG.

    Raises ConversionError, after logging the reason, on failure.
    """
    data = _read_input(input_path, logger)
    file_type = detect_xml_file_type(data) if data is not None else FileType.UNKNOWN
    if file_type is FileType.TEXT:
        _log_type(file_type, logger)
        output = write_text_eng(read_text_xml(data, logger), encoding, logger)
    elif file_type is FileType.MESSAGE:
        _log_type(file_type, logger)
        output = write_message_eng(read_message_xml(data, logger), encoding, logger)
    else:
        raise _unknown_type(logger)
    _write_output(output_path, output, "ENG", logger)