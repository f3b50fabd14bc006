"""Reading and writing text files in the XML format."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape

from .logger import ConversionError, Logger
from .textfile import TextFile
from .textgroup import TextGroup

_INTEGER = re.compile(r"\s*[+-]?\d+\s*")
_TEXT_ENTITIES = {"\r": "&#13;"}
_ATTRIBUTE_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}
_INDENT = "    "


def _fail(logger: Logger, message: str) -> ConversionError:
    logger.error(message)
    return ConversionError(message)


def _parse(data: bytes, logger: Logger) -> ET.Element:
    try:
        return ET.fromstring(bytes(data))
    except ET.ParseError as exc:
        raise _fail(logger, f"Invalid XML: {exc}") from exc


def _integer_attribute(element: ET.Element, name: str, logger: Logger) -> int:
    value = element.get(name)
    if value is None or not _INTEGER.fullmatch(value):
        raise _fail(
            logger,
            f"Missing or invalid integer attribute '{name}' on <{element.tag}>",
        )
    return int(value)


def _read_group(element: ET.Element, logger: Logger) -> TextGroup:
    group = TextGroup(_integer_attribute(element, "id", logger))
    for child in element:
        if child.tag != "string":
            raise _fail(logger, f"Unexpected tag {child.tag} in group {group.id}")
        if _integer_attribute(child, "id", logger) != len(group):
            raise _fail(
                logger, f"Strings in group {group.id} are not ordered properly"
            )
        group.add("".join(child.itertext()))
    return group


def read_text_xml(data: bytes, logger: Logger) -> TextFile:
    """Parse an XML text file.

    Raises ConversionError, after logging the reason, when the document is
    not a valid strings file.
    """
    root = _parse(data, logger)
    if root.tag != "strings":
        raise _fail(logger, "Unable to find root <strings> element")
    textfile = TextFile()
    if "name" in root.attrib:
        textfile.name = root.attrib["name"]
    if "indexWithCounts" in root.attrib:
        textfile.index_with_counts = root.attrib["indexWithCounts"] != "false"
    for child in root:
        if child.tag != "group":
            raise _fail(logger, f"Unexpected tag {child.tag} in <strings>")
        textfile.groups.append(_read_group(child, logger))
    return textfile


def _attribute(value: str) -> str:
    return escape(value, _ATTRIBUTE_ENTITIES)


def _group_lines(group: TextGroup) -> list[str]:
    opening = f'{_INDENT}<group id="{group.id}"'
    if not group.strings:
        return [opening + "/>"]
    lines = [opening + ">"]
    lines.extend(
        f'{_INDENT * 2}<string id="{index}">{escape(text, _TEXT_ENTITIES)}</string>'
        for index, text in enumerate(group.strings)
    )
    lines.append(f"{_INDENT}</group>")
    return lines


def write_text_xml(textfile: TextFile) -> bytes:
    """Serialise a text file as an indented UTF-8 XML document."""
    counts = "true" if textfile.index_with_counts else "false"
    opening = f'<strings name="{_attribute(textfile.name)}" indexWithCounts="{counts}"'
    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    if textfile.groups:
        lines.append(opening + ">")
        for group in textfile.groups:
            lines.extend(_group_lines(group))
        lines.append("</strings>")
    else:
        lines.append(opening + "/>")
    return ("\n".join(lines) + "\n").encode("utf-8")