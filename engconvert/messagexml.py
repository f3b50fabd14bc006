"""Reading and writing message files in the XML format."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from xml.sax.saxutils import escape

from .logger import ConversionError, Logger
from .messageentry import Dialog, Image, MessageEntry, StringWithPosition
from .messagefile import MessageFile

_INTEGER = re.compile(r"\s*[+-]?\d+\s*")
_TEXT_ENTITIES = {"\r": "&#13;"}
_ATTRIBUTE_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}
_INDENT = "    "

_CONTROL = "\x0e"
"""Character the game uses inside message content, stored as '~' in XML."""

_TILDE = "~"


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


def _boolean_attribute(element: ET.Element, name: str) -> bool:
    value = element.get(name)
    return value is not None and value.strip().lower() == "true"


def _element_text(element: ET.Element) -> str:
    return "".join(element.itertext())


def _read_entry(element: ET.Element, logger: Logger) -> MessageEntry:
    entry_id = _integer_attribute(element, "id", logger)
    kind = _integer_attribute(element, "type", logger)
    subtype = _integer_attribute(element, "subtype", logger)
    logger.set_context(f"Message {entry_id}")

    entry = MessageEntry(
        entry_id,
        type=kind,
        subtype=subtype,
        urgent=_boolean_attribute(element, "urgent"),
    )

    children = list(element)
    if not children or children[0].tag != "dialog":
        raise _fail(logger, f"Expected <dialog> element in message {entry_id}")
    dialog = children[0]
    entry.dialog = Dialog(
        *(_integer_attribute(dialog, name, logger) for name in ("x", "y", "width", "height"))
    )

    for child in children[1:]:
        tag = child.tag
        if tag in ("image", "image2"):
            image = Image(
                *(_integer_attribute(child, name, logger) for name in ("graphic", "x", "y"))
            )
            setattr(entry, tag, image)
        elif tag in ("title", "subtitle", "video"):
            target: StringWithPosition = getattr(entry, tag)
            target.x = _integer_attribute(child, "x", logger)
            target.y = _integer_attribute(child, "y", logger)
            target.text = _element_text(child)
        elif tag == "content":
            entry.content.text = _element_text(child).replace(_TILDE, _CONTROL)
        else:
            logger.error(f"Unexpected tag {tag} in message {entry_id}")
    return entry


def read_message_xml(data: bytes, logger: Logger) -> MessageFile:
    """Parse an XML message file.

    Raises ConversionError, after logging the reason, when the document is
    not a valid messages file. Unknown tags inside a message are logged and
    skipped.
    """
    root = _parse(data, logger)
    if root.tag != "messages":
        raise _fail(logger, "Unable to find root <messages> element")
    messagefile = MessageFile()
    if "name" in root.attrib:
        messagefile.name = root.attrib["name"]
    messagefile.total_entries = _integer_attribute(root, "entries", logger)
    try:
        for child in root:
            if child.tag != "message":
                raise _fail(logger, f"Unexpected tag {child.tag} in <messages>")
            messagefile.entries.append(_read_entry(child, logger))
    finally:
        logger.set_context("")
    return messagefile


def _attributes(pairs: Iterable[tuple[str, object]]) -> str:
    return " ".join(
        f'{key}="{escape(str(value), _ATTRIBUTE_ENTITIES)}"' for key, value in pairs
    )


def _text(value: str) -> str:
    return escape(value, _TEXT_ENTITIES)


def _entry_lines(entry: MessageEntry) -> list[str]:
    inner = _INDENT * 2
    attrs: list[tuple[str, object]] = [
        ("id", entry.id),
        ("type", entry.type),
        ("subtype", entry.subtype),
    ]
    if entry.urgent:
        attrs.append(("urgent", "true"))
    lines = [f"{_INDENT}<message {_attributes(attrs)}>"]

    d = entry.dialog
    dialog_attrs = _attributes(
        [("x", d.x), ("y", d.y), ("width", d.width), ("height", d.height)]
    )
    lines.append(f"{inner}<dialog {dialog_attrs}/>")

    for tag, image in (("image", entry.image), ("image2", entry.image2)):
        if not image.is_empty():
            image_attrs = _attributes(
                [("graphic", image.graphic), ("x", image.x), ("y", image.y)]
            )
            lines.append(f"{inner}<{tag} {image_attrs}/>")

    for tag, string in (
        ("title", entry.title),
        ("subtitle", entry.subtitle),
        ("video", entry.video),
    ):
        if not string.is_empty():
            position = _attributes([("x", string.x), ("y", string.y)])
            lines.append(f"{inner}<{tag} {position}>{_text(string.text)}</{tag}>")

    if entry.content.text:
        content = _text(entry.content.text.replace(_CONTROL, _TILDE))
        lines.append(f"{inner}<content>{content}</content>")

    lines.append(f"{_INDENT}</message>")
    return lines


def write_message_xml(messagefile: MessageFile) -> bytes:
    """Serialise a message file as an indented UTF-8 XML document."""
    root_attrs = _attributes(
        [("name", messagefile.name), ("entries", messagefile.total_entries)]
    )
    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    if messagefile.entries:
        lines.append(f"<messages {root_attrs}>")
        for entry in messagefile.entries:
            lines.extend(_entry_lines(entry))
        lines.append("</messages>")
    else:
        lines.append(f"<messages {root_attrs}/>")
    return ("\n".join(lines) + "\n").encode("utf-8")