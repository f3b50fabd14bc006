import pytest

from engconvert.logger import ConversionError, Logger
from engconvert.messageentry import (
    Dialog,
    Image,
    MessageEntry,
    MessageString,
    StringWithPosition,
)
from engconvert.messagefile import MessageFile
from engconvert.messagexml import read_message_xml, write_message_xml


def _full_entry() -> MessageEntry:
    return MessageEntry(
        7,
        type=2,
        subtype=3,
        image=Image(100, 5, 6),
        image2=Image(200, 7, 8),
        dialog=Dialog(10, 20, 30, 40),
        urgent=True,
        title=StringWithPosition(text="Title", x=1, y=2),
        subtitle=StringWithPosition(text="Sub", x=3, y=4),
        video=StringWithPosition(text="intro.smk", x=5, y=6),
        content=MessageString(text="Line one\x0eLine two"),
    )


def test_write_minimal_document():
    messagefile = MessageFile(
        name="mm",
        total_entries=10,
        entries=[MessageEntry(1, type=2, subtype=0, dialog=Dialog(1, 2, 3, 4))],
    )
    expected = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<messages name="mm" entries="10">\n'
        '    <message id="1" type="2" subtype="0">\n'
        '        <dialog x="1" y="2" width="3" height="4"/>\n'
        "    </message>\n"
        "</messages>\n"
    )
    assert write_message_xml(messagefile).decode("utf-8") == expected


def test_round_trip_preserves_entries():
    original = MessageFile(
        name="c3_mm",
        total_entries=400,
        entries=[_full_entry(), MessageEntry(9, type=1, dialog=Dialog(0, 0, 5, 5))],
    )
    result = read_message_xml(write_message_xml(original), Logger())
    assert result == original


def test_round_trip_empty_file():
    original = MessageFile(name="empty", total_entries=0)
    result = read_message_xml(write_message_xml(original), Logger())
    assert result == original


def test_content_tilde_becomes_control_character():
    data = (
        b'<messages name="m" entries="5">'
        b'<message id="1" type="0" subtype="0">'
        b'<dialog x="0" y="0" width="1" height="1"/>'
        b"<content>a~b</content>"
        b"</message></messages>"
    )
    result = read_message_xml(data, Logger())
    assert result.entries[0].content.text == "a\x0eb"


def test_written_content_uses_tilde():
    output = write_message_xml(MessageFile(name="m", total_entries=10, entries=[_full_entry()]))
    assert b"<content>Line one~Line two</content>" in output
    assert b"\x0e" not in output


def test_urgent_attribute_only_when_set():
    entry = MessageEntry(1, dialog=Dialog(1, 1, 1, 1))
    plain = write_message_xml(MessageFile(total_entries=2, entries=[entry]))
    entry.urgent = True
    urgent = write_message_xml(MessageFile(total_entries=2, entries=[entry]))
    assert b"urgent" not in plain
    assert b'urgent="true"' in urgent


def test_empty_images_and_texts_are_omitted():
    entry = MessageEntry(1, dialog=Dialog(1, 1, 1, 1))
    output = write_message_xml(MessageFile(total_entries=2, entries=[entry]))
    for tag in (b"<image", b"<title", b"<subtitle", b"<video", b"<content"):
        assert tag not in output


def test_special_characters_round_trip():
    entry = MessageEntry(
        0,
        dialog=Dialog(1, 1, 1, 1),
        title=StringWithPosition(text="<a & b>", x=1, y=1),
    )
    original = MessageFile(name='say "hi"', total_entries=1, entries=[entry])
    result = read_message_xml(write_message_xml(original), Logger())
    assert result.name == 'say "hi"'
    assert result.entries[0].title.text == "<a & b>"


def test_wrong_root_raises_and_logs():
    logger = Logger()
    with pytest.raises(ConversionError):
        read_message_xml(b'<strings name="x"/>', logger)
    assert logger.messages() == ["ERROR: Unable to find root <messages> element"]


def test_missing_entries_attribute_raises():
    with pytest.raises(ConversionError):
        read_message_xml(b'<messages name="x"/>', Logger())


def test_missing_dialog_raises():
    data = (
        b'<messages entries="2">'
        b'<message id="1" type="0" subtype="0"><content>x</content></message>'
        b"</messages>"
    )
    with pytest.raises(ConversionError):
        read_message_xml(data, Logger())


def test_invalid_integer_raises():
    data = (
        b'<messages entries="2">'
        b'<message id="one" type="0" subtype="0">'
        b'<dialog x="0" y="0" width="1" height="1"/></message>'
        b"</messages>"
    )
    with pytest.raises(ConversionError):
        read_message_xml(data, Logger())


def test_invalid_xml_raises():
    with pytest.raises(ConversionError):
        read_message_xml(b"<messages", Logger())


def test_unexpected_tag_is_logged_with_context_and_skipped():
    logger = Logger()
    data = (
        b'<messages entries="10">'
        b'<message id="5" type="0" subtype="0">'
        b'<dialog x="0" y="0" width="1" height="1"/>'
        b"<foo/>"
        b"</message></messages>"
    )
    result = read_message_xml(data, logger)
    assert [entry.id for entry in result.entries] == [5]
    assert logger.messages() == ["Message 5: ERROR: Unexpected tag foo in message 5"]
    logger.info("after")
    assert logger.messages()[-1] == "after"