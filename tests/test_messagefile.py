from engconvert.messageentry import MessageEntry
from engconvert.messagefile import MessageFile


def test_defaults():
    messagefile = MessageFile()
    assert messagefile.name == ""
    assert messagefile.total_entries == 0
    assert messagefile.entries == []


def test_max_entry_id_empty_is_zero():
    assert MessageFile().max_entry_id() == 0


def test_max_entry_id_is_highest():
    messagefile = MessageFile(
        entries=[MessageEntry(3), MessageEntry(7), MessageEntry(1)]
    )
    assert messagefile.max_entry_id() == 7


def test_entries_are_independent_between_instances():
    a = MessageFile()
    b = MessageFile()
    a.entries.append(MessageEntry(5))
    assert b.entries == []
    assert a.max_entry_id() == 5