from engconvert.textfile import TextFile
from engconvert.textgroup import TextGroup


def test_empty_file_defaults():
    textfile = TextFile()
    assert textfile.name == ""
    assert textfile.groups == []
    assert textfile.index_with_counts is False
    assert textfile.max_group_id() == 0
    assert textfile.total_strings() == 0
    assert textfile.total_words() == 0


def test_max_group_id_is_highest_id():
    textfile = TextFile(groups=[TextGroup(4), TextGroup(17), TextGroup(9)])
    assert textfile.max_group_id() == 17


def test_total_strings_counts_all_groups():
    first = TextGroup(0, strings=["a", "b"])
    second = TextGroup(1, strings=["c"])
    textfile = TextFile(groups=[first, second])
    assert textfile.total_strings() == len(first) + len(second)


def test_total_words_sums_groups():
    first = TextGroup(0, strings=["one two"])
    second = TextGroup(1, strings=["three"])
    textfile = TextFile(groups=[first, second])
    assert textfile.total_words() == 3
    assert textfile.total_words() == first.total_words() + second.total_words()


def test_groups_are_independent_between_instances():
    a = TextFile()
    b = TextFile()
    a.groups.append(TextGroup(1))
    assert b.groups == []