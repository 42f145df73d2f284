import pytest

from fsbrowse.filetypes import (
    DEFAULT_GROUPS,
    ExtensionTypeTable,
    extension_types_from_filenames,
    file_extension_type,
)


@pytest.fixture
def table():
    return ExtensionTypeTable()


def test_first_default_group_is_zero(table):
    assert table.get_extension_type("bin") == 0


def test_leading_dot_is_optional(table):
    assert table.get_extension_type(".pdf") == table.get_extension_type("pdf")
    assert table.get_extension_type("pdf") >= 0


def test_same_group_shares_type(table):
    assert table.get_extension_type("jpg") == table.get_extension_type("png")
    assert table.get_extension_type("zip") == table.get_extension_type("rar")
    assert table.get_extension_type("jpg") != table.get_extension_type("zip")


def test_last_default_group_number(table):
    assert table.get_extension_type("html") == len(DEFAULT_GROUPS) - 1


def test_case_insensitive_by_default(table):
    assert table.get_extension_type("PNG") == table.get_extension_type("png")


def test_case_sensitive_match(table):
    assert table.get_extension_type("PNG", True) == -1
    assert table.get_extension_type("png", True) == table.get_extension_type("png")


@pytest.mark.parametrize("ext", [None, "", ".", "unknownext", ".qqq"])
def test_unknown_extensions(table, ext):
    assert table.get_extension_type(ext) == -1


def test_add_returns_token_count_and_new_group():
    empty = ExtensionTypeTable(groups=())
    assert empty.add("foo;bar;;baz") == 3
    assert empty.add("qux") == 1
    assert empty.get_extension_type("foo") == 0
    assert empty.get_extension_type("baz") == empty.get_extension_type("bar")
    assert empty.get_extension_type("qux") == 1


def test_first_match_wins():
    custom = ExtensionTypeTable(groups=("abc", "abc;def"))
    assert custom.get_extension_type("abc") == 0
    assert custom.get_extension_type("def") == 1


@pytest.mark.parametrize("bad", ["", "a", ";", ";;;"])
def test_add_rejects_bad_groups(bad):
    with pytest.raises(ValueError):
        ExtensionTypeTable(groups=()).add(bad)


def test_add_rejects_too_long_group():
    with pytest.raises(ValueError):
        ExtensionTypeTable(groups=()).add("x" * 600)


def test_types_for_filenames(table):
    names = ["photo.JPG", "README", "archive.tar.gz", "notes.txt"]
    assert table.types_for_filenames(names) == [
        table.get_extension_type("jpg"),
        -1,
        table.get_extension_type("gz"),
        table.get_extension_type("txt"),
    ]


def test_module_functions_use_default_table(table):
    assert file_extension_type("docs/report.PDF") == table.get_extension_type("pdf")
    assert file_extension_type("Makefile") == -1
    names = ["a.cpp", "b.h", "c"]
    assert extension_types_from_filenames(names) == table.types_for_filenames(names)


def test_extension_types_length_matches_input():
    names = ["x.mp3", "y.mkv", "z.unknown", "w"]
    result = extension_types_from_filenames(names)
    assert len(result) == len(names)
    assert result[2] == -1 and result[3] == -1