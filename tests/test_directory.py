import os

import pytest

from fsbrowse.directory import (
    Entry,
    Sorting,
    create_directory,
    directory_exists,
    file_exists,
    get_directories,
    get_files,
    get_files_filtered,
    get_user_known_directories,
    path_exists,
    read_file,
    sort_key,
)


def _write(path, size=1):
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture
def tree(tmp_path):
    _write(tmp_path / "beta.TXT", 3)
    _write(tmp_path / "Alpha.png", 10)
    _write(tmp_path / "gamma.txt", 1)
    _write(tmp_path / "noext", 5)
    _write(tmp_path / ".hidden", 1)
    _write(tmp_path / "backup~", 1)
    (tmp_path / "Sub").mkdir()
    (tmp_path / "another").mkdir()
    (tmp_path / ".git").mkdir()
    return tmp_path


def _names(entries):
    return [e.name for e in entries]


def test_get_files_alphabetic_case_insensitive(tree):
    entries = get_files(str(tree))
    assert _names(entries) == ["Alpha.png", "beta.TXT", "gamma.txt", "noext"]
    assert entries[0].path == f"{tree}/Alpha.png"


def test_get_files_trailing_slash_in_directory(tree):
    entries = get_files(str(tree) + "/")
    assert entries[0].path == f"{tree}/Alpha.png"


def test_get_files_inverse(tree):
    assert _names(get_files(str(tree), Sorting.ALPHABETIC_INVERSE)) == [
        "noext", "gamma.txt", "beta.TXT", "Alpha.png"
    ]


def test_get_directories_skips_hidden(tree):
    assert _names(get_directories(str(tree))) == ["another", "Sub"]


def test_size_sorting(tree):
    assert _names(get_files(str(tree), Sorting.SIZE)) == ["gamma.txt", "beta.TXT", "noext", "Alpha.png"]
    assert _names(get_files(str(tree), Sorting.SIZE_INVERSE)) == ["Alpha.png", "noext", "beta.TXT", "gamma.txt"]


def test_type_sorting_puts_no_extension_first(tree):
    names = _names(get_files(str(tree), Sorting.TYPE))
    assert names[0] == "noext"
    assert names[1] == "Alpha.png"
    assert set(names[2:]) == {"beta.TXT", "gamma.txt"}
    inverse = _names(get_files(str(tree), Sorting.TYPE_INVERSE))
    assert inverse[-1] == "noext"


def test_last_modification_sorting(tree):
    for offset, name in enumerate(["noext", "gamma.txt", "Alpha.png", "beta.TXT"]):
        os.utime(tree / name, (1_000_000 + offset * 100, 1_000_000 + offset * 100))
    order = _names(get_files(str(tree), Sorting.LAST_MODIFICATION))
    assert order == ["noext", "gamma.txt", "Alpha.png", "beta.TXT"]
    assert _names(get_files(str(tree), Sorting.LAST_MODIFICATION_INVERSE)) == order[::-1]


def test_sort_key_unknown_value_falls_back_to_alphabetic():
    entries = [Entry("/x/b", "b"), Entry("/x/A", "A")]
    assert sorted(entries, key=sort_key(42)) == sorted(entries, key=sort_key(Sorting.ALPHABETIC))
    assert sorted(entries, key=sort_key(42))[0].name == "A"


def test_missing_directory_lists_nothing(tmp_path):
    assert get_files(str(tmp_path / "missing")) == []
    assert get_directories(str(tmp_path / "missing")) == []


def test_filtered_wanted(tree):
    assert _names(get_files_filtered(str(tree), ".TXT")) == ["beta.TXT", "gamma.txt"]
    assert _names(get_files_filtered(str(tree), ".png;.txt")) == ["Alpha.png", "beta.TXT", "gamma.txt"]


def test_filtered_unwanted(tree):
    assert _names(get_files_filtered(str(tree), "", ".txt")) == ["Alpha.png", "noext"]


def test_filtered_nothing_returns_all(tree):
    assert get_files_filtered(str(tree), None, None) == get_files(str(tree))


def test_exists_checks(tree):
    assert directory_exists(str(tree / "Sub"))
    assert not directory_exists(str(tree / "noext"))
    assert file_exists(str(tree / "noext"))
    assert not file_exists(str(tree / "Sub"))
    assert path_exists(str(tree / "Sub")) and path_exists(str(tree / "noext"))
    assert not path_exists(str(tree / "nothing"))


def test_create_directory(tmp_path):
    target = tmp_path / "New Folder"
    assert create_directory(str(target)) is True
    assert target.is_dir()
    assert create_directory(str(tmp_path / "a" / "b")) is False


def test_read_file_binary_and_text(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"\x00\x01hello")
    assert read_file(str(path)) == b"\x00\x01hello"
    text_path = tmp_path / "data.txt"
    text_path.write_text("line one\n", encoding="utf-8")
    assert read_file(str(text_path), True) == "line one\n"


def test_read_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file(str(tmp_path / "absent"))


def test_known_directories(tmp_path, monkeypatch):
    home = tmp_path / "someone"
    home.mkdir()
    (home / "Documents").mkdir()
    (home / "Music").mkdir()
    monkeypatch.setenv("HOME", str(home))
    known = get_user_known_directories(True)
    assert known.paths[:3] == [str(home), f"{home}/Documents", f"{home}/Music"]
    assert known.display_names[:3] == ["Home", "Documents", "Music"]
    assert known.number_except_drives == 3
    assert len(known.paths) == len(known.display_names)
    assert get_user_known_directories() is known
    get_user_known_directories(True)