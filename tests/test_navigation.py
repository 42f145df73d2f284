import pytest

from fsbrowse.navigation import (
    BrowsingLayout,
    FolderInfo,
    History,
    browsing_layout,
    split_path_index_of_zip_file,
)
from fsbrowse.paths import split


DEEP = "/home/user/docs"


def test_from_current_folder_sets_both_folders():
    info = FolderInfo.from_current_folder(DEEP)
    assert info.full_folder == DEEP
    assert info.current_folder == DEEP
    assert info.split_path_index == len(split(DEEP)) - 1
    assert info.split_path_index_of_zip_file == -1


def test_from_current_folder_empty_is_reset():
    info = FolderInfo.from_current_folder("")
    assert info == FolderInfo()
    assert info.split_path_index == -1
    assert info.current_folder == ""


def test_split_path_matches_paths_split():
    info = FolderInfo.from_current_folder(DEEP)
    assert info.split_path() == split(DEEP)


def test_is_equal_with_string_and_info():
    info = FolderInfo.from_current_folder(DEEP)
    assert info.is_equal(DEEP)
    assert info.is_equal(FolderInfo.from_current_folder(DEEP))
    assert not info.is_equal("/home")
    ancestor = info.for_split_path_index(1)
    assert not info.is_equal(ancestor)


@pytest.mark.parametrize("index", [0, 1, 2, 3])
def test_for_split_path_index_round_trip(index):
    info = FolderInfo.from_current_folder(DEEP)
    ancestor = info.for_split_path_index(index)
    assert ancestor.split_path_index == index
    assert ancestor.full_folder == DEEP
    assert info.split_path_index_for(ancestor.current_folder) == index


def test_for_split_path_index_last_is_full_folder():
    info = FolderInfo.from_current_folder(DEEP)
    last = info.for_split_path_index(len(split(DEEP)) - 1)
    assert last.current_folder == DEEP


def test_for_split_path_index_root():
    info = FolderInfo.from_current_folder(DEEP)
    assert info.for_split_path_index(0).current_folder == "/"


@pytest.mark.parametrize("bad", [-1, 4, 10])
def test_for_split_path_index_out_of_range(bad):
    info = FolderInfo.from_current_folder(DEEP)
    with pytest.raises(IndexError):
        info.for_split_path_index(bad)


def test_split_path_index_for_unrelated_path():
    info = FolderInfo.from_current_folder(DEEP)
    assert info.split_path_index_for("/var") == -1
    assert info.split_path_index_for("") == -1
    assert info.split_path_index_for(None) == -1
    # a prefix that is not a whole component
    assert info.split_path_index_for("/home/us") == -1


def test_zip_index_in_split_path():
    assert split_path_index_of_zip_file(["/", "data/", "arch.ZIP/", "inner"]) == 2
    assert split_path_index_of_zip_file(["/", "a.zip"]) == 1
    assert split_path_index_of_zip_file([".zip"]) == -1
    assert split_path_index_of_zip_file(["/", "zipper/", "file"]) == -1
    assert split_path_index_of_zip_file([]) == -1


def test_zip_index_from_folder():
    path = "/x/a.zip/b"
    info = FolderInfo.from_current_folder(path)
    assert info.split_path_index_of_zip_file == split(path).index("a.zip/")


def test_history_starts_empty():
    history = History()
    assert not history.is_valid()
    assert history.current_info() is None
    assert history.current_folder() is None
    assert history.current_split_path() == []
    assert not history.can_go_back()
    assert not history.can_go_forward()


def test_history_switch_to_same_path_is_noop():
    history = History()
    assert history.switch_to("/a")
    assert not history.switch_to("/a")
    assert len(history) == 1
    assert history.current_folder() == "/a"


def test_history_rejects_empty():
    history = History()
    assert not history.switch_to("")
    assert not history.switch_to(None)
    assert not history.switch_to(FolderInfo())
    assert len(history) == 0


def test_history_ancestor_keeps_full_folder():
    history = History()
    history.switch_to("/a/b/c")
    assert history.switch_to("/a/b")
    info = history.current_info()
    assert info.full_folder == "/a/b/c"
    assert info.current_folder == "/a/b"
    assert info.split_path_index == FolderInfo.from_current_folder("/a/b/c").split_path_index_for("/a/b")
    assert history.current_split_path() == split("/a/b/c")


def test_history_back_and_forward():
    history = History()
    for folder in ("/a", "/b", "/c"):
        history.switch_to(folder)
    history.go_back()
    history.go_back()
    assert history.current_folder() == "/a"
    assert not history.can_go_back()
    history.go_back()
    assert history.current_folder() == "/a"
    history.go_forward()
    assert history.current_folder() == "/b"
    assert history.can_go_forward()


def test_history_switch_truncates_forward_entries():
    history = History()
    for folder in ("/a", "/b", "/c"):
        history.switch_to(folder)
    history.go_back()
    history.go_back()
    history.switch_to("/d")
    assert not history.can_go_forward()
    assert len(history) == 2
    history.go_back()
    assert history.current_folder() == "/a"


def test_history_switch_to_folder_info():
    history = History()
    history.switch_to(DEEP)
    ancestor = history.current_info().for_split_path_index(1)
    assert history.switch_to(ancestor)
    assert history.current_info() == ancestor
    assert not history.switch_to(ancestor)


def test_history_reset():
    history = History()
    history.switch_to("/a")
    history.switch_to("/b")
    history.reset()
    assert not history.is_valid()
    assert len(history) == 0
    assert history.switch_to("/c")
    assert history.current_folder() == "/c"


def test_layout_few_entries_single_column():
    assert browsing_layout(10) == BrowsingLayout(1, 20)


@pytest.mark.parametrize("total", [20, 35, 57, 200, 1000])
def test_layout_covers_all_entries(total):
    layout = browsing_layout(total)
    assert 1 <= layout.columns <= 6
    assert layout.columns * layout.entries_per_column >= total
    assert (layout.columns - 1) * layout.entries_per_column < total


def test_layout_width_limits_columns():
    layout = browsing_layout(1000, child_width=250)
    assert layout.columns <= 2
    assert layout.columns * layout.entries_per_column >= 1000


def test_layout_height_sets_entries_per_column():
    layout = browsing_layout(5, child_width=600, child_height=100, line_height=10)
    assert layout.columns == 1
    assert layout.entries_per_column == 10


def test_layout_height_needs_line_height():
    with pytest.raises(ValueError):
        browsing_layout(5, child_height=100)