"""Folder navigation state: split-path breadcrumbs, history and browsing layout."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .paths import append, split

_ZIP_SUFFIX = ".zip"
_DEFAULT_ENTRIES_PER_COLUMN = 20
_DEFAULT_MAX_COLUMNS = 6
_MIN_COLUMN_WIDTH = 100


def _ascii_fold(text: str) -> str:
    return "".join(chr(ord(c) + 32) if "A" <= c <= "Z" else c for c in text)


def split_path_index_of_zip_file(split_path: list[str]) -> int:
    """Return the index of the first component naming a '.zip' archive, or -1.

    Intermediate components are expected to end with a separator, which is
    skipped when looking at their suffix.
    """
    width = len(_ZIP_SUFFIX)
    last = len(split_path) - 1
    for j, component in enumerate(split_path):
        start = width if j == last else width + 1
        if len(component) <= start:
            continue
        i = len(component) - start
        if _ascii_fold(component[i:i + width]) == _ZIP_SUFFIX:
            return j
    return -1


@dataclass(frozen=True)
class FolderInfo:
    """A browsed folder: the deepest folder reached and the one shown now.

    ``full_folder`` is the path whose components form the breadcrumb bar;
    ``current_folder`` is the folder being shown, which may be one of its
    ancestors at component ``split_path_index``.
    """

    full_folder: str = ""
    current_folder: str = ""
    split_path_index: int = -1
    split_path_index_of_zip_file: int = -1

    @classmethod
    def from_current_folder(cls, path: str | None) -> FolderInfo:
        """Build the info for showing ``path`` itself (an empty info when blank)."""
        if not path:
            return cls()
        parts = split(path)
        return cls(
            full_folder=path,
            current_folder=path,
            split_path_index=len(parts) - 1,
            split_path_index_of_zip_file=split_path_index_of_zip_file(parts),
        )

    def split_path(self) -> list[str]:
        """Return the components of ``full_folder``."""
        return split(self.full_folder)

    def is_equal(self, other: FolderInfo | str) -> bool:
        """Tell whether both folders match ``other`` (a path or another info)."""
        if isinstance(other, FolderInfo):
            return (
                self.full_folder == other.full_folder
                and self.current_folder == other.current_folder
            )
        return self.full_folder == other and self.current_folder == other

    def split_path_index_for(self, path: str | None) -> int:
        """Return the component index at which ``full_folder`` reaches ``path``, or -1."""
        if not path or not self.full_folder.startswith(path):
            return -1
        accumulated = ""
        for index, component in enumerate(self.split_path()):
            accumulated = append(accumulated, component)
            if accumulated == path:
                return index
        return -1

    def for_split_path_index(self, index: int) -> FolderInfo:
        """Return the info showing the ancestor at component ``index``.

        Raises IndexError when ``index`` is not a component of ``full_folder``.
        """
        parts = self.split_path()
        if not 0 <= index < len(parts):
            raise IndexError(f"split path index {index} out of range 0..{len(parts) - 1}")
        current = ""
        for component in parts[:index + 1]:
            current = append(current, component)
        return replace(
            self,
            current_folder=current,
            split_path_index=index,
            split_path_index_of_zip_file=split_path_index_of_zip_file(parts),
        )


class History:
    """Back/forward navigation history of visited folders."""

    def __init__(self) -> None:
        self._info: list[FolderInfo] = []
        self._index = -1

    def __len__(self) -> int:
        return len(self._info)

    def reset(self) -> None:
        """Forget every visited folder."""
        self._info.clear()
        self._index = -1

    def can_go_back(self) -> bool:
        return self._index > 0

    def can_go_forward(self) -> bool:
        return 0 <= self._index < len(self._info) - 1

    def go_back(self) -> None:
        if self.can_go_back():
            self._index -= 1

    def go_forward(self) -> None:
        if self.can_go_forward():
            self._index += 1

    def _push(self, info: FolderInfo) -> None:
        self._index += 1
        del self._info[self._index:]
        self._info.append(info)

    def switch_to(self, target: FolderInfo | str | None) -> bool:
        """Visit ``target``, dropping any forward history; return whether it moved.

        A path that is an ancestor of the current full folder keeps that full
        folder, so the breadcrumb bar still shows the deeper components.
        """
        if isinstance(target, FolderInfo):
            if not target.current_folder:
                return False
            if self._index >= 0 and self._info[self._index].is_equal(target):
                return False
            self._push(target)
            return True

        if not target:
            return False
        if self._index < 0:
            self._push(FolderInfo.from_current_folder(target))
            return True
        last = self._info[self._index]
        if last.is_equal(target):
            return False
        index_in_last = last.split_path_index_for(target)
        if index_in_last == -1:
            info = FolderInfo.from_current_folder(target)
        else:
            info = replace(last, split_path_index=index_in_last, current_folder=target)
        self._push(info)
        return True

    def is_valid(self) -> bool:
        return 0 <= self._index < len(self._info)

    def current_info(self) -> FolderInfo | None:
        return self._info[self._index] if self.is_valid() else None

    def current_folder(self) -> str | None:
        info = self.current_info()
        return info.current_folder if info is not None else None

    def current_split_path(self) -> list[str]:
        """Return the breadcrumb components of the current entry ([] when empty)."""
        info = self.current_info()
        return info.split_path() if info is not None else []


@dataclass(frozen=True)
class BrowsingLayout:
    """How many columns the entries are shown in, and how many per column."""

    columns: int
    entries_per_column: int


def browsing_layout(
    total_entries: int,
    child_width: float = -1,
    child_height: float = -1,
    line_height: float | None = None,
) -> BrowsingLayout:
    """Work out the column layout for ``total_entries`` in a child area.

    A non-positive size means it is unknown; ``line_height`` is needed when
    ``child_height`` is given.
    """
    per_column = _DEFAULT_ENTRIES_PER_COLUMN
    if child_height > 0:
        if line_height is None or line_height <= 0:
            raise ValueError("a positive line_height is needed with child_height")
        per_column = max(int(child_height / line_height), 1)
    columns = total_entries // per_column
    if columns <= 0:
        return BrowsingLayout(1, per_column)
    if total_entries % per_column > per_column // 2:
        columns += 1
    max_columns = int(child_width / _MIN_COLUMN_WIDTH) if child_width > 0 else _DEFAULT_MAX_COLUMNS
    max_columns = max(max_columns, 1)
    columns = min(columns, max_columns)
    entries = total_entries // columns
    if total_entries % columns:
        entries += 1
    return BrowsingLayout(columns, entries)