"""A file chooser: the state and actions behind an open, save or select-folder dialog."""

from __future__ import annotations

import itertools
from enum import Enum

from .directory import (
    Entry,
    KnownDirectories,
    Sorting,
    directory_exists,
    file_exists,
    get_directories,
    get_files,
    get_files_filtered,
    get_user_known_directories,
)
from .directory import create_directory as _make_directory
from .filetypes import extension_types_from_filenames
from .navigation import FolderInfo, History
from .paths import (
    append,
    combine,
    get_absolute_path,
    get_directory_name,
    get_extension,
    get_file_name,
    split_text,
)
from .ziparchive import UnZipFile, split_first_zip_folder

DEFAULT_NEW_DIRECTORY_NAME = "New Folder"
SORT_TAB_NAMES = ("Name", "Modified", "Size", "Type")


class DialogMode(Enum):
    """What the chooser is asked to pick."""

    OPEN_FILE = "open_file"
    SELECT_FOLDER = "select_folder"
    SAVE_FILE = "save_file"


_DEFAULT_TITLES = {
    DialogMode.SELECT_FOLDER: "Please select a folder",
    DialogMode.SAVE_FILE: "Please choose/create a file for saving",
    DialogMode.OPEN_FILE: "Please choose a file",
}


def _ascii_fold(text: str) -> str:
    return "".join(chr(ord(c) + 32) if "A" <= c <= "Z" else c for c in text)


def _entry_path(target: Entry | str) -> str:
    return target.path if isinstance(target, Entry) else target


class FileChooser:
    """Browses folders (and zip archives) and yields the path the user picks.

    Call :meth:`open` to start; the chooser then stays open until a path is
    chosen (see :attr:`chosen_path`) or :meth:`cancel` is called.
    """

    _unique_numbers = itertools.count()

    def __init__(
        self,
        no_known_directories_section: bool = False,
        no_create_directory_section: bool = False,
        no_filtering_section: bool = False,
        detect_known_directories_at_each_opening: bool = False,
        dont_filter_save_file_paths: bool = False,
    ) -> None:
        self.unique_number = next(self._unique_numbers)
        self.allow_known_directories_section = not no_known_directories_section
        self.forbid_directory_creation = no_create_directory_section
        self.allow_filtering = not no_filtering_section
        self.detect_known_directories_at_each_opening = detect_known_directories_at_each_opening
        self.filter_save_file_paths = not dont_filter_save_file_paths

        self.mode = DialogMode.OPEN_FILE
        self.current_folder = "./"
        self.sorting_mode = Sorting.ALPHABETIC
        self.history = History()
        self.directories: list[Entry] = []
        self.files: list[Entry] = []
        self.file_extension_types: list[int] = []
        self.current_split_path: list[str] = []
        self.file_filter = ""
        self.window_title = ""
        self.save_file_name = ""
        self.new_directory_name = DEFAULT_NEW_DIRECTORY_NAME
        self.edit_location_text = ""
        self.known_directories: KnownDirectories | None = None
        self.chosen_path = ""
        self.is_open = False
        self.user_has_just_cancelled = False
        self._archive = UnZipFile()

    # -- state ------------------------------------------------------------

    @property
    def last_directory(self) -> str:
        """The folder shown last."""
        return self.current_folder

    @property
    def allow_directory_creation(self) -> bool:
        if self.forbid_directory_creation:
            return False
        return self.mode in (DialogMode.SELECT_FOLDER, DialogMode.SAVE_FILE)

    @property
    def is_browsing_inside_zip(self) -> bool:
        """Tell whether the folder shown is inside a zip archive."""
        info = self.history.current_info()
        if info is None:
            return False
        zip_index = info.split_path_index_of_zip_file
        return not (zip_index < 0 or zip_index > info.split_path_index)

    @property
    def total_entries(self) -> int:
        return len(self.directories) + len(self.files)

    def _require_open(self) -> None:
        if not self.is_open:
            raise RuntimeError("the file chooser is not open")

    # -- opening and scanning ---------------------------------------------

    def _valid_start_folder(self, directory: str | None) -> str:
        source = directory if directory else self.current_folder
        base, inner, inside = split_first_zip_folder(source)
        if file_exists(base) if inside else directory_exists(base):
            valid = base
            if inner:
                valid = append(valid, get_directory_name(inner))
        else:
            valid = get_directory_name(directory)
            if not directory_exists(valid):
                valid = ""
        return valid if valid else get_absolute_path("")

    def open(
        self,
        mode: DialogMode = DialogMode.OPEN_FILE,
        directory: str | None = None,
        file_filter: str | None = None,
        save_file_name: str | None = None,
        window_title: str | None = None,
    ) -> None:
        """Open the chooser in ``mode`` at ``directory`` (the last folder when empty).

        ``file_filter`` is a ';' list of extensions such as ".txt;.md".
        """
        self.mode = DialogMode(mode)
        self.chosen_path = ""
        self.user_has_just_cancelled = False
        self.is_open = True
        self.file_filter = file_filter or ""

        self.current_folder = self._valid_start_folder(directory)
        self.edit_location_text = ""
        self.history.reset()
        self.history.switch_to(self.current_folder)
        self.directories, self.files = [], []
        self.file_extension_types, self.current_split_path = [], []
        self.new_directory_name = DEFAULT_NEW_DIRECTORY_NAME
        self.save_file_name = get_file_name(save_file_name) if save_file_name else ""
        if self.mode is DialogMode.SELECT_FOLDER and self.sorting_mode > Sorting.LAST_MODIFICATION_INVERSE:
            self.sorting_mode = Sorting.ALPHABETIC

        title = window_title if window_title else _DEFAULT_TITLES[self.mode]
        self.window_title = f"{title}##{self.unique_number}"

        if self.allow_known_directories_section:
            self.known_directories = get_user_known_directories(
                self.detect_known_directories_at_each_opening
            )
        self.rescan()

    def rescan(self) -> None:
        """Read the directories and files of the current folder again."""
        self._require_open()
        sorting = self.sorting_mode
        dir_sorting = (
            sorting if sorting <= Sorting.LAST_MODIFICATION_INVERSE else Sorting(sorting % 2)
        )
        base, inner, inside = split_first_zip_folder(self.current_folder)
        if not inside:
            self.directories = get_directories(base, dir_sorting)
        elif self._archive.load(base, False):
            self.directories = self._archive.get_directories(inner, dir_sorting, True)
        else:
            self._archive.close()
            self.directories = []

        if self.mode is not DialogMode.SELECT_FOLDER:
            if not inside:
                if self.file_filter:
                    self.files = get_files_filtered(self.current_folder, self.file_filter, None, sorting)
                else:
                    self.files = get_files(self.current_folder, sorting)
            elif self._archive.is_valid():
                self.files = self._archive.get_files(inner, sorting, True)
            else:
                self.files = []
            self.file_extension_types = extension_types_from_filenames(e.name for e in self.files)
        else:
            self.files, self.file_extension_types = [], []
            name = get_file_name(self.current_folder)
            if not name or name.endswith(":"):
                name += "/"
            self.save_file_name = name

        self.current_split_path = self.history.current_split_path()

    # -- navigation -------------------------------------------------------

    def _show_history_entry(self) -> None:
        self.current_folder = self.history.current_folder() or self.current_folder
        self.edit_location_text = self.current_folder
        self.rescan()

    def go_back(self) -> bool:
        """Show the previous folder in the history; return whether it moved."""
        self._require_open()
        if not self.history.can_go_back():
            return False
        self.history.go_back()
        self._show_history_entry()
        return True

    def go_forward(self) -> bool:
        """Show the next folder in the history; return whether it moved."""
        self._require_open()
        if not self.history.can_go_forward():
            return False
        self.history.go_forward()
        self._show_history_entry()
        return True

    def enter_directory(self, path: Entry | str) -> None:
        """Show ``path``: a listed directory, a known directory or a zip archive."""
        self._require_open()
        self.current_folder = _entry_path(path)
        self.edit_location_text = self.current_folder
        self.history.switch_to(self.current_folder)
        self.rescan()

    def select_split_path(self, index: int) -> bool:
        """Show the breadcrumb component ``index``; return whether it moved."""
        self._require_open()
        info: FolderInfo | None = self.history.current_info()
        if info is None or index == info.split_path_index:
            return False
        self.history.switch_to(info.for_split_path_index(index))
        self._show_history_entry()
        return True

    def edit_location(self, entered_path: str) -> bool:
        """Go to a typed path when it is an existing folder; return whether it moved."""
        self._require_open()
        clean = entered_path.rstrip("/\\")
        if not clean or clean == self.current_folder:
            return False
        base, inner, inside = split_first_zip_folder(clean, False)
        if not inside:
            exists = directory_exists(clean)
        elif self._archive.zip_file_path == base and self._archive.is_valid():
            exists = self._archive.directory_exists(inner)
        else:
            with UnZipFile(base) as archive:
                exists = archive.directory_exists(inner)
        if not exists:
            return False
        self.history.switch_to(clean)
        self.current_folder = clean
        self.rescan()
        return True

    # -- actions ----------------------------------------------------------

    def create_directory(self, name: str | None = None) -> bool:
        """Create a folder in the current one; return whether a new one was made.

        Raises PermissionError where creating folders is not offered and
        OSError when the folder could not be created.
        """
        self._require_open()
        if not self.allow_directory_creation or self.is_browsing_inside_zip:
            raise PermissionError("creating directories is not allowed here")
        if name is not None:
            self.new_directory_name = name
        if not self.new_directory_name:
            return False
        new_path = combine(self.current_folder, self.new_directory_name)
        if directory_exists(new_path):
            return False
        if not _make_directory(new_path):
            raise OSError(f"error creating new folder: {new_path!r}")
        self.rescan()
        return True

    def press_sort_tab(self, tab: int) -> Sorting:
        """Press a sorting tab: a new tab sorts ascending, the same one flips order."""
        self._require_open()
        used_tabs = 2 if self.mode is DialogMode.SELECT_FOLDER else len(SORT_TAB_NAMES)
        if not 0 <= tab < used_tabs:
            raise IndexError(f"sorting tab {tab} out of range 0..{used_tabs - 1}")
        old = int(self.sorting_mode)
        if old // 2 == tab:
            new = old + 1 if old % 2 == 0 else old - 1
        else:
            new = tab * 2
        if new != old:
            self.sorting_mode = Sorting(new)
            self.rescan()
        return self.sorting_mode

    def _filtered(self, entries: list[Entry], pattern: str) -> list[Entry]:
        if not pattern:
            return list(entries)
        if not self.allow_filtering:
            raise PermissionError("filtering is disabled for this chooser")
        wanted = _ascii_fold(pattern)
        return [e for e in entries if wanted in _ascii_fold(e.name)]

    def visible_directories(self, pattern: str = "") -> list[Entry]:
        """Directories whose name contains ``pattern``, ignoring letter case."""
        return self._filtered(self.directories, pattern)

    def visible_files(self, pattern: str = "") -> list[Entry]:
        """Files whose name contains ``pattern``, ignoring letter case."""
        if self.mode is DialogMode.SELECT_FOLDER:
            return []
        return self._filtered(self.files, pattern)

    def _finish(self, path: str) -> None:
        self.chosen_path = path
        self._archive.close()
        self.directories, self.files = [], []
        self.file_extension_types, self.current_split_path = [], []
        self.is_open = False

    def choose_file(self, path: Entry | str) -> str:
        """Click a file: picks it when opening, fills the file name when saving."""
        self._require_open()
        if self.mode is DialogMode.SELECT_FOLDER:
            raise ValueError("files cannot be chosen when selecting a folder")
        file_path = _entry_path(path)
        if self.mode is DialogMode.SAVE_FILE:
            self.save_file_name = get_file_name(file_path)
            return ""
        self._finish(file_path)
        return self.chosen_path

    def confirm(self) -> str:
        """Press Select or Save; return the chosen path, or '' when none yet.

        When saving with a file filter, a name without a wanted extension
        gets the first one appended and must be confirmed again.
        """
        self._require_open()
        if self.mode is DialogMode.OPEN_FILE:
            raise ValueError("an open-file chooser is confirmed by choosing a file")
        if self.mode is DialogMode.SELECT_FOLDER:
            self._finish(self.current_folder)
            return self.chosen_path
        if not self.save_file_name:
            return ""
        path_ok = True
        if self.filter_save_file_paths and self.file_filter:
            path_ok = False
            extension = get_extension(self.save_file_name)
            wanted = split_text(self.file_filter, ";")
            if not extension:
                if not wanted:
                    path_ok = True
                else:
                    self.save_file_name += wanted[0]
            elif extension in wanted:
                path_ok = True
            elif wanted:
                self.save_file_name += wanted[0]
        if path_ok:
            self._finish(combine(self.current_folder, self.save_file_name))
        return self.chosen_path

    def cancel(self) -> None:
        """Close the chooser without choosing anything."""
        if self.chosen_path:
            return
        self._finish("")
        self.user_has_just_cancelled = True