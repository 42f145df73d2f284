"""Directory listing, sorting, existence checks and well-known user folders."""

from __future__ import annotations

import contextlib
import functools
import os
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable

from .paths import combine, get_extension, get_file_name, split_text

_ON_WINDOWS = os.name == "nt"


class Sorting(IntEnum):
    """Orders in which directory entries can be listed."""

    ALPHABETIC = 0
    ALPHABETIC_INVERSE = 1
    LAST_MODIFICATION = 2
    LAST_MODIFICATION_INVERSE = 3
    SIZE = 4
    SIZE_INVERSE = 5
    TYPE = 6
    TYPE_INVERSE = 7


@dataclass(frozen=True)
class Entry:
    """A listed directory entry: its full path and its plain name."""

    path: str
    name: str


def _ascii_fold(text: str) -> str:
    return "".join(chr(ord(c) + 32) if "A" <= c <= "Z" else c for c in text)


def _casecmp(a: str, b: str) -> int:
    fa, fb = _ascii_fold(a), _ascii_fold(b)
    return (fa > fb) - (fa < fb)


def _sign(a: float, b: float) -> int:
    return (a > b) - (a < b)


def _stat(entry: Entry) -> os.stat_result | None:
    try:
        return os.stat(entry.path)
    except OSError:
        return None


def _by_stat(attribute: str, inverse: bool) -> Callable[[Entry, Entry], int]:
    def compare(e1: Entry, e2: Entry) -> int:
        s1 = _stat(e1)
        if s1 is None:
            return 1 if inverse else -1
        s2 = _stat(e2)
        if s2 is None:
            return -1 if inverse else 1
        v1, v2 = getattr(s1, attribute), getattr(s2, attribute)
        return _sign(v2, v1) if inverse else _sign(v1, v2)

    return compare


def _dot_tail(name: str) -> str | None:
    dot = name.rfind(".")
    return None if dot == -1 else name[dot:]


def _by_type(inverse: bool) -> Callable[[Entry, Entry], int]:
    def compare(e1: Entry, e2: Entry) -> int:
        p1, p2 = _dot_tail(e1.name), _dot_tail(e2.name)
        if p1 is None:
            if p2 is None:
                return 0
            return 1 if inverse else -1
        if p2 is None:
            return -1 if inverse else 1
        result = _casecmp(p1, p2)
        return -result if inverse else result

    return compare


_COMPARATORS: dict[Sorting, Callable[[Entry, Entry], int]] = {
    Sorting.ALPHABETIC: lambda a, b: _casecmp(a.name, b.name),
    Sorting.ALPHABETIC_INVERSE: lambda a, b: -_casecmp(a.name, b.name),
    Sorting.LAST_MODIFICATION: _by_stat("st_mtime", False),
    Sorting.LAST_MODIFICATION_INVERSE: _by_stat("st_mtime", True),
    Sorting.SIZE: _by_stat("st_size", False),
    Sorting.SIZE_INVERSE: _by_stat("st_size", True),
    Sorting.TYPE: _by_type(False),
    Sorting.TYPE_INVERSE: _by_type(True),
}


def sort_key(sorting: Sorting | int = Sorting.ALPHABETIC):
    """Return a key function ordering :class:`Entry` objects by ``sorting``.

    Unknown sorting values fall back to alphabetic order.
    """
    try:
        mode = Sorting(int(sorting))
    except ValueError:
        mode = Sorting.ALPHABETIC
    return functools.cmp_to_key(_COMPARATORS[mode])


def _list(directory_name: str, want_dirs: bool, sorting: Sorting | int) -> list[Entry]:
    scan_name = directory_name
    if _ON_WINDOWS and directory_name.endswith(":"):
        scan_name += "\\"
    base = directory_name[:-1] if directory_name.endswith("/") else directory_name
    try:
        with os.scandir(scan_name) as it:
            raw = [
                e.name
                for e in it
                if (e.is_dir(follow_symlinks=False) if want_dirs else e.is_file(follow_symlinks=False))
            ]
    except OSError:
        return []
    entries = [
        Entry(f"{base}/{name}", name)
        for name in raw
        if name and not name.startswith(".") and not name.endswith("~")
    ]
    entries.sort(key=sort_key(sorting))
    return entries


def get_directories(directory_name: str, sorting: Sorting | int = Sorting.ALPHABETIC) -> list[Entry]:
    """List the visible sub-directories of ``directory_name`` (empty if unreadable)."""
    return _list(directory_name, True, sorting)


def get_files(directory_name: str, sorting: Sorting | int = Sorting.ALPHABETIC) -> list[Entry]:
    """List the visible regular files of ``directory_name`` (empty if unreadable)."""
    return _list(directory_name, False, sorting)


def get_files_filtered(
    path: str,
    wanted_extensions: str | None,
    unwanted_extensions: str | None = None,
    sorting: Sorting | int = Sorting.ALPHABETIC,
) -> list[Entry]:
    """List files keeping or dropping those whose extension is in a ';' list.

    Extensions are given like ".txt;.png" and matched case-insensitively.
    ``unwanted_extensions`` is only used when ``wanted_extensions`` is empty.
    """
    entries = get_files(path, sorting)
    if wanted_extensions:
        wanted = split_text(_ascii_fold(wanted_extensions), ";")
        result: list[Entry] = []
        for entry in entries:
            ext = get_extension(entry.path)
            result.extend(entry for w in wanted if w == ext)
        return result
    if unwanted_extensions:
        unwanted = split_text(_ascii_fold(unwanted_extensions), ";")
        return [e for e in entries if get_extension(e.path) not in unwanted]
    return entries


def create_directory(directory_name: str) -> bool:
    """Create ``directory_name``; return whether it exists afterwards."""
    with contextlib.suppress(OSError):
        os.mkdir(directory_name, 0o777)
    return directory_exists(directory_name)


def directory_exists(path: str) -> bool:
    """Tell whether ``path`` names a directory."""
    return os.path.isdir(path)


def file_exists(path: str) -> bool:
    """Tell whether ``path`` names a regular file."""
    return os.path.isfile(path)


def path_exists(path: str) -> bool:
    """Tell whether ``path`` names a directory or a regular file."""
    return os.path.isdir(path) or os.path.isfile(path)


def read_file(path: str, text_mode: bool = False) -> bytes | str:
    """Return the content of ``path``: text when ``text_mode``, bytes otherwise."""
    if text_mode:
        with open(path, "rt", encoding="utf-8", errors="replace") as fh:
            return fh.read()
    with open(path, "rb") as fh:
        return fh.read()


@dataclass
class KnownDirectories:
    """Well-known user folders followed by detected drives or mounted media."""

    paths: list[str] = field(default_factory=list)
    display_names: list[str] = field(default_factory=list)
    number_except_drives: int = 0

    def add(self, path: str, display_name: str) -> None:
        self.paths.append(path)
        self.display_names.append(display_name)


_USER_FOLDERS = ("Desktop", "Documents", "Downloads", "Music", "Pictures", "Videos")
_WINDOWS_FOLDERS = (
    ("Desktop", "Desktop"),
    ("Documents", "Documents"),
    ("Favorites", "Favorites"),
    ("Music", "Music"),
    ("Pictures", "Pictures"),
    ("Recent", "Recent"),
    ("Videos", "Video"),
)
_MOUNT_LOCATIONS = ("/media", "/mnt", "/Volumes", "/vol", "/data")


def _home_directory() -> str | None:
    home = os.environ.get("HOME")
    if home is not None:
        return home
    try:
        import pwd

        return pwd.getpwuid(os.getuid()).pw_dir
    except (ImportError, KeyError):
        return None


def _detect_windows() -> KnownDirectories:
    result = KnownDirectories()
    profile = os.environ.get("USERPROFILE")
    if profile:
        for folder, display in _WINDOWS_FOLDERS:
            candidate = combine(profile, folder)
            if directory_exists(candidate):
                result.add(candidate, display)
    result.number_except_drives = len(result.paths)
    for letter in "CDEFGHIJKLMNOPQRSTUVWXYZ":
        drive = f"{letter}:/"
        if directory_exists(drive):
            result.add(drive, drive[:-1])
    return result


def _detect_posix() -> KnownDirectories:
    result = KnownDirectories()
    home = _home_directory()
    if home is None:
        return result
    user = get_file_name(home)
    result.add(home, "Home")
    for folder in _USER_FOLDERS:
        candidate = combine(home, folder)
        if directory_exists(candidate):
            result.add(candidate, folder)
    result.number_except_drives = len(result.paths)

    user_media = ""
    last_good = False
    for index in range(2 * len(_MOUNT_LOCATIONS)):
        location = _MOUNT_LOCATIONS[index // 2]
        if index % 2 == 0:
            user_media = combine(location, user)
            target = user_media
        elif last_good:
            # "/media/<user>" exists: skip the other entries of "/media".
            last_good = False
            continue
        else:
            target = location
        last_good = directory_exists(target)
        if not last_good:
            continue
        for entry in get_directories(target):
            if entry.path == user_media:
                continue
            result.add(entry.path, get_file_name(entry.path))
    return result


@functools.lru_cache(maxsize=1)
def _detect() -> KnownDirectories:
    return _detect_windows() if _ON_WINDOWS else _detect_posix()


def get_user_known_directories(force_update: bool = False) -> KnownDirectories:
    """Return the user's known directories, detected once and cached."""
    if force_update:
        _detect.cache_clear()
    return _detect()