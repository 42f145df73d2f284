"""Browsing and reading the contents of zip archives as if they were folders."""

from __future__ import annotations

import functools
import zipfile
import zlib
from dataclasses import dataclass
from typing import Callable, NamedTuple

from .directory import (
    Entry,
    Sorting,
    file_exists,
    get_directories,
    get_files,
    path_exists,
    read_file,
)
from .paths import get_absolute_path, get_directory_name

_SEPARATORS = ("/", "\\")
_ZIP_SUFFIX = ".zip"


class ZipArchiveError(OSError):
    """Raised when a zip archive cannot be opened, listed or read."""


class ZipSplit(NamedTuple):
    """A path cut at its first '.zip' component."""

    base: str
    inner: str
    inside_zip: bool


@dataclass(frozen=True)
class _Member:
    path: str
    name: str
    info: zipfile.ZipInfo


def _ascii_fold(text: str) -> str:
    return "".join(chr(ord(c) + 32) if "A" <= c <= "Z" else c for c in text)


def _casecmp(a: str, b: str) -> int:
    fa, fb = _ascii_fold(a), _ascii_fold(b)
    return (fa > fb) - (fa < fb)


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def _dot_tail(name: str) -> str | None:
    dot = name.rfind(".")
    return None if dot == -1 else name[dot:]


def _by_type(inverse: bool) -> Callable[[_Member, _Member], int]:
    def compare(m1: _Member, m2: _Member) -> int:
        p1, p2 = _dot_tail(m1.name), _dot_tail(m2.name)
        if p1 is None:
            if p2 is None:
                return 0
            return 1 if inverse else -1
        if p2 is None:
            return -1 if inverse else 1
        result = _casecmp(p1, p2)
        return -result if inverse else result

    return compare


_COMPARATORS: dict[Sorting, Callable[[_Member, _Member], int]] = {
    Sorting.ALPHABETIC: lambda a, b: _casecmp(a.name, b.name),
    Sorting.ALPHABETIC_INVERSE: lambda a, b: -_casecmp(a.name, b.name),
    Sorting.LAST_MODIFICATION: lambda a, b: _sign(a.info.date_time, b.info.date_time),
    Sorting.LAST_MODIFICATION_INVERSE: lambda a, b: _sign(b.info.date_time, a.info.date_time),
    Sorting.SIZE: lambda a, b: _sign(a.info.file_size, b.info.file_size),
    Sorting.SIZE_INVERSE: lambda a, b: _sign(b.info.file_size, a.info.file_size),
    Sorting.TYPE: _by_type(False),
    Sorting.TYPE_INVERSE: _by_type(True),
}


def _is_directory_name(name: str) -> bool:
    return bool(name) and name[-1] in _SEPARATORS


def _has_zero_size(info: zipfile.ZipInfo) -> bool:
    return info.compress_size == 0 and info.file_size == 0


def _clean_inner(path: str | None) -> str:
    """Drop a leading './' and any trailing separators."""
    if not path:
        return ""
    if len(path) > 1 and path[0] == "." and path[1] in _SEPARATORS:
        path = path[2:]
    return path.rstrip("/\\")


class UnZipFile:
    """A zip archive opened for listing its folders and reading its members."""

    def __init__(self, zip_file_path: str | None = None) -> None:
        self._archive: zipfile.ZipFile | None = None
        self.zip_file_path = ""
        self.load(zip_file_path)

    def __enter__(self) -> UnZipFile:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def load(self, zip_file_path: str | None, reload_if_already_loaded: bool = False) -> bool:
        """Open ``zip_file_path``; return whether a valid archive is loaded."""
        if not reload_if_already_loaded and self.is_valid() and zip_file_path == self.zip_file_path:
            return True
        self.close()
        if zip_file_path is not None:
            self.zip_file_path = get_absolute_path(zip_file_path)
            try:
                self._archive = zipfile.ZipFile(self.zip_file_path)
            except (OSError, zipfile.BadZipFile):
                self._archive = None
        return self.is_valid()

    def close(self) -> None:
        """Close the archive, if one is open."""
        if self._archive is not None:
            self._archive.close()
            self._archive = None

    def is_valid(self) -> bool:
        """Tell whether an archive is open."""
        return self._archive is not None

    def _require(self) -> zipfile.ZipFile:
        if self._archive is None:
            raise ZipArchiveError(f"no valid zip archive loaded: {self.zip_file_path!r}")
        return self._archive

    def _members(self, file_mode: bool, directory_name: str | None) -> list[_Member]:
        archive = self._require()
        dir_name = _clean_inner(directory_name)
        dir_len = len(dir_name)
        members: list[_Member] = []
        for info in archive.infolist():
            full = info.filename
            is_dir = _is_directory_name(full)
            zero = _has_zero_size(info)
            ok = (not is_dir and not zero) if file_mode else (is_dir and zero)
            if not ok:
                continue
            if dir_len > 0:
                if (
                    dir_len >= len(full)
                    or not full.startswith(dir_name)
                    or full[dir_len] not in _SEPARATORS
                    or (not file_mode and dir_len + 1 == len(full))
                ):
                    continue
            if _is_directory_name(full):
                full = full[:-1]
            plain = full[dir_len + 1:] if dir_len > 0 else full
            last = len(plain) - 1
            if any(
                ch in _SEPARATORS and (file_mode or k != last)
                for k, ch in enumerate(plain)
            ):
                continue
            if info.flag_bits & 1:
                plain += "*"
            members.append(_Member(full, plain, info))
        return members

    def _listing(
        self,
        file_mode: bool,
        directory_name: str | None,
        sorting: Sorting | int,
        prefix_with_zip_path: bool,
    ) -> list[Entry]:
        members = self._members(file_mode, directory_name)
        mode = int(sorting)
        if not file_mode and mode >= Sorting.SIZE:
            mode %= 2
        try:
            comparator = _COMPARATORS[Sorting(mode)]
        except ValueError:
            comparator = None
        if comparator is not None:
            members.sort(key=functools.cmp_to_key(comparator))
        prefix = self.zip_file_path + "/" if prefix_with_zip_path else ""
        return [Entry(prefix + m.path, m.name) for m in members]

    def get_directories(
        self,
        directory_name: str | None = "",
        sorting: Sorting | int = Sorting.ALPHABETIC,
        prefix_with_zip_path: bool = False,
    ) -> list[Entry]:
        """List the folders directly inside ``directory_name`` in the archive."""
        return self._listing(False, directory_name, sorting, prefix_with_zip_path)

    def get_files(
        self,
        directory_name: str | None = "",
        sorting: Sorting | int = Sorting.ALPHABETIC,
        prefix_with_zip_path: bool = False,
    ) -> list[Entry]:
        """List the non-empty files directly inside ``directory_name`` in the archive."""
        return self._listing(True, directory_name, sorting, prefix_with_zip_path)

    def _info(self, name: str | None) -> zipfile.ZipInfo | None:
        if self._archive is None or not name:
            return None
        try:
            return self._archive.getinfo(name)
        except KeyError:
            return None

    def get_file_size(self, file_path: str | None) -> int:
        """Return the uncompressed size of a member, or 0 when it cannot be told."""
        info = self._info(file_path)
        if info is None or info.file_size >= 1 << 32:
            return 0
        return info.file_size

    def get_file_content(self, file_path: str, password: str | bytes | None = None) -> bytes:
        """Return the uncompressed content of the member ``file_path``."""
        archive = self._require()
        info = self._info(file_path)
        if info is None:
            raise ZipArchiveError(f"{file_path!r} not found in {self.zip_file_path!r}")
        pwd = password.encode() if isinstance(password, str) else password
        try:
            return archive.read(info, pwd=pwd)
        except (RuntimeError, ValueError, zipfile.BadZipFile, zlib.error, OSError) as exc:
            raise ZipArchiveError(f"error while unzipping {file_path!r}: {exc}") from exc

    def exists(
        self,
        path_inside_zip: str | None,
        report_only_files: bool = False,
        report_only_directories: bool = False,
    ) -> bool:
        """Tell whether ``path_inside_zip`` is in the archive.

        Without exactly one of the two flags, only folders are looked for;
        the empty path is the archive's root folder.
        """
        if self._archive is None or path_inside_zip is None:
            return False
        path = _clean_inner(path_inside_zip)
        only_files = only_dirs = False
        if report_only_files != report_only_directories:
            only_files, only_dirs = report_only_files, report_only_directories
        if not path and not only_files:
            return True
        if not only_files:
            path += "/"
        info = self._info(path)
        if info is None:
            return False
        if only_files:
            return not _is_directory_name(info.filename) and not _has_zero_size(info)
        if only_dirs:
            return _is_directory_name(info.filename) and _has_zero_size(info)
        return True

    def file_exists(self, path_inside_zip: str | None) -> bool:
        """Tell whether ``path_inside_zip`` is a non-empty file of the archive."""
        return self.exists(path_inside_zip, True, False)

    def directory_exists(self, path_inside_zip: str | None) -> bool:
        """Tell whether ``path_inside_zip`` is a folder of the archive."""
        return self.exists(path_inside_zip, False, True)


def split_first_zip_folder(path: str | None, absolute: bool = True) -> ZipSplit:
    """Cut ``path`` after its first '.zip' (any letter case).

    ``base`` is the archive path (or the whole path when there is no
    archive), made absolute when asked; ``inner`` is the rest, without
    leading separators.
    """
    if path is None:
        return ZipSplit("", "", False)
    width = len(_ZIP_SUFFIX)
    for i in range(len(path) - width + 1):
        if _ascii_fold(path[i:i + width]) == _ZIP_SUFFIX:
            end = i + width
            rest = end
            while rest < len(path) and path[rest] in _SEPARATORS:
                rest += 1
            head = path[:end]
            return ZipSplit(get_absolute_path(head) if absolute else head, path[rest:], True)
    return ZipSplit(get_absolute_path(path) if absolute else path, "", False)


def path_exists_with_zip_support(
    path: str | None,
    report_only_files: bool = False,
    report_only_directories: bool = False,
    check_absolute_path: bool = True,
) -> bool:
    """Tell whether ``path`` exists, looking inside a zip archive when it crosses one."""
    base, inner, inside = split_first_zip_folder(path, check_absolute_path)
    if inside:
        with UnZipFile(base) as archive:
            return archive.exists(inner, report_only_files, report_only_directories)
    return path_exists(base)


def path_is_inside_zip_file(path: str | None) -> bool:
    """Tell whether ``path`` goes through a zip archive."""
    return split_first_zip_folder(path, True).inside_zip


def get_directories_with_zip_support(
    directory_name: str,
    sorting: Sorting | int = Sorting.ALPHABETIC,
    prefix_with_zip_path: bool = True,
) -> list[Entry]:
    """List folders of a plain directory or of a folder inside a zip archive."""
    base, inner, inside = split_first_zip_folder(directory_name)
    if inside:
        with UnZipFile(base) as archive:
            return archive.get_directories(inner, sorting, prefix_with_zip_path)
    return get_directories(directory_name, sorting)


def get_files_with_zip_support(
    directory_name: str,
    sorting: Sorting | int = Sorting.ALPHABETIC,
    prefix_with_zip_path: bool = True,
) -> list[Entry]:
    """List files of a plain directory or of a folder inside a zip archive."""
    base, inner, inside = split_first_zip_folder(directory_name)
    if inside:
        with UnZipFile(base) as archive:
            return archive.get_files(inner, sorting, prefix_with_zip_path)
    return get_files(directory_name, sorting)


def get_directory_name_with_zip_support(path: str, prefix_with_zip_path: bool = True) -> str:
    """Return the directory part of ``path``, which may lead into a zip archive."""
    base, inner, inside = split_first_zip_folder(path)
    if not inside:
        return get_directory_name(path)
    folder = get_directory_name(inner)
    result = ""
    if prefix_with_zip_path:
        result = base
        if folder and folder[0] not in _SEPARATORS:
            result += "/"
    return result + folder


def get_absolute_with_zip_support(path: str) -> str:
    """Return the absolute form of ``path``, which may lead into a zip archive."""
    base, inner, inside = split_first_zip_folder(path)
    if not inside:
        return get_absolute_path(path)
    result = get_absolute_path(base)
    if inner and inner[0] not in _SEPARATORS:
        result += "/"
    return result + inner


def file_get_content(
    path: str,
    text_mode: bool = False,
    password: str | bytes | None = None,
) -> bytes | str:
    """Return the content of a file, which may be a member of a zip archive."""
    base, inner, _ = split_first_zip_folder(path, True)
    if not file_exists(base):
        raise FileNotFoundError(base)
    if inner:
        with UnZipFile(base) as archive:
            data = archive.get_file_content(inner, password)
        return data.decode("utf-8", errors="replace") if text_mode else data
    return read_file(base, text_mode)