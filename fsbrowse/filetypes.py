"""Classification of file names into icon groups by their extension."""

from __future__ import annotations

import functools
from collections.abc import Iterable
from dataclasses import dataclass

# Extension groups in the order that gives each its type number.
DEFAULT_GROUPS: tuple[str, ...] = (
    "bin",
    "h;hpp;hh;hxx;inl",
    "cpp;c;cxx;cc",
    "jpg;jpeg;png;bmp;ico;gif;tif;tiff;tga",
    "pdf",
    "doc;docx;odt;ott;uot",
    "txt;setting;settings;layout;ini;md;sh;bat",
    "db;sql;sqlite",
    "ods;ots;uos;xlsx;xls",
    "odp;otp;uop;pptx;ppt",
    "7z;zip;bz2;gz;lz;lzma;ar;rar",
    "mp3;wav;ogg;spx;opus;mid;mod;flac",
    "mp4;flv;avi;ogv;theora;mkv;webm;mpg",
    "xml",
    "htm;html",
)

_MAX_GROUP_LENGTH = 511


def _ascii_fold(text: str) -> str:
    return "".join(chr(ord(c) + 32) if "A" <= c <= "Z" else c for c in text)


def _dot_tail(name: str) -> str | None:
    dot = name.rfind(".")
    return None if dot == -1 else name[dot:]


@dataclass(frozen=True)
class _Extension:
    text: str
    type_number: int


class ExtensionTypeTable:
    """Maps file extensions to the number of the group they were added with.

    Each call to :meth:`add` opens a new group whose number is one more than
    the previous group's; the first group is number 0.
    """

    def __init__(self, groups: Iterable[str] = DEFAULT_GROUPS) -> None:
        self._extensions: list[_Extension] = []
        self._next_type = 0
        for group in groups:
            self.add(group)

    def add(self, extensions: str) -> int:
        """Add a ';'-separated group of extensions; return how many were added."""
        if not extensions or len(extensions) <= 1:
            raise ValueError(f"extension group too short: {extensions!r}")
        if len(extensions) >= _MAX_GROUP_LENGTH:
            raise ValueError("extension group too long")
        tokens = [token for token in extensions.split(";") if token]
        if not tokens:
            raise ValueError(f"no extensions in group: {extensions!r}")
        type_number = self._next_type
        self._extensions.extend(_Extension(token, type_number) for token in tokens)
        self._next_type += 1
        return len(tokens)

    def get_extension_type(self, ext: str | None, case_sensitive: bool = False) -> int:
        """Return the group number of ``ext`` (leading dot optional), or -1."""
        if ext is None:
            return -1
        if ext.startswith("."):
            ext = ext[1:]
        if not ext:
            return -1
        wanted = ext if case_sensitive else _ascii_fold(ext)
        for entry in self._extensions:
            if len(entry.text) != len(ext):
                continue
            candidate = entry.text if case_sensitive else _ascii_fold(entry.text)
            if candidate == wanted:
                return entry.type_number
        return -1

    def types_for_filenames(self, file_names: Iterable[str]) -> list[int]:
        """Return the group number of each file name's extension, -1 when unknown."""
        return [self.get_extension_type(_dot_tail(name)) for name in file_names]


@functools.lru_cache(maxsize=1)
def _default_table() -> ExtensionTypeTable:
    return ExtensionTypeTable()


def file_extension_type(path: str) -> int:
    """Return the default group number of the extension of ``path``, or -1."""
    return _default_table().get_extension_type(_dot_tail(path))


def extension_types_from_filenames(file_names: Iterable[str]) -> list[int]:
    """Return the default group numbers of the extensions of ``file_names``."""
    return _default_table().types_for_filenames(file_names)