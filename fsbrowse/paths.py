"""Path string helpers that treat both '/' and '\\' as separators."""

from __future__ import annotations

import os

_SEPARATORS = ("/", "\\")
_ON_WINDOWS = os.name == "nt"


def _ascii_lower(text: str) -> str:
    """Lower-case ASCII letters only, leaving every other character untouched."""
    return "".join(chr(ord(c) + 32) if "A" <= c <= "Z" else c for c in text)


def _last_separator(path: str) -> int:
    return max(path.rfind("\\"), path.rfind("/"))


def _extension_start(path: str) -> int:
    """Index of the dot that starts the extension, or -1 when there is none."""
    dot = path.rfind(".")
    slash = path.rfind("/")
    backslash = path.rfind("\\")
    if slash != -1:
        if backslash != -1:
            slash = backslash
    elif backslash != -1:
        slash = backslash
    else:
        return dot
    if dot != -1 and dot > slash:
        return dot
    return -1


def get_absolute_path(path: str | None) -> str:
    """Return the absolute, resolved form of ``path`` (the current folder when empty)."""
    result = os.path.realpath(path if path else "./")
    if _ON_WINDOWS:
        result = result.replace("\\", "/").rstrip("/")
    return result


def get_directory_name(file_path: str | None) -> str:
    """Return the directory part of ``file_path``."""
    if file_path is None:
        return ""
    while True:
        if file_path in ("", "/", "\\"):
            return file_path
        last = file_path[-1]
        if last in _SEPARATORS:
            file_path = file_path[:-1]
            continue
        if last == ":":
            return file_path
        break
    beg = _last_separator(file_path)
    if beg == 0:
        return file_path[:1]
    if beg != -1:
        return file_path[:beg]
    return ""


def get_file_name(file_path: str) -> str:
    """Return the part of ``file_path`` after its last separator."""
    beg = _last_separator(file_path)
    return file_path[beg + 1:] if beg != -1 else file_path


def get_file_name_without_extension(file_path: str) -> str:
    """Return ``file_path`` without its extension (the name only when it has none)."""
    beg = _last_separator(file_path)
    dot = file_path.rfind(".")
    if beg != -1 and dot < beg:
        return file_path[beg + 1:]
    if dot != -1:
        return file_path[:dot]
    return file_path


def get_extension(file_path: str) -> str:
    """Return the lower-cased extension of ``file_path``, dot included, or ''."""
    start = _extension_start(file_path)
    if start == -1:
        return ""
    return _ascii_lower(file_path[start:])


def change_extension(file_path: str, new_extension: str) -> str:
    """Replace the extension of ``file_path``; return it unchanged when it has none."""
    start = _extension_start(file_path)
    if start == -1:
        return file_path
    return file_path[:start] + new_extension


def has_zip_extension(file_path: str) -> bool:
    """Tell whether the text after the last dot is 'zip' in any letter case."""
    dot = file_path.rfind(".")
    if dot == -1:
        return False
    tail = file_path[dot:]
    return len(tail) == 4 and _ascii_lower(tail[1:]) == "zip"


def combine(directory: str | None, file_name: str) -> str:
    """Join ``directory`` and ``file_name`` with a '/' where one is needed."""
    if not directory:
        return file_name
    if directory[-1] in _SEPARATORS:
        return directory + file_name
    return directory + "/" + file_name


def append(base: str, directory: str | None) -> str:
    """Append ``directory`` to ``base``, dropping trailing separators afterwards."""
    if not directory:
        return base
    result = base
    if result and result[-1] not in _SEPARATORS:
        result += "/"
    result = (result + directory).rstrip("/\\")
    if not result or result[-1] == ":":
        result += "/"
    return result


def split(path: str, leave_intermediate_trailing_slashes: bool = True) -> list[str]:
    """Split ``path`` into its components.

    Intermediate components keep their trailing '/' unless asked otherwise;
    a leading empty component (an absolute path) becomes '/'.
    """
    text = path.replace("\\", "/")
    if _ON_WINDOWS:
        text = text.rstrip("/")
    if not text:
        return []
    parts: list[str] = []
    while (pos := text.find("/")) != -1:
        parts.append(text[:pos + 1] if leave_intermediate_trailing_slashes else text[:pos])
        text = text[pos + 1:]
    parts.append(text)
    if not parts[0]:
        parts[0] = "/"
    if _ON_WINDOWS and len(parts) == 1 and parts[0].endswith(":"):
        parts[0] += "/"
    return parts


def split_text(text: str | None, separator: str = " ") -> list[str]:
    """Split ``text`` on ``separator``; a trailing empty piece is dropped."""
    if not text:
        return []
    pieces = text.split(separator)
    if not pieces[-1]:
        pieces.pop()
    return pieces