# fsbrowse

`fsbrowse` holds the logic behind a file chooser dialog (open a file, save a
file, select a folder) with no user interface attached. It uses only the
standard library.

## Modules

- `fsbrowse.paths`: string helpers for paths that use either `/` or `\` as
  separator. The helpers are `get_absolute_path`, `get_directory_name`,
  `get_file_name`, `get_file_name_without_extension`, `get_extension` (lower
  case, dot included), `change_extension`, `has_zip_extension`, `combine`,
  `append`, `split` and `split_text`.
- `fsbrowse.directory`: directory listing and file checks.
  - `get_directories` and `get_files` return `Entry(path, name)` objects. They
    leave out names that start with `.` or end with `~`, and they return an
    empty list for a folder that cannot be read.
  - Listings are sorted by a `Sorting` value: `ALPHABETIC`,
    `LAST_MODIFICATION`, `SIZE` or `TYPE`, each of which also has an
    `_INVERSE` form.
  - `get_files_filtered` keeps or drops files by a `;` list of extensions.
  - `create_directory`, `directory_exists`, `file_exists`, `path_exists` and
    `read_file` cover the other file operations.
  - `get_user_known_directories` returns a cached `KnownDirectories` object.
    It holds the home folder and its Desktop/Documents/Downloads/Music/Pictures/Videos
    folders, followed by mounted media under `/media`, `/mnt`, `/Volumes`,
    `/vol` and `/data`. On Windows it holds the profile folders followed by
    drive letters.
- `fsbrowse.ziparchive`: browsing inside zip archives.
  - A path such as `bundle.zip/docs/readme.txt` names a location inside an
    archive.
  - `UnZipFile` lists folders and files inside the archive, checks whether
    entries exist, and reads members. A member may be password protected.
    `UnZipFile` can be used as a context manager.
  - `split_first_zip_folder` cuts a path at its first `.zip` component.
  - The `*_with_zip_support` helpers and `file_get_content` handle plain
    paths and archive paths alike.
  - Failures while reading raise `ZipArchiveError`, which is a subclass of
    `OSError`.
- `fsbrowse.filetypes`: `ExtensionTypeTable` maps extensions to the number of
  the group they belong to, such as images, archives or source files.
  `file_extension_type` and `extension_types_from_filenames` use the default
  groups.
- `fsbrowse.navigation`: `FolderInfo` (the breadcrumb state) and `History`
  (back/forward). `browsing_layout` computes how many columns to show and how
  many entries go in each.
- `fsbrowse.chooser`: `FileChooser` runs the whole dialog workflow in one of
  the `DialogMode`s (`OPEN_FILE`, `SAVE_FILE`, `SELECT_FOLDER`):
  - opening and rescanning;
  - history moves and breadcrumb selection;
  - typed locations;
  - creating folders;
  - sort tabs;
  - name filtering;
  - choosing, confirming and cancelling.

## Installation

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Examples

Path helpers:

```python
from fsbrowse.paths import combine, get_directory_name, get_extension

get_extension("photos/Holiday.PNG")      # ".png"
get_directory_name("/home/user/a.txt")   # "/home/user"
combine("/home/user", "a.txt")           # "/home/user/a.txt"
```

Listing a directory:

```python
from fsbrowse.directory import Sorting, get_directories, get_files_filtered

for entry in get_directories(".", Sorting.ALPHABETIC):
    print(entry.name, entry.path)

images = get_files_filtered(".", ".png;.jpg", None, Sorting.SIZE_INVERSE)
```

Reading inside a zip archive:

```python
from fsbrowse.directory import Sorting
from fsbrowse.ziparchive import UnZipFile, file_get_content

with UnZipFile("bundle.zip") as archive:
    if archive.is_valid():
        for entry in archive.get_files("docs", Sorting.ALPHABETIC, False):
            print(entry.name)

data = file_get_content("bundle.zip/docs/readme.txt", False, None)
```

Driving a chooser:

```python
from fsbrowse.chooser import DialogMode, FileChooser

chooser = FileChooser()
chooser.open(DialogMode.SAVE_FILE, ".", ".txt;.md", "notes", None)
print(chooser.visible_files(""))
chooser.confirm()        # "" : the name becomes "notes.txt" and must be confirmed again
print(chooser.confirm()) # the folder joined with "notes.txt"
```

## What it does not do

`fsbrowse` draws nothing. It has no window, no buttons and no icons, and it
provides no command-line program. A front end has to render
`FileChooser`'s state, such as `directories`, `files`, `current_split_path`,
`known_directories` and `file_extension_types`, and call its methods when the
user acts. The file type table returns group numbers only. Choosing an icon
for each group is left to the front end. Zip archives can be read and listed,
but not written.