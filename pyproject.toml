[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "fsbrowse"
version = "0.1.0"
description = "Path helpers, directory and zip-archive listing, navigation history and a UI-independent file chooser model"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "file chooser",
    "file dialog",
    "directory listing",
    "zip",
    "paths",
    "navigation history",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: File Managers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["fsbrowse*"]

[tool.pytest.ini_options]
addopts = "-ra"
