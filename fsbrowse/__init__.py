"""Path helpers, directory and zip-archive listing, navigation history and a file chooser model."""

__version__ = "0.1.0"
__all__ = ["paths", "directory", "ziparchive", "filetypes", "navigation", "chooser"]