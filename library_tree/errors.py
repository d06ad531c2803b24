"""Exception types raised by library-tree."""

from __future__ import annotations


class LibraryTreeError(Exception):
    """Base class for library-tree errors."""

    pass


class ModuleLoadError(LibraryTreeError):
    """Raised when a module named on the command line cannot be imported."""

    def __init__(self, module: str, message: str) -> None:
        self.module = module
        self.message = message
        super().__init__(f"Failed to import '{module}': {message}")
