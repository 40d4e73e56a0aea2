"""Fatal error types raised by the clone pipeline."""

from __future__ import annotations


class CloneError(Exception):
    """Base class for failures that abort a clone run."""


class NavigationFailure(CloneError):
    """The page did not finish loading within the navigation timeout."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Could not load {url}: {reason}")
        self.url = url
        self.reason = reason


class DirectoryCreationFailure(CloneError):
    """The output directory layout could not be created."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Could not create directory {path}: {reason}")
        self.path = path
        self.reason = reason
