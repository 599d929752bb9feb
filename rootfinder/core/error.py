"""\
Errors
======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, August 02 2025
Last updated on: Monday, October 19 2026

This module provides the error classes raised throughout this package.
Probe helpers never raise; only the resolver and the directory helpers
surface these errors to their callers.
"""

from __future__ import annotations

import typing as t

__all__: tuple[str, ...] = (
    "BaseError",
    "ConfigValidationError",
    "DirectoryCreationError",
    "FilesystemError",
    "RootNotFoundError",
)


class BaseError(Exception):
    """Base error class for all exceptions in this package.

    :param message: The error message to be displayed.
    """

    def __init__(self, message: str, *args: t.Any) -> None:
        """Initialise the error with a message and optional args."""
        super().__init__(message, *args)
        self.message = message

    def __str__(self) -> str:
        """Return the error message."""
        return self.message

    def __repr__(self) -> str:
        """Return a string representation of the error."""
        return f"<{type(self).__name__}(message={self.message!r})>"


class ConfigValidationError(BaseError):
    """Errors related to configuration validation failure."""


class FilesystemError(BaseError):
    """Errors related to a filesystem operation on a specific path.

    :param message: The error message to be displayed.
    :param path: The path the failed operation was working on.
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        """Initialise the filesystem error with context."""
        super().__init__(message)
        if path:
            self.message = f"{message} (Path: {path!r})"
        self.path = path


class RootNotFoundError(FilesystemError):
    """Raised when no ancestor directory holds a marker subdirectory.

    :param message: The error message to be displayed.
    :param path: The last directory visited by the walk.
    :param markers: The marker names that were searched for.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        markers: tuple[str, ...] = (),
    ) -> None:
        """Initialise the error with the walk's final state."""
        super().__init__(message, path=path)
        self.markers = markers


class DirectoryCreationError(FilesystemError):
    """Raised when a directory chain cannot be created."""
