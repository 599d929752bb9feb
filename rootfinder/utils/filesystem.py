"""\
Filesystem utility objects
==========================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Wednesday, July 30 2025
Last updated on: Monday, October 19 2026

This module provides the path probes and the directory helper used
throughout the package.

The probes are best-effort and non-diagnostic. Each one issues a single
filesystem query and maps any failure to `False` or `0`, so a caller
cannot tell a missing path apart from one it is not allowed to inspect.
Do not grow them into something that reports why a check failed.
"""

from __future__ import annotations

import os
import stat

from rootfinder.core.error import DirectoryCreationError
from rootfinder.utils.logging import get_logger

__all__: tuple[str, ...] = (
    "ensure_directory",
    "exists",
    "is_file",
    "is_writable",
    "size",
)

_PROBE_FILENAME: str = ".test"
_DIRECTORY_MODE: int = 0o755

logger = get_logger(__name__)


def exists(path: str | os.PathLike[str]) -> bool:
    """Return `True` if any entry (file or directory) exists at path.

    Only a "not found" style failure counts as absence. Any other stat
    failure, such as a permission error on the entry itself, still
    reports `True`.
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError, ValueError):
        return False
    except OSError as error:
        logger.debug(f"Stat failed for {os.fspath(path)!r}: {error}")
    return True


def is_file(path: str | os.PathLike[str]) -> bool:
    """Return `True` if path exists and is not a directory."""
    try:
        mode = os.stat(path).st_mode
    except (OSError, ValueError) as error:
        logger.debug(f"Stat failed for {os.fspath(path)!r}: {error}")
        return False
    return not stat.S_ISDIR(mode)


def size(path: str | os.PathLike[str]) -> int:
    """Return the size of path in bytes.

    Returns `0` on any error, including a missing path, so a zero size
    is ambiguous between an empty file and no file at all.
    """
    try:
        return os.stat(path).st_size
    except (OSError, ValueError) as error:
        logger.debug(f"Stat failed for {os.fspath(path)!r}: {error}")
        return 0


def is_writable(
    path: str | os.PathLike[str],
    probe: str = _PROBE_FILENAME,
) -> bool:
    """Check whether files can be created inside the directory at path.

    This creates the hidden probe file inside the directory and removes
    it straight away. Removal is best-effort; if the process dies between
    the two steps the probe file is left behind.

    :param path: Directory to check.
    :param probe: Name of the probe file, defaults to `.test`.
    :return: `True` if the probe file could be created.
    """
    target = os.path.join(path, probe)
    try:
        with open(target, "a"):
            pass
    except (OSError, ValueError) as error:
        logger.debug(
            f"Directory {os.fspath(path)!r} is not writable: {error}"
        )
        return False
    try:
        os.remove(target)
    except OSError:
        pass
    return True


def ensure_directory(
    path: str | os.PathLike[str],
    mode: int = _DIRECTORY_MODE,
) -> str:
    """Create a directory, and any missing parents, if it does not exist.

    Existence alone short-circuits, even if the existing entry is not a
    directory.

    :param path: Directory to create.
    :param mode: Permission bits for newly created directories.
    :return: The path, as a string.
    :raises DirectoryCreationError: If the chain cannot be created.
    """
    path = os.fspath(path)
    if exists(path):
        return path
    try:
        os.makedirs(path, mode, exist_ok=True)
    except OSError as error:
        raise DirectoryCreationError(
            f"could not create directory: {error.strerror or error}",
            path=path,
        ) from error
    logger.debug(f"Created directory {path!r}")
    return path
