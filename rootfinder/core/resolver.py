"""\
Root resolver
=============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module locates the root directory of a project. A project root is
the nearest directory, walking upward from a starting point, that has
one of the marker entries (`etc` or `data` by default) as a child.

The resolver functions here are stateless. Caching the result for the
lifetime of an application is the job of `RootContext`.
"""

from __future__ import annotations

import os
import typing as t

from opentelemetry import trace

from rootfinder.core.config import _DEFAULT_MARKERS
from rootfinder.core.config import _DEFAULT_SEGMENT
from rootfinder.core.error import RootNotFoundError
from rootfinder.utils.filesystem import exists
from rootfinder.utils.logging import get_logger
from rootfinder.utils.logging import perf_logger

if t.TYPE_CHECKING:
    from collections.abc import Sequence

__all__: tuple[str, ...] = (
    "find_project_root",
    "process_root_path",
    "resolve_project_root",
)

_MIN_PATH_LENGTH: t.Final[int] = 2

logger = get_logger(__name__)
tracer = trace.get_tracer(__name__)


def _has_marker(path: str, markers: Sequence[str]) -> bool:
    """Return `True` if any of the markers exists directly under path."""
    return any(exists(os.path.join(path, marker)) for marker in markers)


@perf_logger
def resolve_project_root(
    start: str | os.PathLike[str] | None = None,
    *,
    markers: Sequence[str] | None = None,
    min_length: int | None = None,
) -> tuple[str, bool]:
    """Walk upward from start looking for a marker subdirectory.

    Each candidate directory is checked for the markers before the walk
    decides whether to stop, so the filesystem root is checked too. The
    walk stops once the parent of a candidate is the candidate itself,
    or once the candidate is shorter than `min_length` characters.

    :param start: Directory to start from, defaults to the current
        working directory.
    :param markers: Names whose presence marks a project root, defaults
        to `("etc", "data")`.
    :param min_length: Shortest candidate path to visit, defaults to 2.
    :return: A `(path, found)` pair. On success `path` is the project
        root; otherwise it is the last directory visited.
    """
    markers = tuple(markers) if markers is not None else _DEFAULT_MARKERS
    if min_length is None:
        min_length = _MIN_PATH_LENGTH
    with tracer.start_as_current_span("resolve_project_root") as span:
        if start is None:
            try:
                path = os.getcwd()
            except OSError as error:
                logger.warning(f"Cannot read working directory: {error}")
                span.set_attribute("rootfinder.found", False)
                return "", False
        else:
            path = os.path.abspath(start)
        span.set_attribute("rootfinder.start", path)
        previous = None
        while True:
            if _has_marker(path, markers):
                span.set_attribute("rootfinder.found", True)
                span.set_attribute("rootfinder.path", path)
                logger.debug(
                    f"Found project root at {path!r}",
                    extra={"markers": markers},
                )
                return path, True
            if previous == path or len(path) < min_length:
                break
            previous = path
            path = os.path.dirname(path)
        span.set_attribute("rootfinder.found", False)
        span.set_attribute("rootfinder.path", path)
        logger.warning(
            f"No project root found, walk stopped at {path!r}",
            extra={"markers": markers},
        )
        return path, False


def find_project_root(
    start: str | os.PathLike[str] | None = None,
    *,
    markers: Sequence[str] | None = None,
    min_length: int | None = None,
) -> str:
    """Return the project root or raise if there is none.

    This is `resolve_project_root` for callers that prefer an exception
    to a flag. Whether a missing root is fatal is left to them.

    :param start: Directory to start from, defaults to the current
        working directory.
    :param markers: Names whose presence marks a project root.
    :param min_length: Shortest candidate path to visit.
    :return: The project root.
    :raises RootNotFoundError: If no ancestor holds a marker.
    """
    markers = tuple(markers) if markers is not None else _DEFAULT_MARKERS
    path, found = resolve_project_root(
        start,
        markers=markers,
        min_length=min_length,
    )
    if not found:
        raise RootNotFoundError(
            "project root not found (no "
            + " or ".join(f"{marker}/" for marker in markers)
            + " directory)",
            path=path,
            markers=markers,
        )
    return path


def process_root_path(segment: str | None = None) -> str:
    """Return the working directory, cut short at the marker segment.

    A process started from inside a marker directory, for example
    `/srv/app/etc/nginx`, gets `/srv/app` back. Any other working
    directory is returned unchanged. An unreadable working directory,
    such as one that has been deleted, yields an empty string.

    :param segment: Segment to cut at, defaults to `/etc/`.
    :return: The working directory, possibly truncated.
    """
    segment = segment or _DEFAULT_SEGMENT
    try:
        directory = os.getcwd()
    except OSError as error:
        logger.warning(f"Cannot read working directory: {error}")
        return ""
    if segment in directory:
        directory = directory.split(segment, 1)[0]
    return directory
