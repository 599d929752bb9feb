"""\
Root context
============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module provides `RootContext`, which owns the resolved project
root for an application. Create one at start-up, pass it to whatever
needs the root, and the upward walk runs at most once. Nothing in this
package keeps a process-wide root of its own.
"""

from __future__ import annotations

import os
import threading
import typing as t

from rootfinder.core.config import Config
from rootfinder.core.resolver import find_project_root
from rootfinder.core.resolver import process_root_path
from rootfinder.core.resolver import resolve_project_root
from rootfinder.utils.filesystem import ensure_directory
from rootfinder.utils.filesystem import is_writable
from rootfinder.utils.logging import get_logger
from rootfinder.utils.opentelemetry import get_tracer

if t.TYPE_CHECKING:
    from opentelemetry.trace import Tracer

__all__: tuple[str, ...] = ("RootContext",)

logger = get_logger(__name__)


class RootContext:
    """Initialise-once holder of the project root.

    The root is resolved lazily on first access, using the markers and
    minimum path length from the configuration, and cached for the
    lifetime of the context. A cached root is never re-checked against
    the filesystem. Failed resolutions are not cached, so a later call
    walks again.

    :param config: Configuration to use, defaults to a fresh `Config`.
    :param root: A known project root. When given, no walk ever runs.
    :param start: Directory the walk starts from, defaults to the
        working directory at the time of first resolution.
    """

    __slots__: tuple[str, ...] = (
        "_config",
        "_lock",
        "_root",
        "_start",
        "_tracer",
    )

    def __init__(
        self,
        config: Config | None = None,
        *,
        root: str | os.PathLike[str] | None = None,
        start: str | os.PathLike[str] | None = None,
    ) -> None:
        """Initialise the context."""
        self._config = config or Config()
        self._root: str | None = os.fspath(root) if root else None
        self._start = start
        self._lock = threading.RLock()
        self._tracer: Tracer = get_tracer(self._config)

    def __repr__(self) -> str:
        """Return a string representation of the context."""
        return f"<{type(self).__name__}(root={self._root!r})>"

    @property
    def config(self) -> Config:
        """Return the configuration this context resolves with."""
        return self._config

    @property
    def resolved(self) -> bool:
        """Return `True` once a root has been cached."""
        return self._root is not None

    @property
    def root(self) -> str:
        """Return the cached root, resolving it on first access.

        :raises RootNotFoundError: If no project root can be found.
        """
        if self._root is not None:
            return self._root
        with self._lock:
            if self._root is None:
                with self._tracer.start_as_current_span("RootContext.root"):
                    self._root = find_project_root(
                        self._start,
                        markers=self._config.resolver.markers,
                        min_length=self._config.resolver.min_length,
                    )
                logger.info(f"Project root resolved to {self._root!r}")
            return self._root

    def resolve(self) -> tuple[str, bool]:
        """Resolve the root without raising.

        The cache is filled only when a root is found.

        :return: A `(path, found)` pair, as `resolve_project_root`
            returns it.
        """
        if self._root is not None:
            return self._root, True
        with self._lock:
            if self._root is not None:
                return self._root, True
            path, found = resolve_project_root(
                self._start,
                markers=self._config.resolver.markers,
                min_length=self._config.resolver.min_length,
            )
            if found:
                self._root = path
            return path, found

    def path(self, *parts: str | os.PathLike[str]) -> str:
        """Join parts onto the project root."""
        return os.path.join(self.root, *parts)

    def ensure_directory(self, *parts: str | os.PathLike[str]) -> str:
        """Create a directory under the project root if it is missing.

        Uses the directory mode from the configuration.

        :raises RootNotFoundError: If no project root can be found.
        :raises DirectoryCreationError: If the directory cannot be
            created.
        """
        return ensure_directory(
            self.path(*parts),
            mode=self._config.resolver.mode,
        )

    def is_writable(self, *parts: str | os.PathLike[str]) -> bool:
        """Probe a directory under the project root for writability."""
        return is_writable(
            self.path(*parts),
            probe=self._config.resolver.probe,
        )

    def process_root(self) -> str:
        """Return the working directory cut at the configured segment."""
        return process_root_path(self._config.resolver.segment)
