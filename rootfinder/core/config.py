"""\
Configurations
==============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, August 02 2025
Last updated on: Monday, October 19 2026

This module provides the configurations that are used throughout this
package: the markers and literals used by the root resolver and the
filesystem probes, plus the logging and telemetry settings.
"""

from __future__ import annotations

import os
import threading
import typing as t
from weakref import WeakKeyDictionary as WKDictionary

from rootfinder.core.error import ConfigValidationError
from rootfinder.utils.logging import dehumanise


if t.TYPE_CHECKING:
    from collections.abc import Iterable

__all__: tuple[str, ...] = (
    "Config",
    "ConsoleLoggerConfig",
    "FileLoggerConfig",
    "LoggerConfig",
    "ResolverConfig",
    "TTYLoggerConfig",
    "TelemetryConfig",
    "config_property",
)

_ALLOWED_LOG_LEVELS: tuple[str, ...] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)
# NOTE(xames3): The default log format uses the special `qualName`
# attribute which the coloured formatter fills in with the fully
# qualified name of the function that emitted the record.
_DEFAULT_LOG_FMT: t.Final[str] = (
    "%(asctime)s %(levelname)s %(qualName)s:%(lineno)d %(extra)s: %(message)s"
)
_DEFAULT_LOG_DATEFMT: t.Final[str] = "%Y-%m-%dT%H:%M:%SZ"
_DEFAULT_MARKERS: t.Final[tuple[str, ...]] = ("etc", "data")
_DEFAULT_SEGMENT: t.Final[str] = "/etc/"
_DEFAULT_PROBE: t.Final[str] = ".test"
_VERSION: t.Final[str] = "19.10.2026"


def _is_name(value: t.Any) -> bool:
    """Return `True` if value is a bare, non-empty path component."""
    return (
        isinstance(value, str)
        and value not in ("", ".", "..")
        and os.sep not in value
        and (os.altsep is None or os.altsep not in value)
    )


def _are_markers(value: t.Any) -> bool:
    """Return `True` if value is a non-empty tuple of marker names."""
    return (
        isinstance(value, tuple)
        and len(value) > 0
        and all(_is_name(item) for item in value)
    )


class config_property[T]:  # noqa: N801
    """Descriptor for configuration properties.

    This descriptor class creates and provides functionalities like
    Python's built-in `property` object decorator, but with additional
    features for configuration management: default values, immutable
    (frozen) properties, and validation against allowed values, a range
    or an arbitrary check.
    """

    __slots__: tuple[str, ...] = (
        "allowed",
        "between",
        "check",
        "default",
        "description",
        "frozen",
        "locks",
        "property",
        "validate",
    )

    _object_locks: WKDictionary[object, threading.RLock] = WKDictionary()
    _global_lock: threading.RLock = threading.RLock()

    def __init__(
        self,
        default: T,
        *,
        frozen: bool = False,
        description: str | None = None,
        allowed: Iterable[T] | None = None,
        check: t.Callable[[T], bool] | None = None,
        between: tuple[int | float, ...] | None = None,
    ) -> None:
        """Initialise configuration property."""
        self.default = default
        self.frozen = frozen
        self.description = description
        self.allowed = allowed
        self.check = check
        self.between = between
        self.property: str = ""
        self.validate: bool = any([self.between, self.check, self.allowed])
        self.locks: dict[int, threading.RLock] = {}

    def __set_name__(self, instance: type, value: str) -> None:
        """Configure and set the property value on the instance.

        This method sets the name of the property and initialises the
        default value on the owning class, validating it first.

        :param instance: The class where the property is being set.
        :param value: The name of the property to be set.
        :raises ConfigValidationError: If the default value is invalid.
        """
        self.property = f"_{value}"
        if self.default is not None and self.validate:
            try:
                self.__validate__(self.default)
            except ConfigValidationError as error:
                raise ConfigValidationError(
                    f"got invalid value for {value!r}: {error}"
                ) from error
        setattr(instance, self.property, self.default)

    @t.overload
    def __get__(self, instance: None, owner: type) -> config_property[T]: ...

    @t.overload
    def __get__(self, instance: object, owner: type) -> T: ...

    def __get__(
        self,
        instance: object | None,
        owner: type,
    ) -> config_property[T] | T:
        """Get and return the property value from the instance.

        :param instance: The instance where the property is being
            accessed.
        :param owner: The owner class of the property (not used).
        :return: The value of the property from the instance.
        """
        if instance is None:
            return self
        return getattr(instance, self.property, self.default)

    def __set__(self, instance: object, value: T) -> None:
        """Set the property with validation & immutability checks.

        :param instance: The instance where the property is being set.
        :param value: The value to be set for the property.
        :raises ConfigValidationError: If the property is frozen or the
            value fails validation.
        """
        if self.frozen:
            raise ConfigValidationError(
                f"cannot modify frozen property: {self.property[1:]!r}",
            )
        if self.validate:
            lock = self._acquire_lock(instance)
            with lock:
                self.__validate__(value)
        setattr(instance, self.property, value)

    def __validate__(self, value: t.Any) -> None:
        """Validate the property value based on constraints.

        :param value: The value to be validated.
        :raises ConfigValidationError: If the value does not meet the
            validation criteria.
        """
        if self.allowed is not None and value not in self.allowed:
            raise ConfigValidationError(
                f"{value!r} is not one of the allowed values "
                f"({', '.join(str(item) for item in self.allowed)})"
            )
        if self.check is not None:
            try:
                if not self.check(value):
                    raise ConfigValidationError("property validation failed")
            except ConfigValidationError:
                raise
            except Exception as error:
                raise ConfigValidationError(
                    f"property validation failed for {value!r} with "
                    f"message: {error}"
                ) from error
        if self.between is not None and len(self.between) == 2:
            minimum, maximum = self.between
            if not all(
                isinstance(num, int | float) for num in (minimum, maximum)
            ):
                raise ConfigValidationError("must be a tuple of two numbers")
            if not isinstance(value, int | float):
                raise ConfigValidationError(f"{value!r} is not a number")
            if not (minimum <= value <= maximum):
                raise ConfigValidationError(
                    f"{value} is not between {minimum} and {maximum}"
                )

    def _acquire_lock(self, instance: object) -> threading.RLock:
        """Return the validation lock owned by instance.

        Instances that support weak references keep their lock in a
        weak dictionary so it goes away with them. Anything else falls
        back to a regular dictionary keyed by `id`.

        :param instance: The instance where the property is being set.
        :return: A re-entrant lock for the instance.
        """
        with self._global_lock:
            try:
                lock = self._object_locks.get(instance)
                if lock is None:
                    lock = self._object_locks[instance] = threading.RLock()
            except TypeError:
                lock = self.locks.setdefault(id(instance), threading.RLock())
            return lock


class ResolverConfig:
    """Root resolver and probe configuration.

    The marker names, the process-root segment and the probe filename
    default to the fixed literals the helpers have always used, but can
    be overridden per configuration instance.
    """

    markers: config_property[tuple[str, ...]] = config_property(
        _DEFAULT_MARKERS,
        description="Subdirectory names that mark a project root.",
        check=_are_markers,
    )
    segment: config_property[str] = config_property(
        _DEFAULT_SEGMENT,
        description="Path segment stripped by `process_root_path`.",
        check=lambda x: isinstance(x, str) and len(x) > 0,
    )
    min_length: config_property[int] = config_property(
        2,
        description="Shortest candidate path the upward walk will visit.",
        check=lambda x: type(x) is int,
        between=(1, 4096),
    )
    probe: config_property[str] = config_property(
        _DEFAULT_PROBE,
        description="Name of the file created by the writability probe.",
        check=_is_name,
    )
    mode: config_property[int] = config_property(
        0o755,
        description="Permission bits for directories created on demand.",
        check=lambda x: type(x) is int,
        between=(0, 0o7777),
    )


class FileLoggerConfig:
    """File logger configuration.

    This class provides configuration options for logging to a file with
    options for log rotation and backup retention. File logging is off
    by default; a library should not write log files unless asked to.
    """

    enable: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )
    level: config_property[str] = config_property(
        "INFO",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    path: config_property[str] = config_property(
        "logs",
        check=lambda x: isinstance(x, str) and len(x) > 0,
    )
    output: config_property[str] = config_property("rootfinder.log")
    encoding: config_property[str] = config_property("utf-8", frozen=True)
    max_size: config_property[str] = config_property(
        "10MB",
        check=lambda x: dehumanise(x) >= 0,
    )
    backups: config_property[int] = config_property(5, check=lambda x: x >= 0)


class ConsoleLoggerConfig:
    """Console logger configuration.

    This class provides configuration options for logging to the console
    or the tty. It is designed to be used in development and debugging
    environments where real-time log output is required.
    """

    enable: config_property[bool] = config_property(
        True,
        allowed=[True, False],
    )
    level: config_property[str] = config_property(
        "DEBUG",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    colour: config_property[bool] = config_property(
        True,
        allowed=[True, False],
    )


TTYLoggerConfig = ConsoleLoggerConfig


class LoggerConfig:
    """Logger configuration.

    This class provides a unified configuration for logging. It combines
    the file and console logger configurations.
    """

    level: config_property[str] = config_property(
        "DEBUG",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    as_json: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )

    def __init__(self) -> None:
        """Initialise nested logger configurations."""
        self.file = FileLoggerConfig()
        self.tty = TTYLoggerConfig()


class TelemetryConfig:
    """OpenTelemetry configuration."""

    enabled: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )
    name: config_property[str | None] = config_property(None)


class Config:
    """Configuration.

    This class serves as the main configuration object for the package.
    It groups the resolver, logging and telemetry settings so a single
    instance can be created at start-up and handed to a `RootContext`.
    """

    name: config_property[str] = config_property("rootfinder", frozen=True)
    version: config_property[str] = config_property(_VERSION, frozen=True)
    debug: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )

    def __init__(self) -> None:
        """Initialise nested configurations."""
        self.resolver = ResolverConfig()
        self.logger = LoggerConfig()
        self.telemetry = TelemetryConfig()
