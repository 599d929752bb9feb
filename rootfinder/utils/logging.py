"""\
Logging
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Friday, July 04 2025
Last updated on: Monday, October 19 2026

This module provides logging utilities and configuration helpers for
the package. Everything here builds on the standard Python logging
library.

Library modules only ever call `get_logger`. Handlers are installed by
`configure`, which an application calls once with its `LoggerConfig`.
The module also ships formatters for coloured and JSON output with
automatic rendering of `extra` fields, and a decorator that logs how
long a function took.
"""

from __future__ import annotations

import functools
import json
import logging
import logging.handlers
import os
import re
import sys
import time
import typing as t

if t.TYPE_CHECKING:
    from rootfinder.core.config import LoggerConfig

__all__: list[str] = [
    "ColouredFormatter",
    "JSONFormatter",
    "RootfinderFormatter",
    "configure",
    "dehumanise",
    "get_logger",
    "perf_logger",
]


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs log records as one JSON object per line,
    which suits environments where logs are shipped to a collector. It
    captures timestamp, level, logger name, message, module, function,
    line number and any exception information.

    :param extras: Whether to include extra fields in output, defaults
        to `True`.
    """

    def __init__(self, extras: bool = True):
        """Initialise the JSON formatter instance."""
        super().__init__()
        self.extras = extras

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        :param record: The log record to format.
        :return: JSON-formatted log message.
        """
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if self.extras:
            for key, value in record.__dict__.items():
                if (
                    key not in payload
                    and key not in RootfinderFormatter.LOG_RECORD_ATTRS
                    and not key.startswith("_")
                ):
                    payload[key] = value
        return json.dumps(payload, default=str)


class RootfinderFormatter(logging.Formatter):
    """Custom formatter that automatically includes extra fields.

    This formatter detects fields passed through `extra=` (those not
    part of the standard `LogRecord` attributes) and renders them into
    the `%(extra)s` placeholder of the format string, so call sites do
    not have to build that context into the message by hand.

    :param fmt: The format string for log messages, defaults to `None`.
    :param datefmt: The format string for timestamps in log messages,
        defaults to `None`.
    :param extra_format: Format string for individual extra fields.
    :param extra_separator: Separator between multiple extra fields,
        defaults to a single space.
    :var LOG_RECORD_ATTRS: Set of standard `LogRecord` attributes.
    """

    LOG_RECORD_ATTRS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
        "taskName",
        "qualName",
        "extra",
    }

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        extra_format: str = "{key}: {value}",
        extra_separator: str = " ",
    ) -> None:
        """Initialise the custom formatter."""
        super().__init__(fmt, datefmt)
        self.extra = extra_format
        self.extra_separator = extra_separator

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with automatic extra field handling.

        :param record: The log record to format.
        :return: Formatted log message with extra fields.
        """
        clone = logging.makeLogRecord(record.__dict__)
        entries = [
            self.extra.format(key=key, value=value)
            for key, value in sorted(record.__dict__.items())
            if key not in self.LOG_RECORD_ATTRS and not key.startswith("_")
        ]
        clone.extra = self.extra_separator.join(entries)
        if not hasattr(clone, "qualName"):
            clone.qualName = record.name
        return super().format(clone)


class ColouredFormatter(RootfinderFormatter):
    """Formatter with qualified function names and level colours.

    Each record is labelled with `module.function` of the call site and
    a right-aligned level name. Colours are applied only when `is_tty`
    is set, so log files stay free of ANSI escape sequences.

    :var COLORS: Dictionary mapping log levels to ANSI colour codes.
    """

    COLORS = {
        "DEBUG": "\x1b[38;5;14m",
        "INFO": "\x1b[38;5;41m",
        "WARNING": "\x1b[38;5;215m",
        "ERROR": "\x1b[38;5;204m",
        "CRITICAL": "\x1b[38;5;197m",
        "QUALNAME": "\x1b[38;5;140m",
        "RESET": "\x1b[0m",
    }

    is_tty: bool = False

    def make_qualname(self, record: logging.LogRecord) -> str:
        """Return the qualified name of the function that logged.

        :param record: The log record containing function information.
        :return: Qualified name string.
        """
        parts = [part for part in (record.name, record.funcName) if part]
        return ".".join(parts) if parts else "unknown"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, colouring it for TTY output.

        :param record: The log record to format.
        :return: Formatted log message.
        """
        clone = logging.makeLogRecord(record.__dict__)
        qualname = self.make_qualname(record)
        clone.qualName = qualname
        if self.is_tty:
            colour = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            clone.levelname = (
                f"{colour}{record.levelname:>8s}{self.COLORS['RESET']}"
            )
            clone.qualName = (
                f"{self.COLORS['QUALNAME']}{qualname}{self.COLORS['RESET']}"
            )
        else:
            clone.levelname = f"{record.levelname:>8s}"
        return super().format(clone)


def configure(config: LoggerConfig, name: str = "rootfinder") -> None:
    """Configure logging based on provided configuration settings.

    This installs a console handler and, when enabled, a rotating file
    handler on the named logger. Existing handlers on that logger are
    removed first so the function can be called again to reconfigure.

    :param config: Logging configuration settings.
    :param name: Name of the logger to configure, defaults to the
        package logger.
    """
    from rootfinder.utils.filesystem import ensure_directory

    handlers: list[logging.Handler] = []
    levels: list[int] = []
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    if config.tty.enable:
        levels.append(getattr(logging, config.tty.level.upper()))
    if config.file.enable:
        levels.append(getattr(logging, config.file.level.upper()))
    logger.setLevel(
        min(levels) if levels else getattr(logging, config.level.upper())
    )
    if config.tty.enable:
        tty = logging.StreamHandler(sys.stdout)
        tty.setLevel(getattr(logging, config.tty.level.upper()))
        if config.as_json:
            formatter = JSONFormatter()
        else:
            formatter = ColouredFormatter(
                fmt=config.tty.fmt,
                datefmt=config.tty.datefmt,
                extra_format="[{key}: {value}]",
            )
            formatter.is_tty = config.tty.colour and sys.stdout.isatty()
        tty.setFormatter(formatter)
        handlers.append(tty)
    if config.file.enable:
        directory = ensure_directory(config.file.path)
        handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(directory, config.file.output),
            maxBytes=dehumanise(config.file.max_size),
            backupCount=config.file.backups,
            encoding=config.file.encoding,
        )
        handler.setLevel(getattr(logging, config.file.level.upper()))
        if config.as_json:
            formatter = JSONFormatter()
        else:
            formatter = ColouredFormatter(
                fmt=config.file.fmt,
                datefmt=config.file.datefmt,
                extra_format="[{key}: {value}]",
            )
        handler.setFormatter(formatter)
        handlers.append(handler)
    for handler in handlers:
        logger.addHandler(handler)


def dehumanise(size: str) -> int:
    """Parse size string to bytes.

    This function converts a human-readable size string (like `10MB`,
    `1GB`, etc.) into the number of bytes it stands for. Units are case
    insensitive and may be separated from the number by whitespace.

    :param size: Size string like `10MB`, `1GB`, etc.
    :return: Size in bytes.
    :raises ValueError: If the string cannot be parsed.
    """
    size = size.upper().strip()
    multipliers = {
        "B": 1,
        "KB": 1024,
        "MB": 1024**2,
        "GB": 1024**3,
        "TB": 1024**4,
    }
    matched = re.match(r"^(\d+(?:\.\d+)?)\s*([KMGT]?B?)$", size)
    if not matched:
        raise ValueError(f"Invalid size format: {size}")
    value, unit = matched.groups()
    if unit and not unit.endswith("B"):
        unit += "B"
    return int(float(value) * multipliers.get(unit or "B", 1))


def get_logger(logger_name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    :param logger_name: Logger name.
    :return: Logger instance.
    """
    return logging.getLogger(logger_name)


def perf_logger(func: t.Callable[..., t.Any]) -> t.Callable[..., t.Any]:
    """Decorator to log function execution time.

    The wrapped function's elapsed time is logged at DEBUG when it
    returns, and at ERROR with the traceback when it raises. The
    exception is always re-raised.

    :param func: Function to wrap.
    :return: Wrapped function with performance logging.
    """

    @functools.wraps(func)
    def wrapper(*args: t.Any, **kwargs: t.Any) -> t.Any:
        """Wrapper function to log execution time."""
        logger = get_logger(func.__module__)
        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            elapsed = time.perf_counter() - started
            logger.error(
                f"Function {func.__name__!r} failed after "
                f"{elapsed:.4f}s: {exc}",
                extra={
                    "function": func.__name__,
                    "func_module": func.__module__,
                    "elapsed": elapsed,
                },
                exc_info=True,
            )
            raise
        elapsed = time.perf_counter() - started
        logger.debug(
            f"Function: {func.__qualname__!r} completed in {elapsed:.4f}s",
            extra={
                "function": func.__qualname__,
                "func_module": func.__module__,
                "elapsed": elapsed,
            },
        )
        return result

    return wrapper
