"""\
Logging
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module provides logging utilities and configuration helpers for
applications built on errchain. The library itself never logs the
errors it builds; it only emits debug records about degraded
call-sites. Applications log errors, and the formatters here make sure
an error chain is written with its detailed, per-call-site rendering
instead of (or ahead of) a bare traceback.

It includes a formatter with automatic extra field handling, a
coloured variant for terminals and a JSON formatter for log
collectors, all built on the standard Python logging library.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
import typing as t
from pathlib import Path

from errchain.core.capability import is_detailed
from errchain.core.chain import details

if t.TYPE_CHECKING:
    from types import TracebackType

    from errchain.core.config import LoggerConfig

    ExcInfo = tuple[type[BaseException], BaseException, TracebackType | None]

__all__: list[str] = [
    "ChainFormatter",
    "ColouredFormatter",
    "JSONFormatter",
    "configure",
    "get_logger",
]


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs every log record as a single JSON object.
    When a record carries an exception, its short rendering is stored
    under `error` and its detailed rendering, one entry per line, under
    `details`.

    :param extras: Whether to include extra fields in output, defaults
        to `True`.
    """

    def __init__(self, extras: bool = True) -> None:
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
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["error"] = str(exc)
            payload["details"] = details(exc).splitlines()
            payload["exception"] = self.formatException(record.exc_info)
        if self.extras:
            for key, value in record.__dict__.items():
                if key in ChainFormatter.LOG_RECORD_ATTRS:
                    continue
                if key not in payload and not key.startswith("_"):
                    payload[key] = value
        return json.dumps(payload, default=str)


class ChainFormatter(logging.Formatter):
    """Formatter that renders error chains and extra fields.

    Exceptions that can describe themselves in detail are written with
    their detailed rendering, where every line carries the call-site it
    came from. The standard traceback follows only when `traceback` is
    enabled. Other exceptions are formatted as usual.

    Extra fields (those not part of the standard `LogRecord`
    attributes) are formatted into a single string available as
    `%(extra)s` in the format pattern.

    :param fmt: The format string for log messages, defaults to `None`.
    :param datefmt: The format string for timestamps, defaults to
        `None`.
    :param extra_format: Format string for individual extra fields,
        defaults to `key: value`.
    :param extra_separator: Separator between multiple extra fields,
        defaults to a single space.
    :param traceback: Whether to append the traceback after the
        detailed rendering of an error, defaults to `False`.
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
        traceback: bool = False,
    ) -> None:
        """Initialise the chain formatter."""
        super().__init__(fmt, datefmt)
        self.extra = extra_format
        self.extra_separator = extra_separator
        self.traceback = traceback

    def formatException(self, ei: ExcInfo) -> str:  # noqa: N802
        """Format an exception, preferring its detailed rendering.

        :param ei: The exception info tuple from the log record.
        :return: The detailed rendering, optionally followed by the
            traceback, or the standard traceback for other exceptions.
        """
        exc = ei[1]
        if not is_detailed(exc):
            return super().formatException(ei)
        rendered = exc.details()
        if self.traceback:
            return f"{rendered}\n{super().formatException(ei)}"
        return rendered

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with automatic extra field handling.

        :param record: The log record to format.
        :return: Formatted log message with extra fields.
        """
        clone = logging.makeLogRecord(record.__dict__)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extras:
            entries = [
                self.extra.format(key=key, value=value)
                for key, value in sorted(extras.items())
            ]
            clone.extra = self.extra_separator.join(entries) + " "
        else:
            clone.extra = ""
        if not hasattr(clone, "qualName"):
            clone.qualName = f"{record.name}.{record.funcName}"
        # NOTE(xames3): The cached text is computed with this formatter's
        # own exception handling, so it must not leak across formatters.
        clone.exc_text = None
        return super().format(clone)


class ColouredFormatter(ChainFormatter):
    """Chain formatter with coloured, padded level names.

    Colours are only applied when `is_tty` is set, so log files stay
    free of ANSI escape sequences.

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

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colours for TTY output.

        :param record: The log record to format.
        :return: Formatted log message.
        """
        clone = logging.makeLogRecord(record.__dict__)
        qualname = f"{record.name}.{record.funcName}"
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
            clone.qualName = qualname
        return super().format(clone)


def configure(config: LoggerConfig) -> None:
    """Configure logging based on provided configuration settings.

    This function replaces the handlers on the root logger with a
    console handler and a rotating file handler, as enabled in the
    configuration. The root level is the lowest level among the enabled
    handlers.

    :param config: Logging configuration settings.
    """
    handlers: list[logging.Handler] = []
    levels: list[int] = []
    logger = logging.getLogger()
    logger.handlers.clear()
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
        formatter: logging.Formatter
        if config.as_json:
            formatter = JSONFormatter()
        else:
            coloured = ColouredFormatter(
                fmt=config.tty.fmt,
                datefmt=config.tty.datefmt,
                extra_format="[{key}: {value}]",
                traceback=config.tty.traceback,
            )
            coloured.is_tty = config.tty.colour and sys.stdout.isatty()
            formatter = coloured
        tty.setFormatter(formatter)
        handlers.append(tty)
    if config.file.enable:
        file = Path(config.file.path)
        file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            filename=file,
            maxBytes=config.file.max_bytes,
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
                traceback=config.file.traceback,
            )
        handler.setFormatter(formatter)
        handlers.append(handler)
    for handler in handlers:
        logger.addHandler(handler)


def get_logger(logger_name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    :param logger_name: Logger name.
    :return: Logger instance.
    """
    return logging.getLogger(logger_name)
