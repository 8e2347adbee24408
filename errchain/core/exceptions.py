"""\
Exception
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module defines the exceptions raised by the library itself. The
library has no I/O and therefore no runtime failure modes of its own;
these exceptions only report programming mistakes such as invalid
configuration values or message templates that do not match their
arguments. They are kept apart from the error values in
`errchain.core.errors`, which are what the library builds for callers.
"""

from __future__ import annotations

import typing as t

__all__: tuple[str, ...] = (
    "ConfigValidationError",
    "ErrchainException",
    "FormatError",
)


class ErrchainException(Exception):
    """Base exception class for all exceptions raised by the library.

    :param message: The error message to be displayed.
    """

    def __init__(self, message: str, *args: t.Any) -> None:
        """Initialise the exception with a message and optional args."""
        super().__init__(message, *args)
        self.message = message

    def __repr__(self) -> str:
        """Return a string representation of the exception."""
        return f"<{type(self).__name__}(message={self.message!r})>"


class ConfigValidationError(ErrchainException):
    """Errors related to configuration validation failure."""


class FormatError(ErrchainException, TypeError):
    """Exception raised when a message template rejects its arguments.

    It subclasses `TypeError` so that callers who already guard string
    formatting with `except TypeError` keep working.

    :param message: The error message to be displayed.
    :param template: The template that failed to format, defaults to
        `None`.
    """

    def __init__(self, message: str, *, template: str | None = None) -> None:
        """Initialise the format error with the offending template."""
        super().__init__(message)
        if template is not None:
            self.message = f"{message} (Template: {template!r})"
        self.template = template

    def __str__(self) -> str:
        """Return the error message."""
        return self.message
