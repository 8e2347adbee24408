"""\
Message formatting
==================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module provides the message formatting helper shared by every
error constructor. Messages follow the printf-style convention used by
the standard `logging` module: the template is only interpolated when
arguments are supplied, so literal `%` signs in plain messages are
left untouched.
"""

from __future__ import annotations

import typing as t

from errchain.core.exceptions import FormatError

__all__: tuple[str, ...] = ("format_message",)


def format_message(message: str, *args: t.Any, **kwargs: t.Any) -> str:
    """Interpolate positional or keyword arguments into a message.

    :param message: The printf-style template, or a literal message
        when no arguments are given.
    :param args: Positional arguments for the template.
    :param kwargs: Keyword arguments for a template using named
        fields, for example `%(path)s`.
    :return: The formatted message.
    :raises FormatError: If both positional and keyword arguments are
        given or the template does not accept the arguments.
    """
    if args and kwargs:
        raise FormatError(
            "cannot mix positional and keyword arguments",
            template=message,
        )
    if not (args or kwargs):
        return message
    try:
        return message % (kwargs if kwargs else args)
    except (TypeError, ValueError, KeyError) as error:
        raise FormatError(
            f"message does not accept its arguments: {error}",
            template=message,
        ) from error
