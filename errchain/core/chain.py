"""\
Chain traversal
===============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module provides the helpers terminal consumers use to introspect
an error chain. They work on any exception and rely only on the
capabilities an error offers, never on its concrete type.
"""

from __future__ import annotations

import typing as t

from errchain.core.capability import Causal
from errchain.core.capability import is_detailed

if t.TYPE_CHECKING:
    from collections.abc import Iterator

__all__: tuple[str, ...] = (
    "cause",
    "details",
    "walk",
)


def cause(
    err: BaseException | None,
) -> tuple[BaseException | None, bool]:
    """Return the cause of an error and whether it could report one.

    An error that offers the cause capability always reports
    `found=True`, even when the cause it reports is `None`. Errors
    without the capability, such as masked errors and plain
    exceptions, are their own terminal point and come back unchanged
    with `found=False`.

    Exceptions that keep their cause in a plain `cause` attribute
    instead of a method are read the same way, as long as the
    attribute holds an exception or `None`. Any other value means the
    error has no cause to offer.

    :param err: The error to inspect, possibly `None`.
    :return: A `(cause, found)` tuple.
    """
    if err is None:
        return None, False
    if not isinstance(err, Causal):
        return err, False
    reported = err.cause
    if callable(reported):
        return reported(), True
    if reported is None or isinstance(reported, BaseException):
        return reported, True
    return err, False


def details(err: BaseException | None) -> str:
    """Return detailed information about an error.

    :param err: The error to render, possibly `None`.
    :return: The detailed rendering if the error offers one, otherwise
        its ordinary string form, or an empty string for `None`.
    """
    if err is None:
        return ""
    if is_detailed(err):
        return err.details()
    return str(err)


def walk(err: BaseException | None) -> Iterator[BaseException]:
    """Yield an error followed by each of its causes in turn.

    The walk stops at the first error that has no cause to report and
    never visits the same error twice.

    :param err: The outermost error, possibly `None`.
    :yield: Errors from the outermost to the root cause.
    """
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        reported, found = cause(err)
        if not found:
            return
        err = reported
