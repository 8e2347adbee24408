"""\
Capabilities
============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module defines the behaviours an error can offer to the rest of
the library. Each capability is a small runtime-checkable protocol and
is checked on its own, so any exception type can take part in
annotation, cause reporting or detailed rendering simply by defining
the matching method. No common base class is needed.

Runtime protocol checks only look for the attribute, and plenty of
exceptions keep plain data under names like `details`. The
`is_annotatable` and `is_detailed` helpers also require the attribute
to be callable and are what the library dispatches on.

.. code-block:: python

    class QuotaExceeded(Exception):
        def __init__(self, limit):
            super().__init__(f"quota of {limit} exceeded")
            self.notes = []

        def annotate(self, message, function, file, line):
            self.notes.append((message, function, file, line))

    error = note(QuotaExceeded(10), "upload rejected")
    assert isinstance(error, QuotaExceeded)
"""

from __future__ import annotations

import typing as t

__all__: tuple[str, ...] = (
    "Annotatable",
    "Causal",
    "Detailed",
    "is_annotatable",
    "is_detailed",
)


@t.runtime_checkable
class Causal(t.Protocol):
    """An error that can report the error that caused it."""

    def cause(self) -> BaseException | None:
        """Return the direct cause, or `None` if there is none."""
        ...


@t.runtime_checkable
class Annotatable(t.Protocol):
    """An error that can collect messages tied to call-sites.

    Implementations are not expected to be thread-safe; an error is
    annotated by one thread at a time.
    """

    def annotate(
        self,
        message: str,
        function: str,
        file: str,
        line: int,
    ) -> None:
        """Record a message together with where it was added."""
        ...


@t.runtime_checkable
class Detailed(t.Protocol):
    """An error that can describe itself in more detail than `str`."""

    def details(self) -> str:
        """Return a detailed, usually multi-line, description."""
        ...


def is_annotatable(err: object) -> t.TypeGuard[Annotatable]:
    """Return `True` if `err` offers a callable `annotate`."""
    return callable(getattr(err, "annotate", None))


def is_detailed(err: object) -> t.TypeGuard[Detailed]:
    """Return `True` if `err` offers a callable `details`."""
    return callable(getattr(err, "details", None))
