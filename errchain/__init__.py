"""\
errchain
========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

Chained, annotated errors with source-location context.

This package (errchain) builds errors that remember where they were
created, collect context as they travel up the call stack, and render
either as a single colon-joined line or as a detailed, line-by-line
trace of every point where context was added.

It also lets a component decide which errors its callers may see.
`pass_` keeps the identity of whitelisted errors and masks every other
error behind an opaque one that carries only its text. This keeps
callers from coming to depend on implementation-specific errors.

    >>> from errchain import new, note, wrap
    >>> error = wrap(new("config missing"), "read failed")
    >>> str(note(error, "can't bootstrap"))
    "can't bootstrap: read failed: config missing"
"""

from __future__ import annotations

from .core import *
from .utils import *


__all__: tuple[str, ...] = ("__version__",)
__all__ += core.__all__
__all__ += utils.__all__

__version__: str = "18.10.2026"
