"""\
Call-sites
==========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module records where in the source code an error was created or
annotated. The recorded locations make up the detailed rendering of an
error chain, an explicit substitute for a traceback that is built only
from the points where callers chose to add context.

Every public constructor in this library locates its *caller*, not
itself. Internal helpers therefore take a `depth` argument counting
the frames between them and user code, and each layer of indirection
adds one to it.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

from errchain.core.config import settings
from errchain.utils.logging import get_logger

__all__: tuple[str, ...] = (
    "CallSite",
    "locate",
)

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CallSite:
    """A single line in the source code.

    :param function: Name of the function, qualified by its module
        unless qualification is turned off in the configuration.
    :param file: Path of the source file.
    :param line: Line number within the file, `0` when unknown.
    """

    function: str = ""
    file: str = ""
    line: int = 0

    def __str__(self) -> str:
        """Render the call-site through the configured site format."""
        return settings.render.site_format.format(
            function=self.function,
            file=self.file,
            line=self.line,
        )

    def __bool__(self) -> bool:
        """Return `False` for a call-site that could not be located."""
        return bool(self.file or self.line)


def locate(depth: int = 0) -> CallSite:
    """Return the call-site `depth` frames above the caller.

    With the default depth this is the line that called `locate`.
    Helpers that locate on behalf of their own caller pass `depth=1`,
    and so on for every additional frame of indirection.

    :param depth: Number of frames to skip above the caller, defaults
        to `0`.
    :return: The located call-site, or an empty one if the stack is not
        deep enough.
    """
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        logger.debug(
            "Stack is too shallow to locate a call-site",
            extra={"depth": depth},
        )
        return CallSite()
    code = frame.f_code
    function = code.co_qualname
    if settings.render.qualified:
        module = frame.f_globals.get("__name__")
        if module:
            function = f"{module}.{function}"
    return CallSite(function, code.co_filename, frame.f_lineno)

