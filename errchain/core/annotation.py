"""\
Annotations
===========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module provides the annotation record, a contextual message tied
to the call-site where it was added to an error.
"""

from __future__ import annotations

from dataclasses import dataclass

from errchain.core.site import CallSite

__all__: tuple[str, ...] = ("Annotation",)


@dataclass(frozen=True, slots=True)
class Annotation:
    """A message associated with a call-site.

    An annotation with an empty message still carries its call-site.
    It is left out of the short rendering of an error but shows up in
    the detailed one.

    :param message: The contextual message, possibly empty.
    :param site: Where the annotation was added.
    """

    message: str
    site: CallSite

    def __str__(self) -> str:
        """Return the short rendering, which is the message alone."""
        return self.message

    def details(self) -> str:
        """Return the detailed rendering, the call-site and message."""
        if not self.message:
            return str(self.site)
        return f"{self.site} {self.message}"
