"""\
Core
====

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module acts as an entry point for combining the error values,
capabilities, chain helpers and configurations that make up this
library.
"""

from __future__ import annotations

from .exceptions import *
from .config import *
from .site import *
from .annotation import *
from .capability import *
from .chain import *
from .errors import *


__all__: tuple[str, ...] = (
    exceptions.__all__
    + config.__all__
    + site.__all__
    + annotation.__all__
    + capability.__all__
    + chain.__all__
    + errors.__all__
)
