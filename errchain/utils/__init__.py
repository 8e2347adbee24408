"""\
Utilities
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module acts as an entry point for combining various utilities used
throughout the library. The logging and OpenTelemetry integrations are
not re-exported here and are imported from their own modules.
"""

from __future__ import annotations

from .formatting import *


__all__: tuple[str, ...] = formatting.__all__
