"""\
Core
====

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, August 02 2025
Last updated on: Monday, October 19 2026

This module acts as an entry point for combining the configuration,
errors, root resolver and root context used throughout this package.
"""

from __future__ import annotations

from .config import *
from .error import *
from .resolver import *
from .context import *


__all__: tuple[str, ...] = (
    config.__all__ + error.__all__ + resolver.__all__ + context.__all__
)
