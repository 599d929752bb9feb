"""\
rootfinder
==========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, August 02 2025
Last updated on: Monday, October 19 2026

Project root discovery and small filesystem helpers.

This package finds the root directory of a project by walking upward
from the working directory until it meets a marker subdirectory (`etc`
or `data` by default). It also ships best-effort probes for existence,
file type, size and writability, and an idempotent directory creator.

The probes never raise. The resolver reports a missing root with a flag
or, through `find_project_root` and `RootContext.root`, with a
`RootNotFoundError` the caller decides how to handle.
"""

from __future__ import annotations

from .core import *
from .utils import *


__all__: tuple[str, ...] = ("__version__",)
__all__ += core.__all__
__all__ += utils.__all__

__version__: str = "19.10.2026"
