"""Bundled sample modules.

Each module here is importable and is also read back as text by
`sigdefs.scan.scan_sample`, so keep their comments and layout meaningful.
"""

from __future__ import annotations

from .bar import Bar
from .bar_variant import Bar as BarVariant

AVAILABLE_SAMPLES: tuple[str, ...] = ("bar", "bar_variant")

__all__ = ["AVAILABLE_SAMPLES", "Bar", "BarVariant"]
