"""sigdefs.

List the definitions a Python module declares, with their signatures, and the
comments that annotate them. Ships a small sample record type (`Bar`) that the
command line tool scans by default.

Public API (v1)
--------------
Primary user entrypoints:
- `scan_source`: Scan module source text into a `ScanReport`.
- `scan_path`: Same, reading a UTF-8 file.
- `scan_sample`: Same, for a bundled sample module.

Core data structures:
- `NamedItem`, `Sig`, `Comment`
- `ScanReport`
"""

from __future__ import annotations

from .comments import Comment, extract_comments, leading_comments
from .definitions import (
    AttrType,
    Definitions,
    ItemKind,
    NamedItem,
    Param,
    ParamKind,
    PropType,
    Sig,
    Type,
    definitions,
)
from .errors import ErrorCode, SigdefsError
from .samples import AVAILABLE_SAMPLES, Bar, BarVariant
from .scan import ScanReport, scan_path, scan_sample, scan_source

# -----------------------------------------------------------------------------
# Versioning
# -----------------------------------------------------------------------------

__version__ = "0.1.0"

# -----------------------------------------------------------------------------
# Public export surface
# -----------------------------------------------------------------------------

__all__ = [
    "AVAILABLE_SAMPLES",
    "AttrType",
    "Bar",
    "BarVariant",
    "Comment",
    "Definitions",
    "ErrorCode",
    "ItemKind",
    "NamedItem",
    "Param",
    "ParamKind",
    "PropType",
    "ScanReport",
    "Sig",
    "SigdefsError",
    "Type",
    "__version__",
    "definitions",
    "extract_comments",
    "leading_comments",
    "scan_path",
    "scan_sample",
    "scan_source",
]
