"""
sigdefs.scan.

Public facade: turn module source into a `ScanReport` of definitions and
comments.

Contract
--------
- `scan_source` is the core entrypoint; `scan_path` and `scan_sample` only
  differ in where the text comes from.
- Raises built-in exceptions and chains `SigdefsError` as the cause via helpers
  in `sigdefs.errors`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from .comments import Comment, extract_comments, leading_comments
from .definitions import Definitions, NamedItem, parse_source
from .errors import (
    raise_invalid_source,
    raise_source_not_found,
    raise_unsupported_feature,
)
from .samples import AVAILABLE_SAMPLES

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScanReport:
    """Definitions and comments of one module.

    Attributes:
        module_name: Name the module was scanned under.
        definitions: Items in source order, parents before children.
        comments: Comments in source order (empty if not requested).
    """

    module_name: str
    definitions: tuple[NamedItem, ...]
    comments: tuple[Comment, ...]

    def leading_comments(self, item: NamedItem) -> tuple[Comment, ...]:
        """Return the comment block directly above `item`."""
        return leading_comments(item, self.comments)

    def find(self, qualname: str) -> NamedItem | None:
        """Return the first item with the given qualname, if any."""
        for item in self.definitions:
            if item.qualname == qualname:
                return item
        return None

    def lines(self) -> list[str]:
        """Render the report, one definition or comment per line."""
        out = [f"Defn: {str(item)!r}" for item in self.definitions]
        out.extend(f"C: {comment}" for comment in self.comments)
        return out


def scan_source(
    source: str,
    *,
    module_name: str = "<string>",
    include_private: bool = True,
    include_comments: bool = True,
) -> ScanReport:
    """
    Scan module source text.

    Args:
        source: Python source.
        module_name: Name reported for the module item.
        include_private: Keep `_private` items (and items nested in them).
        include_comments: Collect comments.

    Returns:
        ScanReport for the source.
    """
    tree = parse_source(source, filename=module_name)
    items = tuple(
        item
        for item in Definitions(tree, module_name=module_name)
        if include_private or not item.is_private
    )
    comments = tuple(extract_comments(source)) if include_comments else ()
    logger.debug(
        "Scanned %s: %d definition(s), %d comment(s)",
        module_name,
        len(items),
        len(comments),
    )
    return ScanReport(module_name=module_name, definitions=items, comments=comments)


def scan_path(
    path: Path | str,
    *,
    include_private: bool = True,
    include_comments: bool = True,
) -> ScanReport:
    """
    Scan a UTF-8 source file. The module name is the file stem.

    Raises:
        FileNotFoundError: If `path` is not a file.
        ValueError: If the file is not valid UTF-8 or does not parse.
    """
    p = Path(path)
    if not p.is_file():
        raise_source_not_found(path=p)
    try:
        source = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise_invalid_source(detail=f"{p} is not valid UTF-8: {exc.reason}")
    logger.info("Scanning %s", p)
    return scan_source(
        source,
        module_name=p.stem,
        include_private=include_private,
        include_comments=include_comments,
    )


def scan_sample(
    name: str = "bar",
    *,
    include_private: bool = True,
    include_comments: bool = True,
) -> ScanReport:
    """
    Scan one of the bundled sample modules.

    Args:
        name: Sample name, one of `sigdefs.samples.AVAILABLE_SAMPLES`.
        include_private: Keep `_private` items.
        include_comments: Collect comments.

    Raises:
        NotImplementedError: If there is no sample with that name.
    """
    if name not in AVAILABLE_SAMPLES:
        raise_unsupported_feature(
            feature=f"sample={name}",
            detail=f"Available samples: {list(AVAILABLE_SAMPLES)}.",
        )
    source = (
        resources.files("sigdefs.samples")
        .joinpath(f"{name}.py")
        .read_text(encoding="utf-8")
    )
    return scan_source(
        source,
        module_name=f"sigdefs.samples.{name}",
        include_private=include_private,
        include_comments=include_comments,
    )
