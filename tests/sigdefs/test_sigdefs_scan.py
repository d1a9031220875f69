"""Unit tests for sigdefs.scan (pytest).

These tests cover:
- the report for the bundled samples
- privacy and comment filters
- file scanning and its failure modes
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

import pytest

from sigdefs.errors import ErrorCode, SigdefsError
from sigdefs.scan import ScanReport, scan_path, scan_sample, scan_source

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def bar_report() -> ScanReport:
    """Report for the bundled `bar` sample.

    Returns:
        ScanReport instance.
    """
    return scan_sample("bar")


def test_bar_sample_definitions(bar_report: ScanReport) -> None:
    """Every definition of the Bar sample is listed, in order."""
    assert bar_report.module_name == "sigdefs.samples.bar"
    assert [str(item) for item in bar_report.definitions] == [
        "module sigdefs.samples.bar",
        "constant GREETING: Final[str]",
        "def _require_int(value: object, *, name: str) -> None",
        "class Bar",
        "constant Bar.X: ClassVar[int]",
        "const Bar.bar: int",
        "const Bar._foo: object",
        "def Bar.__post_init__() -> None",
        "defs Bar.do_the_thing() -> None",
        "def Bar.add_one(x: int) -> int",
        "attr_reader Bar.foo -> object",
    ]


def test_bar_variant_sample_has_ten() -> None:
    """The variant lists ten() instead of add_one()."""
    report = scan_sample("bar_variant")
    names = [item.qualname for item in report.definitions]
    assert "Bar.ten" in names
    assert "Bar.add_one" not in names
    assert str(report.find("Bar.ten")) == "def Bar.ten() -> int"


def test_bar_sample_comments(bar_report: ScanReport) -> None:
    """Comments are collected and attached to the item below them."""
    assert all(c.text.startswith("#") for c in bar_report.comments)
    do_the_thing = bar_report.find("Bar.do_the_thing")
    assert do_the_thing is not None
    assert [c.text for c in bar_report.leading_comments(do_the_thing)] == [
        "# prints the greeting",
        "# and needs no instance",
    ]
    x = bar_report.find("Bar.X")
    assert x is not None
    assert [c.text for c in bar_report.leading_comments(x)] == ["# always 5"]


def test_report_lines_format(bar_report: ScanReport) -> None:
    """Definitions come first, then comments."""
    lines = bar_report.lines()
    n_defs = len(bar_report.definitions)
    assert lines[0] == "Defn: 'module sigdefs.samples.bar'"
    assert all(line.startswith("Defn: ") for line in lines[:n_defs])
    assert all(re.match(r"C: \d+:\d+: '#", line) for line in lines[n_defs:])
    assert len(lines) == n_defs + len(bar_report.comments)


def test_filters() -> None:
    """include_private and include_comments drop what they name."""
    report = scan_sample("bar", include_private=False, include_comments=False)
    names = [item.qualname for item in report.definitions]
    assert "_require_int" not in names
    assert "Bar._foo" not in names
    assert "Bar.__post_init__" in names
    assert report.comments == ()


def test_find_missing_returns_none(bar_report: ScanReport) -> None:
    """find() returns None for unknown names."""
    assert bar_report.find("Bar.nope") is None


def test_unknown_sample() -> None:
    """Unknown samples are unsupported."""
    with pytest.raises(NotImplementedError, match=r"Available samples") as exc:
        scan_sample("baz")
    assert isinstance(exc.value.__cause__, SigdefsError)
    assert exc.value.__cause__.code == ErrorCode.UNSUPPORTED_FEATURE


def test_scan_path_uses_file_stem(tmp_path: Path) -> None:
    """Module name comes from the file name."""
    src = tmp_path / "widgets.py"
    src.write_text("# hi\nclass Widget:\n    pass\n", encoding="utf-8")
    report = scan_path(src)
    assert report.module_name == "widgets"
    assert [str(i) for i in report.definitions] == ["module widgets", "class Widget"]
    assert report.lines()[-1] == "C: 1:0: '# hi'"


def test_scan_path_missing_file(tmp_path: Path) -> None:
    """Missing files raise FileNotFoundError chained from SigdefsError."""
    with pytest.raises(FileNotFoundError, match=r"sigdefs source not found") as exc:
        scan_path(tmp_path / "absent.py")
    assert isinstance(exc.value.__cause__, SigdefsError)
    assert exc.value.__cause__.code == ErrorCode.SOURCE_NOT_FOUND


def test_scan_path_rejects_non_utf8(tmp_path: Path) -> None:
    """Non UTF-8 files are invalid sources."""
    src = tmp_path / "latin.py"
    src.write_bytes(b"x = '\xff'\n")
    with pytest.raises(ValueError, match=r"not valid UTF-8"):
        scan_path(src)


def test_scan_source_logs_summary(caplog: pytest.LogCaptureFixture) -> None:
    """A debug summary is logged per scan."""
    with caplog.at_level(logging.DEBUG, logger="sigdefs"):
        scan_source("A = 1\n", module_name="m")
    assert "Scanned m: 2 definition(s), 0 comment(s)" in caplog.text
