"""Unit tests for sigdefs.config (pytest)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sigdefs.config import Settings

if TYPE_CHECKING:
    from pathlib import Path


def test_defaults() -> None:
    """Settings() needs no file."""
    settings = Settings()
    assert settings.scan.sample == "bar"
    assert settings.scan.include_private is True
    assert settings.scan.include_comments is True
    assert settings.logging.level == "INFO"
    assert settings.logging.file is None


def test_load_yaml(tmp_path: Path) -> None:
    """Values are read from YAML and normalized."""
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "scan:\n"
        "  sample: bar_variant\n"
        "  include_comments: false\n"
        "logging:\n"
        "  level: debug\n"
        f"  file: {tmp_path / 'out.log'}\n",
        encoding="utf-8",
    )
    settings = Settings.load(cfg)
    assert settings.scan.sample == "bar_variant"
    assert settings.scan.include_comments is False
    assert settings.scan.include_private is True
    assert settings.logging.level == "DEBUG"
    assert settings.logging.file == (tmp_path / "out.log").resolve()


def test_load_empty_file(tmp_path: Path) -> None:
    """An empty file means defaults."""
    cfg = tmp_path / "config.yaml"
    cfg.write_text("", encoding="utf-8")
    assert Settings.load(cfg) == Settings()


@pytest.mark.parametrize(
    ("content", "match"),
    [
        ("scan: [\n", r"not valid YAML"),
        ("- a\n- b\n", r"mapping at top level"),
        ("scan:\n  sample: baz\n", r"invalid field\(s\) \['scan.sample'\]"),
        ("logging:\n  level: LOUD\n", r"unknown logging level"),
    ],
)
def test_load_rejects_bad_content(tmp_path: Path, content: str, match: str) -> None:
    """Bad files raise ValueError with a config prefix."""
    cfg = tmp_path / "config.yaml"
    cfg.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError, match=r"Invalid sigdefs configuration") as exc:
        Settings.load(cfg)
    assert exc.match(match)


def test_load_missing_file(tmp_path: Path) -> None:
    """A missing config file is a config error."""
    with pytest.raises(ValueError, match=r"config file not found"):
        Settings.load(tmp_path / "absent.yaml")
