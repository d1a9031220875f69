from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from .errors import raise_invalid_config
from .samples import AVAILABLE_SAMPLES


class ScanSettings(BaseModel):
    sample: str = "bar"
    include_private: bool = True
    include_comments: bool = True

    @field_validator("sample")
    @classmethod
    def _known_sample(cls, value: str) -> str:
        if value not in AVAILABLE_SAMPLES:
            raise ValueError(
                f"unknown sample {value!r}; expected one of {list(AVAILABLE_SAMPLES)}"
            )
        return value


class LoggingSettings(BaseModel):
    level: str = "INFO"
    file: Optional[Path] = None

    @field_validator("level", mode="before")
    @classmethod
    def _known_level(cls, value: str) -> str:
        name = str(value).strip().upper()
        if name not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown logging level {value!r}")
        return name

    @field_validator("file", mode="before")
    @classmethod
    def _expand_file(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value is None:
            return None
        return Path(value).expanduser().resolve()


class Settings(BaseModel):
    scan: ScanSettings = ScanSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        if not path.is_file():
            raise_invalid_config(detail=f"config file not found: {str(path)!r}")
        try:
            with path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise_invalid_config(detail=f"{path} is not valid YAML: {exc}")
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise_invalid_config(detail=f"{path} must contain a mapping at top level")
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            fields = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
            raise_invalid_config(detail=f"invalid field(s) {fields}: {exc}")
        raise AssertionError("unreachable")  # pragma: no cover
