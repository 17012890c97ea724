"""Extractor configuration: Pydantic model plus YAML loader."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field


class ExtractorConfig(BaseModel):
    """Top-level configuration loaded from extractor.yaml."""

    base_dir: Path = Field(Path.home() / "Screenshots", description="Parent of per-run output folders")
    batch_size: int = Field(10, ge=1, description="Timestamps per decoder call")
    quality: float = Field(1.0, gt=0.0, le=1.0, description="Image quality in (0, 1]")
    output_format: Literal["png", "jpg"] = Field("png", description="Frame image format")
    default_rate: float = Field(1.0, gt=0.0, description="Samples per second when none is given")
    log_level: str = Field("INFO", description="Logging level name")


def load_config(config_path: Path) -> ExtractorConfig:
    """Load and validate extractor.yaml."""
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return ExtractorConfig(**raw)
