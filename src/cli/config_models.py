"""Typed configuration models for ideinfo."""

from __future__ import annotations

from typing import Literal

from core_types import PositiveInt
from serde_msgspec import StructBaseStrict


class IdeInfoConfig(StructBaseStrict, frozen=True):
    """Configuration values read from ideinfo.toml or ``[tool.ideinfo]``."""

    output_dir: str | None = None
    workspace_root: str | None = None
    genfiles_root: str | None = None
    bin_root: str | None = None
    max_workers: PositiveInt | None = None
    write_text: bool | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None


__all__ = ["IdeInfoConfig"]
