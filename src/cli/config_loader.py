"""Config loading and normalization helpers for the CLI."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import cast

import msgspec

from cli.config_models import IdeInfoConfig
from core_types import JsonValue
from serde_msgspec import convert, to_builtins, validation_error_payload

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "ideinfo.toml"
PYPROJECT_FILENAME = "pyproject.toml"


@dataclass(frozen=True)
class ConfigResolution:
    """Resolved configuration plus the location it was read from."""

    config: IdeInfoConfig
    location: str | None = None

    def to_mapping(self) -> dict[str, JsonValue]:
        return cast("dict[str, JsonValue]", to_builtins(self.config, str_keys=True))


def load_effective_config(config_file: str | None) -> ConfigResolution:
    """Load config from an explicit file, ideinfo.toml, or pyproject.toml.

    Parameters
    ----------
    config_file
        Optional explicit config file path.

    Returns:
    -------
    ConfigResolution
        Parsed configuration and its location.

    Raises
    ------
    FileNotFoundError
        Raised when an explicit config file does not exist.
    """
    if config_file:
        path = Path(config_file)
        if not path.exists():
            msg = f"Config file not found: {config_file!r}."
            raise FileNotFoundError(msg)
        raw = _read_toml(path)
        if path.name == PYPROJECT_FILENAME:
            nested = _extract_tool_config(raw)
            return ConfigResolution(
                config=_decode_config(nested or {}, location=f"{path}:tool.ideinfo"),
                location=str(path),
            )
        return ConfigResolution(config=_decode_config(raw, location=str(path)), location=str(path))

    config_path = _find_in_parents(CONFIG_FILENAME)
    if config_path is not None:
        raw = _read_toml(config_path)
        return ConfigResolution(
            config=_decode_config(raw, location=str(config_path)),
            location=str(config_path),
        )

    pyproject_path = _find_in_parents(PYPROJECT_FILENAME)
    if pyproject_path is not None:
        nested = _extract_tool_config(_read_toml(pyproject_path))
        if nested is not None:
            location = f"{pyproject_path}:tool.ideinfo"
            return ConfigResolution(
                config=_decode_config(nested, location=location),
                location=location,
            )

    logger.debug("No ideinfo configuration found; using defaults")
    return ConfigResolution(config=IdeInfoConfig())


def _find_in_parents(filename: str) -> Path | None:
    path = Path.cwd()
    while True:
        candidate = path / filename
        if candidate.exists():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def _read_toml(path: Path) -> dict[str, JsonValue]:
    payload = msgspec.toml.decode(path.read_text(encoding="utf-8"), type=object, strict=True)
    if not isinstance(payload, dict):
        msg = f"Expected TOML mapping in {path}, got {type(payload).__name__}."
        raise TypeError(msg)
    return cast("dict[str, JsonValue]", payload)


def _extract_tool_config(raw: Mapping[str, JsonValue]) -> Mapping[str, JsonValue] | None:
    tool = raw.get("tool")
    if not isinstance(tool, Mapping):
        return None
    nested = tool.get("ideinfo")
    if not isinstance(nested, Mapping):
        return None
    return cast("Mapping[str, JsonValue]", nested)


def _decode_config(raw: Mapping[str, JsonValue], *, location: str) -> IdeInfoConfig:
    try:
        return convert(raw, target_type=IdeInfoConfig, strict=True)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Config validation failed for {location}: {details}"
        raise ValueError(msg) from exc


__all__ = ["CONFIG_FILENAME", "ConfigResolution", "load_effective_config"]
