"""Run context for CLI command injection."""

from __future__ import annotations

from dataclasses import dataclass, field

from cli.config_models import IdeInfoConfig
from core_types import LogLevel


@dataclass(frozen=True)
class RunContext:
    """Injected run context for CLI commands.

    Parameters
    ----------
    log_level
        Logging level applied to the invocation.
    config
        Effective configuration for the invocation.
    config_location
        Where the configuration was read from, if anywhere.
    """

    log_level: LogLevel
    config: IdeInfoConfig = field(default_factory=IdeInfoConfig)
    config_location: str | None = None


__all__ = ["RunContext"]
