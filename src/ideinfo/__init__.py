"""IDE info aspect: dependency aggregation and per-target info records."""

from ideinfo.aspect import AspectOptions, AspectResult, TargetResult, process_target, run_aspect
from ideinfo.errors import (
    IdeInfoContractError,
    IdeInfoError,
    IdeInfoGraphError,
    IdeInfoInputError,
)
from ideinfo.host import AspectHost, InMemoryHost
from ideinfo.kinds import TargetKind, kind_for_rule_class
from ideinfo.records import InfoRecord, TargetSummary

__all__ = [
    "AspectHost",
    "AspectOptions",
    "AspectResult",
    "IdeInfoContractError",
    "IdeInfoError",
    "IdeInfoGraphError",
    "IdeInfoInputError",
    "InMemoryHost",
    "InfoRecord",
    "TargetKind",
    "TargetResult",
    "TargetSummary",
    "kind_for_rule_class",
    "process_target",
    "run_aspect",
]
