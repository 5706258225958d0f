"""Dependency aggregation over direct prerequisite summaries.

Exports propagate one hop: a dependent sees the labels its direct
dependencies export, not the exports of those exports unless the intermediate
target re-exports them itself.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from core_types import Label
from ideinfo.artifacts import Artifact, ArtifactLocation
from ideinfo.errors import IdeInfoContractError
from ideinfo.kinds import TargetKind
from ideinfo.providers import DependencyEdge, DependencyRole
from ideinfo.records import TargetSummary


@dataclass(frozen=True)
class Prerequisite:
    """Direct prerequisite edge paired with the finished summary of its target."""

    edge: DependencyEdge
    summary: TargetSummary


@dataclass(frozen=True)
class DependencyAggregate:
    """Merged view of a target's direct prerequisites."""

    transitive_deps: frozenset[Label]
    exported_deps: frozenset[Label]
    runtime_deps: frozenset[Label]
    resources: Label | None
    resolve_artifacts: frozenset[Artifact]
    info_artifacts: frozenset[Artifact]
    info_text_artifacts: frozenset[Artifact]
    transitive_resources: frozenset[ArtifactLocation]


def aggregate_dependencies(
    prerequisites: Sequence[Prerequisite],
    *,
    kind: TargetKind,
    has_sources: bool,
) -> DependencyAggregate:
    """Merge direct prerequisite summaries for one target.

    Parameters
    ----------
    prerequisites
        Direct prerequisite edges with their finished summaries.
    kind
        Kind of the target being processed.
    has_sources
        Whether the target declares any source files.

    Returns
    -------
    DependencyAggregate
        Dependency sets and artifacts inherited from the prerequisites.

    Raises
    ------
    IdeInfoContractError
        Raised when an edge is paired with another target's summary or when
        more than one resources label is declared.
    """
    transitive: set[Label] = set()
    exported: set[Label] = set()
    runtime: set[Label] = set()
    direct_deps: set[Label] = set()
    resources: Label | None = None
    resolve: set[Artifact] = set()
    info: set[Artifact] = set()
    info_text: set[Artifact] = set()
    transitive_resources: set[ArtifactLocation] = set()

    for prerequisite in prerequisites:
        edge = prerequisite.edge
        summary = prerequisite.summary
        if summary.label != edge.label:
            msg = f"Edge to {edge.label!r} was paired with the summary of {summary.label!r}."
            raise IdeInfoContractError(msg)
        label = Label(edge.label)
        resolve.update(summary.resolve_artifacts)
        info.update(summary.info_artifacts)
        info_text.update(summary.info_text_artifacts)
        transitive_resources.update(summary.transitive_resources)
        match edge.role:
            case DependencyRole.RUNTIME_DEPS:
                runtime.add(label)
                continue
            case DependencyRole.EXPORTS:
                exported.add(label)
                continue
            case DependencyRole.RESOURCES:
                if resources is not None and resources != label:
                    msg = f"Multiple resources labels declared: {resources!r} and {label!r}."
                    raise IdeInfoContractError(msg)
                resources = label
            case DependencyRole.DEPS:
                direct_deps.add(label)
            case DependencyRole.TOOLCHAIN | DependencyRole.JAVA_WRAP_CC:
                pass
        transitive.add(label)
        transitive.update(summary.exported_deps)

    # Resource-only android libraries re-export everything they depend on.
    if kind is TargetKind.ANDROID_LIBRARY and not has_sources:
        exported.update(direct_deps)

    return DependencyAggregate(
        transitive_deps=frozenset(transitive),
        exported_deps=frozenset(exported),
        runtime_deps=frozenset(runtime),
        resources=resources,
        resolve_artifacts=frozenset(resolve),
        info_artifacts=frozenset(info),
        info_text_artifacts=frozenset(info_text),
        transitive_resources=frozenset(transitive_resources),
    )


__all__ = ["DependencyAggregate", "Prerequisite", "aggregate_dependencies"]
