"""Per-target processing and whole-graph traversal.

``process_target`` is the pure per-node transform: aggregate prerequisite
summaries, build the record, emit it. ``run_aspect`` applies it in
dependency order, optionally running each topological generation on a
thread pool; a generation starts only after the previous one is finished.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from opentelemetry import trace

from ideinfo.aggregate import Prerequisite, aggregate_dependencies
from ideinfo.artifacts import Artifact
from ideinfo.builder import build_info_record
from ideinfo.emit import emit_target_info, plan_info_outputs
from ideinfo.errors import IdeInfoContractError
from ideinfo.graph import (
    TargetGraph,
    build_target_graph,
    dependency_closure,
    topological_generations,
    topological_order,
)
from ideinfo.host import AspectHost
from ideinfo.kinds import TargetKind
from ideinfo.package_manifest import derive_package_manifest
from ideinfo.providers import TargetInput
from ideinfo.records import InfoRecord, TargetSummary

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass(frozen=True)
class AspectOptions:
    """Traversal options."""

    write_text: bool = True
    max_workers: int = 1
    requested: tuple[str, ...] = ()


@dataclass(frozen=True)
class TargetResult:
    """Outputs of processing a single target."""

    record: InfoRecord | None
    summary: TargetSummary
    output_groups: Mapping[str, frozenset[Artifact]]


@dataclass(frozen=True)
class AspectResult:
    """Outputs of a whole traversal, keyed by label."""

    order: tuple[str, ...]
    results: Mapping[str, TargetResult]

    @property
    def records(self) -> dict[str, InfoRecord]:
        return {
            label: result.record
            for label, result in self.results.items()
            if result.record is not None
        }

    @property
    def summaries(self) -> dict[str, TargetSummary]:
        return {label: result.summary for label, result in self.results.items()}


def process_target(
    target: TargetInput,
    summaries: Mapping[str, TargetSummary],
    host: AspectHost,
    *,
    write_text: bool = True,
) -> TargetResult:
    """Process one target whose prerequisites are all finished.

    Parameters
    ----------
    target
        Target to process.
    summaries
        Finished summaries, containing at least every direct prerequisite.
    host
        Host receiving derived outputs.
    write_text
        Whether to write the human-readable record.

    Returns
    -------
    TargetResult
        Record, summary and output groups of the target.

    Raises
    ------
    IdeInfoContractError
        Raised when a prerequisite has no finished summary.
    """
    kind = target.kind
    with tracer.start_as_current_span("ideinfo.process_target") as span:
        span.set_attribute("ideinfo.label", target.label)
        span.set_attribute("ideinfo.kind", kind.value)
        prerequisites: list[Prerequisite] = []
        for edge in target.deps:
            summary = summaries.get(edge.label)
            if summary is None:
                msg = f"Target {target.label!r} processed before its prerequisite {edge.label!r}."
                raise IdeInfoContractError(msg)
            prerequisites.append(Prerequisite(edge=edge, summary=summary))
        aggregate = aggregate_dependencies(
            prerequisites,
            kind=kind,
            has_sources=bool(target.attributes.srcs),
        )

        manifest = None
        if kind is not TargetKind.UNRECOGNIZED:
            manifest = derive_package_manifest(target, kind, host)
        built = build_info_record(
            target,
            kind=kind,
            aggregate=aggregate,
            roots=host.roots,
            package_manifest=manifest,
        )

        outputs = None
        own_info: set[Artifact] = set()
        own_info_text: set[Artifact] = set()
        if built.record is not None:
            outputs = plan_info_outputs(target.label, host, write_text=write_text)
            own_info.add(outputs.binary)
            if outputs.text is not None:
                own_info_text.add(outputs.text)
        if manifest is not None:
            own_info.add(manifest)

        summary = TargetSummary(
            label=target.label,
            kind=kind,
            transitive_deps=aggregate.transitive_deps,
            runtime_deps=aggregate.runtime_deps,
            exported_deps=aggregate.exported_deps,
            resolve_artifacts=aggregate.resolve_artifacts | built.resolve_artifacts,
            info_artifacts=aggregate.info_artifacts | own_info,
            info_text_artifacts=aggregate.info_text_artifacts | own_info_text,
            transitive_resources=built.transitive_resources,
        )
        groups = emit_target_info(built.record, summary, outputs=outputs, host=host)
        logger.debug(
            "Processed %s (%s): %d deps, %d resolve artifacts",
            target.label,
            kind.value,
            len(summary.transitive_deps),
            len(summary.resolve_artifacts),
        )
        return TargetResult(record=built.record, summary=summary, output_groups=groups)


def run_aspect(
    targets: Sequence[TargetInput] | TargetGraph,
    host: AspectHost,
    *,
    options: AspectOptions | None = None,
) -> AspectResult:
    """Process every target of a graph in dependency order.

    Returns
    -------
    AspectResult
        Per-target results and the processing order.
    """
    resolved = options or AspectOptions()
    graph = targets if isinstance(targets, TargetGraph) else build_target_graph(targets)
    if resolved.requested:
        graph = dependency_closure(graph, resolved.requested)
    with tracer.start_as_current_span("ideinfo.run_aspect") as span:
        span.set_attribute("ideinfo.target_count", len(graph.target_idx))
        span.set_attribute("ideinfo.max_workers", resolved.max_workers)
        if resolved.max_workers > 1:
            order, results = _run_generations(graph, host, options=resolved)
        else:
            order, results = _run_sequential(graph, host, options=resolved)
    records = sum(1 for result in results.values() if result.record is not None)
    logger.info("Processed %d targets, emitted %d records", len(order), records)
    return AspectResult(order=order, results=results)


def _run_sequential(
    graph: TargetGraph,
    host: AspectHost,
    *,
    options: AspectOptions,
) -> tuple[tuple[str, ...], dict[str, TargetResult]]:
    order = topological_order(graph)
    summaries: dict[str, TargetSummary] = {}
    results: dict[str, TargetResult] = {}
    for label in order:
        result = process_target(graph.target(label), summaries, host, write_text=options.write_text)
        summaries[label] = result.summary
        results[label] = result
    return order, results


def _run_generations(
    graph: TargetGraph,
    host: AspectHost,
    *,
    options: AspectOptions,
) -> tuple[tuple[str, ...], dict[str, TargetResult]]:
    summaries: dict[str, TargetSummary] = {}
    results: dict[str, TargetResult] = {}
    order: list[str] = []
    with ThreadPoolExecutor(max_workers=options.max_workers) as executor:
        for generation in topological_generations(graph):
            finished = dict(summaries)
            futures = {
                label: executor.submit(
                    process_target,
                    graph.target(label),
                    finished,
                    host,
                    write_text=options.write_text,
                )
                for label in generation
            }
            for label in generation:
                result = futures[label].result()
                summaries[label] = result.summary
                results[label] = result
                order.append(label)
    return tuple(order), results


__all__ = [
    "AspectOptions",
    "AspectResult",
    "TargetResult",
    "process_target",
    "run_aspect",
]
