"""Rustworkx-backed target graph with deterministic dependency ordering."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

import rustworkx as rx

from ideinfo.errors import IdeInfoGraphError
from ideinfo.providers import DependencyRole, TargetInput

_CYCLE_EDGE_MIN_LEN = 2


@dataclass(frozen=True)
class TargetGraph:
    """Rustworkx graph plus label lookup.

    Edges point from a dependency to its dependent, so a topological order
    visits every target after all of its prerequisites.
    """

    graph: rx.PyDiGraph
    target_idx: Mapping[str, int]

    def target(self, label: str) -> TargetInput:
        return self.graph[self.target_idx[label]]


def build_target_graph(targets: Sequence[TargetInput]) -> TargetGraph:
    """Return a validated target graph.

    Returns
    -------
    TargetGraph
        Graph with one node per target and one edge per distinct prerequisite.

    Raises
    ------
    IdeInfoGraphError
        Raised on duplicate labels, edges to unknown targets or cycles.
    """
    _validate_labels(targets)
    targets_sorted = sorted(targets, key=lambda item: item.label)
    graph = rx.PyDiGraph(
        multigraph=False,
        check_cycle=False,
        attrs={"label": "ideinfo"},
        node_count_hint=len(targets_sorted),
        edge_count_hint=sum(len(target.deps) for target in targets_sorted),
    )
    indices = graph.add_nodes_from(targets_sorted)
    target_idx = dict(zip([target.label for target in targets_sorted], indices, strict=True))
    edges: list[tuple[int, int, DependencyRole]] = []
    for target in targets_sorted:
        for edge in target.deps:
            dep_idx = target_idx.get(edge.label)
            if dep_idx is None:
                msg = f"Target {target.label!r} depends on unknown target {edge.label!r}."
                raise IdeInfoGraphError(msg)
            edges.append((dep_idx, target_idx[target.label], edge.role))
    graph.add_edges_from(edges)
    if not rx.is_directed_acyclic_graph(graph):
        cycle = _cycle_labels(graph, rx.digraph_find_cycle(graph))
        msg = f"Target graph contains a cycle: {' -> '.join(cycle)}."
        raise IdeInfoGraphError(msg)
    return TargetGraph(graph=graph, target_idx=target_idx)


def topological_order(graph: TargetGraph) -> tuple[str, ...]:
    """Return labels in dependency order, ties broken lexicographically."""
    ordered = rx.lexicographical_topological_sort(graph.graph, key=lambda node: node.label)
    return tuple(node.label for node in ordered)


def topological_generations(graph: TargetGraph) -> tuple[tuple[str, ...], ...]:
    """Return waves of labels whose prerequisites all lie in earlier waves."""
    return tuple(
        tuple(sorted(graph.graph[idx].label for idx in generation))
        for generation in rx.topological_generations(graph.graph)
    )


def dependency_closure(graph: TargetGraph, labels: Iterable[str]) -> TargetGraph:
    """Return the subgraph of ``labels`` and everything they depend on.

    Raises
    ------
    IdeInfoGraphError
        Raised when a requested label is not in the graph.
    """
    keep: set[int] = set()
    for label in labels:
        idx = graph.target_idx.get(label)
        if idx is None:
            msg = f"Requested target {label!r} is not in the graph."
            raise IdeInfoGraphError(msg)
        keep.add(idx)
        keep.update(rx.ancestors(graph.graph, idx))
    return build_target_graph([graph.graph[idx] for idx in sorted(keep)])


def _validate_labels(targets: Sequence[TargetInput]) -> None:
    seen: set[str] = set()
    for target in targets:
        if not target.label:
            msg = "Target labels must be non-empty."
            raise IdeInfoGraphError(msg)
        if target.label in seen:
            msg = f"Duplicate target label: {target.label!r}."
            raise IdeInfoGraphError(msg)
        seen.add(target.label)


def _cycle_labels(graph: rx.PyDiGraph, cycle: Iterable[object]) -> tuple[str, ...]:
    nodes: list[int] = []
    for item in cycle:
        if isinstance(item, tuple) and len(item) >= _CYCLE_EDGE_MIN_LEN:
            left, right = item[0], item[1]
            if not nodes:
                nodes.append(left)
            nodes.append(right)
    return tuple(graph[idx].label for idx in nodes)


__all__ = [
    "TargetGraph",
    "build_target_graph",
    "dependency_closure",
    "topological_order",
    "topological_generations",
]
