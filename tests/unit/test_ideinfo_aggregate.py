"""Tests for dependency aggregation."""

from __future__ import annotations

import pytest

from ideinfo.aggregate import Prerequisite, aggregate_dependencies
from ideinfo.errors import IdeInfoContractError
from ideinfo.kinds import TargetKind
from ideinfo.providers import DependencyRole
from tests.test_helpers.targets import dep, out, summary


def _prereq(
    label: str,
    role: DependencyRole = DependencyRole.DEPS,
    **kwargs: object,
) -> Prerequisite:
    return Prerequisite(edge=dep(label, role), summary=summary(label, **kwargs))


def test_transitive_deps_include_one_hop_exports() -> None:
    """Ensure a dependent sees the exports of its direct dependencies."""
    aggregate = aggregate_dependencies(
        [_prereq("//b:b", exported=["//c:c"])],
        kind=TargetKind.JAVA_LIBRARY,
        has_sources=True,
    )
    assert aggregate.transitive_deps == frozenset({"//b:b", "//c:c"})
    assert aggregate.exported_deps == frozenset()


def test_exports_of_exports_are_not_followed() -> None:
    """Ensure exports propagate exactly one hop."""
    # //b exports //c, //c exports //d; //b's summary lists only //c.
    aggregate = aggregate_dependencies(
        [_prereq("//b:b", exported=["//c:c"], transitive=["//d:d"])],
        kind=TargetKind.JAVA_LIBRARY,
        has_sources=True,
    )
    assert "//d:d" not in aggregate.transitive_deps


def test_runtime_and_export_edges_stay_out_of_transitive_deps() -> None:
    """Ensure runtime-only and export-only edges are kept separate."""
    aggregate = aggregate_dependencies(
        [
            _prereq("//r:r", DependencyRole.RUNTIME_DEPS),
            _prereq("//e:e", DependencyRole.EXPORTS),
        ],
        kind=TargetKind.JAVA_LIBRARY,
        has_sources=True,
    )
    assert aggregate.transitive_deps == frozenset()
    assert aggregate.runtime_deps == frozenset({"//r:r"})
    assert aggregate.exported_deps == frozenset({"//e:e"})


def test_toolchain_and_resources_edges_are_dependencies() -> None:
    """Ensure toolchain, resources and wrap-cc edges count as dependencies."""
    aggregate = aggregate_dependencies(
        [
            _prereq("//tc:cc", DependencyRole.TOOLCHAIN),
            _prereq("//res:res", DependencyRole.RESOURCES),
            _prereq("//swig:cc", DependencyRole.JAVA_WRAP_CC),
        ],
        kind=TargetKind.ANDROID_LIBRARY,
        has_sources=True,
    )
    assert aggregate.transitive_deps == frozenset({"//tc:cc", "//res:res", "//swig:cc"})
    assert aggregate.resources == "//res:res"


def test_sourceless_android_library_reexports_deps() -> None:
    """Ensure a sourceless android_library exports all of its direct deps."""
    aggregate = aggregate_dependencies(
        [_prereq("//v:v"), _prereq("//r:r", DependencyRole.RUNTIME_DEPS)],
        kind=TargetKind.ANDROID_LIBRARY,
        has_sources=False,
    )
    assert aggregate.exported_deps == frozenset({"//v:v"})


def test_android_library_with_sources_does_not_reexport() -> None:
    """Ensure re-export only applies to sourceless android libraries."""
    with_sources = aggregate_dependencies(
        [_prereq("//v:v")],
        kind=TargetKind.ANDROID_LIBRARY,
        has_sources=True,
    )
    java = aggregate_dependencies([_prereq("//v:v")], kind=TargetKind.JAVA_LIBRARY, has_sources=False)
    assert with_sources.exported_deps == frozenset()
    assert java.exported_deps == frozenset()


def test_artifacts_union_over_all_edges() -> None:
    """Ensure resolve and info artifacts come from every prerequisite."""
    jar = out("b.jar")
    runtime_jar = out("r.jar")
    info = out("b.aswb-build")
    aggregate = aggregate_dependencies(
        [
            _prereq("//b:b", resolve=[jar], info=[info]),
            _prereq("//r:r", DependencyRole.RUNTIME_DEPS, resolve=[runtime_jar]),
        ],
        kind=TargetKind.JAVA_LIBRARY,
        has_sources=True,
    )
    assert aggregate.resolve_artifacts == frozenset({jar, runtime_jar})
    assert aggregate.info_artifacts == frozenset({info})


def test_duplicate_edges_deduplicate() -> None:
    """Ensure the same dependency reached twice is counted once."""
    aggregate = aggregate_dependencies(
        [_prereq("//b:b"), _prereq("//a:a", exported=["//b:b"])],
        kind=TargetKind.JAVA_LIBRARY,
        has_sources=True,
    )
    assert aggregate.transitive_deps == frozenset({"//a:a", "//b:b"})


def test_mismatched_summary_fails_loudly() -> None:
    """Ensure an edge paired with another target's summary is rejected."""
    bad = Prerequisite(edge=dep("//a:a"), summary=summary("//b:b"))
    with pytest.raises(IdeInfoContractError, match="paired"):
        aggregate_dependencies([bad], kind=TargetKind.JAVA_LIBRARY, has_sources=True)


def test_multiple_resources_labels_fail_loudly() -> None:
    """Ensure a target cannot declare two resources labels."""
    with pytest.raises(IdeInfoContractError, match="resources"):
        aggregate_dependencies(
            [
                _prereq("//r1:r", DependencyRole.RESOURCES),
                _prereq("//r2:r", DependencyRole.RESOURCES),
            ],
            kind=TargetKind.ANDROID_BINARY,
            has_sources=True,
        )
