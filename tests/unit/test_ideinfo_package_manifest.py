"""Tests for package manifest derivation and parsing."""

from __future__ import annotations

import pytest

from ideinfo.artifacts import Artifact
from ideinfo.host import InMemoryHost, PackageManifestRequest
from ideinfo.kinds import TargetKind
from ideinfo.package_manifest import (
    build_package_manifest,
    derive_package_manifest,
    parse_java_package,
)
from tests.test_helpers.targets import java_library, out, src, target


def test_manifest_requested_for_java_sources_only(memory_host: InMemoryHost) -> None:
    """Ensure the manifest action covers only .java sources."""
    item = java_library("//t:T", srcs=["t/A.java", "t/B.kt", "t/C.java"])
    output = derive_package_manifest(item, TargetKind.JAVA_LIBRARY, memory_host)
    assert output is not None
    assert output.relative_path == "t/T.manifest"
    request = memory_host.manifest_requests["//t:T"]
    assert [source.relative_path for source in request.sources] == ["t/A.java", "t/C.java"]
    assert request.output == output


def test_no_manifest_without_sources(memory_host: InMemoryHost) -> None:
    """Ensure targets without sources get no manifest."""
    assert derive_package_manifest(java_library("//t:T"), TargetKind.JAVA_LIBRARY, memory_host) is None
    assert memory_host.manifest_requests == {}


def test_no_manifest_for_cc_targets(memory_host: InMemoryHost) -> None:
    """Ensure non-Java kinds never request a manifest."""
    item = target("//n:lib", "cc_library", srcs=["n/lib.cc"])
    assert derive_package_manifest(item, TargetKind.CC_LIBRARY, memory_host) is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("package com.example;\nclass A {}", "com.example"),
        ("// package wrong;\n/* package wrong2; */\npackage com.right;", "com.right"),
        ("@ParametersAreNonnullByDefault\npackage com.annotated;", "com.annotated"),
        ("package com . spaced ;", "com.spaced"),
        ("class A {}", None),
    ],
)
def test_parse_java_package(text: str, expected: str | None) -> None:
    """Ensure package declarations are found outside comments."""
    assert parse_java_package(text) == expected


def test_build_package_manifest_tolerates_unreadable_sources() -> None:
    """Ensure unreadable sources are listed with an empty package."""
    readable = src("t/A.java")
    missing = src("t/Missing.java")
    request = PackageManifestRequest(
        label="//t:T",
        sources=(readable, missing),
        output=out("t/T.manifest"),
    )

    def read_text(artifact: Artifact) -> str:
        if artifact == missing:
            raise FileNotFoundError(artifact.path)
        return "package com.example;"

    manifest = build_package_manifest(request, read_text=read_text)
    assert [entry.package_string for entry in manifest.sources] == ["com.example", ""]
    assert manifest.sources[0].artifact_location.relative_path == "t/A.java"
