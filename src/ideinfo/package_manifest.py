"""Package manifests: the Java package declared by each source of a target.

The manifest is derived next to the info record rather than inside it. The
aspect only requests the action; hosts decide how to run it. The parser here
is what :class:`ideinfo.filesystem.FileSystemHost` runs in-process.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ideinfo.artifacts import Artifact, ArtifactLocation, make_artifact_location
from ideinfo.host import AspectHost, PackageManifestRequest
from ideinfo.kinds import TargetKind, is_java_kind
from ideinfo.providers import TargetInput
from serde_msgspec import StructBaseStrict

logger = logging.getLogger(__name__)

PACKAGE_MANIFEST_SUFFIX = ".manifest"

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_PACKAGE_RE = re.compile(
    r"^\s*(?:@[\w.]+(?:\([^)]*\))?\s*)*package\s+(?P<name>[A-Za-z_][\w\s.]*?)\s*;",
    re.MULTILINE,
)


class JavaSourcePackage(StructBaseStrict, frozen=True):
    """Package declared by a single Java source."""

    artifact_location: ArtifactLocation
    package_string: str


class PackageManifest(StructBaseStrict, frozen=True):
    """Package declarations for all Java sources of one target."""

    sources: tuple[JavaSourcePackage, ...] = ()


def java_sources(target: TargetInput) -> tuple[Artifact, ...]:
    """Return the ``.java`` sources of a target in declaration order."""
    return tuple(src for src in target.attributes.srcs if src.extension == "java")


def derive_package_manifest(
    target: TargetInput,
    kind: TargetKind,
    host: AspectHost,
) -> Artifact | None:
    """Request the package-manifest action when the target has Java sources.

    Returns
    -------
    Artifact | None
        Manifest output handle, or None when no manifest applies.
    """
    if not is_java_kind(kind) or not target.attributes.srcs:
        return None
    output = host.derived_artifact(target.label, PACKAGE_MANIFEST_SUFFIX)
    host.register_package_manifest_action(
        PackageManifestRequest(label=target.label, sources=java_sources(target), output=output)
    )
    return output


def parse_java_package(text: str) -> str | None:
    """Return the package declared in Java source text, if any.

    Returns
    -------
    str | None
        Dotted package name, or None for the default package.
    """
    stripped = _LINE_COMMENT_RE.sub("", _BLOCK_COMMENT_RE.sub("", text))
    match = _PACKAGE_RE.search(stripped)
    if match is None:
        return None
    return re.sub(r"\s+", "", match.group("name"))


def build_package_manifest(
    request: PackageManifestRequest,
    *,
    read_text: Callable[[Artifact], str],
) -> PackageManifest:
    """Parse every source of a manifest request.

    Sources that cannot be read or are not valid UTF-8 are recorded with an
    empty package.

    Returns
    -------
    PackageManifest
        Manifest with one entry per requested source.
    """
    entries: list[JavaSourcePackage] = []
    for source in request.sources:
        try:
            text = read_text(source)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s for %s: %s", source.path, request.label, exc)
            text = ""
        entries.append(
            JavaSourcePackage(
                artifact_location=make_artifact_location(source),
                package_string=parse_java_package(text) or "",
            )
        )
    return PackageManifest(sources=tuple(entries))


__all__ = [
    "PACKAGE_MANIFEST_SUFFIX",
    "JavaSourcePackage",
    "PackageManifest",
    "build_package_manifest",
    "derive_package_manifest",
    "java_sources",
    "parse_java_package",
]
