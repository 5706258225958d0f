"""Artifact handles and their serializable locations."""

from __future__ import annotations

from collections.abc import Iterable

from core_types import RelativePathStr
from serde_msgspec import StructBaseHotPath, StructBaseStrict


class Artifact(StructBaseHotPath, frozen=True, order=True, kw_only=True):
    """File handle supplied by the host.

    Source artifacts live under the workspace root and carry no execution
    root; derived artifacts live under an output root such as
    ``bazel-out/genfiles``.
    """

    root_execution_path: str = ""
    relative_path: RelativePathStr
    root_path: str
    is_source: bool = False

    @property
    def exec_path(self) -> str:
        """Return the path relative to the execution root."""
        if self.root_execution_path:
            return f"{self.root_execution_path}/{self.relative_path}"
        return self.relative_path

    @property
    def path(self) -> str:
        """Return the absolute path under the artifact root."""
        return f"{self.root_path.rstrip('/')}/{self.relative_path}"

    @property
    def extension(self) -> str:
        _, dot, ext = self.relative_path.rpartition(".")
        return ext if dot else ""


class SourceDirectory(StructBaseHotPath, frozen=True, order=True, kw_only=True):
    """Directory handle, used for Android resource roots."""

    root_execution_path: str = ""
    relative_path: RelativePathStr
    root_path: str
    is_source: bool = True


class ArtifactLocation(StructBaseStrict, frozen=True, order=True, kw_only=True):
    """Serializable reference to a file relative to its root."""

    root_execution_path: str = ""
    relative_path: RelativePathStr
    root_path: str = ""
    is_source: bool = False


class LibraryArtifact(StructBaseStrict, frozen=True):
    """Compiled library with optional interface and source jars."""

    jar: ArtifactLocation
    interface_jar: ArtifactLocation | None = None
    source_jar: ArtifactLocation | None = None


def source_artifact(root_path: str, relative_path: str) -> Artifact:
    """Return a handle for a file under the workspace root."""
    return Artifact(root_path=root_path, relative_path=relative_path, is_source=True)


def derived_artifact(root_path: str, root_execution_path: str, relative_path: str) -> Artifact:
    """Return a handle for a file produced under an output root."""
    return Artifact(
        root_path=root_path,
        root_execution_path=root_execution_path,
        relative_path=relative_path,
        is_source=False,
    )


def make_artifact_location(artifact: Artifact | SourceDirectory) -> ArtifactLocation:
    """Return the serializable location for a host handle.

    Source handles never carry an execution root prefix.

    Returns
    -------
    ArtifactLocation
        Location relative to the handle's root.
    """
    return ArtifactLocation(
        root_path=artifact.root_path,
        root_execution_path="" if artifact.is_source else artifact.root_execution_path,
        relative_path=artifact.relative_path,
        is_source=artifact.is_source,
    )


def make_library_artifact(
    jar: Artifact | None,
    *,
    interface_jar: Artifact | None = None,
    source_jar: Artifact | None = None,
) -> LibraryArtifact | None:
    """Return a library artifact, or None when no class jar exists.

    Returns
    -------
    LibraryArtifact | None
        Library artifact when a class jar is present.
    """
    if jar is None:
        return None
    return LibraryArtifact(
        jar=make_artifact_location(jar),
        interface_jar=make_artifact_location(interface_jar) if interface_jar else None,
        source_jar=make_artifact_location(source_jar) if source_jar else None,
    )


def non_source(artifacts: Iterable[Artifact | None]) -> frozenset[Artifact]:
    """Return the present, non-source artifacts from an iterable."""
    return frozenset(
        artifact for artifact in artifacts if artifact is not None and not artifact.is_source
    )


__all__ = [
    "Artifact",
    "ArtifactLocation",
    "LibraryArtifact",
    "SourceDirectory",
    "derived_artifact",
    "make_artifact_location",
    "make_library_artifact",
    "non_source",
    "source_artifact",
]
