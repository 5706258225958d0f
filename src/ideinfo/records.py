"""Per-target info records and propagated summaries."""

from __future__ import annotations

from core_types import Label
from ideinfo.artifacts import Artifact, ArtifactLocation, LibraryArtifact
from ideinfo.kinds import TargetKind
from serde_msgspec import StructBaseStrict


class JavaIdeInfo(StructBaseStrict, frozen=True):
    """Java outputs and sources of a target."""

    jars: tuple[LibraryArtifact, ...] = ()
    generated_jars: tuple[LibraryArtifact, ...] = ()
    sources: tuple[ArtifactLocation, ...] = ()
    jdeps: ArtifactLocation | None = None
    package_manifest: ArtifactLocation | None = None


class CIdeInfo(StructBaseStrict, frozen=True):
    """C/C++ sources and compilation settings of a target."""

    sources: tuple[ArtifactLocation, ...] = ()
    exported_headers: tuple[ArtifactLocation, ...] = ()
    rule_include: tuple[str, ...] = ()
    rule_define: tuple[str, ...] = ()
    rule_copt: tuple[str, ...] = ()
    transitive_include_directory: tuple[str, ...] = ()
    transitive_quote_include_directory: tuple[str, ...] = ()
    transitive_system_include_directory: tuple[str, ...] = ()
    transitive_define: tuple[str, ...] = ()


class CToolchainIdeInfo(StructBaseStrict, frozen=True):
    """Compiler and linker settings of a C++ toolchain."""

    target_name: str = ""
    base_compiler_option: tuple[str, ...] = ()
    c_option: tuple[str, ...] = ()
    cpp_option: tuple[str, ...] = ()
    link_option: tuple[str, ...] = ()
    built_in_include_directory: tuple[str, ...] = ()
    cpp_executable: str = ""
    preprocessor_executable: str = ""


class AndroidIdeInfo(StructBaseStrict, frozen=True):
    """Android outputs, resources and manifest of a target."""

    apk: ArtifactLocation | None = None
    dependency_apk: tuple[ArtifactLocation, ...] = ()
    manifest: ArtifactLocation | None = None
    generated_manifest: ArtifactLocation | None = None
    resources: tuple[ArtifactLocation, ...] = ()
    transitive_resources: tuple[ArtifactLocation, ...] = ()
    java_package: str = ""
    idl_jar: LibraryArtifact | None = None
    idl_import_root: str | None = None
    resource_jar: LibraryArtifact | None = None
    generate_resource_class: bool = False
    legacy_resources: str | None = None


class AndroidSdkIdeInfo(StructBaseStrict, frozen=True):
    """Android SDK location and output roots."""

    android_sdk_path: str
    genfiles_path: str
    bin_path: str


class InfoRecord(StructBaseStrict, frozen=True):
    """Serializable description of one target for the IDE.

    Android targets carry both the Java and the Android payload; every other
    kind carries at most one payload.
    """

    label: str
    kind: TargetKind
    build_file_artifact_location: ArtifactLocation | None = None
    dependencies: tuple[str, ...] = ()
    runtime_deps: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    java_ide_info: JavaIdeInfo | None = None
    c_ide_info: CIdeInfo | None = None
    c_toolchain_ide_info: CToolchainIdeInfo | None = None
    android_ide_info: AndroidIdeInfo | None = None
    android_sdk_ide_info: AndroidSdkIdeInfo | None = None


class TargetSummary(StructBaseStrict, frozen=True):
    """Summary of a processed target, read by each of its direct dependents."""

    label: Label
    kind: TargetKind
    transitive_deps: frozenset[Label] = frozenset()
    runtime_deps: frozenset[Label] = frozenset()
    exported_deps: frozenset[Label] = frozenset()
    resolve_artifacts: frozenset[Artifact] = frozenset()
    info_artifacts: frozenset[Artifact] = frozenset()
    info_text_artifacts: frozenset[Artifact] = frozenset()
    transitive_resources: frozenset[ArtifactLocation] = frozenset()


__all__ = [
    "AndroidIdeInfo",
    "AndroidSdkIdeInfo",
    "CIdeInfo",
    "CToolchainIdeInfo",
    "InfoRecord",
    "JavaIdeInfo",
    "TargetSummary",
]
