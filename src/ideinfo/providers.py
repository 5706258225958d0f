"""Per-target inputs supplied by the host.

Feature bundles are explicit optional fields rather than capability lookups:
the host fills in the bundles its analysis already computed and leaves the
rest unset. Which bundles are read is decided by the target kind.
"""

from __future__ import annotations

from enum import StrEnum

import msgspec

from core_types import LabelStr
from ideinfo.artifacts import Artifact, SourceDirectory
from ideinfo.kinds import TargetKind, kind_for_rule_class
from serde_msgspec import StructBaseStrict


class DependencyRole(StrEnum):
    """Role of a prerequisite edge."""

    DEPS = "deps"
    RUNTIME_DEPS = "runtime_deps"
    EXPORTS = "exports"
    TOOLCHAIN = "toolchain"
    RESOURCES = "resources"
    JAVA_WRAP_CC = "java_wrap_cc"


class DependencyEdge(StructBaseStrict, frozen=True):
    """Direct prerequisite edge from a target to one of its dependencies."""

    label: LabelStr
    role: DependencyRole = DependencyRole.DEPS


class HostRoots(StructBaseStrict, frozen=True):
    """Output root layout of the host.

    ``genfiles_root`` and ``bin_root`` are relative to ``execution_root``.
    """

    workspace_root: str = "."
    execution_root: str = "."
    genfiles_root: str = "bazel-out/genfiles"
    bin_root: str = "bazel-out/bin"

    @property
    def genfiles_path(self) -> str:
        return f"{self.execution_root.rstrip('/')}/{self.genfiles_root}"

    @property
    def bin_path(self) -> str:
        return f"{self.execution_root.rstrip('/')}/{self.bin_root}"


class TargetAttributes(StructBaseStrict, frozen=True):
    """Raw rule attributes. String-list attributes are None when undeclared."""

    srcs: tuple[Artifact, ...] = ()
    hdrs: tuple[Artifact, ...] = ()
    includes: tuple[str, ...] | None = None
    defines: tuple[str, ...] | None = None
    copts: tuple[str, ...] | None = None
    tags: tuple[str, ...] = ()


class OutputJar(StructBaseStrict, frozen=True):
    """One compiled output-jar group."""

    class_jar: Artifact | None = None
    interface_jar: Artifact | None = None
    source_jar: Artifact | None = None


class JavaOutputs(StructBaseStrict, frozen=True):
    """Compiled outputs of a Java-producing rule."""

    jars: tuple[OutputJar, ...] = ()
    jdeps: Artifact | None = None


class ImportedJars(StructBaseStrict, frozen=True):
    """Prebuilt jars of an import rule; the first source jar covers every jar."""

    jars: tuple[Artifact, ...] = ()
    source_jars: tuple[Artifact, ...] = ()


class AnnotationProcessing(StructBaseStrict, frozen=True):
    """Annotation-processor outputs of a Java compilation."""

    uses_annotation_processing: bool = False
    class_jar: Artifact | None = None
    source_jar: Artifact | None = None


class CcCompilationContext(StructBaseStrict, frozen=True):
    """Transitively computed C++ compilation settings."""

    include_dirs: tuple[str, ...] = ()
    quote_include_dirs: tuple[str, ...] = ()
    system_include_dirs: tuple[str, ...] = ()
    defines: tuple[str, ...] = ()


class CcToolchainFragment(StructBaseStrict, frozen=True):
    """C++ toolchain configuration fragment."""

    target_name: str = ""
    compiler_options: tuple[str, ...] = ()
    c_options: tuple[str, ...] = ()
    cpp_options: tuple[str, ...] = ()
    linker_options: tuple[str, ...] = ()
    built_in_include_directories: tuple[str, ...] = ()
    cpp_executable: str = ""
    preprocessor_executable: str = ""


class AndroidBundle(StructBaseStrict, frozen=True):
    """Android-specific outputs and settings of a target."""

    signed_apk: Artifact | None = None
    manifest: Artifact | None = None
    generated_manifest: Artifact | None = None
    apks_under_test: tuple[Artifact, ...] = ()
    resource_dirs: tuple[SourceDirectory, ...] = ()
    java_package: str | None = None
    idl_sources: tuple[Artifact, ...] = ()
    idl_class_jar: Artifact | None = None
    idl_source_jar: Artifact | None = None
    idl_import_root: str | None = None
    defines_android_resources: bool = False
    resource_jar: OutputJar | None = None


class AndroidSdkBundle(StructBaseStrict, frozen=True):
    """Marks a target as an Android SDK and points at its android.jar."""

    android_jar: Artifact


class FeatureBundles(StructBaseStrict, frozen=True):
    """Optional feature bundles computed by the host."""

    java_outputs: JavaOutputs | None = None
    imported_jars: ImportedJars | None = None
    annotation_processing: AnnotationProcessing | None = None
    cc_compilation: CcCompilationContext | None = None
    cc_toolchain: CcToolchainFragment | None = None
    android: AndroidBundle | None = None
    android_sdk: AndroidSdkBundle | None = None


class TargetInput(StructBaseStrict, frozen=True):
    """Everything the host knows about one target before it is processed."""

    label: LabelStr
    rule_class: str
    build_file: Artifact | None = None
    attributes: TargetAttributes = msgspec.field(default_factory=TargetAttributes)
    deps: tuple[DependencyEdge, ...] = ()
    bundles: FeatureBundles = msgspec.field(default_factory=FeatureBundles)

    @property
    def kind(self) -> TargetKind:
        return kind_for_rule_class(
            self.rule_class,
            has_android_sdk=self.bundles.android_sdk is not None,
        )


class TargetGraphSpec(StructBaseStrict, frozen=True):
    """Decoded target graph file."""

    targets: tuple[TargetInput, ...] = ()
    roots: HostRoots | None = None


__all__ = [
    "AndroidBundle",
    "AndroidSdkBundle",
    "AnnotationProcessing",
    "CcCompilationContext",
    "CcToolchainFragment",
    "DependencyEdge",
    "DependencyRole",
    "FeatureBundles",
    "HostRoots",
    "ImportedJars",
    "JavaOutputs",
    "OutputJar",
    "TargetAttributes",
    "TargetGraphSpec",
    "TargetInput",
]
