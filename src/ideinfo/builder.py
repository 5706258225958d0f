"""Per-target info record construction."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from ideinfo.aggregate import DependencyAggregate
from ideinfo.artifacts import (
    Artifact,
    ArtifactLocation,
    LibraryArtifact,
    make_artifact_location,
    make_library_artifact,
    non_source,
)
from ideinfo.kinds import TargetKind, is_android_kind, is_cc_kind, is_java_kind
from ideinfo.labels import sorted_labels
from ideinfo.providers import (
    AndroidSdkBundle,
    CcToolchainFragment,
    HostRoots,
    OutputJar,
    TargetInput,
)
from ideinfo.records import (
    AndroidIdeInfo,
    AndroidSdkIdeInfo,
    CIdeInfo,
    CToolchainIdeInfo,
    InfoRecord,
    JavaIdeInfo,
)


@dataclass(frozen=True)
class BuiltRecord:
    """Record of one target plus the artifacts it introduces itself."""

    record: InfoRecord | None
    resolve_artifacts: frozenset[Artifact]
    transitive_resources: frozenset[ArtifactLocation]


def build_info_record(
    target: TargetInput,
    *,
    kind: TargetKind,
    aggregate: DependencyAggregate,
    roots: HostRoots,
    package_manifest: Artifact | None = None,
) -> BuiltRecord:
    """Build the info record for a target.

    Parameters
    ----------
    target
        Target attributes and feature bundles.
    kind
        Resolved target kind.
    aggregate
        Merged dependency data of the target.
    roots
        Host output roots, used for Android SDK records.
    package_manifest
        Package manifest handle derived for the target, if any.

    Returns
    -------
    BuiltRecord
        Record (None for unrecognized kinds) and the resolve artifacts the
        target introduces.
    """
    if kind is TargetKind.UNRECOGNIZED:
        return BuiltRecord(
            record=None,
            resolve_artifacts=frozenset(),
            transitive_resources=aggregate.transitive_resources,
        )
    resolve: set[Artifact] = set()
    transitive_resources = aggregate.transitive_resources
    java_ide_info = None
    c_ide_info = None
    c_toolchain_ide_info = None
    android_ide_info = None
    android_sdk_ide_info = None
    if is_java_kind(kind):
        java_ide_info = _java_ide_info(target, resolve=resolve, package_manifest=package_manifest)
    if is_cc_kind(kind):
        c_ide_info = _c_ide_info(target)
    if kind is TargetKind.CC_TOOLCHAIN:
        c_toolchain_ide_info = _c_toolchain_ide_info(target.bundles.cc_toolchain)
    if is_android_kind(kind):
        android_ide_info, transitive_resources = _android_ide_info(
            target,
            aggregate=aggregate,
            resolve=resolve,
        )
    if kind is TargetKind.ANDROID_SDK:
        android_sdk_ide_info = _android_sdk_ide_info(target.bundles.android_sdk, roots=roots)

    build_file = target.build_file
    record = InfoRecord(
        label=target.label,
        kind=kind,
        build_file_artifact_location=make_artifact_location(build_file) if build_file else None,
        dependencies=sorted_labels(aggregate.transitive_deps),
        runtime_deps=sorted_labels(aggregate.runtime_deps),
        tags=target.attributes.tags,
        java_ide_info=java_ide_info,
        c_ide_info=c_ide_info,
        c_toolchain_ide_info=c_toolchain_ide_info,
        android_ide_info=android_ide_info,
        android_sdk_ide_info=android_sdk_ide_info,
    )
    return BuiltRecord(
        record=record,
        resolve_artifacts=frozenset(resolve),
        transitive_resources=transitive_resources,
    )


def _library(output: OutputJar, *, resolve: set[Artifact]) -> LibraryArtifact | None:
    library = make_library_artifact(
        output.class_jar,
        interface_jar=output.interface_jar,
        source_jar=output.source_jar,
    )
    if library is not None:
        resolve.update(non_source((output.class_jar, output.interface_jar, output.source_jar)))
    return library


def _java_ide_info(
    target: TargetInput,
    *,
    resolve: set[Artifact],
    package_manifest: Artifact | None,
) -> JavaIdeInfo:
    bundles = target.bundles
    jars: list[LibraryArtifact] = []
    jdeps: Artifact | None = None
    if bundles.java_outputs is not None:
        jdeps = bundles.java_outputs.jdeps
        for output in bundles.java_outputs.jars:
            library = _library(output, resolve=resolve)
            if library is not None:
                jars.append(library)
    elif bundles.imported_jars is not None:
        imported = bundles.imported_jars
        source_jar = imported.source_jars[0] if imported.source_jars else None
        for jar in imported.jars:
            library = _library(OutputJar(class_jar=jar, source_jar=source_jar), resolve=resolve)
            if library is not None:
                jars.append(library)

    generated_jars: list[LibraryArtifact] = []
    processing = bundles.annotation_processing
    if processing is not None and processing.uses_annotation_processing:
        library = _library(
            OutputJar(class_jar=processing.class_jar, source_jar=processing.source_jar),
            resolve=resolve,
        )
        if library is not None:
            generated_jars.append(library)

    return JavaIdeInfo(
        jars=tuple(jars),
        generated_jars=tuple(generated_jars),
        sources=tuple(make_artifact_location(src) for src in target.attributes.srcs),
        jdeps=make_artifact_location(jdeps) if jdeps else None,
        package_manifest=make_artifact_location(package_manifest) if package_manifest else None,
    )


def _c_ide_info(target: TargetInput) -> CIdeInfo:
    attributes = target.attributes
    context = target.bundles.cc_compilation
    return CIdeInfo(
        sources=tuple(make_artifact_location(src) for src in attributes.srcs),
        exported_headers=tuple(make_artifact_location(hdr) for hdr in attributes.hdrs),
        rule_include=attributes.includes or (),
        rule_define=attributes.defines or (),
        rule_copt=attributes.copts or (),
        transitive_include_directory=context.include_dirs if context else (),
        transitive_quote_include_directory=context.quote_include_dirs if context else (),
        transitive_system_include_directory=context.system_include_dirs if context else (),
        transitive_define=context.defines if context else (),
    )


def _c_toolchain_ide_info(fragment: CcToolchainFragment | None) -> CToolchainIdeInfo | None:
    if fragment is None:
        return None
    return CToolchainIdeInfo(
        target_name=fragment.target_name,
        base_compiler_option=fragment.compiler_options,
        c_option=fragment.c_options,
        cpp_option=fragment.cpp_options,
        link_option=fragment.linker_options,
        built_in_include_directory=fragment.built_in_include_directories,
        cpp_executable=fragment.cpp_executable,
        preprocessor_executable=fragment.preprocessor_executable,
    )


def _android_ide_info(
    target: TargetInput,
    *,
    aggregate: DependencyAggregate,
    resolve: set[Artifact],
) -> tuple[AndroidIdeInfo | None, frozenset[ArtifactLocation]]:
    bundle = target.bundles.android
    if bundle is None:
        return None, aggregate.transitive_resources

    resources = tuple(make_artifact_location(directory) for directory in bundle.resource_dirs)
    transitive_resources = aggregate.transitive_resources | frozenset(resources)

    if bundle.manifest is not None:
        resolve.add(bundle.manifest)

    idl_jar = None
    if bundle.idl_sources:
        idl_jar = _library(
            OutputJar(class_jar=bundle.idl_class_jar, source_jar=bundle.idl_source_jar),
            resolve=resolve,
        )
    resource_jar = None
    if bundle.resource_jar is not None:
        resource_jar = _library(bundle.resource_jar, resolve=resolve)

    info = AndroidIdeInfo(
        apk=make_artifact_location(bundle.signed_apk) if bundle.signed_apk else None,
        dependency_apk=tuple(make_artifact_location(apk) for apk in bundle.apks_under_test),
        manifest=make_artifact_location(bundle.manifest) if bundle.manifest else None,
        generated_manifest=(
            make_artifact_location(bundle.generated_manifest)
            if bundle.generated_manifest
            else None
        ),
        resources=resources,
        transitive_resources=tuple(sorted(transitive_resources)),
        java_package=bundle.java_package or "",
        idl_jar=idl_jar,
        idl_import_root=bundle.idl_import_root if idl_jar is not None else None,
        resource_jar=resource_jar,
        generate_resource_class=bundle.defines_android_resources,
        legacy_resources=aggregate.resources,
    )
    return info, transitive_resources


def _android_sdk_ide_info(
    bundle: AndroidSdkBundle | None,
    *,
    roots: HostRoots,
) -> AndroidSdkIdeInfo | None:
    if bundle is None:
        return None
    return AndroidSdkIdeInfo(
        android_sdk_path=posixpath.dirname(bundle.android_jar.path),
        genfiles_path=roots.genfiles_path,
        bin_path=roots.bin_path,
    )


__all__ = ["BuiltRecord", "build_info_record"]
