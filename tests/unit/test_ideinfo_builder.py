"""Tests for info record construction."""

from __future__ import annotations

from ideinfo.aggregate import DependencyAggregate
from ideinfo.artifacts import SourceDirectory, make_artifact_location
from ideinfo.builder import BuiltRecord, build_info_record
from ideinfo.kinds import TargetKind
from ideinfo.providers import (
    AndroidBundle,
    AndroidSdkBundle,
    AnnotationProcessing,
    CcCompilationContext,
    CcToolchainFragment,
    FeatureBundles,
    HostRoots,
    ImportedJars,
    JavaOutputs,
    OutputJar,
    TargetAttributes,
    TargetInput,
)
from tests.test_helpers.targets import java_library, out, src, target

ROOTS = HostRoots(workspace_root="/workspace", execution_root="/exec")


def _aggregate(
    *,
    transitive: frozenset[str] = frozenset(),
    resources: str | None = None,
) -> DependencyAggregate:
    return DependencyAggregate(
        transitive_deps=frozenset(transitive),
        exported_deps=frozenset(),
        runtime_deps=frozenset(),
        resources=resources,
        resolve_artifacts=frozenset(),
        info_artifacts=frozenset(),
        info_text_artifacts=frozenset(),
        transitive_resources=frozenset(),
    )


def _build(item: TargetInput, **kwargs: object) -> BuiltRecord:
    return build_info_record(
        item,
        kind=item.kind,
        aggregate=kwargs.pop("aggregate", _aggregate()),
        roots=ROOTS,
        **kwargs,
    )


def test_java_library_scenario() -> None:
    """Ensure a two-source java_library yields one jar and resolves it."""
    item = java_library("//t:T", srcs=["t/a.java", "t/b.java"], jars=["t/T.jar"])
    built = _build(item)
    record = built.record
    assert record is not None
    assert record.java_ide_info is not None
    assert len(record.java_ide_info.jars) == 1
    assert [s.relative_path for s in record.java_ide_info.sources] == ["t/a.java", "t/b.java"]
    assert built.resolve_artifacts == frozenset({out("t/T.jar")})


def test_output_jar_without_class_jar_is_dropped() -> None:
    """Ensure output-jar groups without class output produce no library."""
    item = TargetInput(
        label="//t:T",
        rule_class="java_library",
        bundles=FeatureBundles(
            java_outputs=JavaOutputs(jars=(OutputJar(source_jar=out("t/T-src.jar")),)),
        ),
    )
    built = _build(item)
    assert built.record is not None
    assert built.record.java_ide_info is not None
    assert built.record.java_ide_info.jars == ()
    assert built.resolve_artifacts == frozenset()


def test_interface_and_source_jars_join_resolve() -> None:
    """Ensure every derived jar of a library joins the resolve set."""
    jar = OutputJar(
        class_jar=out("T.jar"),
        interface_jar=out("T-ijar.jar"),
        source_jar=out("T-src.jar"),
    )
    item = TargetInput(
        label="//t:T",
        rule_class="java_library",
        bundles=FeatureBundles(java_outputs=JavaOutputs(jars=(jar,), jdeps=out("T.jdeps"))),
    )
    built = _build(item)
    assert built.resolve_artifacts == frozenset({out("T.jar"), out("T-ijar.jar"), out("T-src.jar")})
    assert built.record is not None
    assert built.record.java_ide_info is not None
    assert built.record.java_ide_info.jdeps == make_artifact_location(out("T.jdeps"))


def test_generated_jar_requires_annotation_processing() -> None:
    """Ensure annotation-processor output is listed only when processing ran."""
    processing = AnnotationProcessing(class_jar=out("gen.jar"), source_jar=out("gen-src.jar"))
    unused = TargetInput(
        label="//t:T",
        rule_class="java_library",
        bundles=FeatureBundles(annotation_processing=processing),
    )
    used = TargetInput(
        label="//t:T",
        rule_class="java_library",
        bundles=FeatureBundles(
            annotation_processing=AnnotationProcessing(
                uses_annotation_processing=True,
                class_jar=out("gen.jar"),
                source_jar=out("gen-src.jar"),
            )
        ),
    )
    unused_record = _build(unused).record
    used_built = _build(used)
    assert unused_record is not None
    assert unused_record.java_ide_info is not None
    assert unused_record.java_ide_info.generated_jars == ()
    assert used_built.record is not None
    assert used_built.record.java_ide_info is not None
    assert len(used_built.record.java_ide_info.generated_jars) == 1
    assert out("gen.jar") in used_built.resolve_artifacts


def test_imported_jars_share_first_source_jar() -> None:
    """Ensure each imported jar gets the first declared source jar."""
    item = target(
        "//third_party:guava",
        "java_import",
        bundles=FeatureBundles(
            imported_jars=ImportedJars(
                jars=(src("third_party/a.jar"), src("third_party/b.jar")),
                source_jars=(src("third_party/src.jar"), src("third_party/other.jar")),
            )
        ),
    )
    built = _build(item)
    assert built.record is not None
    assert built.record.java_ide_info is not None
    jars = built.record.java_ide_info.jars
    assert [library.jar.relative_path for library in jars] == [
        "third_party/a.jar",
        "third_party/b.jar",
    ]
    assert {library.source_jar.relative_path for library in jars if library.source_jar} == {
        "third_party/src.jar"
    }
    # Checked-in jars are source artifacts and are never resolved.
    assert built.resolve_artifacts == frozenset()


def test_c_payload_uses_attributes_and_context() -> None:
    """Ensure C payloads copy attributes verbatim and read the context."""
    item = TargetInput(
        label="//native:lib",
        rule_class="cc_library",
        attributes=TargetAttributes(
            srcs=(src("native/lib.cc"),),
            hdrs=(src("native/lib.h"),),
            includes=("include",),
            defines=("FOO=1",),
            copts=("-Wall",),
        ),
        bundles=FeatureBundles(
            cc_compilation=CcCompilationContext(
                include_dirs=("native/include",),
                quote_include_dirs=(".",),
                system_include_dirs=("/usr/include",),
                defines=("FOO=1", "BAR"),
            )
        ),
    )
    record = _build(item).record
    assert record is not None
    assert record.java_ide_info is None
    c_info = record.c_ide_info
    assert c_info is not None
    assert c_info.rule_include == ("include",)
    assert c_info.rule_copt == ("-Wall",)
    assert c_info.transitive_define == ("FOO=1", "BAR")
    assert [header.relative_path for header in c_info.exported_headers] == ["native/lib.h"]


def test_c_payload_without_context_is_empty() -> None:
    """Ensure a missing compilation context yields empty transitive lists."""
    record = _build(target("//native:lib", "cc_binary")).record
    assert record is not None
    assert record.c_ide_info is not None
    assert record.c_ide_info.transitive_include_directory == ()
    assert record.c_ide_info.rule_define == ()


def test_toolchain_without_fragment_has_no_payload() -> None:
    """Ensure a toolchain without configuration keeps its kind but no payload."""
    record = _build(target("//tc:cc", "cc_toolchain")).record
    assert record is not None
    assert record.kind is TargetKind.CC_TOOLCHAIN
    assert record.c_toolchain_ide_info is None


def test_toolchain_with_empty_fragment_has_empty_payload() -> None:
    """Ensure an empty fragment is distinguishable from a missing one."""
    item = target(
        "//tc:cc",
        "cc_toolchain",
        bundles=FeatureBundles(cc_toolchain=CcToolchainFragment()),
    )
    record = _build(item).record
    assert record is not None
    assert record.c_toolchain_ide_info is not None
    assert record.c_toolchain_ide_info.base_compiler_option == ()


def test_android_payload() -> None:
    """Ensure android targets carry both payloads and resolve their manifest."""
    res = SourceDirectory(root_path="/workspace", relative_path="app/res")
    bundle = AndroidBundle(
        signed_apk=out("app/app.apk"),
        manifest=src("app/AndroidManifest.xml"),
        generated_manifest=out("app/AndroidManifest.generated.xml"),
        resource_dirs=(res,),
        java_package="com.example.app",
        defines_android_resources=True,
        resource_jar=OutputJar(class_jar=out("app/app_resources.jar")),
    )
    item = target("//app:app", "android_binary", srcs=["app/Main.java"], bundles=FeatureBundles(android=bundle))
    built = _build(item, aggregate=_aggregate(transitive=frozenset({"//res:res"}), resources="//res:res"))
    record = built.record
    assert record is not None
    assert record.java_ide_info is not None
    android = record.android_ide_info
    assert android is not None
    assert android.java_package == "com.example.app"
    assert android.generate_resource_class
    assert android.legacy_resources == "//res:res"
    assert android.idl_jar is None
    assert android.resource_jar is not None
    assert android.resources == (make_artifact_location(res),)
    assert built.transitive_resources == frozenset({make_artifact_location(res)})
    assert src("app/AndroidManifest.xml") in built.resolve_artifacts
    assert out("app/app_resources.jar") in built.resolve_artifacts


def test_idl_jar_requires_idl_sources() -> None:
    """Ensure the IDL library is emitted only when IDL sources exist."""
    bundle = AndroidBundle(
        idl_sources=(src("app/IService.aidl"),),
        idl_class_jar=out("app/libapp-idl.jar"),
        idl_source_jar=out("app/libapp-idl.srcjar"),
        idl_import_root="app",
    )
    record = _build(target("//app:lib", "android_library", bundles=FeatureBundles(android=bundle))).record
    assert record is not None
    assert record.android_ide_info is not None
    assert record.android_ide_info.idl_jar is not None
    assert record.android_ide_info.idl_import_root == "app"


def test_android_sdk_payload() -> None:
    """Ensure SDK targets report the SDK directory and output roots."""
    item = target(
        "//sdk:android",
        "android_sdk_rule",
        bundles=FeatureBundles(
            android_sdk=AndroidSdkBundle(android_jar=src("sdk/platforms/android-34/android.jar"))
        ),
    )
    record = _build(item).record
    assert record is not None
    assert record.kind is TargetKind.ANDROID_SDK
    assert record.android_sdk_ide_info is not None
    assert record.android_sdk_ide_info.android_sdk_path == "/workspace/sdk/platforms/android-34"
    assert record.android_sdk_ide_info.genfiles_path == "/exec/bazel-out/genfiles"
    assert record.android_sdk_ide_info.bin_path == "/exec/bazel-out/bin"


def test_unrecognized_target_has_no_record() -> None:
    """Ensure unrecognized kinds produce no record and no artifacts."""
    built = _build(target("//py:lib", "py_library"))
    assert built.record is None
    assert built.resolve_artifacts == frozenset()


def test_record_lists_sorted_dependencies() -> None:
    """Ensure dependency labels are emitted in lexicographic order."""
    aggregate = _aggregate(transitive=frozenset({"//b:b", "//a:a", "//c:c"}))
    record = _build(java_library("//t:T"), aggregate=aggregate).record
    assert record is not None
    assert record.dependencies == ("//a:a", "//b:b", "//c:c")
