"""Closed enumeration of target kinds and rule-class resolution."""

from __future__ import annotations

from enum import StrEnum


class TargetKind(StrEnum):
    """Kind of a target, derived from its rule class."""

    JAVA_LIBRARY = "JAVA_LIBRARY"
    JAVA_IMPORT = "JAVA_IMPORT"
    JAVA_TEST = "JAVA_TEST"
    JAVA_BINARY = "JAVA_BINARY"
    JAVA_PLUGIN = "JAVA_PLUGIN"
    JAVA_WRAP_CC = "JAVA_WRAP_CC"
    PROTO_LIBRARY = "PROTO_LIBRARY"
    ANDROID_LIBRARY = "ANDROID_LIBRARY"
    ANDROID_BINARY = "ANDROID_BINARY"
    ANDROID_TEST = "ANDROID_TEST"
    ANDROID_ROBOLECTRIC_TEST = "ANDROID_ROBOLECTRIC_TEST"
    ANDROID_RESOURCES = "ANDROID_RESOURCES"
    ANDROID_SDK = "ANDROID_SDK"
    CC_LIBRARY = "CC_LIBRARY"
    CC_BINARY = "CC_BINARY"
    CC_TEST = "CC_TEST"
    CC_INC_LIBRARY = "CC_INC_LIBRARY"
    CC_TOOLCHAIN = "CC_TOOLCHAIN"
    UNRECOGNIZED = "UNRECOGNIZED"


RULE_CLASSES: tuple[str, ...] = (
    "android_binary",
    "android_library",
    "android_resources",
    "android_robolectric_test",
    "android_test",
    "cc_binary",
    "cc_inc_library",
    "cc_library",
    "cc_test",
    "cc_toolchain",
    "java_binary",
    "java_import",
    "java_library",
    "java_plugin",
    "java_test",
    "java_wrap_cc",
    "proto_library",
)


def kind_for_rule_class(rule_class: str, *, has_android_sdk: bool = False) -> TargetKind:
    """Return the target kind for a rule class name.

    Rule classes outside the known set resolve to ``ANDROID_SDK`` when the
    target carries an Android SDK bundle, else ``UNRECOGNIZED``.

    Returns
    -------
    TargetKind
        Resolved kind.
    """
    match rule_class:
        case "java_library":
            return TargetKind.JAVA_LIBRARY
        case "java_import":
            return TargetKind.JAVA_IMPORT
        case "java_test":
            return TargetKind.JAVA_TEST
        case "java_binary":
            return TargetKind.JAVA_BINARY
        case "java_plugin":
            return TargetKind.JAVA_PLUGIN
        case "java_wrap_cc":
            return TargetKind.JAVA_WRAP_CC
        case "proto_library":
            return TargetKind.PROTO_LIBRARY
        case "android_library":
            return TargetKind.ANDROID_LIBRARY
        case "android_binary":
            return TargetKind.ANDROID_BINARY
        case "android_test":
            return TargetKind.ANDROID_TEST
        case "android_robolectric_test":
            return TargetKind.ANDROID_ROBOLECTRIC_TEST
        case "android_resources":
            return TargetKind.ANDROID_RESOURCES
        case "cc_library":
            return TargetKind.CC_LIBRARY
        case "cc_binary":
            return TargetKind.CC_BINARY
        case "cc_test":
            return TargetKind.CC_TEST
        case "cc_inc_library":
            return TargetKind.CC_INC_LIBRARY
        case "cc_toolchain":
            return TargetKind.CC_TOOLCHAIN
        case _:
            if has_android_sdk:
                return TargetKind.ANDROID_SDK
            return TargetKind.UNRECOGNIZED


JAVA_KINDS: frozenset[TargetKind] = frozenset(
    {
        TargetKind.JAVA_LIBRARY,
        TargetKind.JAVA_IMPORT,
        TargetKind.JAVA_TEST,
        TargetKind.JAVA_BINARY,
        TargetKind.JAVA_PLUGIN,
        TargetKind.JAVA_WRAP_CC,
        TargetKind.PROTO_LIBRARY,
        TargetKind.ANDROID_LIBRARY,
        TargetKind.ANDROID_BINARY,
        TargetKind.ANDROID_TEST,
        TargetKind.ANDROID_ROBOLECTRIC_TEST,
        TargetKind.ANDROID_RESOURCES,
    }
)
ANDROID_KINDS: frozenset[TargetKind] = frozenset(
    {
        TargetKind.ANDROID_LIBRARY,
        TargetKind.ANDROID_BINARY,
        TargetKind.ANDROID_TEST,
        TargetKind.ANDROID_RESOURCES,
    }
)
CC_KINDS: frozenset[TargetKind] = frozenset(
    {
        TargetKind.CC_LIBRARY,
        TargetKind.CC_BINARY,
        TargetKind.CC_TEST,
        TargetKind.CC_INC_LIBRARY,
    }
)


def is_java_kind(kind: TargetKind) -> bool:
    """Return True when the kind produces Java outputs."""
    return kind in JAVA_KINDS


def is_android_kind(kind: TargetKind) -> bool:
    """Return True when the kind carries an Android payload."""
    return kind in ANDROID_KINDS


def is_cc_kind(kind: TargetKind) -> bool:
    """Return True when the kind produces C/C++ outputs."""
    return kind in CC_KINDS


__all__ = [
    "ANDROID_KINDS",
    "CC_KINDS",
    "JAVA_KINDS",
    "RULE_CLASSES",
    "TargetKind",
    "is_android_kind",
    "is_cc_kind",
    "is_java_kind",
    "kind_for_rule_class",
]
