"""Tests for target kind resolution."""

from __future__ import annotations

import pytest

from ideinfo.kinds import (
    RULE_CLASSES,
    TargetKind,
    is_android_kind,
    is_cc_kind,
    is_java_kind,
    kind_for_rule_class,
)


@pytest.mark.parametrize(
    ("rule_class", "expected"),
    [
        ("java_library", TargetKind.JAVA_LIBRARY),
        ("java_import", TargetKind.JAVA_IMPORT),
        ("android_robolectric_test", TargetKind.ANDROID_ROBOLECTRIC_TEST),
        ("cc_inc_library", TargetKind.CC_INC_LIBRARY),
        ("cc_toolchain", TargetKind.CC_TOOLCHAIN),
        ("proto_library", TargetKind.PROTO_LIBRARY),
    ],
)
def test_kind_for_known_rule_classes(rule_class: str, expected: TargetKind) -> None:
    """Ensure known rule classes map to their kinds."""
    assert kind_for_rule_class(rule_class) is expected


def test_every_rule_class_is_recognized() -> None:
    """Ensure every listed rule class resolves to a concrete kind."""
    kinds = {kind_for_rule_class(rule_class) for rule_class in RULE_CLASSES}
    assert TargetKind.UNRECOGNIZED not in kinds
    assert len(kinds) == len(RULE_CLASSES)


def test_unknown_rule_class_is_unrecognized() -> None:
    """Ensure unknown rule classes fall through to UNRECOGNIZED."""
    assert kind_for_rule_class("py_library") is TargetKind.UNRECOGNIZED


def test_sdk_capability_overrides_unknown_rule_class() -> None:
    """Ensure the SDK bundle marks otherwise unknown targets as ANDROID_SDK."""
    assert kind_for_rule_class("filegroup", has_android_sdk=True) is TargetKind.ANDROID_SDK
    assert kind_for_rule_class("java_library", has_android_sdk=True) is TargetKind.JAVA_LIBRARY


def test_kind_families() -> None:
    """Ensure android kinds are also java kinds and cc kinds are disjoint."""
    assert is_java_kind(TargetKind.ANDROID_LIBRARY)
    assert is_android_kind(TargetKind.ANDROID_LIBRARY)
    assert not is_android_kind(TargetKind.ANDROID_ROBOLECTRIC_TEST)
    assert is_cc_kind(TargetKind.CC_LIBRARY)
    assert not is_cc_kind(TargetKind.CC_TOOLCHAIN)
    assert not is_java_kind(TargetKind.CC_BINARY)
