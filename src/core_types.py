"""Shared type aliases and small typing helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Annotated, Literal, NewType

from msgspec import Meta

type PathLike = str | Path
type LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

Label = NewType("Label", str)

LABEL_PATTERN = r"^(@[A-Za-z0-9_.~+-]*)?//[^:]*(:[^:]+)?$"
SUFFIX_PATTERN = r"^\.[A-Za-z0-9_.-]{1,63}$"

type JsonPrimitive = str | int | float | bool | None
type JsonValue = JsonPrimitive | Mapping[str, JsonValue] | Sequence[JsonValue]

PositiveInt = Annotated[int, Meta(gt=0)]

LabelStr = Annotated[
    str,
    Meta(
        pattern=LABEL_PATTERN,
        title="Label",
        description="Build target label such as //java/com/example:lib.",
        examples=["//java/com/example:lib", "@maven//:guava"],
    ),
]
RelativePathStr = Annotated[
    str,
    Meta(
        title="Relative Path",
        description="Path relative to an artifact root.",
    ),
]


def ensure_path(p: PathLike) -> Path:
    """Return a normalized ``Path`` for the provided value.

    Parameters
    ----------
    p:
        String or ``Path`` input to normalize.

    Returns:
    -------
    pathlib.Path
        Normalized path instance.
    """
    return p if isinstance(p, Path) else Path(p)


__all__ = [
    "LABEL_PATTERN",
    "SUFFIX_PATTERN",
    "JsonPrimitive",
    "JsonValue",
    "Label",
    "LabelStr",
    "LogLevel",
    "PathLike",
    "PositiveInt",
    "RelativePathStr",
    "ensure_path",
]
