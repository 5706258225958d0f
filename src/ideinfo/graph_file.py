"""Decoding of target graph files."""

from __future__ import annotations

import msgspec

from core_types import PathLike, ensure_path
from ideinfo.errors import IdeInfoInputError
from ideinfo.providers import TargetGraphSpec
from serde_msgspec import loads_json, validation_error_payload


def decode_target_graph(payload: bytes | str, *, location: str = "<memory>") -> TargetGraphSpec:
    """Decode a JSON target graph payload.

    Returns
    -------
    TargetGraphSpec
        Decoded target graph.

    Raises
    ------
    IdeInfoInputError
        Raised when the payload is not valid JSON or does not match the schema.
    """
    try:
        return loads_json(payload, target_type=TargetGraphSpec)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Target graph validation failed for {location}: {details}"
        raise IdeInfoInputError(msg) from exc
    except msgspec.DecodeError as exc:
        msg = f"Target graph at {location} is not valid JSON: {exc}"
        raise IdeInfoInputError(msg) from exc


def load_target_graph(path: PathLike) -> TargetGraphSpec:
    """Read and decode a JSON target graph file."""
    resolved = ensure_path(path)
    return decode_target_graph(resolved.read_bytes(), location=str(resolved))


__all__ = ["decode_target_graph", "load_target_graph"]
