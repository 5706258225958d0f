"""msgspec struct bases and deterministic codecs for records, graphs and config."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Literal

import msgspec


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Base struct for records, graph inputs and config; unknown fields are errors."""


class StructBaseHotPath(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
    gc=False,
    cache_hash=True,
):
    """Base struct for artifact handles, which are hashed into many sets; unknown fields are errors."""


_DETERMINISTIC: Literal["deterministic"] = "deterministic"

_VALIDATION_RE = re.compile(r"^(?P<summary>.*?)(?:\s+-\s+at\s+`(?P<path>[^`]+)`)?$")


def _enc_hook(obj: object) -> object:
    if isinstance(obj, Path):
        return str(obj)
    msg = f"Cannot encode objects of type {type(obj).__name__}."
    raise TypeError(msg)


def _dec_hook(type_hint: Any, obj: object) -> object:
    if type_hint is Path and isinstance(obj, str):
        return Path(obj)
    msg = f"Cannot decode {type(obj).__name__} as {type_hint!r}."
    raise NotImplementedError(msg)


JSON_ENCODER_SORTED = msgspec.json.Encoder(enc_hook=_enc_hook, order="sorted")
MSGPACK_ENCODER = msgspec.msgpack.Encoder(enc_hook=_enc_hook, order=_DETERMINISTIC)


def validation_error_payload(exc: msgspec.ValidationError) -> dict[str, str]:
    """Split a msgspec ValidationError into summary and JSON path.

    Parameters
    ----------
    exc
        ValidationError raised while decoding or converting.

    Returns
    -------
    dict[str, str]
        ``type`` and ``summary`` keys, plus ``path`` when msgspec reports one.
    """
    message = str(exc).strip()
    payload: dict[str, str] = {"type": exc.__class__.__name__}
    match = _VALIDATION_RE.match(message)
    if match is None:
        payload["summary"] = message
        return payload
    summary = (match.group("summary") or "").strip()
    if summary:
        payload["summary"] = summary
    if match.group("path"):
        payload["path"] = match.group("path")
    return payload


def dumps_json_sorted(obj: object, *, pretty: bool = False) -> bytes:
    """Serialize to JSON with sorted object keys.

    Returns
    -------
    bytes
        JSON payload, indented by two spaces when ``pretty`` is set.
    """
    raw = JSON_ENCODER_SORTED.encode(obj)
    return msgspec.json.format(raw, indent=2) if pretty else raw


def loads_json[T](buf: bytes | str, *, target_type: type[T], strict: bool = True) -> T:
    """Decode JSON into ``target_type``."""
    return msgspec.json.decode(buf, type=target_type, strict=strict, dec_hook=_dec_hook)


def dumps_msgpack(obj: object) -> bytes:
    """Serialize to MessagePack with deterministic set and mapping order."""
    return MSGPACK_ENCODER.encode(obj)


def loads_msgpack[T](buf: bytes, *, target_type: type[T], strict: bool = True) -> T:
    """Decode MessagePack into ``target_type``."""
    return msgspec.msgpack.decode(buf, type=target_type, strict=strict, dec_hook=_dec_hook)


def convert[T](obj: object, *, target_type: type[T], strict: bool = True) -> T:
    """Validate builtin data (for example decoded TOML) against ``target_type``."""
    return msgspec.convert(obj, type=target_type, strict=strict, dec_hook=_dec_hook)


def to_builtins(obj: object, *, str_keys: bool = True) -> object:
    """Convert structs and enums into JSON-friendly builtins.

    Returns
    -------
    object
        Builtin representation with deterministic set order.
    """
    return msgspec.to_builtins(obj, order=_DETERMINISTIC, str_keys=str_keys, enc_hook=_enc_hook)


__all__ = [
    "JSON_ENCODER_SORTED",
    "MSGPACK_ENCODER",
    "StructBaseHotPath",
    "StructBaseStrict",
    "convert",
    "dumps_json_sorted",
    "dumps_msgpack",
    "loads_json",
    "loads_msgpack",
    "to_builtins",
    "validation_error_payload",
]
