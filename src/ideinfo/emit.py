"""Hand finished records and summaries to the host."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ideinfo.artifacts import Artifact
from ideinfo.host import AspectHost
from ideinfo.records import InfoRecord, TargetSummary
from serde_msgspec import dumps_json_sorted, dumps_msgpack, loads_msgpack

INFO_SUFFIX = ".aswb-build"
INFO_TEXT_SUFFIX = ".aswb-build.txt"


class OutputGroup(StrEnum):
    """Output groups registered for every target."""

    IDE_INFO = "ide-info"
    IDE_INFO_TEXT = "ide-info-text"
    IDE_RESOLVE = "ide-resolve"


@dataclass(frozen=True)
class InfoOutputs:
    """Output handles for a target's record files."""

    binary: Artifact
    text: Artifact | None = None


def plan_info_outputs(label: str, host: AspectHost, *, write_text: bool = True) -> InfoOutputs:
    """Return the record file handles for a target."""
    return InfoOutputs(
        binary=host.derived_artifact(label, INFO_SUFFIX),
        text=host.derived_artifact(label, INFO_TEXT_SUFFIX) if write_text else None,
    )


def encode_record(record: InfoRecord) -> bytes:
    """Return the compact binary (MessagePack) form of a record."""
    return dumps_msgpack(record)


def decode_record(payload: bytes) -> InfoRecord:
    """Decode a binary record written by :func:`encode_record`."""
    return loads_msgpack(payload, target_type=InfoRecord)


def render_record_text(record: InfoRecord) -> str:
    """Return the human-readable form of a record."""
    return dumps_json_sorted(record, pretty=True).decode("utf-8") + "\n"


def output_groups_for(summary: TargetSummary) -> dict[str, frozenset[Artifact]]:
    """Return the output groups of a target from its summary."""
    return {
        OutputGroup.IDE_INFO: summary.info_artifacts,
        OutputGroup.IDE_INFO_TEXT: summary.info_text_artifacts,
        OutputGroup.IDE_RESOLVE: summary.resolve_artifacts,
    }


def emit_target_info(
    record: InfoRecord | None,
    summary: TargetSummary,
    *,
    outputs: InfoOutputs | None,
    host: AspectHost,
) -> dict[str, frozenset[Artifact]]:
    """Write the record files and register the target's output groups.

    Parameters
    ----------
    record
        Finished record, or None for unrecognized targets.
    summary
        Finished summary of the target.
    outputs
        Record file handles; required when ``record`` is present.
    host
        Host receiving the writes and output groups.

    Returns
    -------
    dict[str, frozenset[Artifact]]
        Registered output groups.

    Raises
    ------
    ValueError
        Raised when a record is given without output handles.
    """
    if record is not None:
        if outputs is None:
            msg = f"No output handles planned for record {record.label!r}."
            raise ValueError(msg)
        host.write_binary(outputs.binary, encode_record(record))
        if outputs.text is not None:
            host.write_text(outputs.text, render_record_text(record))
    groups = output_groups_for(summary)
    host.register_output_groups(summary.label, groups)
    return groups


__all__ = [
    "INFO_SUFFIX",
    "INFO_TEXT_SUFFIX",
    "InfoOutputs",
    "OutputGroup",
    "decode_record",
    "emit_target_info",
    "encode_record",
    "output_groups_for",
    "plan_info_outputs",
]
