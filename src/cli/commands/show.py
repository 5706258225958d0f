"""Render a binary IDE info record as text."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter, validators

from ideinfo.emit import decode_record, render_record_text


def show_command(
    record: Annotated[
        Path,
        Parameter(
            help="Binary record file (.aswb-build) to decode.",
            validator=validators.Path(exists=True, dir_okay=False, file_okay=True),
        ),
    ],
) -> int:
    """Decode a binary record and print its text form.

    Returns
    -------
    int
        Exit status code.
    """
    sys.stdout.write(render_record_text(decode_record(record.read_bytes())))
    return 0


__all__ = ["show_command"]
