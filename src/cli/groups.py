"""Shared help-panel groups for the ideinfo CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Session and run context options.",
    sort_key=0,
)

output_group = Group(
    "Output",
    help="Configure output directory and record formats.",
    sort_key=1,
)

execution_group = Group(
    "Execution",
    help="Control traversal scope and parallelism.",
    sort_key=2,
)

__all__ = ["execution_group", "output_group", "session_group"]
