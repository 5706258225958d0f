"""List recognized rule classes."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ideinfo.kinds import RULE_CLASSES, kind_for_rule_class


def kinds_command() -> int:
    """Show each recognized rule class and the kind it maps to.

    Returns
    -------
    int
        Exit status code.
    """
    table = Table(title="Rule classes")
    table.add_column("Rule class")
    table.add_column("Kind")
    for rule_class in RULE_CLASSES:
        table.add_row(rule_class, kind_for_rule_class(rule_class).value)
    table.add_row("<other, with android_sdk>", kind_for_rule_class("", has_android_sdk=True).value)
    table.add_row("<other>", kind_for_rule_class("").value)
    Console().print(table)
    return 0


__all__ = ["kinds_command"]
