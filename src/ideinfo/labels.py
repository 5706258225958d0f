"""Label parsing helpers.

Labels are treated as opaque keys everywhere except when deriving output file
names, which need the package path and target name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from core_types import LABEL_PATTERN, Label

_LABEL_RE = re.compile(LABEL_PATTERN)


@dataclass(frozen=True)
class ParsedLabel:
    """Label split into repository, package and target name."""

    repository: str
    package: str
    name: str

    @property
    def package_path(self) -> str:
        """Return the package as a relative path, prefixed by external/<repo> for remote repos."""
        if not self.repository:
            return self.package
        base = f"external/{self.repository}"
        return f"{base}/{self.package}" if self.package else base


def parse_label(label: str) -> ParsedLabel:
    """Split a label into its components.

    ``//pkg`` is shorthand for ``//pkg:pkg``.

    Returns
    -------
    ParsedLabel
        Parsed label components.

    Raises
    ------
    ValueError
        Raised when the label is not of the form ``[@repo]//pkg[:name]``.
    """
    if _LABEL_RE.match(label) is None:
        msg = f"Malformed label: {label!r}."
        raise ValueError(msg)
    repository = ""
    rest = label
    if rest.startswith("@"):
        repository, _, rest = rest[1:].partition("//")
        rest = f"//{rest}"
    body = rest[2:]
    package, sep, name = body.partition(":")
    if not sep:
        name = package.rsplit("/", 1)[-1] if package else repository
    if not name:
        msg = f"Label {label!r} has no target name."
        raise ValueError(msg)
    return ParsedLabel(repository=repository, package=package, name=name)


def label_output_stem(label: Label | str) -> str:
    """Return ``<package path>/<name>`` used as the base for derived files."""
    parsed = parse_label(label)
    if parsed.package_path:
        return f"{parsed.package_path}/{parsed.name}"
    return parsed.name


def sorted_labels(labels: frozenset[Label] | set[Label]) -> tuple[str, ...]:
    return tuple(sorted(labels))


__all__ = ["ParsedLabel", "label_output_stem", "parse_label", "sorted_labels"]
