"""Host interface consumed by the aspect, plus an in-memory host."""

from __future__ import annotations

import re
import threading
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from core_types import SUFFIX_PATTERN
from ideinfo.artifacts import Artifact, derived_artifact
from ideinfo.labels import label_output_stem
from ideinfo.providers import HostRoots
from serde_msgspec import StructBaseStrict

_SUFFIX_RE = re.compile(SUFFIX_PATTERN)


class PackageManifestRequest(StructBaseStrict, frozen=True):
    """Request to run the package-manifest action for one target."""

    label: str
    sources: tuple[Artifact, ...]
    output: Artifact


@runtime_checkable
class AspectHost(Protocol):
    """Narrow host surface used while processing targets."""

    @property
    def roots(self) -> HostRoots:
        """Return the host's output root layout."""
        ...

    def derived_artifact(self, label: str, suffix: str) -> Artifact:
        """Return the output handle for ``label`` with ``suffix`` appended."""
        ...

    def register_package_manifest_action(self, request: PackageManifestRequest) -> None:
        """Register the package-manifest action for a target."""
        ...

    def write_binary(self, output: Artifact, payload: bytes) -> None:
        """Persist a binary payload at ``output``."""
        ...

    def write_text(self, output: Artifact, payload: str) -> None:
        """Persist a text payload at ``output``."""
        ...

    def register_output_groups(
        self,
        label: str,
        groups: Mapping[str, frozenset[Artifact]],
    ) -> None:
        """Register named output groups for a target."""
        ...


def derive_output(roots: HostRoots, label: str, suffix: str) -> Artifact:
    """Return the genfiles handle ``<package>/<name><suffix>`` for a label.

    Returns
    -------
    Artifact
        Derived output handle.

    Raises
    ------
    ValueError
        Raised when ``suffix`` is not a file extension such as ``.manifest``.
    """
    if _SUFFIX_RE.match(suffix) is None:
        msg = f"Invalid output suffix {suffix!r}."
        raise ValueError(msg)
    return derived_artifact(
        root_path=roots.genfiles_path,
        root_execution_path=roots.genfiles_root,
        relative_path=f"{label_output_stem(label)}{suffix}",
    )


class InMemoryHost:
    """Host that keeps every output in memory.

    Used by tests and dry runs; safe to share across worker threads.
    """

    def __init__(self, roots: HostRoots | None = None) -> None:
        self._roots = roots or HostRoots()
        self._lock = threading.Lock()
        self.binary_outputs: dict[Artifact, bytes] = {}
        self.text_outputs: dict[Artifact, str] = {}
        self.manifest_requests: dict[str, PackageManifestRequest] = {}
        self.output_groups: dict[str, dict[str, frozenset[Artifact]]] = {}

    @property
    def roots(self) -> HostRoots:
        return self._roots

    def derived_artifact(self, label: str, suffix: str) -> Artifact:
        return derive_output(self._roots, label, suffix)

    def register_package_manifest_action(self, request: PackageManifestRequest) -> None:
        with self._lock:
            self.manifest_requests[request.label] = request

    def write_binary(self, output: Artifact, payload: bytes) -> None:
        with self._lock:
            self.binary_outputs[output] = payload

    def write_text(self, output: Artifact, payload: str) -> None:
        with self._lock:
            self.text_outputs[output] = payload

    def register_output_groups(
        self,
        label: str,
        groups: Mapping[str, frozenset[Artifact]],
    ) -> None:
        with self._lock:
            self.output_groups[label] = dict(groups)


__all__ = ["AspectHost", "InMemoryHost", "PackageManifestRequest", "derive_output"]
