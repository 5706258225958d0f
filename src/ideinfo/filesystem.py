"""Host that writes every output below a local output directory."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from pathlib import Path

from core_types import PathLike, ensure_path
from ideinfo.artifacts import Artifact
from ideinfo.host import PackageManifestRequest, derive_output
from ideinfo.package_manifest import build_package_manifest
from ideinfo.providers import HostRoots
from serde_msgspec import StructBaseStrict, dumps_json_sorted
from utils.hashing import hash_sha256_hex

logger = logging.getLogger(__name__)

INDEX_FILENAME = "ide-info-index.json"


class OutputIndex(StructBaseStrict, frozen=True):
    """Output groups per target and SHA-256 digests of written records."""

    output_groups: dict[str, dict[str, tuple[str, ...]]]
    digests: dict[str, str]


class FileSystemHost:
    """Host rooted at ``output_dir``.

    Derived files land under ``<output_dir>/<genfiles_root>``; package
    manifests are computed in-process when requested.
    """

    def __init__(
        self,
        output_dir: PathLike,
        *,
        workspace_root: PathLike = ".",
        genfiles_root: str = "bazel-out/genfiles",
        bin_root: str = "bazel-out/bin",
    ) -> None:
        self.output_dir = ensure_path(output_dir)
        self._roots = HostRoots(
            workspace_root=str(ensure_path(workspace_root)),
            execution_root=str(self.output_dir),
            genfiles_root=genfiles_root,
            bin_root=bin_root,
        )
        self._lock = threading.Lock()
        self._groups: dict[str, dict[str, tuple[str, ...]]] = {}
        self._digests: dict[str, str] = {}

    @property
    def roots(self) -> HostRoots:
        return self._roots

    def derived_artifact(self, label: str, suffix: str) -> Artifact:
        return derive_output(self._roots, label, suffix)

    def register_package_manifest_action(self, request: PackageManifestRequest) -> None:
        manifest = build_package_manifest(request, read_text=self._read_source)
        self._write(request.output, dumps_json_sorted(manifest, pretty=True))

    def write_binary(self, output: Artifact, payload: bytes) -> None:
        self._write(output, payload)
        with self._lock:
            self._digests[output.exec_path] = hash_sha256_hex(payload)

    def write_text(self, output: Artifact, payload: str) -> None:
        self._write(output, payload.encode("utf-8"))

    def register_output_groups(
        self,
        label: str,
        groups: Mapping[str, frozenset[Artifact]],
    ) -> None:
        entry = {
            str(name): tuple(sorted(artifact.exec_path for artifact in artifacts))
            for name, artifacts in groups.items()
        }
        with self._lock:
            self._groups[label] = entry

    def index(self) -> OutputIndex:
        with self._lock:
            return OutputIndex(output_groups=dict(self._groups), digests=dict(self._digests))

    def write_index(self) -> Path:
        """Write the output index next to the outputs.

        Returns
        -------
        Path
            Path of the written index file.
        """
        path = self.output_dir / INDEX_FILENAME
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(dumps_json_sorted(self.index(), pretty=True))
        logger.info("Wrote output index to %s", path)
        return path

    def _read_source(self, artifact: Artifact) -> str:
        if artifact.is_source:
            # Relative source roots resolve against the workspace root.
            path = Path(self._roots.workspace_root) / artifact.root_path / artifact.relative_path
        else:
            path = Path(artifact.path)
        return path.read_text(encoding="utf-8")

    def _write(self, output: Artifact, payload: bytes) -> None:
        path = Path(output.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)


__all__ = ["INDEX_FILENAME", "FileSystemHost", "OutputIndex"]
