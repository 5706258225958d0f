"""Configuration management commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from cli.config_loader import CONFIG_FILENAME, ConfigResolution, load_effective_config
from cli.context import RunContext

_TEMPLATE = """# ideinfo.toml

# Directory receiving records, package manifests and the output index.
output_dir = "build/ideinfo"

# Source artifact paths are resolved against this directory.
workspace_root = "."

# Roots of derived files below the output directory.
genfiles_root = "bazel-out/genfiles"
bin_root = "bazel-out/bin"

# Worker threads per dependency generation; 1 runs sequentially.
max_workers = 1

# Also write human-readable records next to the binary ones.
write_text = true

# log_level = "INFO"
"""


def show_config(
    *,
    with_location: Annotated[
        bool,
        Parameter(
            name="--with-location",
            help="Include the file the configuration was read from.",
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show the effective configuration payload.

    Returns:
    -------
    int
        Exit status code.
    """
    if run_context is None:
        resolution = load_effective_config(None)
    else:
        resolution = ConfigResolution(
            config=run_context.config,
            location=run_context.config_location,
        )
    payload: dict[str, object] = dict(resolution.to_mapping())
    if with_location:
        payload = {"config": payload, "location": resolution.location}
    sys.stdout.write(json.dumps(payload, indent=2, sort_keys=True) + "\n")
    return 0


def init_config(
    *,
    path: Annotated[
        Path | None,
        Parameter(
            name="--path",
            help=f"Path to write the configuration template (default: {CONFIG_FILENAME}).",
        ),
    ] = None,
    force: Annotated[
        bool,
        Parameter(
            name="--force",
            help="Overwrite existing config file.",
        ),
    ] = False,
) -> int:
    """Write a configuration template to disk.

    Returns:
    -------
    int
        Exit status code.

    Raises
    ------
    FileExistsError
        If the target path exists and ``force`` is false.
    """
    target_path = path if path is not None else Path(CONFIG_FILENAME)
    if target_path.exists() and not force:
        msg = f"Config file already exists: {target_path}."
        raise FileExistsError(msg)
    target_path.write_text(_TEMPLATE, encoding="utf-8")
    return 0


__all__ = ["init_config", "show_config"]
