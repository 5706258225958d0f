"""Build command implementation for the ideinfo CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter, validators
from rich.console import Console
from rich.table import Table

from cli.config_models import IdeInfoConfig
from cli.context import RunContext
from cli.groups import execution_group, output_group
from ideinfo.aspect import AspectOptions, AspectResult, run_aspect
from ideinfo.emit import OutputGroup
from ideinfo.filesystem import FileSystemHost
from ideinfo.graph_file import load_target_graph
from ideinfo.providers import HostRoots

logger = logging.getLogger(__name__)

_DEFAULT_OUTPUT_DIR = Path("build/ideinfo")


@dataclass(frozen=True)
class BuildOptions:
    """Output and execution options for ``ideinfo build``."""

    output_dir: Annotated[
        Path | None,
        Parameter(
            name=["--output-dir", "-o"],
            help="Directory receiving records, manifests and the output index.",
            env_var="IDEINFO_OUTPUT_DIR",
            group=output_group,
        ),
    ] = None
    workspace_root: Annotated[
        Path | None,
        Parameter(
            name="--workspace-root",
            help="Directory that source artifact paths are relative to.",
            group=execution_group,
        ),
    ] = None
    target: Annotated[
        tuple[str, ...],
        Parameter(
            name="--target",
            help="Restrict the run to these targets and their dependencies.",
            group=execution_group,
        ),
    ] = ()
    max_workers: Annotated[
        int | None,
        Parameter(
            name="--max-workers",
            help="Worker threads per dependency generation (1 runs sequentially).",
            validator=validators.Number(gte=1),
            group=execution_group,
        ),
    ] = None
    no_text: Annotated[
        bool,
        Parameter(
            name="--no-text",
            help="Skip the human-readable record files.",
            negative="",
            group=output_group,
        ),
    ] = False


_DEFAULT_BUILD_OPTIONS = BuildOptions()


@dataclass(frozen=True)
class ResolvedBuildSettings:
    """Build settings after merging CLI flags, configuration and graph roots."""

    output_dir: Path
    workspace_root: Path
    genfiles_root: str
    bin_root: str
    max_workers: int
    write_text: bool
    targets: tuple[str, ...]


def resolve_build_settings(
    options: BuildOptions,
    config: IdeInfoConfig,
    roots: HostRoots | None = None,
) -> ResolvedBuildSettings:
    """Merge CLI options over config values over the graph file's roots.

    The graph file's ``execution_root`` is not used; the output directory is
    the execution root of the filesystem host.

    Returns
    -------
    ResolvedBuildSettings
        Effective settings for one build invocation.
    """
    graph_roots = roots or HostRoots()
    output_dir = options.output_dir
    if output_dir is None:
        output_dir = Path(config.output_dir) if config.output_dir else _DEFAULT_OUTPUT_DIR
    workspace_root = options.workspace_root
    if workspace_root is None:
        workspace_root = Path(config.workspace_root or graph_roots.workspace_root)
    if options.no_text:
        write_text = False
    else:
        write_text = config.write_text if config.write_text is not None else True
    return ResolvedBuildSettings(
        output_dir=output_dir,
        workspace_root=workspace_root,
        genfiles_root=config.genfiles_root or graph_roots.genfiles_root,
        bin_root=config.bin_root or graph_roots.bin_root,
        max_workers=options.max_workers or config.max_workers or 1,
        write_text=write_text,
        targets=options.target,
    )


def build_command(
    graph: Annotated[
        Path,
        Parameter(
            help="JSON target graph file to process.",
            validator=validators.Path(exists=True, dir_okay=False, file_okay=True),
        ),
    ],
    options: Annotated[BuildOptions, Parameter(name="*")] = _DEFAULT_BUILD_OPTIONS,
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Emit IDE info records for every target of a build graph.

    Returns
    -------
    int
        Exit status code.
    """
    config = run_context.config if run_context is not None else IdeInfoConfig()
    spec = load_target_graph(graph)
    settings = resolve_build_settings(options, config, spec.roots)
    host = FileSystemHost(
        settings.output_dir,
        workspace_root=settings.workspace_root,
        genfiles_root=settings.genfiles_root,
        bin_root=settings.bin_root,
    )
    logger.info(
        "Processing %d targets from %s into %s",
        len(spec.targets),
        graph,
        settings.output_dir,
    )
    result = run_aspect(
        spec.targets,
        host,
        options=AspectOptions(
            write_text=settings.write_text,
            max_workers=settings.max_workers,
            requested=settings.targets,
        ),
    )
    index_path = host.write_index()
    _print_summary(result, index_path)
    return 0


def _print_summary(result: AspectResult, index_path: Path) -> None:
    table = Table(title="IDE info")
    table.add_column("Target")
    table.add_column("Kind")
    table.add_column("Deps", justify="right")
    table.add_column(str(OutputGroup.IDE_RESOLVE), justify="right")
    for label in result.order:
        target = result.results[label]
        if target.record is None:
            continue
        table.add_row(
            label,
            target.summary.kind.value,
            str(len(target.summary.transitive_deps)),
            str(len(target.summary.resolve_artifacts)),
        )
    console = Console()
    console.print(table)
    console.print(
        f"{len(result.records)} records for {len(result.order)} targets; index at {index_path}",
        highlight=False,
    )


__all__ = ["BuildOptions", "ResolvedBuildSettings", "build_command", "resolve_build_settings"]
