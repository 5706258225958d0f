"""Main application setup for the ideinfo CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from typing import Annotated, Literal

from cyclopts import App, Parameter
from rich.console import Console

from cli.commands.build import build_command
from cli.commands.config import init_config, show_config
from cli.commands.kinds import kinds_command
from cli.commands.show import show_command
from cli.config_loader import load_effective_config
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import session_group
from cli.telemetry import invoke_with_context

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def get_version() -> str:
    """Return the installed ideinfo version, or "0.0.0-dev" from a source tree."""
    try:
        return pkg_version("ideinfo")
    except PackageNotFoundError:
        return "0.0.0-dev"


_ERROR_CONSOLE = Console(stderr=True)

_HELP_EPILOGUE = """
Examples:
  ideinfo build graph.json                  Emit records for every target
  ideinfo build graph.json -o ./out         Emit into a custom output directory
  ideinfo build graph.json --target //a:b   Emit records for //a:b and its deps
  ideinfo show out/bazel-out/genfiles/a/b.aswb-build
  ideinfo config show                       Show effective configuration

Environment Variables:
  IDEINFO_LOG_LEVEL    Default log level (DEBUG, INFO, WARNING, ERROR)
  IDEINFO_OUTPUT_DIR   Default output directory
"""

app = App(
    name="ideinfo",
    help="IDE info aspect - per-target IDE records over a build graph.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to configuration file (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None,
        Parameter(
            name="--log-level",
            help="Logging verbosity level (defaults to the configured level, then INFO).",
            env_var="IDEINFO_LOG_LEVEL",
            group=session_group,
        ),
    ] = None


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for config selection and context injection.

    Returns
    -------
    int
        Exit status code from command execution.
    """
    try:
        resolution = load_effective_config(session.config_file)
    except (OSError, ValueError, TypeError) as exc:
        _ERROR_CONSOLE.print(f"[bold red]config error:[/bold red] {exc}", highlight=False)
        return ExitCode.CONFIG_ERROR
    log_level = (session.log_level or resolution.config.log_level or "INFO").upper()
    if log_level not in LOG_LEVELS:
        _ERROR_CONSOLE.print(f"Unsupported log level {log_level!r}.", highlight=False)
        return ExitCode.VALIDATION_ERROR
    logging.basicConfig(level=log_level)

    run_context = RunContext(
        log_level=log_level,
        config=resolution.config,
        config_location=resolution.location,
    )
    return invoke_with_context(app, list(tokens), run_context=run_context)


app.command(build_command, name="build")
app.command(show_command, name="show")
app.command(kinds_command, name="kinds")

_config_app = App(name="config", help="Configuration management.")
_config_app.command(show_config, name="show")
_config_app.command(init_config, name="init")
app.command(_config_app)


def main() -> None:
    """Run the ideinfo CLI."""
    raise SystemExit(app.meta())


__all__ = ["app", "get_version", "main"]
