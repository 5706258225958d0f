"""Command dispatch with run-context injection and a command span."""

from __future__ import annotations

import logging
import time

from cyclopts import App
from cyclopts.exceptions import CycloptsError
from opentelemetry import trace
from rich.console import Console

from cli.context import RunContext
from cli.exit_codes import ExitCode
from ideinfo.errors import IdeInfoError

_LOGGER = logging.getLogger(__name__)
tracer = trace.get_tracer("ideinfo.cli")

_ERROR_CONSOLE = Console(stderr=True)


def invoke_with_context(
    app: App,
    tokens: list[str] | None,
    *,
    run_context: RunContext | None,
) -> int:
    """Parse ``tokens`` against ``app`` and run the selected command.

    Commands that declare a ``run_context`` parameter excluded from parsing
    receive ``run_context``.

    Returns
    -------
    int
        Exit status code.
    """
    t0 = time.perf_counter()
    try:
        command, bound, ignored = app.parse_args(
            tokens or [],
            exit_on_error=False,
            print_error=True,
        )
    except CycloptsError as exc:
        return ExitCode.from_exception(exc)

    if run_context is not None:
        for name, hint in ignored.items():
            if hint is RunContext or name == "run_context":
                bound.arguments[name] = run_context

    command_name = getattr(command, "__qualname__", repr(command))
    with tracer.start_as_current_span("cli.command") as span:
        span.set_attribute("cli.command", command_name)
        try:
            result = command(*bound.args, **bound.kwargs)
        except (IdeInfoError, OSError, ValueError) as exc:
            exit_code = ExitCode.from_exception(exc)
            span.set_attribute("cli.exit_code", int(exit_code))
            span.record_exception(exc)
            _LOGGER.debug("Command %s failed", command_name, exc_info=exc)
            _ERROR_CONSOLE.print(f"[bold red]error:[/bold red] {exc}", highlight=False)
            return exit_code
        exit_code = result if isinstance(result, int) else ExitCode.SUCCESS
        span.set_attribute("cli.exit_code", int(exit_code))
    _LOGGER.debug(
        "Command %s finished in %.1f ms",
        command_name,
        (time.perf_counter() - t0) * 1000.0,
    )
    return int(exit_code)


__all__ = ["invoke_with_context"]
