"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from brewdiag.core.errors import ErrorCode
from brewdiag.output.console import ConsoleProtocol, Style
from brewdiag.services.checkers import CheckRegistry, Diagnostic, RegistryError, build_registry

if TYPE_CHECKING:
    from brewdiag.cli.context import CLIContext
    from brewdiag.services.doctor import DoctorReport

MAINTAINER_NOTE = (
    "Please note that these warnings are just used to help the maintainers\n"
    "with debugging if you file an issue. If everything you use works\n"
    "fine: please don't worry or file an issue; just ignore this. Thanks!"
)


def registry_or_exit(ctx: CLIContext) -> CheckRegistry:
    """Build the check registry, exiting on a misconfigured catalog."""
    try:
        return build_registry(ctx.env)
    except RegistryError as e:
        ctx.console.error(f"check registry is misconfigured: {e}")
        raise typer.Exit(code=int(ErrorCode.INTERNAL_ERROR))


def print_diagnostic(console: ConsoleProtocol, diagnostic: Diagnostic) -> None:
    """Print the first line as a warning/error, the rest verbatim."""
    first, _, rest = diagnostic.message.rstrip("\n").partition("\n")
    if diagnostic.is_fatal:
        console.error(first)
    else:
        console.warning(first)
    if rest:
        console.print(rest)
    console.newline()


def print_report(console: ConsoleProtocol, report: DoctorReport, *, note: bool = True) -> None:
    diagnostics = report.diagnostics()
    if not diagnostics:
        return
    if note:
        console.print(MAINTAINER_NOTE, Style.DIM)
        console.newline()
    for diagnostic in diagnostics:
        print_diagnostic(console, diagnostic)


def exit_code_for(report: DoctorReport, *, strict: bool) -> ErrorCode:
    """Fatal findings always fail; warnings fail only in strict mode."""
    if report.has_fatal():
        return ErrorCode.ENV_ERROR
    if strict and report.has_findings():
        return ErrorCode.ENV_ERROR
    return ErrorCode.OK
