from __future__ import annotations

import typer

from brewdiag.cli.commands._helpers import exit_code_for, print_report, registry_or_exit
from brewdiag.cli.context import build_context
from brewdiag.output.console import Style
from brewdiag.services.doctor import DoctorService


def preflight(
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero on warnings too."),
) -> None:
    """Run the checks that gate building packages from source."""
    ctx = build_context()
    service = DoctorService(registry=registry_or_exit(ctx))
    report = service.preflight()

    print_report(ctx.console, report, note=False)

    if report.aborted:
        ctx.console.print("Cannot build from source until this is fixed.", Style.DIM)
    elif not report.has_findings():
        ctx.console.success("ready to build from source")

    code = exit_code_for(report, strict=strict)
    if not code.is_success:
        raise typer.Exit(code=int(code))
