from __future__ import annotations

import typer

from brewdiag.cli.commands._helpers import exit_code_for, print_report, registry_or_exit
from brewdiag.cli.context import build_context
from brewdiag.core.errors import ErrorCode
from brewdiag.output.console import Style
from brewdiag.services.checkers import UnknownCheckError
from brewdiag.services.doctor import DoctorService


def doctor(
    checks: list[str] | None = typer.Argument(
        None, help="Only run these checks (see --list-checks)."
    ),
    list_checks: bool = typer.Option(False, "--list-checks", help="List all checks and exit."),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero on warnings too."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show each check as it runs."),
) -> None:
    """Check your system for potential problems."""
    ctx = build_context()
    console = ctx.console
    registry = registry_or_exit(ctx)

    if list_checks:
        for name in registry.names():
            console.print(name)
        return

    on_check = (lambda name: console.print(f"Running {name}", Style.DIM)) if verbose else None
    service = DoctorService(registry=registry, on_check=on_check)
    try:
        report = service.doctor(checks or [])
    except UnknownCheckError as e:
        console.error(str(e))
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not report.has_findings():
        console.print("Your system is ready to brew.", Style.SUCCESS)
        return

    print_report(console, report)
    code = exit_code_for(report, strict=strict)
    if not code.is_success:
        raise typer.Exit(code=int(code))
