"""Check runner.

Runs checks one at a time, in listed order. Only the fatal tier
short-circuits: its first finding stops the tier and every tier after it.
Other tiers always run every check and keep all findings in order.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from brewdiag.services.checkers import Check, CheckRegistry, Diagnostic, Severity, Tier

# Order `preflight` evaluates tiers in before a build from source.
PREFLIGHT_TIERS: tuple[Tier, ...] = (
    Tier.SUPPORTED_CONFIGURATION,
    Tier.FATAL_BUILD_FROM_SOURCE,
    Tier.BUILD_FROM_SOURCE,
)


@dataclass(frozen=True, slots=True)
class SectionReport:
    """Outcome of running one group of checks."""

    title: str
    ran: tuple[str, ...]
    diagnostics: tuple[Diagnostic, ...]
    aborted: bool = False


@dataclass(frozen=True, slots=True)
class DoctorReport:
    sections: tuple[SectionReport, ...]

    def diagnostics(self) -> list[Diagnostic]:
        return [d for section in self.sections for d in section.diagnostics]

    def has_fatal(self) -> bool:
        return any(d.is_fatal for d in self.diagnostics())

    def has_findings(self) -> bool:
        return bool(self.diagnostics())

    @property
    def aborted(self) -> bool:
        return any(section.aborted for section in self.sections)


class DoctorService:
    def __init__(
        self,
        *,
        registry: CheckRegistry,
        on_check: Callable[[str], None] | None = None,
    ) -> None:
        self._registry = registry
        self._on_check = on_check

    def run_tier(self, tier: Tier) -> SectionReport:
        return self._run(
            tier.value,
            self._registry.checks_for(tier),
            severity=tier.severity,
            short_circuit=tier.short_circuit,
        )

    def run_checks(self, checks: Sequence[Check], *, title: str = "doctor") -> SectionReport:
        """Run checks as warnings, never stopping early."""
        return self._run(title, checks, severity=Severity.WARNING, short_circuit=False)

    def doctor(self, names: Sequence[str] = ()) -> DoctorReport:
        """Run the named checks, or the whole catalog when no names are given.

        Raises:
            UnknownCheckError: If a requested name is not registered
        """
        checks = self._registry.resolve(names) if names else self._registry.catalog()
        return DoctorReport(sections=(self.run_checks(checks),))

    def preflight(self, tiers: Sequence[Tier] = PREFLIGHT_TIERS) -> DoctorReport:
        sections: list[SectionReport] = []
        for tier in tiers:
            section = self.run_tier(tier)
            sections.append(section)
            if section.aborted:
                break
        return DoctorReport(sections=tuple(sections))

    def _run(
        self,
        title: str,
        checks: Sequence[Check],
        *,
        severity: Severity,
        short_circuit: bool,
    ) -> SectionReport:
        ran: list[str] = []
        diagnostics: list[Diagnostic] = []
        for check in checks:
            if self._on_check is not None:
                self._on_check(check.name)
            ran.append(check.name)
            diagnostic = check.run()
            if diagnostic is None:
                continue
            diagnostics.append(diagnostic.stamped(check.name, severity))
            if short_circuit:
                return SectionReport(title, tuple(ran), tuple(diagnostics), aborted=True)
        return SectionReport(title, tuple(ran), tuple(diagnostics))
