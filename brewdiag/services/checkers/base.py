# SPDX-License-Identifier: MIT
"""Base types for checks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum, auto


class Severity(Enum):
    """How a finding affects the operation the check gates."""

    FATAL = auto()
    """The gated operation must stop."""

    WARNING = auto()
    """Advisory only."""


class Tier(Enum):
    """Named, ordered groups of checks sharing a gating policy."""

    FATAL_BUILD_FROM_SOURCE = "fatal_build_from_source"
    SUPPORTED_CONFIGURATION = "supported_configuration"
    BUILD_FROM_SOURCE = "build_from_source"

    @property
    def severity(self) -> Severity:
        if self is Tier.FATAL_BUILD_FROM_SOURCE:
            return Severity.FATAL
        return Severity.WARNING

    @property
    def short_circuit(self) -> bool:
        """Return True if the first finding stops the rest of the tier."""
        return self.severity is Severity.FATAL


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A detected problem, fully rendered.

    Attributes:
        message: Multi-line advisory text
        severity: Set by the runner from the tier that produced it
        check: Name of the producing check (set by the runner)
        paths: Offending files, when the check reports a file list
    """

    message: str
    severity: Severity = Severity.WARNING
    check: str = ""
    paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.message.strip():
            raise ValueError("a diagnostic needs a message")

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.FATAL

    def stamped(self, check: str, severity: Severity) -> Diagnostic:
        """Return a copy attributed to `check` with the given severity."""
        return replace(self, check=check, severity=severity)


CheckFunc = Callable[[], Diagnostic | None]


@dataclass(frozen=True, slots=True)
class Check:
    """A named inspection routine producing at most one Diagnostic."""

    name: str
    func: CheckFunc

    def run(self) -> Diagnostic | None:
        return self.func()
