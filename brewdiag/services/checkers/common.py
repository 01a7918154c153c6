# SPDX-License-Identifier: MIT
"""Common utilities for checks and providers.

- CommandRunner protocol for subprocess abstraction
- Version parsing helpers
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Protocol


class CommandRunner(Protocol):
    """Protocol for running shell commands.

    This abstraction allows mocking subprocess calls in tests.
    """

    def run(
        self, args: list[str], *, capture: bool = True, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        """Run a command and return the result.

        Raises:
            OSError: If the executable cannot be started
        """
        ...


class DefaultCommandRunner:
    """Default command runner using subprocess.run."""

    def run(
        self, args: list[str], *, capture: bool = True, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            args,
            capture_output=capture,
            text=True,
            check=False,
            cwd=cwd,
        )


def combined_output(result: subprocess.CompletedProcess[str]) -> str:
    """Return stdout and stderr together, like `cmd 2>&1`."""
    return (result.stdout or "") + (result.stderr or "")


def first_line(text: str) -> str:
    """Extract first non-empty line from text."""
    for line in text.strip().splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ""


_VERSION_RE = re.compile(r"\b(\d+(?:\.\d+)*)\b")


def parse_version(text: str) -> tuple[int, ...] | None:
    """Parse the first dotted version number found in text.

    "Xcode 16.2" -> (16, 2); "version: 16.0.0.0.1.1724870825" -> (16, 0, 0, 0, 1, 1724870825)
    """
    match = _VERSION_RE.search(text)
    if not match:
        return None
    return tuple(int(part) for part in match.group(1).split("."))


def format_version(version: tuple[int, ...]) -> str:
    return ".".join(str(part) for part in version)


def version_less_than(current: str | None, required: str) -> bool:
    """Return True if `current` parses and sorts before `required`.

    Unparseable or missing versions are never "less than": a check cannot
    report a version it could not read.
    """
    if current is None:
        return False
    actual = parse_version(current)
    wanted = parse_version(required)
    if actual is None or wanted is None:
        return False
    return _pad(actual, len(wanted)) < _pad(wanted, len(actual))


def _pad(version: tuple[int, ...], length: int) -> tuple[int, ...]:
    return version + (0,) * max(0, length - len(version))
