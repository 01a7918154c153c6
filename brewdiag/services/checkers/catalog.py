# SPDX-License-Identifier: MIT
"""Default check catalog."""

from __future__ import annotations

from .base import Check
from .environment import DoctorEnvironment
from .filesystem import FilesystemChecker
from .libraries import LibrariesChecker
from .registry import CheckRegistry
from .toolchain import ToolchainChecker


def default_checks(env: DoctorEnvironment) -> list[Check]:
    return [
        *ToolchainChecker(env=env).checks(),
        *FilesystemChecker(env=env).checks(),
        *LibrariesChecker(env=env).checks(),
    ]


def build_registry(env: DoctorEnvironment) -> CheckRegistry:
    """Build the registry of every built-in check, validated against the default tiers."""
    return CheckRegistry(default_checks(env))
