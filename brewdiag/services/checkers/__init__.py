# SPDX-License-Identifier: MIT
"""Diagnostic checks.

Each checker groups related checks over one `DoctorEnvironment`:
- ToolchainChecker: Xcode, Command Line Tools, XQuartz, OS support
- FilesystemChecker: case sensitivity, volumes, interfering software
- LibrariesChecker: conflicting gettext/libiconv/findutils installs
"""

from brewdiag.services.checkers.accumulator import FileListAccumulator, inject_file_list
from brewdiag.services.checkers.base import Check, CheckFunc, Diagnostic, Severity, Tier
from brewdiag.services.checkers.catalog import build_registry, default_checks
from brewdiag.services.checkers.environment import (
    CltInfo,
    DoctorEnvironment,
    InstallPaths,
    MacOSFacts,
    Package,
    PackageLookup,
    PackageLookupError,
    ToolchainVersion,
    VolumeProvider,
    XcodeInfo,
)
from brewdiag.services.checkers.filesystem import FilesystemChecker
from brewdiag.services.checkers.libraries import LibrariesChecker
from brewdiag.services.checkers.registry import (
    CheckRegistry,
    DuplicateCheckError,
    RegistryError,
    UnknownCheckError,
)
from brewdiag.services.checkers.toolchain import ToolchainChecker

__all__ = [
    # Result types
    "Check",
    "CheckFunc",
    "Diagnostic",
    "Severity",
    "Tier",
    # Accumulation
    "FileListAccumulator",
    "inject_file_list",
    # Registry
    "CheckRegistry",
    "RegistryError",
    "UnknownCheckError",
    "DuplicateCheckError",
    "build_registry",
    "default_checks",
    # Environment
    "CltInfo",
    "DoctorEnvironment",
    "InstallPaths",
    "MacOSFacts",
    "Package",
    "PackageLookup",
    "PackageLookupError",
    "ToolchainVersion",
    "VolumeProvider",
    "XcodeInfo",
    # Checkers
    "ToolchainChecker",
    "FilesystemChecker",
    "LibrariesChecker",
]
