# SPDX-License-Identifier: MIT
"""Provider interfaces and the environment handed to every checker.

Checks never read global state. Everything they inspect comes from a
`DoctorEnvironment`, built once per run by the CLI from the default
providers in `brewdiag.platform`, or by tests from fakes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from brewdiag.core.result import Result

from .accumulator import default_library_prefixes
from .common import CommandRunner, DefaultCommandRunner


class ToolchainVersion(Protocol):
    """Version facts for one installed toolchain (Xcode, CLT, XQuartz)."""

    def installed(self) -> bool: ...

    def version(self) -> str | None: ...

    def latest_version(self) -> str: ...

    def outdated(self) -> bool: ...

    def below_minimum_version(self) -> bool: ...

    def update_instructions(self) -> str: ...


class XcodeInfo(ToolchainVersion, Protocol):
    def prefix(self) -> Path | None:
        """Developer directory of the selected Xcode, if any."""
        ...

    def default_prefix(self) -> bool: ...

    def bundle_path(self) -> Path | None: ...

    def needs_clt_installed(self) -> bool: ...


class CltInfo(ToolchainVersion, Protocol):
    def installation_instructions(self) -> str:
        """How to install developer tools from scratch."""
        ...


@dataclass(frozen=True, slots=True)
class PackageLookupError:
    """A package name the package database cannot resolve."""

    name: str
    message: str


class Package(Protocol):
    """An installed (or installable) package as seen by the package database."""

    @property
    def name(self) -> str: ...

    def any_version_installed(self) -> bool: ...

    def linked_and_present(self) -> bool:
        """Return True if the package is linked and its linked keg exists on disk."""
        ...

    def keg_only(self) -> bool: ...

    def managed_install_root(self) -> Path:
        """Directory holding every installed version (<cellar>/<name>)."""
        ...

    def libexec_dirs(self) -> list[Path]: ...

    def built_with(self, option: str) -> bool: ...


class PackageLookup(Protocol):
    def lookup(self, name: str) -> Result[Package, PackageLookupError]: ...


class VolumeProvider(Protocol):
    def volume_of(self, path: Path) -> str | None:
        """Mount point of the volume containing `path`, or None if unknown."""
        ...


@dataclass(frozen=True, slots=True)
class MacOSFacts:
    """Facts about the running OS release."""

    version: str
    pretty_name: str
    prerelease: bool = False
    outdated_release: bool = False
    active_developer_dir: Path = Path("/Library/Developer/CommandLineTools")


@dataclass(frozen=True, slots=True)
class InstallPaths:
    """Where the package manager lives on this host."""

    prefix: Path
    repository: Path
    cellar: Path
    temp: Path

    def well_known_dirs(self) -> tuple[Path, ...]:
        return (self.prefix, self.repository, self.cellar, self.temp)


@dataclass(frozen=True, slots=True)
class DoctorEnvironment:
    """Everything a check may consult.

    Attributes:
        paths: Install locations
        os: Facts about the running OS release
        xcode: Xcode provider
        clt: Command Line Tools provider
        xquartz: XQuartz provider
        packages: Installed-package lookup
        volumes: Path to volume resolution
        runner: Command runner for checks that shell out
        ci: True when running on the project's own CI
        developer: True when the user develops the package manager itself
        search_path: Entries of PATH, in order
        library_prefixes: Prefixes searched for conflicting libraries
        ruby: Interpreter the package manager runs on, if known
    """

    paths: InstallPaths
    os: MacOSFacts
    xcode: XcodeInfo
    clt: CltInfo
    xquartz: ToolchainVersion
    packages: PackageLookup
    volumes: VolumeProvider
    runner: CommandRunner = field(default_factory=DefaultCommandRunner)
    ci: bool = False
    developer: bool = False
    search_path: tuple[Path, ...] = ()
    library_prefixes: tuple[str, ...] = ()
    ruby: Path | None = None

    def library_search_prefixes(self) -> tuple[str, ...]:
        if self.library_prefixes:
            return self.library_prefixes
        return default_library_prefixes(self.paths.prefix)
