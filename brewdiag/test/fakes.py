"""Fake providers shared by the test suite."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from brewdiag.core.result import Err, Ok, Result
from brewdiag.services.checkers.environment import (
    DoctorEnvironment,
    InstallPaths,
    MacOSFacts,
    Package,
    PackageLookupError,
)


class MockCommandRunner:
    """Mock command runner returning canned responses."""

    def __init__(self, responses: dict[tuple[str, ...], tuple[int, str, str]] | None = None):
        self.responses = responses or {}
        self.calls: list[list[str]] = []

    def run(
        self, args: list[str], *, capture: bool = True, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        self.calls.append(args)
        key = tuple(args)
        if key in self.responses:
            rc, stdout, stderr = self.responses[key]
            return subprocess.CompletedProcess(args, rc, stdout, stderr)
        # Default: command not found
        raise FileNotFoundError(f"Command not found: {args[0]}")


@dataclass
class FakeToolchain:
    is_installed: bool = True
    current: str | None = "16.2"
    latest: str = "16.2"
    is_outdated: bool = False
    is_below_minimum: bool = False
    instructions: str = "Update it from the App Store."

    def installed(self) -> bool:
        return self.is_installed

    def version(self) -> str | None:
        return self.current

    def latest_version(self) -> str:
        return self.latest

    def outdated(self) -> bool:
        return self.is_outdated

    def below_minimum_version(self) -> bool:
        return self.is_below_minimum

    def update_instructions(self) -> str:
        return self.instructions


@dataclass
class FakeXcode(FakeToolchain):
    developer_dir: Path | None = None
    is_default_prefix: bool = True
    bundle: Path | None = None
    needs_clt: bool = False

    def prefix(self) -> Path | None:
        return self.developer_dir

    def default_prefix(self) -> bool:
        return self.is_default_prefix

    def bundle_path(self) -> Path | None:
        return self.bundle

    def needs_clt_installed(self) -> bool:
        return self.needs_clt


@dataclass
class FakeClt(FakeToolchain):
    install_instructions: str = "Install the Command Line Tools:\n  xcode-select --install"

    def installation_instructions(self) -> str:
        return self.install_instructions


@dataclass
class FakePackage:
    name: str
    root: Path
    linked: bool = False
    is_keg_only: bool = False
    installed: bool = True
    libexec: list[Path] = field(default_factory=list)
    options: tuple[str, ...] = ()

    def any_version_installed(self) -> bool:
        return self.installed

    def linked_and_present(self) -> bool:
        return self.linked

    def keg_only(self) -> bool:
        return self.is_keg_only

    def managed_install_root(self) -> Path:
        return self.root

    def libexec_dirs(self) -> list[Path]:
        return list(self.libexec)

    def built_with(self, option: str) -> bool:
        return option in self.options


class FakePackageLookup:
    def __init__(self, *packages: FakePackage) -> None:
        self.packages = {p.name: p for p in packages}
        self.calls: list[str] = []

    def lookup(self, name: str) -> Result[Package, PackageLookupError]:
        self.calls.append(name)
        if name in self.packages:
            return Ok(self.packages[name])
        return Err(PackageLookupError(name, "No available formula"))


class FakeVolumes:
    """Maps path prefixes to volume names; records every path it resolves."""

    def __init__(self, mounts: dict[str, str] | None = None, *, default: str | None = "/") -> None:
        self.mounts = mounts or {}
        self.default = default
        self.seen: list[Path] = []

    def volume_of(self, path: Path) -> str | None:
        self.seen.append(path)
        text = str(path)
        for prefix in sorted(self.mounts, key=len, reverse=True):
            if text == prefix or text.startswith(prefix.rstrip("/") + "/"):
                return self.mounts[prefix]
        return self.default


def make_paths(root: Path) -> InstallPaths:
    prefix = root / "prefix"
    paths = InstallPaths(prefix=prefix, repository=prefix, cellar=prefix / "Cellar", temp=root / "tmp")
    for directory in paths.well_known_dirs():
        directory.mkdir(parents=True, exist_ok=True)
    return paths


def make_env(root: Path, **overrides: object) -> DoctorEnvironment:
    """Environment where every check passes; override fields to inject problems."""
    paths = make_paths(root)
    fields: dict[str, object] = {
        "paths": paths,
        "os": MacOSFacts(version="15.3", pretty_name="macOS Sequoia"),
        "xcode": FakeXcode(),
        "clt": FakeClt(),
        "xquartz": FakeToolchain(is_installed=False, current=None, latest="2.8.5"),
        "packages": FakePackageLookup(),
        "volumes": FakeVolumes(),
        "runner": MockCommandRunner(),
        "library_prefixes": (str(paths.prefix), str(root / "usr_local")),
    }
    fields.update(overrides)
    return DoctorEnvironment(**fields)  # type: ignore[arg-type]
