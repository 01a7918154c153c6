"""Installed-package lookup backed by `brew info --json=v2`."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from brewdiag.core.result import Err, Ok, Result
from brewdiag.core.structured import as_obj_list, as_str_dict, get_list, get_str
from brewdiag.services.checkers.common import CommandRunner, first_line
from brewdiag.services.checkers.environment import InstallPaths, PackageLookupError

__all__ = ["BrewPackage", "BrewPackageLookup", "parse_package_info"]


@dataclass(frozen=True, slots=True)
class BrewPackage:
    """A formula as described by `brew info` plus the local install layout."""

    name: str
    paths: InstallPaths
    installed_versions: tuple[str, ...] = ()
    linked_keg: str | None = None
    is_keg_only: bool = False
    used_options: tuple[str, ...] = ()

    def any_version_installed(self) -> bool:
        return bool(self.installed_versions)

    def linked_and_present(self) -> bool:
        if self.linked_keg is None:
            return False
        return (self.paths.prefix / "var" / "homebrew" / "linked" / self.name).is_dir()

    def keg_only(self) -> bool:
        return self.is_keg_only

    def managed_install_root(self) -> Path:
        return self.paths.cellar / self.name

    def libexec_dirs(self) -> list[Path]:
        dirs = [self.paths.prefix / "opt" / self.name / "libexec"]
        dirs.extend(self.managed_install_root() / v / "libexec" for v in self.installed_versions)
        return dirs

    def built_with(self, option: str) -> bool:
        return f"--with-{option}" in self.used_options or option in self.used_options


def parse_package_info(
    name: str, output: str, paths: InstallPaths
) -> Result[BrewPackage, PackageLookupError]:
    """Build a BrewPackage from `brew info --json=v2 <name>` output."""
    try:
        data = as_str_dict(json.loads(output))
    except json.JSONDecodeError as e:
        return Err(PackageLookupError(name, f"invalid brew info output: {e}"))
    if data is None:
        return Err(PackageLookupError(name, "brew info output is not an object"))

    formulae = get_list(data, "formulae") or []
    formula = as_str_dict(formulae[0]) if formulae else None
    if formula is None:
        return Err(PackageLookupError(name, "no formula with this name"))

    versions: list[str] = []
    options: list[str] = []
    for entry in as_obj_list(formula.get("installed")) or []:
        install = as_str_dict(entry)
        if install is None:
            continue
        version = get_str(install, "version")
        if version:
            versions.append(version)
        options.extend(o for o in get_list(install, "used_options") or [] if isinstance(o, str))

    return Ok(
        BrewPackage(
            name=get_str(formula, "name") or name,
            paths=paths,
            installed_versions=tuple(versions),
            linked_keg=get_str(formula, "linked_keg"),
            is_keg_only=formula.get("keg_only") is True,
            used_options=tuple(options),
        )
    )


class BrewPackageLookup:
    """Looks packages up through the `brew` executable under the prefix."""

    def __init__(self, *, paths: InstallPaths, runner: CommandRunner) -> None:
        self._paths = paths
        self._runner = runner
        self._brew = str(paths.prefix / "bin" / "brew")

    def lookup(self, name: str) -> Result[BrewPackage, PackageLookupError]:
        try:
            result = self._runner.run([self._brew, "info", "--json=v2", name])
        except OSError as e:
            return Err(PackageLookupError(name, f"cannot run brew: {e}"))
        if result.returncode != 0:
            return Err(PackageLookupError(name, first_line(result.stderr) or "unknown package"))
        return parse_package_info(name, result.stdout, self._paths)
