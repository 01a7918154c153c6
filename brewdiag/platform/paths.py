"""Install-path and config-path resolution.

Precedence for every install path: environment variable, then config file,
then the default derived from the prefix.
"""

from __future__ import annotations

import os
import platform as _platform
import tempfile
from collections.abc import Mapping
from pathlib import Path

from brewdiag.core.config import PathsConfig
from brewdiag.services.checkers.environment import InstallPaths

__all__ = [
    "default_config_path",
    "default_prefix",
    "env_flag",
    "resolve_install_paths",
    "search_path",
    "user_config_dir",
]

APP_NAME = "brewdiag"

ARM64_PREFIX = Path("/opt/homebrew")
INTEL_PREFIX = Path("/usr/local")
MACOS_TEMP = Path("/private/tmp")


def user_config_dir(environ: Mapping[str, str] = os.environ) -> Path:
    """XDG_CONFIG_HOME/brewdiag, or ~/.config/brewdiag."""
    xdg_config = environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    home = environ.get("HOME")
    return (Path(home) if home else Path.home()) / ".config" / APP_NAME


def default_config_path(environ: Mapping[str, str] = os.environ) -> Path:
    return user_config_dir(environ) / "config.toml"


def default_prefix(machine: str | None = None) -> Path:
    machine = machine if machine is not None else _platform.machine()
    if machine.lower() in ("arm64", "aarch64"):
        return ARM64_PREFIX
    return INTEL_PREFIX


def resolve_install_paths(
    config: PathsConfig,
    environ: Mapping[str, str] = os.environ,
    *,
    machine: str | None = None,
) -> InstallPaths:
    prefix = _pick(environ, "HOMEBREW_PREFIX", config.prefix) or default_prefix(machine)

    repository = _pick(environ, "HOMEBREW_REPOSITORY", config.repository)
    if repository is None:
        # Intel installs keep the git checkout out of the shared /usr/local.
        repository = prefix / "Homebrew" if prefix == INTEL_PREFIX else prefix

    cellar = _pick(environ, "HOMEBREW_CELLAR", config.cellar)
    if cellar is None:
        cellar = repository / "Cellar" if (repository / "Cellar").is_dir() else prefix / "Cellar"

    temp = _pick(environ, "HOMEBREW_TEMP", config.temp)
    if temp is None:
        temp = MACOS_TEMP if MACOS_TEMP.is_dir() else Path(tempfile.gettempdir())

    return InstallPaths(prefix=prefix, repository=repository, cellar=cellar, temp=temp)


def search_path(environ: Mapping[str, str] = os.environ) -> tuple[Path, ...]:
    raw = environ.get("PATH", "")
    return tuple(Path(entry) for entry in raw.split(os.pathsep) if entry)


def env_flag(environ: Mapping[str, str], name: str) -> bool:
    """Return True if the variable is set to anything non-empty."""
    return bool(environ.get(name))


def _pick(environ: Mapping[str, str], var: str, configured: str | None) -> Path | None:
    value = environ.get(var) or configured
    if not value:
        return None
    return Path(value).expanduser()
