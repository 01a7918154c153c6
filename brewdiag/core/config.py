"""Typed configuration loading.

The config file is optional. Every field has a default, and environment
variables (HOMEBREW_PREFIX, HOMEBREW_TEMP, ...) override the file when the
install paths are resolved in `brewdiag.platform.paths`.

Example config.toml:

    developer = false

    [paths]
    prefix = "/opt/homebrew"
    temp = "/private/tmp"

    [ci]
    env_var = "HOMEBREW_GITHUB_ACTIONS"

    [libraries]
    prefixes = ["/opt/homebrew", "/usr/local"]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list, get_table

__all__ = [
    "CiConfig",
    "ConfigError",
    "DoctorConfig",
    "LibrariesConfig",
    "PathsConfig",
    "DEFAULT_CI_ENV_VAR",
    "load_config",
    "load_config_or_default",
]

# Set by the project's own CI; outdated toolchains on CI images are not reported.
DEFAULT_CI_ENV_VAR = "HOMEBREW_GITHUB_ACTIONS"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Install locations. None means "derive from the prefix"."""

    prefix: str | None = None
    repository: str | None = None
    cellar: str | None = None
    temp: str | None = None


@dataclass(frozen=True, slots=True)
class CiConfig:
    env_var: str = DEFAULT_CI_ENV_VAR


@dataclass(frozen=True, slots=True)
class LibrariesConfig:
    """System prefixes searched for conflicting gettext/libiconv files.

    Empty means the package manager prefix plus /usr/local.
    """

    prefixes: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DoctorConfig:
    """Main configuration container."""

    developer: bool = False
    paths: PathsConfig = field(default_factory=PathsConfig)
    ci: CiConfig = field(default_factory=CiConfig)
    libraries: LibrariesConfig = field(default_factory=LibrariesConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> DoctorConfig:
        """Create DoctorConfig from a mapping (parsed TOML)."""
        paths: StrDict = get_table(data, "paths") or {}
        ci: StrDict = get_table(data, "ci") or {}
        libraries: StrDict = get_table(data, "libraries") or {}

        return cls(
            developer=get_bool(data, "developer") or False,
            paths=PathsConfig(
                prefix=get_str(paths, "prefix"),
                repository=get_str(paths, "repository"),
                cellar=get_str(paths, "cellar"),
                temp=get_str(paths, "temp"),
            ),
            ci=CiConfig(env_var=get_str(ci, "env_var") or DEFAULT_CI_ENV_VAR),
            libraries=LibrariesConfig(prefixes=tuple(get_str_list(libraries, "prefixes"))),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[DoctorConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Returns:
        Ok(DoctorConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(DoctorConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> DoctorConfig:
    """Load config from file, or the default config if it is missing or broken."""
    return load_config(path).unwrap_or(DoctorConfig())
