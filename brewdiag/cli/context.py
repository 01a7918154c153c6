from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from brewdiag.core.config import DoctorConfig, load_config
from brewdiag.core.errors import ErrorCode
from brewdiag.core.result import is_err
from brewdiag.output.console import ConsoleProtocol, RichConsole
from brewdiag.platform import (
    BrewPackageLookup,
    CommandLineTools,
    DfVolumes,
    XQuartz,
    Xcode,
    default_config_path,
    detect_macos,
    env_flag,
    resolve_install_paths,
    search_path,
)
from brewdiag.services.checkers import DoctorEnvironment, InstallPaths
from brewdiag.services.checkers.common import CommandRunner, DefaultCommandRunner

# Set by the --config global option.
CONFIG_ENV_VAR = "BREWDIAG_CONFIG"

PORTABLE_RUBY = Path("Library/Homebrew/vendor/portable-ruby/current/bin/ruby")


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: DoctorConfig
    env: DoctorEnvironment
    console: ConsoleProtocol


def build_context() -> CLIContext:
    console = RichConsole()
    config = _load_config(console)
    return CLIContext(config=config, env=build_environment(config), console=console)


def build_environment(
    config: DoctorConfig,
    environ: Mapping[str, str] = os.environ,
    runner: CommandRunner | None = None,
) -> DoctorEnvironment:
    """Assemble the default providers for this host."""
    runner = runner or DefaultCommandRunner()
    paths = resolve_install_paths(config.paths, environ)
    os_facts = detect_macos(runner)
    clt = CommandLineTools(runner, os_facts.version)

    return DoctorEnvironment(
        paths=paths,
        os=os_facts,
        xcode=Xcode(runner, os_facts.version, clt, prerelease=os_facts.prerelease),
        clt=clt,
        xquartz=XQuartz(),
        packages=BrewPackageLookup(paths=paths, runner=runner),
        volumes=DfVolumes(runner),
        runner=runner,
        ci=env_flag(environ, config.ci.env_var),
        developer=config.developer or env_flag(environ, "HOMEBREW_DEVELOPER"),
        search_path=search_path(environ),
        library_prefixes=config.libraries.prefixes,
        ruby=ruby_path(paths, environ),
    )


def ruby_path(paths: InstallPaths, environ: Mapping[str, str]) -> Path:
    """Interpreter the package manager runs on: HOMEBREW_RUBY_PATH or its portable Ruby."""
    explicit = environ.get("HOMEBREW_RUBY_PATH")
    if explicit:
        return Path(explicit)
    return paths.repository / PORTABLE_RUBY


def _load_config(console: ConsoleProtocol) -> DoctorConfig:
    explicit = os.environ.get(CONFIG_ENV_VAR)
    path = Path(explicit) if explicit else default_config_path()
    if not explicit and not path.exists():
        return DoctorConfig()

    result = load_config(path)
    if is_err(result):
        console.error(result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return result.unwrap()
