"""Default providers for the host being diagnosed."""

from .macos import CommandLineTools, XQuartz, Xcode, detect_macos
from .packages import BrewPackage, BrewPackageLookup
from .paths import (
    default_config_path,
    env_flag,
    resolve_install_paths,
    search_path,
    user_config_dir,
)
from .volumes import DfVolumes

__all__ = [
    # macos
    "CommandLineTools",
    "XQuartz",
    "Xcode",
    "detect_macos",
    # packages
    "BrewPackage",
    "BrewPackageLookup",
    # paths
    "default_config_path",
    "env_flag",
    "resolve_install_paths",
    "search_path",
    "user_config_dir",
    # volumes
    "DfVolumes",
]
