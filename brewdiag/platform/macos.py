"""Default macOS toolchain providers.

Each provider shells out through a `CommandRunner` and caches what it reads
for the lifetime of one run. A missing executable or unreadable file means
"not installed", never an error.
"""

from __future__ import annotations

import platform as _platform
import plistlib
from functools import cached_property
from pathlib import Path

from brewdiag.core.versions import (
    CLT_REQUIREMENTS,
    LATEST_SDK_MACOS,
    MACOS_NAMES,
    NEWEST_SUPPORTED_MACOS,
    OLDEST_SUPPORTED_MACOS,
    XCODE_REQUIREMENTS,
    XQUARTZ_LATEST_VERSION,
    XQUARTZ_MINIMUM_VERSION,
    macos_key,
)
from brewdiag.services.checkers.common import (
    CommandRunner,
    first_line,
    format_version,
    parse_version,
    version_less_than,
)
from brewdiag.services.checkers.environment import MacOSFacts

__all__ = [
    "CommandLineTools",
    "Xcode",
    "XQuartz",
    "detect_macos",
]

CLT_PATH = Path("/Library/Developer/CommandLineTools")
CLT_PKG_ID = "com.apple.pkg.CLTools_Executables"
DEFAULT_XCODE_PREFIX = Path("/Applications/Xcode.app/Contents/Developer")
XQUARTZ_INFO_PLIST = Path("/Applications/Utilities/XQuartz.app/Contents/Info.plist")


def detect_macos(runner: CommandRunner, release: str | None = None) -> MacOSFacts:
    """Collect facts about the running macOS release.

    Args:
        runner: Used to ask xcode-select for the active developer dir
        release: Override for platform.mac_ver() (tests)
    """
    release = release if release is not None else _platform.mac_ver()[0]
    parsed = parse_version(release) if release else None
    if parsed is None:
        return MacOSFacts(version="unknown", pretty_name="this OS")

    key = macos_key(parsed)
    name = MACOS_NAMES.get(key)
    return MacOSFacts(
        version=release,
        pretty_name=f"macOS {name}" if name else f"macOS {key}",
        prerelease=parsed[0] != 10 and parsed[0] > NEWEST_SUPPORTED_MACOS,
        outdated_release=parsed[0] == 10 or parsed[0] < OLDEST_SUPPORTED_MACOS,
        active_developer_dir=_active_developer_dir(runner),
    )


def _active_developer_dir(runner: CommandRunner) -> Path:
    try:
        result = runner.run(["/usr/bin/xcode-select", "-p"])
    except OSError:
        return CLT_PATH
    path = first_line(result.stdout)
    if result.returncode != 0 or not path:
        return CLT_PATH
    return Path(path)


def _requirements(
    table: dict[str, tuple[str, str]], os_version: tuple[int, ...]
) -> tuple[str, str] | tuple[None, None]:
    """Latest and minimum versions for a macOS release.

    A release newer than every row (a pre-release) is held to the newest row.
    An older release without a row has no known requirements: (None, None).
    """
    key = macos_key(os_version)
    if key in table:
        return table[key]
    newest = max(table, key=lambda k: parse_version(k) or ())
    if os_version > (parse_version(newest) or ()):
        return table[newest]
    return None, None


def _older_than(current: str | None, required: str | None) -> bool:
    return required is not None and version_less_than(current, required)


class CommandLineTools:
    """Xcode Command Line Tools, read from pkgutil receipts."""

    def __init__(self, runner: CommandRunner, os_version: str) -> None:
        self._runner = runner
        self._latest, self._minimum = _requirements(
            CLT_REQUIREMENTS, parse_version(os_version) or ()
        )

    def installed(self) -> bool:
        return (CLT_PATH / "usr" / "bin" / "clang").is_file()

    @cached_property
    def _version(self) -> str | None:
        if not self.installed():
            return None
        try:
            result = self._runner.run(["/usr/sbin/pkgutil", f"--pkg-info={CLT_PKG_ID}"])
        except OSError:
            return None
        if result.returncode != 0:
            return None
        for line in result.stdout.splitlines():
            if line.startswith("version:"):
                parsed = parse_version(line)
                return format_version(parsed[:3]) if parsed else None
        return None

    def version(self) -> str | None:
        return self._version

    def latest_version(self) -> str:
        return self._latest or self.version() or "unknown"

    def outdated(self) -> bool:
        return _older_than(self.version(), self._latest)

    def below_minimum_version(self) -> bool:
        return _older_than(self.version(), self._minimum)

    def update_instructions(self) -> str:
        return (
            "Update them from Software Update in System Settings.\n"
            "If that doesn't show you any updates, run:\n"
            "  sudo rm -rf /Library/Developer/CommandLineTools\n"
            "  sudo xcode-select --install"
        )

    def installation_instructions(self) -> str:
        return "Install the Command Line Tools:\n  xcode-select --install"


class Xcode:
    """The Xcode selected with xcode-select."""

    def __init__(
        self,
        runner: CommandRunner,
        os_version: str,
        clt: CommandLineTools,
        *,
        prerelease: bool = False,
    ) -> None:
        self._runner = runner
        self._clt = clt
        self._prerelease = prerelease
        self._os_version = parse_version(os_version) or ()
        self._latest, self._minimum = _requirements(
            XCODE_REQUIREMENTS, self._os_version
        )

    @cached_property
    def _prefix(self) -> Path | None:
        try:
            result = self._runner.run(["/usr/bin/xcode-select", "-p"])
        except OSError:
            result = None
        if result is not None and result.returncode == 0:
            path = first_line(result.stdout)
            if ".app/Contents/Developer" in path:
                return Path(path)
        if DEFAULT_XCODE_PREFIX.is_dir():
            return DEFAULT_XCODE_PREFIX
        return None

    @cached_property
    def _version(self) -> str | None:
        if self._prefix is None:
            return None
        try:
            result = self._runner.run(["/usr/bin/xcodebuild", "-version"])
        except OSError:
            return None
        line = first_line(result.stdout)
        if result.returncode != 0 or not line.startswith("Xcode"):
            return None
        parsed = parse_version(line)
        return format_version(parsed) if parsed else None

    def installed(self) -> bool:
        return self.version() is not None

    def version(self) -> str | None:
        return self._version

    def latest_version(self) -> str:
        return self._latest or self.version() or "unknown"

    def outdated(self) -> bool:
        return _older_than(self.version(), self._latest)

    def below_minimum_version(self) -> bool:
        return _older_than(self.version(), self._minimum)

    def prefix(self) -> Path | None:
        return self._prefix

    def default_prefix(self) -> bool:
        return self._prefix == DEFAULT_XCODE_PREFIX

    def bundle_path(self) -> Path | None:
        """The .app bundle: <bundle>/Contents/Developer -> <bundle>."""
        if self._prefix is None:
            return None
        return self._prefix.parent.parent

    def needs_clt_installed(self) -> bool:
        """Return True if Xcode is installed without the CLT on a release that needs both.

        From LATEST_SDK_MACOS on, Xcode ships the matching SDK itself.
        """
        if self._os_version[:1] >= (LATEST_SDK_MACOS,):
            return False
        return self.installed() and not self._clt.installed()

    def update_instructions(self) -> str:
        if self._prerelease:
            return "Xcode can be updated from:\n  https://developer.apple.com/download/all/"
        return "Xcode can be updated from the App Store."


class XQuartz:
    """XQuartz, read from its application bundle."""

    def __init__(self, info_plist: Path = XQUARTZ_INFO_PLIST) -> None:
        self._info_plist = info_plist

    @cached_property
    def _version(self) -> str | None:
        try:
            with self._info_plist.open("rb") as f:
                info = plistlib.load(f)
        except (OSError, plistlib.InvalidFileException, ValueError):
            return None
        version = info.get("CFBundleShortVersionString") if isinstance(info, dict) else None
        return version if isinstance(version, str) and version else None

    def installed(self) -> bool:
        return self.version() is not None

    def version(self) -> str | None:
        return self._version

    def latest_version(self) -> str:
        return XQUARTZ_LATEST_VERSION

    def outdated(self) -> bool:
        return version_less_than(self.version(), XQUARTZ_LATEST_VERSION)

    def below_minimum_version(self) -> bool:
        return version_less_than(self.version(), XQUARTZ_MINIMUM_VERSION)

    def update_instructions(self) -> str:
        return "XQuartz can be updated using Homebrew Cask by running:\n  brew reinstall --cask xquartz"
