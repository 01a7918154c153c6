"""Toolchain version requirements per macOS release.

Keys are macOS major versions ("15", "14", ...; "10.15" for the 10.x line).
Update this table when a new macOS or Xcode ships.
"""

from __future__ import annotations

# macOS key -> (latest Xcode, minimum Xcode)
XCODE_REQUIREMENTS: dict[str, tuple[str, str]] = {
    "26": ("26.0", "26.0"),
    "15": ("16.4", "16.0"),
    "14": ("16.2", "15.0"),
    "13": ("15.2", "14.1"),
    "12": ("14.2", "13.1"),
    "11": ("13.2.1", "12.2"),
    "10.15": ("12.4", "11.0"),
}

# macOS key -> (latest CLT, minimum CLT)
CLT_REQUIREMENTS: dict[str, tuple[str, str]] = {
    "26": ("26.0", "26.0"),
    "15": ("16.4", "16.0"),
    "14": ("16.2", "15.0"),
    "13": ("15.1", "14.0"),
    "12": ("14.2", "13.0"),
    "11": ("13.2", "12.5"),
    "10.15": ("12.4", "11.0"),
}

MACOS_NAMES: dict[str, str] = {
    "26": "Tahoe",
    "15": "Sequoia",
    "14": "Sonoma",
    "13": "Ventura",
    "12": "Monterey",
    "11": "Big Sur",
    "10.15": "Catalina",
}

# Newest release the maintainers support; anything newer is a pre-release.
NEWEST_SUPPORTED_MACOS = 26
# Oldest release still supported; anything older is outdated.
OLDEST_SUPPORTED_MACOS = 13

# Newest macOS SDK shipped with the latest Xcode. On that release or newer,
# Xcode carries its own SDK and the CLT are optional.
LATEST_SDK_MACOS = 26

# Interpreter the package manager is developed and tested on (major.minor).
REQUIRED_RUBY_VERSION = "3.4"

XQUARTZ_LATEST_VERSION = "2.8.5"
XQUARTZ_MINIMUM_VERSION = "2.7.11"


def macos_key(version: tuple[int, ...]) -> str:
    """Table key for a parsed macOS version: (15, 3) -> "15", (10, 15, 7) -> "10.15"."""
    if not version:
        return ""
    if version[0] == 10 and len(version) > 1:
        return f"10.{version[1]}"
    return str(version[0])
