# SPDX-License-Identifier: MIT
"""Filesystem checks: case sensitivity, volume layout, interfering software."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .base import Check, Diagnostic
from .environment import DoctorEnvironment

BITDEFENDER_PATHS: tuple[Path, ...] = (
    Path("/Library/Bitdefender/AVP/EndpointSecurityforMac.app"),
    Path("/Library/Bitdefender/AVP/BDLDaemon"),
)

BITDEFENDER_ISSUE_URL = "https://github.com/Homebrew/brew/issues/5558"


def _path_exists(path: Path) -> bool:
    return os.path.exists(path)


@dataclass(frozen=True, slots=True)
class FilesystemChecker:
    """Checks on the filesystems backing the install directories.

    Attributes:
        env: Injected environment facts and providers
        exists: Existence test used for case-sensitivity detection
    """

    env: DoctorEnvironment
    exists: Callable[[Path], bool] = field(default=_path_exists)

    def checks(self) -> list[Check]:
        return [
            Check("check_filesystem_case_sensitive", self.check_filesystem_case_sensitive),
            Check("check_for_multiple_volumes", self.check_for_multiple_volumes),
            Check("check_for_bitdefender", self.check_for_bitdefender),
        ]

    def check_filesystem_case_sensitive(self) -> Diagnostic | None:
        case_sensitive_dirs = [
            directory
            for directory in self.env.paths.well_known_dirs()
            if self._is_case_sensitive(directory)
        ]
        if not case_sensitive_dirs:
            return None

        volumes: list[str] = []
        for directory in case_sensitive_dirs:
            volume = self.env.volumes.volume_of(directory) or str(directory)
            if volume not in volumes:
                volumes.append(volume)

        return Diagnostic(
            f"The filesystem on {','.join(volumes)} appears to be case-sensitive.\n"
            "The default macOS filesystem is case-insensitive. "
            "Please report any apparent problems.\n"
        )

    def _is_case_sensitive(self, directory: Path) -> bool:
        """Return True if the upcased or the downcased spelling is missing.

        On a case-insensitive filesystem both spellings resolve. A directory
        that really exists in both spellings (/TMP and /tmp) reads as
        case-insensitive; several directories are checked, so one false
        negative is acceptable and nothing has to be written to disk.
        """
        if not self.exists(directory):
            return False
        upcased = Path(str(directory).upper())
        downcased = Path(str(directory).lower())
        return not (self.exists(upcased) and self.exists(downcased))

    def check_for_multiple_volumes(self) -> Diagnostic | None:
        cellar = self.env.paths.cellar
        if not cellar.exists():
            return None

        volumes = self.env.volumes
        try:
            where_cellar = volumes.volume_of(cellar.resolve())
            with tempfile.TemporaryDirectory(prefix="doctor", dir=self.env.paths.temp) as tmp:
                where_tmp = volumes.volume_of(Path(tmp).resolve().parent)
        except OSError:
            return None

        if where_cellar is None or where_tmp is None or where_cellar == where_tmp:
            return None

        return Diagnostic(
            "Your Cellar and TEMP directories are on different volumes.\n"
            "macOS won't move relative symlinks across volumes unless the target file already\n"
            "exists. Packages known to be affected by this are Git and Narwhal.\n"
            "\n"
            'You should set the "HOMEBREW_TEMP" environment variable to a suitable\n'
            "directory on the same volume as your Cellar.\n"
        )

    def check_for_bitdefender(self) -> Diagnostic | None:
        if not any(path.exists() for path in BITDEFENDER_PATHS):
            return None

        return Diagnostic(
            'You have installed Bitdefender. The "Traffic Scan" option interferes with\n'
            "the package manager's ability to download packages. See:\n"
            f"  {BITDEFENDER_ISSUE_URL}\n"
        )
