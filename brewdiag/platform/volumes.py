"""Mount-point lookup from `df -P` output."""

from __future__ import annotations

import re
from functools import cached_property
from pathlib import Path

from brewdiag.services.checkers.common import CommandRunner

__all__ = ["DfVolumes", "parse_df_mounts"]

DF = "/bin/df"

_MOUNT_RE = re.compile(r"\s\d+%\s+(/.*?)\s*$")


def parse_df_mounts(output: str) -> list[str]:
    """Extract mount points from POSIX `df -P` output, longest first.

    Columns are: Filesystem, blocks, Used, Available, Capacity, Mounted on.
    Both the filesystem ("map auto_home") and the mount point may contain
    spaces, so the mount point is whatever follows the Capacity column.
    """
    mounts: list[str] = []
    for line in output.splitlines()[1:]:
        match = _MOUNT_RE.search(line)
        if match:
            mounts.append(match.group(1))
    return sorted(set(mounts), key=len, reverse=True)


class DfVolumes:
    """Resolves paths to the mount point of their volume."""

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    @cached_property
    def mounts(self) -> list[str]:
        try:
            result = self._runner.run([DF, "-P"])
        except OSError:
            return []
        if result.returncode != 0:
            return []
        return parse_df_mounts(result.stdout)

    def volume_of(self, path: Path) -> str | None:
        text = str(path)
        for mount in self.mounts:
            if mount == "/" or text == mount or text.startswith(mount.rstrip("/") + "/"):
                return mount
        return None
