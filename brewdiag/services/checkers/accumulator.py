# SPDX-License-Identifier: MIT
"""File-list accumulation for checks that report leftover files.

A check creates one `FileListAccumulator` per invocation, feeds it the
relative paths it is looking for, and renders a Diagnostic from whatever was
found. Nothing is shared between checks or runs.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .base import Diagnostic

__all__ = ["FileListAccumulator", "inject_file_list", "default_library_prefixes"]

FALLBACK_LIBRARY_PREFIX = "/usr/local"


def default_library_prefixes(prefix: Path) -> tuple[str, ...]:
    """The package manager prefix and /usr/local, without duplicates."""
    return tuple(dict.fromkeys([str(prefix), FALLBACK_LIBRARY_PREFIX]))


def inject_file_list(paths: Iterable[str], preamble: str) -> str:
    """Append one indented line per path to `preamble`."""
    text = preamble if preamble.endswith("\n") else preamble + "\n"
    return text + "".join(f"  {path}\n" for path in paths)


class FileListAccumulator:
    """Collects existing files found under a fixed list of prefixes.

    Search order is prefix-major. A path whose canonical (symlink-resolved)
    form was already collected is skipped, so a prefix symlinked into another
    does not list the same file twice.
    """

    def __init__(self, prefixes: Iterable[str | Path]) -> None:
        self._prefixes = tuple(dict.fromkeys(str(p) for p in prefixes))
        self._found: list[str] = []
        self._canonical: set[str] = set()

    @property
    def prefixes(self) -> tuple[str, ...]:
        return self._prefixes

    @property
    def found(self) -> list[str]:
        return list(self._found)

    def find(self, *relative_paths: str) -> None:
        for prefix in self._prefixes:
            for relative in relative_paths:
                candidate = os.path.join(prefix, relative)
                if not os.path.exists(candidate):
                    continue
                canonical = os.path.realpath(candidate)
                if canonical in self._canonical:
                    continue
                self._canonical.add(canonical)
                self._found.append(candidate)

    def all_under(self, root: Path) -> bool:
        """Return True if every found path resolves inside `root`.

        `root` is resolved too, so a symlinked cellar still matches.
        """
        resolved_root = Path(os.path.realpath(root))
        return all(Path(os.path.realpath(p)).is_relative_to(resolved_root) for p in self._found)

    def render(self, preamble: str) -> Diagnostic:
        return Diagnostic(
            message=inject_file_list(self._found, preamble),
            paths=tuple(self._found),
        )

    def __bool__(self) -> bool:
        return bool(self._found)

    def __len__(self) -> int:
        return len(self._found)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._found))
