# SPDX-License-Identifier: MIT
"""Checks for third-party library files that break builds.

gettext and libiconv copies installed at a system prefix by something other
than the package manager get picked up by compilers and linkers. Each check
has its own rule for when the package manager's own package explains the
files.
"""

from __future__ import annotations

from dataclasses import dataclass

from brewdiag.core.result import is_ok

from .accumulator import FileListAccumulator
from .base import Check, Diagnostic
from .environment import DoctorEnvironment, Package

GETTEXT_FILES = (
    "lib/libgettextlib.dylib",
    "lib/libintl.dylib",
    "include/libintl.h",
)

ICONV_FILES = (
    "lib/libiconv.dylib",
    "include/iconv.h",
)

GETTEXT_PREAMBLE = (
    "gettext files detected at a system prefix.\n"
    "These files can cause compilation and link failures, especially if they\n"
    "are compiled with improper architectures. Consider removing these files:\n"
)

ICONV_PREAMBLE = (
    "libiconv files detected at a system prefix other than /usr.\n"
    "The package manager doesn't provide a libiconv package, and expects to link against\n"
    "the system version in /usr. libiconv in other prefixes can cause\n"
    "compile or link failure, especially if compiled with improper\n"
    "architectures. macOS itself never installs anything to /usr/local so\n"
    "it was either installed by a user or some other third party software.\n"
    "\n"
    "tl;dr: delete these files:\n"
)

ICONV_LINKED_MESSAGE = (
    "A libiconv package is installed and linked.\n"
    "This will break stuff. For serious. Unlink it.\n"
)

FINDUTILS_MESSAGE = "Putting non-prefixed findutils in your path can cause python builds to fail.\n"


@dataclass(frozen=True, slots=True)
class LibrariesChecker:
    """Checks for conflicting library installations.

    Attributes:
        env: Injected environment facts and providers
    """

    env: DoctorEnvironment

    def checks(self) -> list[Check]:
        return [
            Check("check_for_gettext", self.check_for_gettext),
            Check("check_for_iconv", self.check_for_iconv),
            Check("check_for_non_prefixed_findutils", self.check_for_non_prefixed_findutils),
        ]

    def check_for_gettext(self) -> Diagnostic | None:
        found = self._find(*GETTEXT_FILES)
        if not found:
            return None

        gettext = self._package("gettext")
        if gettext is not None and gettext.linked_and_present():
            if found.all_under(gettext.managed_install_root()):
                return None

        return found.render(GETTEXT_PREAMBLE)

    def check_for_iconv(self) -> Diagnostic | None:
        found = self._find(*ICONV_FILES)
        if not found:
            return None

        libiconv = self._package("libiconv")
        if libiconv is not None and libiconv.linked_and_present() and not libiconv.keg_only():
            return Diagnostic(ICONV_LINKED_MESSAGE)

        return found.render(ICONV_PREAMBLE)

    def check_for_non_prefixed_findutils(self) -> Diagnostic | None:
        findutils = self._package("findutils")
        if findutils is None or not findutils.any_version_installed():
            return None

        gnubin = {directory / "gnubin" for directory in findutils.libexec_dirs()}
        on_path = any(entry in gnubin for entry in self.env.search_path)
        if not findutils.built_with("default-names") and not on_path:
            return None

        return Diagnostic(FINDUTILS_MESSAGE)

    def _find(self, *relative_paths: str) -> FileListAccumulator:
        accumulator = FileListAccumulator(self.env.library_search_prefixes())
        accumulator.find(*relative_paths)
        return accumulator

    def _package(self, name: str) -> Package | None:
        result = self.env.packages.lookup(name)
        return result.value if is_ok(result) else None
