# SPDX-License-Identifier: MIT
"""Developer toolchain checks.

Covers Xcode, the Command Line Tools (CLT), XQuartz and the OS release
itself: license acceptance, minimum/latest versions, install prefixes.
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import Check, Diagnostic
from brewdiag.core.versions import REQUIRED_RUBY_VERSION

from .common import combined_output, first_line, format_version, parse_version
from .environment import DoctorEnvironment

XCRUN = "/usr/bin/xcrun"
XCODE_SELECT = "/usr/bin/xcode-select"


def _text(*lines: str) -> str:
    return "\n".join(lines) + "\n"


def please_create_pull_requests(what: str = "unsupported configuration") -> str:
    return _text(
        f"Some packages are expected to fail to build on this {what}.",
        "Please do not open issues about it; the maintainers cannot reproduce them.",
        "Try to figure out the problem yourself and submit a fix as a pull request.",
    )


@dataclass(frozen=True, slots=True)
class ToolchainChecker:
    """Checks for Xcode, CLT, XQuartz and OS support.

    Attributes:
        env: Injected environment facts and providers
    """

    env: DoctorEnvironment

    def checks(self) -> list[Check]:
        return [
            Check("check_xcode_license_approved", self.check_xcode_license_approved),
            Check("check_xcode_minimum_version", self.check_xcode_minimum_version),
            Check("check_clt_minimum_version", self.check_clt_minimum_version),
            Check("check_if_xcode_needs_clt_installed", self.check_if_xcode_needs_clt_installed),
            Check("check_for_unsupported_macos", self.check_for_unsupported_macos),
            Check("check_for_installed_developer_tools", self.check_for_installed_developer_tools),
            Check("check_xcode_up_to_date", self.check_xcode_up_to_date),
            Check("check_clt_up_to_date", self.check_clt_up_to_date),
            Check("check_xquartz_up_to_date", self.check_xquartz_up_to_date),
            Check("check_xcode_prefix", self.check_xcode_prefix),
            Check("check_xcode_prefix_exists", self.check_xcode_prefix_exists),
            Check("check_xcode_select_path", self.check_xcode_select_path),
            Check("check_ruby_version", self.check_ruby_version),
        ]

    # -------------------------------------------------------------------------
    # Fatal when building from source
    # -------------------------------------------------------------------------

    def check_xcode_license_approved(self) -> Diagnostic | None:
        """Report an unaccepted Xcode license.

        With Xcode installed and no license agreed, every xc* tool fails and
        mentions the license. Both the text and the failing status are needed.
        """
        try:
            result = self.env.runner.run([XCRUN, "clang"])
        except OSError:
            return None

        if "license" not in combined_output(result) or result.returncode == 0:
            return None

        return Diagnostic(
            _text(
                "You have not agreed to the Xcode license.",
                "Agree to the license by opening Xcode.app or running:",
                "  sudo xcodebuild -license",
            )
        )

    def check_xcode_minimum_version(self) -> Diagnostic | None:
        xcode = self.env.xcode
        if not xcode.below_minimum_version():
            return None

        version = xcode.version() or "unknown"
        prefix = xcode.prefix()
        if prefix is not None and not xcode.default_prefix():
            version += f" => {prefix}"

        return Diagnostic(
            _text(
                f"Your Xcode ({version}) is too outdated.",
                f"Please update to Xcode {xcode.latest_version()} (or delete it).",
                xcode.update_instructions(),
            )
        )

    def check_clt_minimum_version(self) -> Diagnostic | None:
        if not self.env.clt.below_minimum_version():
            return None

        return Diagnostic(
            _text(
                "Your Command Line Tools are too outdated.",
                self.env.clt.update_instructions(),
            )
        )

    def check_if_xcode_needs_clt_installed(self) -> Diagnostic | None:
        if not self.env.xcode.needs_clt_installed():
            return None

        return Diagnostic(
            _text(
                f"Xcode alone is not sufficient on {self.env.os.pretty_name}.",
                self.env.clt.installation_instructions(),
            )
        )

    # -------------------------------------------------------------------------
    # Supported configuration
    # -------------------------------------------------------------------------

    def check_for_unsupported_macos(self) -> Diagnostic | None:
        if self.env.developer:
            return None

        if self.env.os.prerelease:
            who, what = "We", "pre-release version"
        elif self.env.os.outdated_release:
            who, what = "We (and Apple)", "old version"
        else:
            return None

        return Diagnostic(
            _text(
                f"You are using macOS {self.env.os.version}.",
                f"{who} do not provide support for this {what}.",
            )
            + please_create_pull_requests(what)
        )

    # -------------------------------------------------------------------------
    # Build from source
    # -------------------------------------------------------------------------

    def check_for_installed_developer_tools(self) -> Diagnostic | None:
        if self.env.xcode.installed() or self.env.clt.installed():
            return None

        return Diagnostic(
            _text(
                "No developer tools installed.",
                self.env.clt.installation_instructions(),
            )
        )

    def check_xcode_up_to_date(self) -> Diagnostic | None:
        xcode = self.env.xcode
        if not xcode.outdated():
            return None

        # CI images lag behind the latest Xcode and are not ours to update.
        if self.env.ci:
            return None

        latest = xcode.latest_version()
        message = _text(
            f"Your Xcode ({xcode.version()}) is outdated.",
            f"Please update to Xcode {latest} (or delete it).",
            xcode.update_instructions(),
        )

        if self.env.os.prerelease:
            message += _text(
                f"If {latest} is installed, you may need to:",
                "  sudo xcode-select --switch /Applications/Xcode.app",
                "Current developer directory is:",
                f"  {self._current_developer_dir()}",
            )
        return Diagnostic(message)

    def check_clt_up_to_date(self) -> Diagnostic | None:
        if not self.env.clt.outdated():
            return None

        # Same reasoning as for Xcode: CI images are allowed to lag.
        if self.env.ci:
            return None

        return Diagnostic(
            _text(
                "A newer Command Line Tools release is available.",
                self.env.clt.update_instructions(),
            )
        )

    # -------------------------------------------------------------------------
    # General
    # -------------------------------------------------------------------------

    def check_xquartz_up_to_date(self) -> Diagnostic | None:
        xquartz = self.env.xquartz
        if not xquartz.outdated():
            return None

        return Diagnostic(
            _text(
                f"Your XQuartz ({xquartz.version()}) is outdated.",
                f"Please install XQuartz {xquartz.latest_version()} "
                "(or delete the current version).",
                xquartz.update_instructions(),
            )
        )

    def check_xcode_prefix(self) -> Diagnostic | None:
        prefix = self.env.xcode.prefix()
        if prefix is None or " " not in str(prefix):
            return None

        return Diagnostic(
            _text(
                "Xcode is installed to a directory with a space in the name.",
                "This will cause some packages to fail to build.",
            )
        )

    def check_xcode_prefix_exists(self) -> Diagnostic | None:
        prefix = self.env.xcode.prefix()
        if prefix is None or prefix.exists():
            return None

        return Diagnostic(
            _text(
                "The directory Xcode is reportedly installed to doesn't exist:",
                f"  {prefix}",
                "You may need to `xcode-select` the proper path if you have moved Xcode.",
            )
        )

    def check_xcode_select_path(self) -> Diagnostic | None:
        if self.env.clt.installed():
            return None
        if not self.env.xcode.installed():
            return None
        if (self.env.os.active_developer_dir / "usr" / "bin" / "xcodebuild").is_file():
            return None

        path = self.env.xcode.bundle_path()
        target = str(path) if path is not None and path.is_dir() else "/Developer"
        return Diagnostic(
            _text(
                "Your Xcode is configured with an invalid path.",
                "You should change it to the correct path:",
                f"  sudo xcode-select -switch {target}",
            )
        )

    def check_ruby_version(self) -> Diagnostic | None:
        """Report an interpreter whose major.minor differs from the supported one."""
        if self.env.developer and self.env.os.prerelease:
            return None

        current = self._ruby_version()
        if current is None:
            return None
        wanted = parse_version(REQUIRED_RUBY_VERSION) or ()
        if current[: len(wanted)] == wanted:
            return None

        return Diagnostic(
            _text(
                f"Ruby version {format_version(current)} is unsupported on "
                f"{self.env.os.pretty_name} {self.env.os.version}.",
                f"The package manager is developed and tested on Ruby {REQUIRED_RUBY_VERSION}, "
                "and may not work correctly",
                "on other Rubies. Patches are accepted as long as they don't cause breakage",
                "on supported Rubies.",
            )
        )

    def _ruby_version(self) -> tuple[int, ...] | None:
        if self.env.ruby is None:
            return None
        try:
            result = self.env.runner.run([str(self.env.ruby), "-e", "print RUBY_VERSION"])
        except OSError:
            return None
        if result.returncode != 0:
            return None
        return parse_version(result.stdout)

    def _current_developer_dir(self) -> str:
        try:
            result = self.env.runner.run([XCODE_SELECT, "-p"])
        except OSError:
            return "unknown"
        return first_line(result.stdout) or "unknown"
