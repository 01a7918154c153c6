# SPDX-License-Identifier: MIT
"""Tests for Diagnostic, Check and Tier."""

import pytest

from brewdiag.services.checkers.base import Check, Diagnostic, Severity, Tier


class TestTier:
    def test_only_fatal_tier_is_fatal(self) -> None:
        assert Tier.FATAL_BUILD_FROM_SOURCE.severity is Severity.FATAL
        assert Tier.SUPPORTED_CONFIGURATION.severity is Severity.WARNING
        assert Tier.BUILD_FROM_SOURCE.severity is Severity.WARNING

    def test_only_fatal_tier_short_circuits(self) -> None:
        assert Tier.FATAL_BUILD_FROM_SOURCE.short_circuit is True
        assert Tier.SUPPORTED_CONFIGURATION.short_circuit is False
        assert Tier.BUILD_FROM_SOURCE.short_circuit is False


class TestDiagnostic:
    def test_defaults(self) -> None:
        diagnostic = Diagnostic("Something is wrong.\n")
        assert diagnostic.severity is Severity.WARNING
        assert diagnostic.check == ""
        assert diagnostic.paths == ()
        assert diagnostic.is_fatal is False

    def test_empty_message_rejected(self) -> None:
        with pytest.raises(ValueError):
            Diagnostic("  \n")

    def test_stamped_returns_attributed_copy(self) -> None:
        original = Diagnostic("Broken.\n", paths=("/usr/local/lib/libintl.dylib",))
        stamped = original.stamped("check_for_gettext", Severity.FATAL)

        assert stamped.check == "check_for_gettext"
        assert stamped.is_fatal
        assert stamped.paths == original.paths
        assert original.check == ""
        assert original.severity is Severity.WARNING

    def test_frozen(self) -> None:
        diagnostic = Diagnostic("Broken.\n")
        with pytest.raises(AttributeError):
            diagnostic.message = "other"  # type: ignore[misc]


class TestCheck:
    def test_run_calls_function(self) -> None:
        calls: list[str] = []

        def run_check() -> Diagnostic | None:
            calls.append("ran")
            return None

        check = Check("check_example", run_check)
        assert check.run() is None
        assert calls == ["ran"]
