# SPDX-License-Identifier: MIT
"""Tests for common checker utilities."""

import subprocess

import pytest

from brewdiag.services.checkers.common import (
    combined_output,
    first_line,
    format_version,
    parse_version,
    version_less_than,
)


class TestFirstLine:
    def test_multiple_lines(self) -> None:
        assert first_line("first\nsecond\nthird") == "first"

    def test_whitespace_only(self) -> None:
        assert first_line("   \n   \n   ") == ""

    def test_blank_lines_before_content(self) -> None:
        assert first_line("\n\n  content  \n") == "content"


class TestParseVersion:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Xcode 16.2", (16, 2)),
            ("Xcode 13.2.1\nBuild version 13C100", (13, 2, 1)),
            ("version: 16.0.0.0.1.1724870825", (16, 0, 0, 0, 1, 1724870825)),
            ("15", (15,)),
        ],
    )
    def test_parses(self, text: str, expected: tuple[int, ...]) -> None:
        assert parse_version(text) == expected

    def test_no_version(self) -> None:
        assert parse_version("no digits here") is None

    def test_format(self) -> None:
        assert format_version((16, 0, 1)) == "16.0.1"


class TestVersionLessThan:
    def test_older(self) -> None:
        assert version_less_than("16.0", "16.2")

    def test_equal_with_different_lengths(self) -> None:
        assert not version_less_than("16.2.0", "16.2")
        assert not version_less_than("16", "16.0.0")

    def test_newer(self) -> None:
        assert not version_less_than("26.0", "16.4")

    def test_unknown_is_never_older(self) -> None:
        assert not version_less_than(None, "16.2")
        assert not version_less_than("beta", "16.2")


def test_combined_output() -> None:
    result = subprocess.CompletedProcess(["xcrun"], 1, "out\n", "err\n")
    assert combined_output(result) == "out\nerr\n"
