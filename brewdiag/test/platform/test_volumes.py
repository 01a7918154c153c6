"""Tests for brewdiag.platform.volumes module."""

from __future__ import annotations

from pathlib import Path

from brewdiag.platform.volumes import DfVolumes, parse_df_mounts
from brewdiag.test.fakes import MockCommandRunner

DF_OUTPUT = """\
Filesystem     512-blocks      Used Available Capacity  Mounted on
/dev/disk3s1s1  965595304  20017528 454064056     5%    /
devfs                 409       409         0   100%    /dev
/dev/disk3s5    965595304 467468576 454064056    51%    /System/Volumes/Data
/dev/disk5s1    976101344  12345678 963755666     2%    /Volumes/Case Sensitive
map auto_home           0         0         0   100%    /System/Volumes/Data/home
"""


class TestParseDfMounts:
    def test_longest_first(self) -> None:
        mounts = parse_df_mounts(DF_OUTPUT)

        assert mounts[0] == "/System/Volumes/Data/home"
        assert mounts[-1] == "/"

    def test_mount_point_with_spaces(self) -> None:
        assert "/Volumes/Case Sensitive" in parse_df_mounts(DF_OUTPUT)

    def test_header_only(self) -> None:
        assert parse_df_mounts("Filesystem 512-blocks Used Available Capacity Mounted on\n") == []


class TestDfVolumes:
    def _volumes(self) -> DfVolumes:
        return DfVolumes(MockCommandRunner({("/bin/df", "-P"): (0, DF_OUTPUT, "")}))

    def test_nested_mount_wins(self) -> None:
        volumes = self._volumes()
        assert volumes.volume_of(Path("/System/Volumes/Data/opt/homebrew")) == "/System/Volumes/Data"

    def test_root(self) -> None:
        assert self._volumes().volume_of(Path("/private/tmp")) == "/"

    def test_prefix_is_not_a_parent(self) -> None:
        assert self._volumes().volume_of(Path("/Volumes/Case Sensitive2/x")) == "/"

    def test_df_runs_once(self) -> None:
        runner = MockCommandRunner({("/bin/df", "-P"): (0, DF_OUTPUT, "")})
        volumes = DfVolumes(runner)

        volumes.volume_of(Path("/a"))
        volumes.volume_of(Path("/b"))

        assert runner.calls == [["/bin/df", "-P"]]

    def test_df_missing(self) -> None:
        assert DfVolumes(MockCommandRunner()).volume_of(Path("/private/tmp")) is None

    def test_df_failure(self) -> None:
        runner = MockCommandRunner({("/bin/df", "-P"): (1, "", "df: error\n")})
        assert DfVolumes(runner).volume_of(Path("/private/tmp")) is None
