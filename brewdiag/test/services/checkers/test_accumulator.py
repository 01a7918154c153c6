# SPDX-License-Identifier: MIT
"""Tests for FileListAccumulator and inject_file_list."""

from __future__ import annotations

from pathlib import Path

from brewdiag.services.checkers.accumulator import (
    FileListAccumulator,
    default_library_prefixes,
    inject_file_list,
)


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


class TestInjectFileList:
    def test_one_indented_line_per_path(self) -> None:
        text = inject_file_list(["/a/lib/x.dylib", "/b/include/x.h"], "Remove these:\n")
        assert text == "Remove these:\n  /a/lib/x.dylib\n  /b/include/x.h\n"

    def test_preamble_without_trailing_newline(self) -> None:
        assert inject_file_list(["/x"], "Remove:") == "Remove:\n  /x\n"

    def test_empty_list_keeps_preamble(self) -> None:
        assert inject_file_list([], "Remove:\n") == "Remove:\n"


class TestDefaultLibraryPrefixes:
    def test_prefix_then_usr_local(self) -> None:
        assert default_library_prefixes(Path("/opt/homebrew")) == ("/opt/homebrew", "/usr/local")

    def test_deduplicated(self) -> None:
        assert default_library_prefixes(Path("/usr/local")) == ("/usr/local",)


class TestFileListAccumulator:
    def test_nothing_found(self, tmp_path: Path) -> None:
        acc = FileListAccumulator([tmp_path / "a", tmp_path / "b"])
        acc.find("lib/libintl.dylib")
        assert not acc
        assert len(acc) == 0
        assert acc.found == []

    def test_prefix_major_order(self, tmp_path: Path) -> None:
        a, b = tmp_path / "a", tmp_path / "b"
        _touch(a / "include/libintl.h")
        _touch(a / "lib/libintl.dylib")
        _touch(b / "lib/libintl.dylib")

        acc = FileListAccumulator([a, b])
        acc.find("lib/libintl.dylib", "include/libintl.h")

        assert acc.found == [
            str(a / "lib/libintl.dylib"),
            str(a / "include/libintl.h"),
            str(b / "lib/libintl.dylib"),
        ]

    def test_deduplicates_by_canonical_path(self, tmp_path: Path) -> None:
        real = tmp_path / "real"
        _touch(real / "lib/libiconv.dylib")
        alias = tmp_path / "alias"
        alias.symlink_to(real)

        acc = FileListAccumulator([real, alias])
        acc.find("lib/libiconv.dylib")

        assert acc.found == [str(real / "lib/libiconv.dylib")]

    def test_duplicate_prefixes_searched_once(self, tmp_path: Path) -> None:
        acc = FileListAccumulator([tmp_path, tmp_path])
        assert acc.prefixes == (str(tmp_path),)

    def test_all_under(self, tmp_path: Path) -> None:
        keg = tmp_path / "Cellar" / "gettext" / "0.22"
        _touch(keg / "lib/libintl.dylib")
        prefix = tmp_path / "prefix"
        (prefix / "lib").mkdir(parents=True)
        (prefix / "lib/libintl.dylib").symlink_to(keg / "lib/libintl.dylib")

        acc = FileListAccumulator([prefix])
        acc.find("lib/libintl.dylib")

        assert acc.all_under(tmp_path / "Cellar" / "gettext")
        assert not acc.all_under(tmp_path / "Cellar" / "libiconv")

    def test_render(self, tmp_path: Path) -> None:
        _touch(tmp_path / "include/iconv.h")
        acc = FileListAccumulator([tmp_path])
        acc.find("include/iconv.h")

        diagnostic = acc.render("Delete these files:\n")

        assert diagnostic.message == f"Delete these files:\n  {tmp_path / 'include/iconv.h'}\n"
        assert diagnostic.paths == (str(tmp_path / "include/iconv.h"),)

    def test_fresh_instances_share_nothing(self, tmp_path: Path) -> None:
        _touch(tmp_path / "lib/libintl.dylib")
        first = FileListAccumulator([tmp_path])
        first.find("lib/libintl.dylib")
        second = FileListAccumulator([tmp_path])

        assert len(first) == 1
        assert len(second) == 0
