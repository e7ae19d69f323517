"""Tests for the include scanner."""

import logging

import pytest

from depscope.config import AnalysisConfig
from depscope.exceptions import InvalidPathError
from depscope.scanning.scanner import INCLUDE_RE, IncludeScanner


def _write(root, relpath, text=""):
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestIncludeRegex:
    @pytest.mark.parametrize(
        "line,expected",
        [
            ('#include "util.h"', "util.h"),
            ("#include <net/socket.hpp>", "net/socket.hpp"),
            ('  #  include   "spaced.h"', "spaced.h"),
            ("#include<tight.h>", "tight.h"),
        ],
    )
    def test_matches(self, line, expected):
        assert INCLUDE_RE.match(line).group(1) == expected

    @pytest.mark.parametrize(
        "line",
        ['// #include "commented.h"', "#define INCLUDE 1", 'x = "#include \\"a.h\\""'],
    )
    def test_rejects(self, line):
        assert INCLUDE_RE.match(line) is None


class TestScanFile:
    def test_extracts_includes_in_order(self, tmp_path):
        path = _write(
            tmp_path,
            "app.cpp",
            '#include "b.h"\n#include <vector>\n#include "a.hpp"\nint main() {}\n',
        )
        record = IncludeScanner(str(tmp_path)).scan_file(path)
        assert record.name == "app.cpp"
        assert record.included_headers == ["b.h", "a.hpp"]

    def test_extracts_defined_types(self, tmp_path):
        path = _write(
            tmp_path,
            "shapes.h",
            "class Circle {};\nstruct Point { int x; };\nenum class Color { Red };\n",
        )
        record = IncludeScanner(str(tmp_path)).scan_file(path)
        assert record.defined_types == ["Circle", "Point", "Color"]

    def test_nested_name_is_posix_relative(self, tmp_path):
        path = _write(tmp_path, "src/net/socket.cpp")
        record = IncludeScanner(str(tmp_path)).scan_file(path)
        assert record.name == "src/net/socket.cpp"

    def test_custom_header_markers(self, tmp_path):
        path = _write(tmp_path, "a.cpp", '#include "x.h"\n#include "y.inl"\n')
        config = AnalysisConfig(header_markers=[".inl"])
        record = IncludeScanner(str(tmp_path), config).scan_file(path)
        assert record.included_headers == ["y.inl"]

    def test_undecodable_bytes_tolerated(self, tmp_path):
        path = tmp_path / "latin.cpp"
        path.write_bytes(b'// caf\xe9\n#include "a.h"\n')
        record = IncludeScanner(str(tmp_path)).scan_file(path)
        assert record.included_headers == ["a.h"]


class TestScan:
    def test_not_a_directory(self, tmp_path):
        with pytest.raises(InvalidPathError):
            IncludeScanner(str(tmp_path / "missing")).scan()

    def test_empty_directory(self, tmp_path):
        assert IncludeScanner(str(tmp_path)).scan() == []

    def test_filters_by_extension(self, tmp_path):
        _write(tmp_path, "a.cpp")
        _write(tmp_path, "a.h")
        _write(tmp_path, "README.md")
        _write(tmp_path, "build.py")
        names = [r.name for r in IncludeScanner(str(tmp_path)).scan()]
        assert names == ["a.cpp", "a.h"]

    def test_extension_match_is_case_insensitive(self, tmp_path):
        _write(tmp_path, "LEGACY.CPP")
        names = [r.name for r in IncludeScanner(str(tmp_path)).scan()]
        assert names == ["LEGACY.CPP"]

    def test_excludes_test_and_mock_files(self, tmp_path):
        _write(tmp_path, "parser.cpp")
        _write(tmp_path, "parser_test.cpp")
        _write(tmp_path, "MockSocket.h")
        names = [r.name for r in IncludeScanner(str(tmp_path)).scan()]
        assert names == ["parser.cpp"]

    def test_empty_exclude_pattern_keeps_everything(self, tmp_path):
        _write(tmp_path, "parser_test.cpp")
        config = AnalysisConfig(exclude_name_pattern="")
        assert len(IncludeScanner(str(tmp_path), config).scan()) == 1

    def test_hidden_files_and_directories_skipped(self, tmp_path):
        _write(tmp_path, "a.cpp")
        _write(tmp_path, ".hidden.cpp")
        _write(tmp_path, ".git/objects/b.cpp")
        names = [r.name for r in IncludeScanner(str(tmp_path)).scan()]
        assert names == ["a.cpp"]

    def test_hidden_files_allowed(self, tmp_path):
        _write(tmp_path, "a.cpp")
        _write(tmp_path, ".cache/b.cpp")
        config = AnalysisConfig(allow_hidden_files=True)
        names = [r.name for r in IncludeScanner(str(tmp_path), config).scan()]
        assert names == [".cache/b.cpp", "a.cpp"]

    def test_sorted_by_name(self, tmp_path):
        _write(tmp_path, "z.cpp")
        _write(tmp_path, "lib/m.h")
        _write(tmp_path, "a.h")
        names = [r.name for r in IncludeScanner(str(tmp_path)).scan()]
        assert names == sorted(names)

    def test_max_files(self, tmp_path, caplog):
        for i in range(5):
            _write(tmp_path, f"f{i}.cpp")
        config = AnalysisConfig(max_files=3)
        with caplog.at_level(logging.WARNING, logger="depscope"):
            records = IncludeScanner(str(tmp_path), config).scan()
        assert len(records) == 3
        assert any("max_files" in r.getMessage() for r in caplog.records)
