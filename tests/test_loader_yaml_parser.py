"""Tests for unified_runner.loader.yaml_parser - line-tracking parsing."""

import pytest

from unified_runner.loader.yaml_parser import YAMLParseError, parse_file, parse_with_lines

SOURCE = """\
description: demo
tests:
  - description: first
  - description: second
    operations:
      - name: find
"""


class TestParseWithLines:
    def test_top_level_keys(self):
        data, line_map = parse_with_lines(SOURCE)
        assert data["description"] == "demo"
        assert line_map["description"] == (1, 1)
        assert line_map["tests"] == (2, 1)

    def test_sequence_items_contribute_index(self):
        _, line_map = parse_with_lines(SOURCE)
        assert line_map["tests.0.description"] == (3, 5)
        assert line_map["tests.1.description"] == (4, 5)
        assert line_map["tests.1.operations.0.name"] == (6, 9)

    def test_json_document(self):
        data, line_map = parse_with_lines('{\n  "description": "j",\n  "tests": []\n}')
        assert data == {"description": "j", "tests": []}
        assert line_map["tests"] == (3, 3)

    def test_anchors_and_aliases_resolve(self):
        data, _ = parse_with_lines("a: &x [1, 2]\nb: *x\n")
        assert data["b"] == [1, 2]

    @pytest.mark.parametrize("source", ["", "# comment only\n", "- a\n- b\n", "just text"])
    def test_non_mapping_root(self, source):
        assert parse_with_lines(source) == (None, {})

    def test_syntax_error_has_position(self):
        with pytest.raises(YAMLParseError) as exc_info:
            parse_with_lines("a: [1, 2\nb: 3\n", filename="bad.yml")
        assert exc_info.value.filename == "bad.yml"
        assert exc_info.value.line is not None
        assert exc_info.value.column is not None


class TestParseFile:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "t.yml"
        path.write_text(SOURCE)
        data, line_map = parse_file(path)
        assert len(data["tests"]) == 2
        assert "tests.1.operations" in line_map

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "missing.yml")
