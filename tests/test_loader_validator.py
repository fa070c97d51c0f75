"""Tests for the test file validation pipeline."""

import json
import tempfile
from pathlib import Path

import pytest

from unified_runner.loader.validator import (
    TestFileError,
    load_test_file,
    validate_test_file_path,
    validate_test_file_string,
)

VALID_YAML = """\
description: insertOne
schemaVersion: "1.0"
createEntities:
  - client:
      id: &client0 client0
  - thread:
      id: thread0
tests:
  - description: insert a document
    operations:
      - name: insertOne
        object: collection0
        arguments:
          document: {_id: 1}
"""


class TestValidateTestFileString:
    """Tests for validate_test_file_string."""

    def test_valid_yaml_returns_test_file_and_no_errors(self):
        test_file, errors = validate_test_file_string(VALID_YAML)
        assert errors == []
        assert test_file is not None
        assert test_file.entity_ids() == ["client0", "thread0"]

    def test_valid_json_is_accepted(self, test_file_data):
        test_file, errors = validate_test_file_string(json.dumps(test_file_data, indent=2))
        assert errors == []
        assert test_file.tests[0].description == "find with filter"

    def test_unknown_top_level_field_with_suggestion(self):
        source = VALID_YAML.replace("schemaVersion", "schemVersion")
        test_file, errors = validate_test_file_string(source)
        assert test_file is None
        unknown = [e for e in errors if e.field == "schemVersion"]
        assert len(unknown) == 1
        assert unknown[0].type == "extra_forbidden"
        assert unknown[0].suggestion == "Did you mean 'schemaVersion'?"
        assert unknown[0].line == 2

    def test_missing_schema_version_reported(self):
        source = VALID_YAML.replace('schemaVersion: "1.0"\n', "")
        test_file, errors = validate_test_file_string(source)
        assert test_file is None
        assert any(e.field == "schemaVersion" and e.type == "missing" for e in errors)

    def test_nested_error_has_line_number(self):
        source = VALID_YAML.replace("object: collection0", "objekt: collection0")
        test_file, errors = validate_test_file_string(source)
        assert test_file is None
        nested = [e for e in errors if e.field == "tests.0.operations.0.objekt"]
        assert len(nested) == 1
        assert nested[0].line == 12
        assert nested[0].suggestion == "Did you mean 'object'?"

    def test_operation_arguments_are_free_form(self):
        source = VALID_YAML.replace("document: {_id: 1}", "document: {_id: 1}\n          objekt: 1")
        test_file, errors = validate_test_file_string(source)
        assert errors == []
        assert test_file.tests[0].operations[0].arguments["objekt"] == 1

    def test_invalid_schema_version_is_value_error(self):
        source = VALID_YAML.replace('"1.0"', '"1.0.0.0"')
        test_file, errors = validate_test_file_string(source)
        assert test_file is None
        assert errors[0].field == "schemaVersion"
        assert errors[0].type == "value_error"

    def test_yaml_syntax_error(self):
        test_file, errors = validate_test_file_string("description: [unclosed\n")
        assert test_file is None
        assert errors[0].type == "yaml_syntax_error"
        assert errors[0].line is not None

    def test_empty_input(self):
        test_file, errors = validate_test_file_string("# nothing here\n")
        assert test_file is None
        assert errors[0].type == "empty_input"

    def test_multiple_errors_returned_at_once(self):
        source = "descripton: x\nschemaVersion: '1.0'\n"
        test_file, errors = validate_test_file_string(source)
        assert test_file is None
        assert {e.type for e in errors} >= {"extra_forbidden", "missing"}


class TestValidateTestFilePath:
    """Tests for file-based validation and loading."""

    def test_valid_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "insert.yml"
            path.write_text(VALID_YAML)
            test_file, errors = validate_test_file_path(path)
        assert errors == []
        assert test_file.description == "insertOne"

    def test_empty_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "empty.json"
            path.write_text("")
            test_file, errors = validate_test_file_path(path)
        assert test_file is None
        assert errors[0].type == "empty_file"

    def test_load_test_file_raises_on_errors(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.yml"
            path.write_text(VALID_YAML + "bogus: 1\n")
            with pytest.raises(TestFileError, match="bogus") as exc_info:
                load_test_file(path)
        assert exc_info.value.errors[0].type == "extra_forbidden"

    def test_load_test_file_returns_model(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "ok.yml"
            path.write_text(VALID_YAML)
            test_file = load_test_file(path)
        assert test_file.tests[0].operations[0].name == "insertOne"
