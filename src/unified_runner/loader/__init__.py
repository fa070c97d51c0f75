"""Test file loader - parsing, validation, and error reporting."""

from unified_runner.loader.validator import (
    TestFileError,
    ValidationErrorDetail,
    load_test_file,
    validate_test_file_path,
    validate_test_file_string,
)
from unified_runner.loader.yaml_parser import (
    YAMLParseError,
    parse_file,
    parse_with_lines,
)

__all__ = [
    "TestFileError",
    "ValidationErrorDetail",
    "YAMLParseError",
    "load_test_file",
    "parse_file",
    "parse_with_lines",
    "validate_test_file_path",
    "validate_test_file_string",
]
