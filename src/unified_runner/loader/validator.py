"""Test file validation pipeline combining parsing with Pydantic validation.

Two-stage validation: first parse the document with line tracking, then
validate against the TestFile model. Errors from both stages are enriched
with source positions and collected for batch reporting.
"""

from __future__ import annotations

import difflib
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from unified_runner.loader.yaml_parser import YAMLParseError, parse_file, parse_with_lines
from unified_runner.models.expectations import ExpectedEvents
from unified_runner.models.operation import Operation
from unified_runner.models.requirements import RunOnRequirement
from unified_runner.models.test_file import CollectionData, TestCase, TestFile

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


def _aliases(model: type[BaseModel]) -> list[str]:
    return [info.alias or name for name, info in model.model_fields.items()]


# Valid top-level keys of a test file, used for typo suggestions
VALID_TEST_FILE_FIELDS: list[str] = _aliases(TestFile)

# Closed models reachable by a fixed key path; indices are written as "*"
_FIELDS_BY_PATH: dict[tuple[str, ...], list[str]] = {
    (): VALID_TEST_FILE_FIELDS,
    ("runOnRequirements", "*"): _aliases(RunOnRequirement),
    ("initialData", "*"): _aliases(CollectionData),
    ("tests", "*"): _aliases(TestCase),
    ("tests", "*", "runOnRequirements", "*"): _aliases(RunOnRequirement),
    ("tests", "*", "operations", "*"): _aliases(Operation),
    ("tests", "*", "expectEvents", "*"): _aliases(ExpectedEvents),
    ("tests", "*", "outcome", "*"): _aliases(CollectionData),
}


@dataclass
class ValidationErrorDetail:
    """A single validation error with source position and context.

    Attributes:
        field: Dotted path of the offending key, e.g. ``tests.0.operations``.
        message: Human-readable error description.
        type: Pydantic error type string (e.g. 'missing', 'extra_forbidden').
        line: 1-indexed line number in the source, or None if unknown.
        col: 1-indexed column number in the source, or None if unknown.
        suggestion: 'Did you mean X?' suggestion for a mistyped key, or None.
        input_value: The invalid input value, if available.
    """

    field: str
    message: str
    type: str
    line: int | None = None
    col: int | None = None
    suggestion: str | None = None
    input_value: Any = field(default=None)


class TestFileError(Exception):
    """Raised by load_test_file when a document fails to parse or validate."""

    __test__ = False

    def __init__(self, filename: str, errors: list[ValidationErrorDetail]) -> None:
        self.filename = filename
        self.errors = errors
        summary = "; ".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(f"{filename}: {summary}")


def _loc_to_field_path(loc: tuple[str | int, ...]) -> str:
    """Convert a Pydantic error loc tuple to a dotted field path."""
    return ".".join(str(part) for part in loc)


def _find_line_for_field(
    field_path: str,
    line_map: dict[str, tuple[int, int]],
) -> tuple[int | None, int | None]:
    """Look up a field path, falling back to progressively shorter prefixes."""
    parts = field_path.split(".")
    while parts:
        prefix = ".".join(parts)
        if prefix in line_map:
            return line_map[prefix]
        parts.pop()
    return None, None


def _get_suggestion(loc: tuple[str | int, ...]) -> str | None:
    """Suggest a known key for an unknown key at ``loc``, if one is close."""
    parent = tuple("*" if isinstance(part, int) else part for part in loc[:-1])
    candidates = _FIELDS_BY_PATH.get(parent)
    if not candidates:
        return None
    matches = difflib.get_close_matches(str(loc[-1]), candidates, n=1, cutoff=0.6)
    if matches:
        return f"Did you mean '{matches[0]}'?"
    return None


def _detail(err: ErrorDetails, line_map: dict[str, tuple[int, int]]) -> ValidationErrorDetail:
    loc = err["loc"]
    field_path = _loc_to_field_path(loc)
    line, col = _find_line_for_field(field_path, line_map)
    unknown_key = err["type"] == "extra_forbidden" and bool(loc)
    return ValidationErrorDetail(
        field=field_path or "<root>",
        message=err["msg"],
        type=err["type"],
        line=line,
        col=col,
        suggestion=_get_suggestion(loc) if unknown_key else None,
        input_value=err.get("input"),
    )


def validate_test_file(
    raw_data: dict[str, Any],
    line_map: dict[str, tuple[int, int]],
) -> tuple[TestFile | None, list[ValidationErrorDetail]]:
    """Validate parsed document data against the TestFile model.

    Returns:
        Tuple of (TestFile, []) on success, or (None, errors) on failure.
    """
    try:
        return TestFile.model_validate(raw_data), []
    except ValidationError as e:
        return None, [_detail(err, line_map) for err in e.errors()]


def _validate_parsed(
    parse: Callable[[], tuple[dict | None, dict[str, tuple[int, int]]]],
    empty: ValidationErrorDetail,
) -> tuple[TestFile | None, list[ValidationErrorDetail]]:
    try:
        raw_data, line_map = parse()
    except YAMLParseError as e:
        return None, [
            ValidationErrorDetail(
                field="<document>",
                message=e.message,
                type="yaml_syntax_error",
                line=e.line,
                col=e.column,
            )
        ]
    if raw_data is None:
        return None, [empty]
    return validate_test_file(raw_data, line_map)


def validate_test_file_string(
    source: str,
    filename: str = "<string>",
) -> tuple[TestFile | None, list[ValidationErrorDetail]]:
    """Parse and validate a test file from a string."""
    return _validate_parsed(
        lambda: parse_with_lines(source, filename=filename),
        ValidationErrorDetail(
            field="<document>",
            message="Input is empty or its root is not a mapping",
            type="empty_input",
        ),
    )


def validate_test_file_path(
    filepath: Path,
) -> tuple[TestFile | None, list[ValidationErrorDetail]]:
    """Parse and validate a test file on disk, returning all errors at once."""
    return _validate_parsed(
        lambda: parse_file(filepath),
        ValidationErrorDetail(
            field="<document>",
            message="File is empty or its root is not a mapping",
            type="empty_file",
        ),
    )


def load_test_file(filepath: Path) -> TestFile:
    """Load a test file, raising TestFileError if it does not validate."""
    test_file, errors = validate_test_file_path(filepath)
    if test_file is None:
        raise TestFileError(str(filepath), errors)
    return test_file
