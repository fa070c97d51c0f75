"""Error formatter with dual-mode output (rich human and CI concise).

Human mode renders an annotated source excerpt in the style of compiler
diagnostics; CI mode renders one ``file:line:col -- field: message`` line
per error. Field paths are displayed with sequence indices in brackets,
e.g. ``tests[1].operations[0].name``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from unified_runner.loader.validator import ValidationErrorDetail


@dataclass(frozen=True)
class ErrorCode:
    code: str
    description: str


UNKNOWN_FIELD = ErrorCode("E001", "unknown field")
MISSING_FIELD = ErrorCode("E002", "required field missing")
INVALID_VALUE = ErrorCode("E003", "invalid value")
TYPE_MISMATCH = ErrorCode("E004", "type mismatch")
INVALID_LITERAL = ErrorCode("E005", "invalid literal")
SYNTAX_ERROR = ErrorCode("E006", "syntax error")
EMPTY_INPUT = ErrorCode("E007", "empty input")
INVALID_ENTITY = ErrorCode("E008", "invalid entity declaration")
OTHER = ErrorCode("E999", "validation error")

# Pydantic error types, plus the loader's own, by error code
_CODES_BY_TYPE: dict[str, ErrorCode] = {
    "extra_forbidden": UNKNOWN_FIELD,
    "missing": MISSING_FIELD,
    "value_error": INVALID_VALUE,
    "literal_error": INVALID_LITERAL,
    "enum": INVALID_LITERAL,
    "yaml_syntax_error": SYNTAX_ERROR,
    "empty_file": EMPTY_INPUT,
    "empty_input": EMPTY_INPUT,
    "invalid_entity": INVALID_ENTITY,
    "union_tag_invalid": INVALID_ENTITY,
}

_TYPE_MISMATCH_SUFFIXES = ("_type", "_parsing", "is_instance_of")


def classify(error_type: str) -> ErrorCode:
    """Map an error type string to its diagnostic code."""
    if error_type in _CODES_BY_TYPE:
        return _CODES_BY_TYPE[error_type]
    if error_type.endswith(_TYPE_MISMATCH_SUFFIXES):
        return TYPE_MISMATCH
    return OTHER


def display_path(field: str) -> str:
    """Render a dotted field path with bracketed sequence indices."""
    rendered = ""
    for part in field.split("."):
        if part.isdigit() and rendered:
            rendered += f"[{part}]"
        elif rendered:
            rendered += f".{part}"
        else:
            rendered = part
    return rendered


def _caret_target(field: str) -> str:
    # Indices never appear on the key's own line; point at the nearest key.
    for part in reversed(field.split(".")):
        if not part.isdigit():
            return part
    return field


class ErrorFormatter:
    """Formats validation errors for human or CI consumption.

    Args:
        ci_mode: If True, use CI-friendly concise output. If None,
            auto-detect from the CI environment variable.
    """

    def __init__(self, ci_mode: bool | None = None) -> None:
        if ci_mode is None:
            ci_mode = os.environ.get("CI", "").lower() in ("true", "1", "yes")
        self.ci_mode = ci_mode

    def format_error(
        self,
        error: ValidationErrorDetail,
        source_lines: list[str],
        filename: str,
    ) -> str:
        if self.ci_mode:
            return self._format_ci(error, filename)
        return self._format_rich(error, source_lines, filename)

    def _format_ci(self, error: ValidationErrorDetail, filename: str) -> str:
        location = f"{filename}:{error.line or 0}:{error.col or 0}"
        text = f"{location} -- {display_path(error.field)}: {error.message}"
        if error.suggestion:
            text += f" ({error.suggestion})"
        return text

    def _excerpt(self, error: ValidationErrorDetail, source_lines: list[str]) -> list[str]:
        """Source line plus a caret underline, or [] if the line is unknown."""
        if error.line is None or not 0 < error.line <= len(source_lines):
            return []
        number = str(error.line)
        gutter = " " * len(number)
        src_line = source_lines[error.line - 1].rstrip()
        target = _caret_target(error.field)
        start = src_line.find(target)
        if start < 0:
            marker = f"{display_path(error.field)}: {error.message}"
        else:
            marker = f"{' ' * start}{'^' * len(target)} {error.message}"
        return [f" {number} | {src_line}", f" {gutter} | {marker}"]

    def _format_rich(
        self,
        error: ValidationErrorDetail,
        source_lines: list[str],
        filename: str,
    ) -> str:
        """Format one error as an annotated excerpt.

        Produces output like:
            error[E001]: unknown field
              --> crud.yml:3:1
               |
             3 | schemVersion: "1.0"
               | ^^^^^^^^^^^^ Extra inputs are not permitted
               |
               = help: Did you mean 'schemaVersion'?
        """
        code = classify(error.type)
        out = [f"error[{code.code}]: {code.description}"]

        excerpt = self._excerpt(error, source_lines)
        if excerpt:
            out.append(f"  --> {filename}:{error.line}:{error.col or 1}")
            out.append("   |")
            out.extend(excerpt)
        else:
            out.append(f"  --> {filename}")
            out.append("   |")
            out.append(f"   | {display_path(error.field)}: {error.message}")
        out.append("   |")

        if error.suggestion:
            out.append(f"   = help: {error.suggestion}")
        return "\n".join(out)

    def format_all(
        self,
        errors: list[ValidationErrorDetail],
        source: str,
        filename: str,
    ) -> str:
        """Format all errors, separated by blank lines."""
        source_lines = source.splitlines()
        return "\n\n".join(
            self.format_error(error, source_lines, filename) for error in errors
        )
