"""Schema version normalization.

Unified test files declare ``schemaVersion`` as "1", "1.5" or "1.5.2".
Versions are padded to three components before strict semver parsing.
"""

from __future__ import annotations

import semver


class SchemaError(ValueError):
    """Raised when a test file does not conform to the schema."""


def normalize_schema_version(text: str) -> str:
    """Pad a dotted version string to major.minor.patch.

    Args:
        text: Version string with one to three dotted components.

    Returns:
        The normalized three-component version string.

    Raises:
        SchemaError: If the string has more than three components or the
            padded result is not a valid semantic version.
    """
    count = len(text.split("."))
    if count == 1:
        text = f"{text}.0.0"
    elif count == 2:
        text = f"{text}.0"
    try:
        semver.Version.parse(text)
    except ValueError as exc:
        raise SchemaError(str(exc)) from exc
    return text


def parse_schema_version(text: str) -> semver.Version:
    """Normalize and parse a schema version string."""
    return semver.Version.parse(normalize_schema_version(text))
