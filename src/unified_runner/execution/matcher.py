"""Document matcher contract and resolution.

The structured-document matcher (partial-document and partial-array
comparison) is supplied by the harness. This module defines the call
contract and resolves a matcher from a dotted import path such as
``"my_harness.matching.documents_match"``.
"""

from __future__ import annotations

import importlib
from typing import Any, Protocol


class MismatchError(Exception):
    """Raised by a document matcher when actual does not match expected."""


class DocumentMatcher(Protocol):
    def __call__(
        self,
        expected: Any,
        actual: Any,
        array_order_sensitive: bool,
        context: str | None,
    ) -> None:
        """Return None on a match; raise MismatchError otherwise."""
        ...


def load_matcher(dotted_path: str) -> DocumentMatcher:
    """Import a document matcher callable by its fully-qualified dotted path.

    Args:
        dotted_path: ``"module.path.function_name"``.

    Returns:
        The resolved callable.

    Raises:
        ValueError: If the path has no module part.
        ImportError: If the module cannot be imported or lacks the attribute.
        TypeError: If the resolved attribute is not callable.
    """
    module_path, _, attr_name = dotted_path.rpartition(".")
    if not module_path or not attr_name:
        raise ValueError(
            f"Invalid matcher path '{dotted_path}'. "
            f"Expected format: 'module.path.function_name'."
        )

    module = importlib.import_module(module_path)

    try:
        matcher = getattr(module, attr_name)
    except AttributeError:
        raise ImportError(
            f"Module '{module_path}' has no attribute '{attr_name}'."
        ) from None

    if not callable(matcher):
        raise TypeError(f"'{dotted_path}' is not callable.")

    return matcher
