"""Scenario document parser with line tracking.

Unified test files are written in YAML or JSON; both are parsed with a
PyYAML SafeLoader subclass that records the source position of every
mapping key so validation errors can point at the offending line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger


class YAMLParseError(Exception):
    """A scenario document is not well-formed YAML or JSON.

    ``line`` and ``column`` are 1-indexed and None when PyYAML reports
    no position.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        filename: str = "<string>",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename

    @classmethod
    def from_yaml_error(cls, error: yaml.YAMLError, filename: str) -> YAMLParseError:
        mark = getattr(error, "problem_mark", None)
        if mark is None:
            return cls(str(error), filename=filename)
        return cls(str(error), line=mark.line + 1, column=mark.column + 1, filename=filename)


class LineTrackingLoader(yaml.SafeLoader):
    """SafeLoader that maps dotted key paths to (line, column) positions.

    Sequence items contribute their index to the path, so the key
    ``description`` of the second test case is recorded as
    ``tests.1.description``.
    """

    def __init__(self, stream: str) -> None:
        super().__init__(stream)
        self.line_map: dict[str, tuple[int, int]] = {}
        self._path: list[str] = []

    def _record(self, key: str, node: yaml.Node) -> None:
        full_key = ".".join([*self._path, key])
        self.line_map[full_key] = (node.start_mark.line + 1, node.start_mark.column + 1)

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        self.flatten_mapping(node)
        mapping: dict[Any, Any] = {}
        for key_node, value_node in node.value:
            key = self.construct_object(key_node, deep=deep)
            if isinstance(key, str):
                self._record(key, key_node)
                self._path.append(key)
                try:
                    mapping[key] = self.construct_object(value_node, deep=deep)
                finally:
                    self._path.pop()
            else:
                mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping

    def construct_sequence(self, node: yaml.SequenceNode, deep: bool = False) -> list[Any]:
        items: list[Any] = []
        for index, child in enumerate(node.value):
            self._path.append(str(index))
            try:
                items.append(self.construct_object(child, deep=deep))
            finally:
                self._path.pop()
        return items

    def construct_yaml_map(self, node: yaml.MappingNode) -> Any:
        yield self.construct_mapping(node, deep=True)

    def construct_yaml_seq(self, node: yaml.SequenceNode) -> Any:
        yield self.construct_sequence(node, deep=True)


LineTrackingLoader.add_constructor("tag:yaml.org,2002:map", LineTrackingLoader.construct_yaml_map)
LineTrackingLoader.add_constructor("tag:yaml.org,2002:seq", LineTrackingLoader.construct_yaml_seq)


def parse_with_lines(
    source: str,
    filename: str = "<string>",
) -> tuple[dict | None, dict[str, tuple[int, int]]]:
    """Parse a YAML or JSON document and return (data, line_map).

    Returns:
        ``(None, {})`` for empty input or a document whose root is not a
        mapping.

    Raises:
        YAMLParseError: If the document contains syntax errors.
    """
    try:
        loader = LineTrackingLoader(source)
        try:
            data = loader.get_single_data()
        finally:
            loader.dispose()
    except yaml.YAMLError as e:
        raise YAMLParseError.from_yaml_error(e, filename) from e

    if not isinstance(data, dict):
        return None, {}

    return data, loader.line_map


def parse_file(filepath: Path) -> tuple[dict | None, dict[str, tuple[int, int]]]:
    """Parse a scenario file and return (data, line_map).

    Raises:
        YAMLParseError: If the file contains syntax errors.
        FileNotFoundError: If the file does not exist.
    """
    logger.debug("parsing scenario file {}", filepath)
    content = filepath.read_text(encoding="utf-8")
    return parse_with_lines(content, filename=str(filepath))
