"""Shared fixtures for unified-runner tests."""

from __future__ import annotations

import copy
from typing import Any

import pytest

MINIMAL_TEST_FILE: dict[str, Any] = {
    "description": "find",
    "schemaVersion": "1.0",
    "createEntities": [
        {"client": {"id": "client0", "observeEvents": ["commandStartedEvent"]}},
        {"database": {"id": "database0", "client": "client0", "databaseName": "crud-tests"}},
        {
            "collection": {
                "id": "collection0",
                "database": "database0",
                "collectionName": "coll0",
            }
        },
    ],
    "initialData": [
        {
            "collectionName": "coll0",
            "databaseName": "crud-tests",
            "documents": [{"_id": 1, "x": 11}],
        }
    ],
    "tests": [
        {
            "description": "find with filter",
            "operations": [
                {
                    "name": "find",
                    "object": "collection0",
                    "arguments": {"filter": {"_id": 1}},
                    "expectResult": [{"_id": 1, "x": 11}],
                }
            ],
            "expectEvents": [
                {
                    "client": "client0",
                    "events": [
                        {"commandStartedEvent": {"command": {"find": "coll0"}}}
                    ],
                }
            ],
        }
    ],
}


@pytest.fixture
def test_file_data() -> dict[str, Any]:
    """A fresh copy of a minimal valid test file document."""
    return copy.deepcopy(MINIMAL_TEST_FILE)
