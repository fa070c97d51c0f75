"""Operation declarations inside a test case."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator
from pydantic.alias_generators import to_camel

from unified_runner.models.expectations import ExpectError


class Operation(BaseModel):
    """A single operation to be executed against a named entity."""

    model_config = {"extra": "forbid", "alias_generator": to_camel}

    name: str
    object: str
    arguments: dict[str, Any] | None = None
    expect_error: ExpectError | None = None
    expect_result: Any = None
    save_result_as_entity: str | None = None
    ignore_result_and_error: bool | None = None

    @model_validator(mode="after")
    def _error_or_result(self) -> Operation:
        if self.expect_error is not None and self.expect_result is not None:
            raise ValueError("expectError and expectResult are mutually exclusive")
        return self
