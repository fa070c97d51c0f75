"""Run-on requirement models.

A requirement is a set of optional clauses describing the environments a
test file or test case may run against. Unset clauses impose no constraint.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class Topology(str, Enum):
    """Deployment shape of the target environment."""

    SINGLE = "single"
    REPLICA_SET = "replicaset"
    SHARDED = "sharded"
    SHARDED_REPLICA_SET = "sharded-replicaset"
    LOAD_BALANCED = "load-balanced"


class Serverless(str, Enum):
    """Serverless gate: restrict a scenario to, or exclude it from, serverless."""

    REQUIRE = "require"
    FORBID = "forbid"
    ALLOW = "allow"

    def can_run(self, is_serverless: bool) -> bool:
        """Whether a deployment with the given classification is compatible."""
        if self is Serverless.REQUIRE:
            return is_serverless
        if self is Serverless.FORBID:
            return not is_serverless
        return True


class RunOnRequirement(BaseModel):
    """One eligibility clause set; all present clauses must hold."""

    model_config = {"extra": "forbid", "alias_generator": to_camel}

    min_server_version: str | None = None
    max_server_version: str | None = None
    topologies: list[Topology] | None = None
    server_parameters: dict[str, Any] | None = None
    serverless: Serverless | None = None
    auth: bool | None = None
