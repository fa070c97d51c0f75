"""Test environment capability consumed by the requirement evaluator.

The live implementation (server discovery, topology detection) belongs
to the harness. ``StaticEnvironment`` reports a fixed snapshot, which is
what the CLI uses and what tests construct directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

import semver

from unified_runner.models.config import EnvironmentConfig
from unified_runner.models.requirements import Topology


class TestEnvironment(Protocol):
    """What requirement evaluation needs to know about the deployment."""

    server_version: semver.Version
    server_parameters: dict[str, Any]

    async def topology(self) -> Topology:
        """Current topology classification; may require a server round trip."""
        ...

    def auth_enabled(self) -> bool: ...

    def is_serverless(self) -> bool: ...


@dataclass
class StaticEnvironment:
    """A TestEnvironment that reports a fixed snapshot."""

    server_version: semver.Version
    current_topology: Topology = Topology.SINGLE
    server_parameters: dict[str, Any] = field(default_factory=dict)
    auth: bool = False
    serverless: bool = False

    async def topology(self) -> Topology:
        return self.current_topology

    def auth_enabled(self) -> bool:
        return self.auth

    def is_serverless(self) -> bool:
        return self.serverless

    @classmethod
    def from_config(cls, config: EnvironmentConfig) -> StaticEnvironment:
        """Build a snapshot environment from the ``environment`` config section."""
        return cls(
            server_version=semver.Version.parse(config.server_version),
            current_topology=config.topology,
            server_parameters=dict(config.server_parameters),
            auth=config.auth,
            serverless=config.serverless,
        )
