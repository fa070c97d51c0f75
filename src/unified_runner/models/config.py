"""Project configuration model for unified-runner.

Captures unified.yaml fields with sensible defaults for the connection
string, the test directory and the environment snapshot used when no
live deployment is available.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from unified_runner.models.requirements import Topology
from unified_runner.models.version import normalize_schema_version

CONFIG_FILENAME = "unified.yaml"


class EnvironmentConfig(BaseModel):
    """Snapshot of the deployment that scenarios are checked against.

    Describes the server version, topology, server parameters and
    auth/serverless classification a static environment reports.
    """

    model_config = {"extra": "forbid"}

    server_version: str = "7.0.0"
    topology: Topology = Topology.SINGLE
    server_parameters: dict[str, Any] = Field(default_factory=dict)
    auth: bool = False
    serverless: bool = False

    @field_validator("server_version", mode="before")
    @classmethod
    def _normalize_version(cls, value: Any) -> Any:
        if isinstance(value, float):
            raise ValueError(
                f"server_version {value!r} was read as a number; quote it in unified.yaml"
            )
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str):
            return normalize_schema_version(value)
        return value


class RunnerConfig(BaseModel):
    """Project-level configuration loaded from unified.yaml."""

    model_config = {"extra": "forbid"}

    default_uri: str = "mongodb://localhost:27017"
    tests_dir: str = "tests/unified"
    ci_mode: bool = False
    log_level: str = "WARNING"
    matcher: str | None = None
    environment: EnvironmentConfig = Field(default_factory=EnvironmentConfig)


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from start (default: cwd) looking for unified.yaml.

    Returns:
        Path to the directory containing unified.yaml, or cwd if none is found.
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    while current != current.parent:
        if (current / CONFIG_FILENAME).exists():
            return current
        current = current.parent
    return Path.cwd()


def _apply_env_overrides(config: RunnerConfig) -> RunnerConfig:
    uri = os.environ.get("MONGODB_URI")
    if uri:
        config = config.model_copy(update={"default_uri": uri})
    if os.environ.get("SERVERLESS", "").lower() == "serverless":
        environment = config.environment.model_copy(update={"serverless": True})
        config = config.model_copy(update={"environment": environment})
    return config


def load_runner_config(project_root: Path | None = None) -> RunnerConfig:
    """Load RunnerConfig from unified.yaml. Returns defaults if not found.

    ``MONGODB_URI`` overrides ``default_uri`` and ``SERVERLESS=serverless``
    marks the environment snapshot as serverless.

    Args:
        project_root: Path to the project root directory. If None,
            uses find_project_root() to locate it.

    Returns:
        Validated RunnerConfig instance.
    """
    if project_root is None:
        project_root = find_project_root()
    config_path = project_root / CONFIG_FILENAME
    if not config_path.exists():
        return _apply_env_overrides(RunnerConfig())
    import yaml

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        return _apply_env_overrides(RunnerConfig())
    return _apply_env_overrides(RunnerConfig.model_validate(raw))
