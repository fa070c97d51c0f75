"""unified-runner data models - re-exports all public model classes."""

from unified_runner.models.config import EnvironmentConfig, RunnerConfig
from unified_runner.models.entities import (
    Bucket,
    Client,
    Collection,
    CollectionOrDatabaseOptions,
    Database,
    Session,
    TestFileEntity,
    Thread,
)
from unified_runner.models.expectations import (
    EventMatch,
    ExpectedEvents,
    ExpectedEventType,
    ExpectError,
)
from unified_runner.models.operation import Operation
from unified_runner.models.requirements import RunOnRequirement, Serverless, Topology
from unified_runner.models.result import Eligibility, VerificationResult
from unified_runner.models.test_file import CollectionData, TestCase, TestFile
from unified_runner.models.version import (
    SchemaError,
    normalize_schema_version,
    parse_schema_version,
)

__all__ = [
    "Bucket",
    "Client",
    "Collection",
    "CollectionData",
    "CollectionOrDatabaseOptions",
    "Database",
    "Eligibility",
    "EnvironmentConfig",
    "EventMatch",
    "ExpectError",
    "ExpectedEventType",
    "ExpectedEvents",
    "Operation",
    "RunOnRequirement",
    "RunnerConfig",
    "SchemaError",
    "Serverless",
    "Session",
    "TestCase",
    "TestFile",
    "TestFileEntity",
    "Thread",
    "Topology",
    "VerificationResult",
    "normalize_schema_version",
    "parse_schema_version",
]
