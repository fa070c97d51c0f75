"""Evaluation package for requirement gating and expectation verification.

Provides the run-on requirement evaluator, the expectError verifier and
the event-expectation comparison contract.
"""

from __future__ import annotations

from unified_runner.evaluation.events import EventCountMismatch, EventExpectation
from unified_runner.evaluation.expect_error import (
    ExpectErrorVerifier,
    ObservedError,
    OperationError,
    verify_expect_error,
)
from unified_runner.evaluation.requirements import (
    RequirementError,
    RequirementEvaluator,
    parse_version_bound,
)

__all__ = [
    "EventCountMismatch",
    "EventExpectation",
    "ExpectErrorVerifier",
    "ObservedError",
    "OperationError",
    "RequirementError",
    "RequirementEvaluator",
    "parse_version_bound",
    "verify_expect_error",
]
