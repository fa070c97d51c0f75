"""Result data models for eligibility checks and expectation verification."""

from __future__ import annotations

from pydantic import BaseModel


class Eligibility(BaseModel):
    """Whether a test case may run against the current environment.

    An ineligible test case is skipped, never failed.
    """

    test: str
    runnable: bool
    reason: str = ""


class VerificationResult(BaseModel):
    """Outcome of comparing an actual result with a declared expectation."""

    expectation_type: str
    passed: bool
    details: str = ""
