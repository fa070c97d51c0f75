"""Requirement evaluator -- decides whether a scenario may run.

A ``RunOnRequirement`` holds up to six clauses (min/max server version,
topologies, server parameters, serverless, auth). Within one requirement
every present clause must hold, checked in that order, stopping at the
first failure. Across a list of requirements any single satisfied entry
makes the scenario eligible.

Version bounds follow Cargo semver comparator semantics:

- ``>= 3.6`` is ``>= 3.6.0``; ``<= 4.2`` admits every ``4.2.x``;
  ``<= 4`` admits every ``4.x.y``.
- A prerelease server version only matches a bound naming the same
  ``major.minor.patch`` with a prerelease of its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

import semver
from loguru import logger

from unified_runner.environment import TestEnvironment
from unified_runner.execution.matcher import DocumentMatcher, MismatchError
from unified_runner.models.requirements import RunOnRequirement
from unified_runner.models.result import Eligibility
from unified_runner.models.test_file import TestCase, TestFile

_BOUND_PATTERN = re.compile(
    r"^(\d+)(?:\.(\d+)(?:\.(\d+)(?:-([0-9A-Za-z.-]+))?)?)?$"
)


class RequirementError(Exception):
    """Internal evaluator error: unparseable bound or missing matcher."""


@dataclass(frozen=True)
class VersionBound:
    """One inclusive version comparator (``>=`` or ``<=``), possibly partial."""

    op: str
    major: int
    minor: int | None = None
    patch: int | None = None
    prerelease: str | None = None

    def _admits_prerelease(self, version: semver.Version) -> bool:
        return (
            self.prerelease is not None
            and self.major == version.major
            and self.minor == version.minor
            and self.patch == version.patch
        )

    def matches(self, version: semver.Version) -> bool:
        if version.prerelease and not self._admits_prerelease(version):
            return False

        if self.minor is None:
            cmp = (version.major > self.major) - (version.major < self.major)
        elif self.patch is None:
            actual = (version.major, version.minor)
            bound = (self.major, self.minor)
            cmp = (actual > bound) - (actual < bound)
        else:
            cmp = version.compare(
                semver.Version(self.major, self.minor, self.patch, self.prerelease)
            )

        if self.op == ">=":
            return cmp >= 0
        return cmp <= 0

    def __str__(self) -> str:
        text = str(self.major)
        if self.minor is not None:
            text += f".{self.minor}"
        if self.patch is not None:
            text += f".{self.patch}"
        if self.prerelease is not None:
            text += f"-{self.prerelease}"
        return f"{self.op} {text}"


@lru_cache(maxsize=256)
def parse_version_bound(op: str, text: str) -> VersionBound:
    """Parse ``text`` into an inclusive bound.

    Raises:
        RequirementError: If the operator is unknown or ``text`` is not a
            (possibly partial) version.
    """
    if op not in (">=", "<="):
        raise RequirementError(f"Unsupported version operator {op!r}")
    match = _BOUND_PATTERN.match(text.strip())
    if match is None:
        raise RequirementError(f"Invalid version requirement '{op} {text}'")
    major, minor, patch, prerelease = match.groups()
    return VersionBound(
        op=op,
        major=int(major),
        minor=int(minor) if minor is not None else None,
        patch=int(patch) if patch is not None else None,
        prerelease=prerelease,
    )


class RequirementEvaluator:
    """Evaluates run-on requirements against a test environment.

    Args:
        environment: The deployment being tested.
        matcher: Document matcher used for the ``serverParameters`` clause.
            Only needed when a requirement declares server parameters.
    """

    def __init__(
        self,
        environment: TestEnvironment,
        matcher: DocumentMatcher | None = None,
    ) -> None:
        self._environment = environment
        self._matcher = matcher

    async def unmet_clause(self, requirement: RunOnRequirement) -> str | None:
        """Describe the first clause of ``requirement`` that does not hold.

        Returns:
            None when every present clause holds, otherwise a short
            description of the failing clause.
        """
        env = self._environment
        version = env.server_version

        if requirement.min_server_version is not None:
            bound = parse_version_bound(">=", requirement.min_server_version)
            if not bound.matches(version):
                return f"server version {version} does not satisfy {bound}"

        if requirement.max_server_version is not None:
            bound = parse_version_bound("<=", requirement.max_server_version)
            if not bound.matches(version):
                return f"server version {version} does not satisfy {bound}"

        if requirement.topologies is not None:
            topology = await env.topology()
            if topology not in requirement.topologies:
                allowed = ", ".join(t.value for t in requirement.topologies)
                return f"topology {topology.value} not in [{allowed}]"

        if requirement.server_parameters is not None:
            if self._matcher is None:
                raise RequirementError(
                    "serverParameters requirement needs a document matcher"
                )
            try:
                self._matcher(
                    requirement.server_parameters,
                    env.server_parameters,
                    False,
                    None,
                )
            except MismatchError as exc:
                return f"server parameters do not match: {exc}"

        if requirement.serverless is not None:
            if not requirement.serverless.can_run(env.is_serverless()):
                return f"serverless={requirement.serverless.value} not satisfied"

        if requirement.auth is not None:
            if requirement.auth != env.auth_enabled():
                return f"auth={str(requirement.auth).lower()} not satisfied"

        return None

    async def can_run_on(self, requirement: RunOnRequirement) -> bool:
        """Whether every present clause of ``requirement`` holds."""
        reason = await self.unmet_clause(requirement)
        if reason is not None:
            logger.debug("requirement not met: {}", reason)
            return False
        return True

    async def any_satisfied(
        self, requirements: list[RunOnRequirement] | None
    ) -> bool:
        """Whether any requirement in the list is met.

        An absent or empty list places no constraint on the environment.
        """
        if not requirements:
            return True
        for requirement in requirements:
            if await self.can_run_on(requirement):
                return True
        return False

    async def _explain(self, requirements: list[RunOnRequirement] | None) -> str | None:
        if not requirements:
            return None
        reasons: list[str] = []
        for requirement in requirements:
            reason = await self.unmet_clause(requirement)
            if reason is None:
                return None
            reasons.append(reason)
        return "; ".join(reasons)

    async def check_test(self, test_file: TestFile, test_case: TestCase) -> Eligibility:
        """Decide whether one test case runs or is skipped.

        Checks the skip marker, then the file-level requirements, then
        the case-level requirements.
        """
        if test_case.skip_reason is not None:
            return Eligibility(
                test=test_case.description,
                runnable=False,
                reason=f"skipped: {test_case.skip_reason}",
            )

        reason = await self._explain(test_file.run_on_requirements)
        if reason is not None:
            return Eligibility(
                test=test_case.description,
                runnable=False,
                reason=f"file requirements not met: {reason}",
            )

        reason = await self._explain(test_case.run_on_requirements)
        if reason is not None:
            return Eligibility(
                test=test_case.description,
                runnable=False,
                reason=f"test requirements not met: {reason}",
            )

        return Eligibility(test=test_case.description, runnable=True)

    async def check_file(self, test_file: TestFile) -> list[Eligibility]:
        """Eligibility of every test case in ``test_file``, in order."""
        return [await self.check_test(test_file, case) for case in test_file.tests]
