"""Error expectation verifier -- compares an observed error with ``expectError``.

Clauses are checked in a fixed order and only the first failing clause
is reported; failures are never aggregated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from unified_runner.models.expectations import ExpectError
from unified_runner.models.result import VerificationResult


class ObservedError(Protocol):
    """The error surface an executor exposes for verification."""

    def is_server_error(self) -> bool: ...

    def message(self) -> str | None: ...

    def code(self) -> int | None: ...

    def code_name(self) -> str | None: ...

    def contains_label(self, label: str) -> bool: ...


@dataclass(eq=False)
class OperationError(Exception):
    """Concrete error recorded by an executor after a failed operation.

    Attributes:
        kind: Short classification, e.g. ``"Command"`` or ``"InvalidArgument"``.
        server_error: Whether the server reported the error.
        error_message: Message text, if the error carries one.
        error_code: Numeric server error code, if any.
        error_code_name: Server code name, if any.
        labels: Error labels attached to the error.
    """

    kind: str
    server_error: bool = False
    error_message: str | None = None
    error_code: int | None = None
    error_code_name: str | None = None
    labels: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__init__(self.error_message or self.kind)

    def __str__(self) -> str:
        if self.error_message is None:
            return self.kind
        return f"{self.kind}: {self.error_message}"

    def is_server_error(self) -> bool:
        return self.server_error

    def message(self) -> str | None:
        return self.error_message

    def code(self) -> int | None:
        return self.error_code

    def code_name(self) -> str | None:
        return self.error_code_name

    def contains_label(self, label: str) -> bool:
        return label in self.labels


def verify_expect_error(
    expectation: ExpectError,
    error: ObservedError,
    description: str,
) -> str | None:
    """Verify ``error`` against ``expectation``.

    Args:
        expectation: The declared error expectation.
        error: The error the operation actually raised.
        description: Context label embedded in every diagnostic.

    Returns:
        None if every declared clause holds, otherwise the diagnostic for
        the first clause that failed.
    """
    if expectation.is_client_error is not None:
        if expectation.is_client_error != (not error.is_server_error()):
            return f"{description}: expected client error but got {error!r}"

    if expectation.error_contains is not None:
        message = error.message()
        if message is None or expectation.error_contains not in message:
            return f'{description}: "{error}" should include message field'

    if expectation.error_code is not None:
        code = error.code()
        if code is None:
            return (
                f"{description}: {error!r} was expected to include code "
                f"{expectation.error_code} but had no code"
            )
        if code != expectation.error_code:
            return (
                f"{description}: error code {code} ({error.code_name()!r}) did not "
                f"match expected error code {expectation.error_code}"
            )

    if expectation.error_code_name is not None:
        name = error.code_name()
        if name is None:
            return (
                f"{description}: {error!r} was expected to include code name "
                f'"{expectation.error_code_name}" but had no code name'
            )
        if name != expectation.error_code_name:
            return (
                f'{description}: error code name "{name}" did not match expected '
                f'error code name "{expectation.error_code_name}"'
            )

    for label in expectation.error_labels_contain or []:
        if not error.contains_label(label):
            return f'{description}: expected {error!r} to contain label "{label}"'

    for label in expectation.error_labels_omit or []:
        if error.contains_label(label):
            return f'{description}: expected {error!r} to omit label "{label}"'

    # TODO: compare expect_result once the matcher contract defines
    # partial-result semantics for errors carrying a result.
    return None


class ExpectErrorVerifier:
    """Verifies expectError blocks and wraps the outcome in a result model."""

    def verify(
        self,
        expectation: ExpectError,
        error: ObservedError,
        description: str,
    ) -> VerificationResult:
        failure = verify_expect_error(expectation, error, description)
        if failure is None:
            return VerificationResult(
                expectation_type="expect_error",
                passed=True,
                details=f"{description}: error matched expectation",
            )
        return VerificationResult(
            expectation_type="expect_error", passed=False, details=failure
        )
