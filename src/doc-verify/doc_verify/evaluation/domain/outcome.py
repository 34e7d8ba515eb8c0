"""Check outcome value objects — the terminal state of one sample check."""

from enum import StrEnum

from pydantic import BaseModel


class Outcome(StrEnum):
    PASS = "pass"
    FAIL = "fail"
    SKIPPED = "skipped"


class Reason(StrEnum):
    """Why a check did not pass."""

    OUTPUT_MISMATCH = "output_mismatch"
    EVALUATION_TIMEOUT = "evaluation_timeout"
    EVALUATION_THREW = "evaluation_threw"
    NONDETERMINISTIC = "nondeterministic"
    UNSUPPORTED_CAPABILITY = "unsupported_capability"
    NO_EXPECTATION = "no_expectation"
    MARKED_SKIP = "marked_skip"


class CheckResult(BaseModel, frozen=True):
    """Immutable result of checking one sample once.

    ``expected`` and ``actual`` are the normalized texts that were compared;
    ``diff`` is a unified diff between them when the check failed on output.
    """

    outcome: Outcome
    reason: Reason | None = None
    message: str = ""
    expected: str = ""
    actual: str = ""
    diff: str = ""
    duration_ms: int = 0
