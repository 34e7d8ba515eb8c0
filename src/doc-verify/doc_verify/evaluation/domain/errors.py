"""Recoverable errors raised while checking a sample.

None of these escape the checker: each is turned into a failed or skipped
CheckResult carrying its reason and message.
"""

from doc_verify.core.errors import DocVerifyError
from doc_verify.evaluation.domain.outcome import Reason


class SampleCheckError(DocVerifyError):
    """Base class for errors that decide a sample's outcome."""

    reason: Reason

    def __init__(self, sample_id: str, message: str) -> None:
        self.sample_id = sample_id
        super().__init__(message)


class OutputMismatchError(SampleCheckError):
    """Raised when captured output differs from the documented output."""

    reason = Reason.OUTPUT_MISMATCH

    def __init__(self, sample_id: str, detail: str) -> None:
        super().__init__(
            sample_id=sample_id,
            message=f"Failed to match documented output for '{sample_id}': {detail}",
        )


class EvaluationThrewError(SampleCheckError):
    """Raised when a sample throws and its annotation does not document an error."""

    reason = Reason.EVALUATION_THREW

    def __init__(self, sample_id: str, error: str) -> None:
        self.error = error
        super().__init__(
            sample_id=sample_id,
            message=f"Failed to run '{sample_id}': uncaught {error}",
        )


class UnsupportedCapabilityError(SampleCheckError):
    """Raised when a sample requires capabilities the run does not provide."""

    reason = Reason.UNSUPPORTED_CAPABILITY

    def __init__(self, sample_id: str, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            sample_id=sample_id,
            message=(
                f"Failed to run '{sample_id}': requires unavailable"
                f" capabilities: {', '.join(missing)}"
            ),
        )
