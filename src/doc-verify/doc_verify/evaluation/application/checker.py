"""SampleChecker — takes one sample from "not run" to exactly one terminal outcome."""

from doc_verify.evaluation.domain.comparison import (
    compare,
    render_actual,
    render_expected,
    unified_diff,
)
from doc_verify.evaluation.domain.errors import (
    OutputMismatchError,
    SampleCheckError,
    UnsupportedCapabilityError,
)
from doc_verify.evaluation.domain.outcome import CheckResult, Outcome, Reason
from doc_verify.extraction.domain.sample import Sample
from doc_verify.runtime.domain.factory import EvaluatorFactory
from doc_verify.runtime.infrastructure.errors import EvaluationTimeoutError


class SampleChecker:
    """Checks one sample: preconditions, evaluation, comparison.

    Recoverable problems (timeouts, thrown errors, mismatches, missing
    capabilities) become the returned CheckResult. Anything else raised by
    the evaluator, such as a missing runtime executable, propagates to the
    caller.
    """

    def __init__(
        self,
        evaluator_factory: EvaluatorFactory,
        capabilities: frozenset[str],
    ) -> None:
        self._evaluator_factory = evaluator_factory
        self._capabilities = capabilities

    async def check(self, sample: Sample) -> CheckResult:
        expected = render_expected(sample.expectation)

        if sample.skip:
            return CheckResult(
                outcome=Outcome.SKIPPED,
                reason=Reason.MARKED_SKIP,
                message="marked as not runnable",
                expected=expected,
            )

        try:
            self._check_capabilities(sample=sample)
        except UnsupportedCapabilityError as exc:
            return CheckResult(
                outcome=Outcome.SKIPPED,
                reason=exc.reason,
                message=str(exc),
                expected=expected,
            )

        if sample.expectation.is_empty:
            return CheckResult(
                outcome=Outcome.SKIPPED,
                reason=Reason.NO_EXPECTATION,
                message="no documented output to compare against",
            )

        evaluator = self._evaluator_factory.create(
            runtime=sample.language, sample_id=sample.sample_id
        )
        try:
            output = await evaluator.evaluate(source=sample.source)
        except EvaluationTimeoutError as exc:
            return CheckResult(
                outcome=Outcome.FAIL,
                reason=Reason.EVALUATION_TIMEOUT,
                message=str(exc),
                expected=expected,
            )

        actual = render_actual(output)
        try:
            compare(
                sample_id=sample.sample_id,
                expectation=sample.expectation,
                output=output,
            )
        except SampleCheckError as exc:
            return CheckResult(
                outcome=Outcome.FAIL,
                reason=exc.reason,
                message=_failure_message(error=exc, stderr=output.stderr),
                expected=expected,
                actual=actual,
                diff=unified_diff(expected=expected, actual=actual),
                duration_ms=output.duration_ms,
            )

        return CheckResult(
            outcome=Outcome.PASS,
            expected=expected,
            actual=actual,
            duration_ms=output.duration_ms,
        )

    def _check_capabilities(self, sample: Sample) -> None:
        missing = sorted(sample.requires - self._capabilities)
        if missing:
            raise UnsupportedCapabilityError(sample_id=sample.sample_id, missing=missing)


def _failure_message(error: SampleCheckError, stderr: str) -> str:
    """The error message, with the runtime's stderr appended when it explains more."""
    message = str(error)
    if isinstance(error, OutputMismatchError) or not stderr.strip():
        return message
    return f"{message}\n{stderr.rstrip()}"
