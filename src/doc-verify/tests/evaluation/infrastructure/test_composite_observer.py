"""Tests for CompositeVerificationObserver."""

from doc_verify.evaluation.infrastructure.composite_observer import (
    CompositeVerificationObserver,
)
from tests.evaluation.fake_observer import FakeVerificationObserver


def _make_composite(
    *observers: FakeVerificationObserver,
) -> CompositeVerificationObserver:
    return CompositeVerificationObserver(observers=list(observers))


class TestCompositeVerificationObserverFanOut:
    """Every event is forwarded to all observers in order."""

    def test_verification_started_forwarded_to_all(self) -> None:
        obs_a = FakeVerificationObserver()
        obs_b = FakeVerificationObserver()
        composite = _make_composite(obs_a, obs_b)

        composite.verification_started(
            run_id="run-1",
            total_samples=3,
            runtime_names=["javascript", "python"],
            samples_per_runtime={"javascript": 2, "python": 1},
            num_repetitions=1,
            max_concurrent=4,
        )

        assert obs_a.started[0].run_id == "run-1"
        assert obs_b.started[0].samples_per_runtime == {"javascript": 2, "python": 1}

    def test_verification_completed_forwarded(self) -> None:
        obs = FakeVerificationObserver()
        _make_composite(obs).verification_completed(
            run_id="r", total_checks=7, elapsed_seconds=1.5
        )
        assert obs.completed[0].total_checks == 7

    def test_progress_forwarded(self) -> None:
        obs = FakeVerificationObserver()
        _make_composite(obs).verification_progress(
            run_id="r", runtime="python", completed=2, total=4
        )
        assert obs.progress[0].completed == 2

    def test_check_lifecycle_forwarded(self) -> None:
        obs = FakeVerificationObserver()
        composite = _make_composite(obs)

        composite.sample_check_started(
            run_id="r", sample_id="a.md:3", runtime="javascript", repetition_index=0
        )
        composite.sample_check_retry(
            run_id="r",
            sample_id="a.md:3",
            runtime="javascript",
            repetition_index=0,
            attempt=1,
            reason="EAGAIN",
            backoff_seconds=0.5,
        )
        composite.sample_check_completed(
            run_id="r",
            sample_id="a.md:3",
            runtime="javascript",
            repetition_index=0,
            outcome="fail",
            reason="output_mismatch",
        )
        composite.sample_check_aborted(
            run_id="r",
            sample_id="a.md:5",
            runtime="javascript",
            repetition_index=0,
            reason="runtime missing",
        )

        assert obs.check_started[0].sample_id == "a.md:3"
        assert obs.check_retried[0].backoff_seconds == 0.5
        assert obs.check_completed[0].reason == "output_mismatch"
        assert obs.check_aborted[0].sample_id == "a.md:5"

    def test_empty_composite_is_a_no_op(self) -> None:
        _make_composite().verification_completed(
            run_id="r", total_checks=0, elapsed_seconds=0.0
        )
