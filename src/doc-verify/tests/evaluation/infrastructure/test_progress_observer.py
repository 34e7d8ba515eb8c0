"""Tests for ProgressVerificationObserver (rendering disabled)."""

from doc_verify.evaluation.infrastructure.progress_observer import (
    ProgressVerificationObserver,
)


def _started(observer: ProgressVerificationObserver) -> None:
    observer.verification_started(
        run_id="r",
        total_samples=3,
        runtime_names=["javascript", "python"],
        samples_per_runtime={"javascript": 2, "python": 1},
        num_repetitions=2,
        max_concurrent=4,
    )


def _completed(
    observer: ProgressVerificationObserver, runtime: str, outcome: str
) -> None:
    observer.sample_check_completed(
        run_id="r",
        sample_id="a.md:1",
        runtime=runtime,
        repetition_index=0,
        outcome=outcome,
        reason=None,
    )


class TestProgressVerificationObserverStarted:
    """verification_started sets up one row per runtime plus Overall."""

    def test_rows_for_each_runtime_and_overall(self) -> None:
        observer = ProgressVerificationObserver(disabled=True)
        _started(observer)
        assert set(observer.tallies) == {"javascript", "python", "Overall"}

    def test_no_rows_before_started(self) -> None:
        observer = ProgressVerificationObserver(disabled=True)
        assert observer.tallies == {}

    def test_rows_start_empty(self) -> None:
        observer = ProgressVerificationObserver(disabled=True)
        _started(observer)
        assert observer.tallies["Overall"] == {"pass": 0, "fail": 0, "skipped": 0}


class TestProgressVerificationObserverCompleted:
    """Each completed check is tallied on its runtime row and on Overall."""

    def test_completed_check_counts_on_runtime_and_overall(self) -> None:
        observer = ProgressVerificationObserver(disabled=True)
        _started(observer)

        _completed(observer, runtime="javascript", outcome="pass")
        _completed(observer, runtime="javascript", outcome="fail")
        _completed(observer, runtime="python", outcome="skipped")

        assert observer.tallies["javascript"] == {"pass": 1, "fail": 1, "skipped": 0}
        assert observer.tallies["python"] == {"pass": 0, "fail": 0, "skipped": 1}
        assert observer.tallies["Overall"] == {"pass": 1, "fail": 1, "skipped": 1}

    def test_unknown_runtime_only_counts_overall(self) -> None:
        observer = ProgressVerificationObserver(disabled=True)
        _started(observer)

        _completed(observer, runtime="ruby", outcome="pass")

        assert "ruby" not in observer.tallies
        assert observer.tallies["Overall"]["pass"] == 1

    def test_events_after_completion_do_not_fail(self) -> None:
        observer = ProgressVerificationObserver(disabled=True)
        _started(observer)
        observer.verification_completed(run_id="r", total_checks=6, elapsed_seconds=1.0)
        observer.sample_check_aborted(
            run_id="r",
            sample_id="a.md:1",
            runtime="python",
            repetition_index=0,
            reason="x",
        )
