"""Observer port for the verification run — defines events in domain language."""

from typing import Protocol


class VerificationObserver(Protocol):
    """Observer port emitting structured events during a verification run.

    Implementations may log to structlog, render progress, or record for tests.
    """

    def verification_started(
        self,
        run_id: str,
        total_samples: int,
        runtime_names: list[str],
        samples_per_runtime: dict[str, int],
        num_repetitions: int,
        max_concurrent: int,
    ) -> None: ...

    def verification_completed(
        self, run_id: str, total_checks: int, elapsed_seconds: float
    ) -> None: ...

    def verification_progress(
        self, run_id: str, runtime: str, completed: int, total: int
    ) -> None: ...

    def sample_check_started(
        self, run_id: str, sample_id: str, runtime: str, repetition_index: int
    ) -> None: ...

    def sample_check_completed(
        self,
        run_id: str,
        sample_id: str,
        runtime: str,
        repetition_index: int,
        outcome: str,
        reason: str | None,
    ) -> None: ...

    def sample_check_aborted(
        self,
        run_id: str,
        sample_id: str,
        runtime: str,
        repetition_index: int,
        reason: str,
    ) -> None: ...

    def sample_check_retry(
        self,
        run_id: str,
        sample_id: str,
        runtime: str,
        repetition_index: int,
        attempt: int,
        reason: str,
        backoff_seconds: float,
    ) -> None: ...
