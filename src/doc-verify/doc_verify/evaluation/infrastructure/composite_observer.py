"""CompositeVerificationObserver — fans out all events to a list of observers."""

from doc_verify.evaluation.domain.observer import VerificationObserver


class CompositeVerificationObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from VerificationObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[VerificationObserver]) -> None:
        self._observers = observers

    def verification_started(
        self,
        run_id: str,
        total_samples: int,
        runtime_names: list[str],
        samples_per_runtime: dict[str, int],
        num_repetitions: int,
        max_concurrent: int,
    ) -> None:
        for obs in self._observers:
            obs.verification_started(
                run_id=run_id,
                total_samples=total_samples,
                runtime_names=runtime_names,
                samples_per_runtime=samples_per_runtime,
                num_repetitions=num_repetitions,
                max_concurrent=max_concurrent,
            )

    def verification_completed(
        self, run_id: str, total_checks: int, elapsed_seconds: float
    ) -> None:
        for obs in self._observers:
            obs.verification_completed(
                run_id=run_id,
                total_checks=total_checks,
                elapsed_seconds=elapsed_seconds,
            )

    def verification_progress(
        self, run_id: str, runtime: str, completed: int, total: int
    ) -> None:
        for obs in self._observers:
            obs.verification_progress(
                run_id=run_id, runtime=runtime, completed=completed, total=total
            )

    def sample_check_started(
        self, run_id: str, sample_id: str, runtime: str, repetition_index: int
    ) -> None:
        for obs in self._observers:
            obs.sample_check_started(
                run_id=run_id,
                sample_id=sample_id,
                runtime=runtime,
                repetition_index=repetition_index,
            )

    def sample_check_completed(
        self,
        run_id: str,
        sample_id: str,
        runtime: str,
        repetition_index: int,
        outcome: str,
        reason: str | None,
    ) -> None:
        for obs in self._observers:
            obs.sample_check_completed(
                run_id=run_id,
                sample_id=sample_id,
                runtime=runtime,
                repetition_index=repetition_index,
                outcome=outcome,
                reason=reason,
            )

    def sample_check_aborted(
        self,
        run_id: str,
        sample_id: str,
        runtime: str,
        repetition_index: int,
        reason: str,
    ) -> None:
        for obs in self._observers:
            obs.sample_check_aborted(
                run_id=run_id,
                sample_id=sample_id,
                runtime=runtime,
                repetition_index=repetition_index,
                reason=reason,
            )

    def sample_check_retry(
        self,
        run_id: str,
        sample_id: str,
        runtime: str,
        repetition_index: int,
        attempt: int,
        reason: str,
        backoff_seconds: float,
    ) -> None:
        for obs in self._observers:
            obs.sample_check_retry(
                run_id=run_id,
                sample_id=sample_id,
                runtime=runtime,
                repetition_index=repetition_index,
                attempt=attempt,
                reason=reason,
                backoff_seconds=backoff_seconds,
            )
