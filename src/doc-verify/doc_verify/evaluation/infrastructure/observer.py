"""StructlogVerificationObserver — production observer that delegates to structlog."""

import structlog


class StructlogVerificationObserver:
    """Logs verification run events to structlog.

    Does NOT inherit from VerificationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def verification_started(
        self,
        run_id: str,
        total_samples: int,
        runtime_names: list[str],
        samples_per_runtime: dict[str, int],
        num_repetitions: int,
        max_concurrent: int,
    ) -> None:
        self._log.info(
            "verification.started",
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
        self._log.info(
            "verification.completed",
            run_id=run_id,
            total_checks=total_checks,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def verification_progress(
        self, run_id: str, runtime: str, completed: int, total: int
    ) -> None:
        self._log.debug(
            "verification.progress",
            run_id=run_id,
            runtime=runtime,
            completed=completed,
            total=total,
            percent=round(100.0 * completed / total, 1) if total else 0.0,
        )

    def sample_check_started(
        self, run_id: str, sample_id: str, runtime: str, repetition_index: int
    ) -> None:
        self._log.debug(
            "verification.sample_check.started",
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
        log = self._log.warning if outcome == "fail" else self._log.info
        log(
            "verification.sample_check.completed",
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
        self._log.error(
            "verification.sample_check.aborted",
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
        self._log.warning(
            "verification.sample_check.retry",
            run_id=run_id,
            sample_id=sample_id,
            runtime=runtime,
            repetition_index=repetition_index,
            attempt=attempt,
            reason=reason,
            backoff_seconds=backoff_seconds,
        )
