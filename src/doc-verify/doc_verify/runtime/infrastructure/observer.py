"""Structlog implementation of the RuntimeObserver port."""

import structlog


class StructlogRuntimeObserver:
    """Delegates runtime domain events to structlog.

    Satisfies the RuntimeObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def evaluation_started(self, runtime: str, sample_id: str) -> None:
        self._log.debug("runtime.evaluation_started", runtime=runtime, sample_id=sample_id)

    def evaluation_completed(
        self, runtime: str, sample_id: str, exit_code: int, duration_ms: int
    ) -> None:
        self._log.debug(
            "runtime.evaluation_completed",
            runtime=runtime,
            sample_id=sample_id,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )

    def evaluation_timed_out(
        self, runtime: str, sample_id: str, timeout_seconds: float
    ) -> None:
        self._log.warning(
            "runtime.evaluation_timed_out",
            runtime=runtime,
            sample_id=sample_id,
            timeout_seconds=timeout_seconds,
        )

    def evaluation_spawn_failed(self, runtime: str, sample_id: str, reason: str) -> None:
        self._log.error(
            "runtime.evaluation_spawn_failed",
            runtime=runtime,
            sample_id=sample_id,
            reason=reason,
        )
