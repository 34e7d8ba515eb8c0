"""Observer port for the runtime domain — defines events in domain language."""

from typing import Protocol


class RuntimeObserver(Protocol):
    def evaluation_started(self, runtime: str, sample_id: str) -> None: ...

    def evaluation_completed(
        self, runtime: str, sample_id: str, exit_code: int, duration_ms: int
    ) -> None: ...

    def evaluation_timed_out(
        self, runtime: str, sample_id: str, timeout_seconds: float
    ) -> None: ...

    def evaluation_spawn_failed(self, runtime: str, sample_id: str, reason: str) -> None: ...
