"""SubprocessEvaluatorFactory — constructs SubprocessEvaluator instances."""

from doc_verify.config.domain.runtime import RuntimeConfig
from doc_verify.runtime.domain.evaluator import Evaluator
from doc_verify.runtime.domain.observer import RuntimeObserver
from doc_verify.runtime.infrastructure.errors import RuntimeNotConfiguredError
from doc_verify.runtime.infrastructure.subprocess_evaluator import SubprocessEvaluator


class SubprocessEvaluatorFactory:
    """Creates SubprocessEvaluator instances for configured runtimes."""

    def __init__(
        self,
        runtimes: dict[str, RuntimeConfig],
        timeout_seconds: float,
        observer: RuntimeObserver,
    ) -> None:
        self._runtimes = runtimes
        self._timeout_seconds = timeout_seconds
        self._observer = observer

    def create(self, runtime: str, sample_id: str) -> Evaluator:
        """Construct a new SubprocessEvaluator for the given runtime and sample.

        Raises:
            RuntimeNotConfiguredError: if runtime names no configured runtime.
        """
        config = self._runtimes.get(runtime)
        if config is None:
            raise RuntimeNotConfiguredError(runtime=runtime)
        return SubprocessEvaluator(
            runtime=runtime,
            config=config,
            sample_id=sample_id,
            timeout_seconds=self._timeout_seconds,
            observer=self._observer,
        )
