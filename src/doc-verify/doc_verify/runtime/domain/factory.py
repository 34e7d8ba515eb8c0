"""EvaluatorFactory Protocol — structural interface for constructing Evaluator instances."""

from typing import Protocol

from doc_verify.runtime.domain.evaluator import Evaluator


class EvaluatorFactory(Protocol):
    """Constructs a new Evaluator for a given (runtime, sample) pair."""

    def create(self, runtime: str, sample_id: str) -> Evaluator: ...
