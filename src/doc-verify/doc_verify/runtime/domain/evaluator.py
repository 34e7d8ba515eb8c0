"""Evaluator Protocol — structural interface for all sample evaluation contexts."""

from typing import Protocol

from doc_verify.runtime.domain.output import EvaluationOutput


class Evaluator(Protocol):
    """Runs one sample's source in a fresh, isolated evaluation context.

    Each instance is constructed once per sample evaluation and shares no
    bindings with any other.
    """

    async def evaluate(self, source: str) -> EvaluationOutput: ...
