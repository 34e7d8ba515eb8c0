"""SampleCheck — the result of a single (sample, repetition) check."""

from typing import TypeAlias

from pydantic import BaseModel

from doc_verify.evaluation.domain.outcome import CheckResult
from doc_verify.extraction.domain.sample import Sample

RunId: TypeAlias = str


class SampleCheck(BaseModel, frozen=True):
    """Immutable record of one complete check: sample evaluated and compared."""

    run_id: RunId
    sample: Sample
    repetition_index: int
    result: CheckResult
