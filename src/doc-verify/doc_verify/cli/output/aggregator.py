"""Aggregator — folds the SampleChecks of a run into one report record per sample."""

from dataclasses import dataclass

from doc_verify.evaluation.domain.check import SampleCheck
from doc_verify.evaluation.domain.outcome import CheckResult, Outcome, Reason
from doc_verify.evaluation.domain.summary import RunSummary
from doc_verify.extraction.domain.sample import Sample


@dataclass(frozen=True)
class SampleReport:
    """The terminal outcome of one sample across all of its repetitions."""

    sample: Sample
    result: CheckResult
    repetitions: int

    @property
    def sample_id(self) -> str:
        return self.sample.sample_id


@dataclass(frozen=True)
class Report:
    """Per-sample outcomes of one run, in document order."""

    run_id: str
    config_name: str
    articles_sha256: str
    total_articles: int
    samples: list[SampleReport]

    def count(self, outcome: Outcome) -> int:
        return sum(1 for s in self.samples if s.result.outcome is outcome)

    @property
    def passed(self) -> int:
        return self.count(Outcome.PASS)

    @property
    def failed(self) -> int:
        return self.count(Outcome.FAIL)

    @property
    def skipped(self) -> int:
        return self.count(Outcome.SKIPPED)

    @property
    def ok(self) -> bool:
        """True when every sample passed or was skipped."""
        return self.failed == 0


def _fold(checks: list[SampleCheck]) -> CheckResult:
    """Collapse the repetitions of one sample into a single result.

    Identical outcomes keep the first repetition's result (the first failing
    one, for failures). Differing outcomes fail the sample as nondeterministic.
    """
    ordered = sorted(checks, key=lambda c: c.repetition_index)
    outcomes = [c.result.outcome for c in ordered]
    if len(set(outcomes)) == 1:
        return ordered[0].result

    first_fail = next(
        (c.result for c in ordered if c.result.outcome is not Outcome.PASS),
        ordered[0].result,
    )
    seen = ", ".join(outcome.value for outcome in outcomes)
    return CheckResult(
        outcome=Outcome.FAIL,
        reason=Reason.NONDETERMINISTIC,
        message=f"outcome differed across {len(ordered)} repetitions: {seen}",
        expected=first_fail.expected,
        actual=first_fail.actual,
        diff=first_fail.diff,
        duration_ms=max(c.result.duration_ms for c in ordered),
    )


def aggregate(summary: RunSummary) -> Report:
    """Group a run's checks by sample id and fold each group into a SampleReport.

    Preserves the order in which samples first appear in the summary.
    """
    groups: dict[str, list[SampleCheck]] = {}
    for check in summary.checks:
        groups.setdefault(check.sample.sample_id, []).append(check)

    samples = [
        SampleReport(sample=group[0].sample, result=_fold(group), repetitions=len(group))
        for group in groups.values()
    ]
    return Report(
        run_id=summary.run_id,
        config_name=summary.config_name,
        articles_sha256=summary.articles_sha256,
        total_articles=summary.total_articles,
        samples=samples,
    )
