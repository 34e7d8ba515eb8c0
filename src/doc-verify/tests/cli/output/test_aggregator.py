"""Tests for cli/output/aggregator.py — aggregate() function."""

from doc_verify.cli.output.aggregator import aggregate
from doc_verify.evaluation.domain.check import SampleCheck
from doc_verify.evaluation.domain.outcome import CheckResult, Outcome, Reason
from doc_verify.evaluation.domain.summary import RunSummary
from doc_verify.extraction.domain.sample import Expectation, Sample


def _make_sample(line: int, article: str = "a.md") -> Sample:
    return Sample(
        sample_id=f"{article}:{line}",
        article=article,
        line=line,
        language="javascript",
        source="1\n",
        expectation=Expectation(lines=["1"]),
    )


def _make_check(
    sample: Sample,
    repetition_index: int = 0,
    outcome: Outcome = Outcome.PASS,
    reason: Reason | None = None,
) -> SampleCheck:
    return SampleCheck(
        run_id="run-1",
        sample=sample,
        repetition_index=repetition_index,
        result=CheckResult(
            outcome=outcome,
            reason=reason,
            expected="1",
            actual="1" if outcome is Outcome.PASS else "2",
            duration_ms=10 + repetition_index,
        ),
    )


def _make_summary(checks: list[SampleCheck]) -> RunSummary:
    return RunSummary(
        run_id="run-1",
        articles_sha256="abc123",
        config_name="docs",
        total_articles=1,
        checks=checks,
    )


class TestAggregateGrouping:
    """One SampleReport per sample, in first-seen order."""

    def test_groups_repetitions_by_sample(self) -> None:
        s1, s2 = _make_sample(1), _make_sample(5)
        report = aggregate(
            _make_summary(
                [_make_check(s1, 0), _make_check(s1, 1), _make_check(s2, 0), _make_check(s2, 1)]
            )
        )

        assert [s.sample_id for s in report.samples] == ["a.md:1", "a.md:5"]
        assert [s.repetitions for s in report.samples] == [2, 2]

    def test_empty_summary(self) -> None:
        report = aggregate(_make_summary([]))
        assert report.samples == []
        assert report.ok is True


class TestAggregateOutcomes:
    """Identical outcomes are kept; differing ones are nondeterministic."""

    def test_consistent_failure_keeps_reason(self) -> None:
        s1 = _make_sample(1)
        report = aggregate(
            _make_summary(
                [
                    _make_check(s1, 0, Outcome.FAIL, Reason.OUTPUT_MISMATCH),
                    _make_check(s1, 1, Outcome.FAIL, Reason.OUTPUT_MISMATCH),
                ]
            )
        )
        assert report.samples[0].result.reason is Reason.OUTPUT_MISMATCH

    def test_differing_outcomes_fail_as_nondeterministic(self) -> None:
        s1 = _make_sample(1)
        report = aggregate(
            _make_summary(
                [
                    _make_check(s1, 0, Outcome.PASS),
                    _make_check(s1, 1, Outcome.FAIL, Reason.OUTPUT_MISMATCH),
                ]
            )
        )

        result = report.samples[0].result
        assert result.outcome is Outcome.FAIL
        assert result.reason is Reason.NONDETERMINISTIC
        assert result.actual == "2"
        assert "pass, fail" in result.message
        assert result.duration_ms == 11


class TestReportCounts:
    def test_counts_and_ok(self) -> None:
        report = aggregate(
            _make_summary(
                [
                    _make_check(_make_sample(1), outcome=Outcome.PASS),
                    _make_check(_make_sample(2), outcome=Outcome.SKIPPED, reason=Reason.NO_EXPECTATION),
                    _make_check(_make_sample(3), outcome=Outcome.FAIL, reason=Reason.EVALUATION_THREW),
                ]
            )
        )

        assert (report.passed, report.failed, report.skipped) == (1, 1, 1)
        assert report.ok is False

    def test_skipped_only_is_ok(self) -> None:
        report = aggregate(
            _make_summary(
                [_make_check(_make_sample(1), outcome=Outcome.SKIPPED, reason=Reason.MARKED_SKIP)]
            )
        )
        assert report.ok is True
