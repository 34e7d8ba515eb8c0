"""Tests for cli/output/report_writer.py — JSON and JSONL report records."""

import json
from pathlib import Path

from doc_verify.cli.output.aggregator import Report, SampleReport
from doc_verify.cli.output.report_writer import (
    SCHEMA_VERSION,
    build_report_json,
    build_report_jsonl_lines,
    write_report,
)
from doc_verify.evaluation.domain.outcome import CheckResult, Outcome, Reason
from doc_verify.extraction.domain.sample import Expectation, Sample


def _make_report() -> Report:
    passed = Sample(
        sample_id="guide.md:3",
        article="guide.md",
        line=3,
        language="javascript",
        source="2 + 2\n",
        expectation=Expectation(lines=["4"]),
    )
    failed = Sample(
        sample_id="guide.md:9",
        article="guide.md",
        line=9,
        language="python",
        source="print(5)\n",
        expectation=Expectation(lines=["4"]),
        requires=frozenset({"net", "dom"}),
    )
    return Report(
        run_id="run-1",
        config_name="docs",
        articles_sha256="abc",
        total_articles=1,
        samples=[
            SampleReport(
                sample=passed,
                result=CheckResult(outcome=Outcome.PASS, expected="4", actual="4"),
                repetitions=1,
            ),
            SampleReport(
                sample=failed,
                result=CheckResult(
                    outcome=Outcome.FAIL,
                    reason=Reason.OUTPUT_MISMATCH,
                    message="output differs",
                    expected="4",
                    actual="5",
                    diff="--- expected\n+++ actual\n@@ -1 +1 @@\n-4\n+5",
                ),
                repetitions=1,
            ),
        ],
    )


class TestBuildReportJson:
    def test_totals(self) -> None:
        data = build_report_json(_make_report())

        assert data["schema_version"] == SCHEMA_VERSION
        assert data["totals"] == {"samples": 2, "passed": 1, "failed": 1, "skipped": 0}
        assert data["ok"] is False

    def test_sample_records_carry_id_outcome_expected_actual_message(self) -> None:
        record = build_report_json(_make_report())["samples"][1]

        assert record["id"] == "guide.md:9"
        assert record["outcome"] == "fail"
        assert record["reason"] == "output_mismatch"
        assert record["expected"] == "4"
        assert record["actual"] == "5"
        assert record["message"] == "output differs"
        assert record["requires"] == ["dom", "net"]

    def test_passing_record_has_no_reason_or_diff(self) -> None:
        record = build_report_json(_make_report())["samples"][0]
        assert record["reason"] is None
        assert record["diff"] is None

    def test_is_json_serializable(self) -> None:
        json.dumps(build_report_json(_make_report()))


class TestBuildReportJsonl:
    def test_one_line_per_sample(self) -> None:
        lines = build_report_jsonl_lines(_make_report())
        assert [line["id"] for line in lines] == ["guide.md:3", "guide.md:9"]


class TestWriteReport:
    def test_writes_json_document(self, tmp_path: Path) -> None:
        path = write_report(_make_report(), path=tmp_path / "out" / "report.json", fmt="json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["run_id"] == "run-1"

    def test_writes_jsonl_lines(self, tmp_path: Path) -> None:
        path = write_report(_make_report(), path=tmp_path / "report.jsonl", fmt="jsonl")

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert json.loads(lines[1])["outcome"] == "fail"
