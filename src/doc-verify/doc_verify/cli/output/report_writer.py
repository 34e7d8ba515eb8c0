"""Report serialization — JSON aggregate document and JSONL per-sample records."""

import json
from pathlib import Path
from typing import Any, TypeAlias

from doc_verify.cli.output.aggregator import Report, SampleReport

SCHEMA_VERSION = "doc_verify_report_1"

JsonRecord: TypeAlias = dict[str, Any]


def build_sample_record(report: Report, sample: SampleReport) -> JsonRecord:
    """One report record: id, outcome, expected, actual, message, plus context."""
    result = sample.result
    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": report.run_id,
        "id": sample.sample_id,
        "article": sample.sample.article,
        "line": sample.sample.line,
        "language": sample.sample.language,
        "outcome": result.outcome.value,
        "reason": result.reason.value if result.reason else None,
        "expected": result.expected,
        "actual": result.actual,
        "message": result.message,
        "diff": result.diff or None,
        "requires": sorted(sample.sample.requires),
        "repetitions": sample.repetitions,
        "duration_ms": result.duration_ms,
    }


def build_report_json(report: Report) -> JsonRecord:
    """The aggregate document: run metadata, counts, and every sample record."""
    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": report.run_id,
        "config_name": report.config_name,
        "articles_sha256": report.articles_sha256,
        "total_articles": report.total_articles,
        "totals": {
            "samples": len(report.samples),
            "passed": report.passed,
            "failed": report.failed,
            "skipped": report.skipped,
        },
        "ok": report.ok,
        "samples": [build_sample_record(report=report, sample=s) for s in report.samples],
    }


def build_report_jsonl_lines(report: Report) -> list[JsonRecord]:
    return [build_sample_record(report=report, sample=s) for s in report.samples]


def write_report(report: Report, path: Path, fmt: str) -> Path:
    """Write report to path as ``json`` or ``jsonl``; parent directories are created."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "jsonl":
        lines = build_report_jsonl_lines(report=report)
        path.write_text(
            "".join(json.dumps(line) + "\n" for line in lines),
            encoding="utf-8",
        )
    else:
        path.write_text(
            json.dumps(build_report_json(report=report), indent=2),
            encoding="utf-8",
        )
    return path
