"""CLI entrypoint for doc-verify — typer app that checks the code samples of Markdown articles."""

import asyncio
import sys
import time
from pathlib import Path

import structlog
import typer
from pydantic import ValidationError

from doc_verify.article.infrastructure.filesystem_loader import FilesystemArticleLoader
from doc_verify.article.infrastructure.observer import StructlogArticleObserver
from doc_verify.cli.output.aggregator import Report, SampleReport, aggregate
from doc_verify.cli.output.report_writer import write_report
from doc_verify.config.domain.config import VerifyConfig
from doc_verify.config.infrastructure.errors import ConfigValidationError
from doc_verify.config.infrastructure.observer import StructlogConfigObserver
from doc_verify.config.infrastructure.yaml_loader import YamlConfigLoader
from doc_verify.core.errors import DocVerifyError
from doc_verify.evaluation.application.runner import VerificationRunner
from doc_verify.evaluation.domain.observer import VerificationObserver
from doc_verify.evaluation.domain.outcome import Outcome
from doc_verify.evaluation.domain.summary import RunSummary
from doc_verify.evaluation.infrastructure.composite_observer import (
    CompositeVerificationObserver,
)
from doc_verify.evaluation.infrastructure.observer import StructlogVerificationObserver
from doc_verify.evaluation.infrastructure.progress_observer import (
    ProgressVerificationObserver,
)
from doc_verify.extraction.domain.sample import Sample
from doc_verify.extraction.infrastructure.markdown import MarkdownSampleExtractor
from doc_verify.extraction.infrastructure.observer import StructlogExtractionObserver
from doc_verify.runtime.infrastructure.factory import SubprocessEvaluatorFactory
from doc_verify.runtime.infrastructure.observer import StructlogRuntimeObserver

app = typer.Typer(add_completion=False)

_REPORT_FORMATS = ("json", "jsonl")


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def _apply_overrides(
    config: VerifyConfig,
    concurrency: int | None,
    timeout: float | None,
    repetitions: int | None,
    capabilities: list[str],
) -> VerifyConfig:
    """Return config with command-line settings layered over it, revalidated.

    Raises:
        ConfigValidationError: if an override violates the schema.
    """
    execution = config.execution.model_dump()
    if concurrency is not None:
        execution["max_concurrent"] = concurrency
    if timeout is not None:
        execution["timeout_seconds"] = timeout
    if repetitions is not None:
        execution["num_repetitions"] = repetitions

    data = config.model_dump()
    data["execution"] = execution
    data["capabilities"] = [*config.capabilities, *capabilities]
    try:
        return VerifyConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_WHITE = "\033[97m"

_OUTCOME_COLORS: dict[Outcome, str] = {
    Outcome.PASS: _GREEN,
    Outcome.FAIL: _RED,
    Outcome.SKIPPED: _YELLOW,
}

# Failures listed in full before the rest are only counted.
_MAX_FAILURES_SHOWN = 20


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _format_elapsed(elapsed_seconds: float) -> str:
    """Format elapsed seconds as '1m 23.4s' or '5.2s'."""
    minutes, seconds = divmod(elapsed_seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def _color_diff_line(line: str) -> str:
    if line.startswith(("+++", "---")):
        return f"{_DIM}{line}{_RESET}"
    if line.startswith("+"):
        return f"{_GREEN}{line}{_RESET}"
    if line.startswith("-"):
        return f"{_RED}{line}{_RESET}"
    if line.startswith("@@"):
        return f"{_CYAN}{line}{_RESET}"
    return line


def _print_failure(sample: SampleReport) -> None:
    result = sample.result
    reason = result.reason.value if result.reason else "failed"
    typer.echo("")
    typer.echo(
        f"  {_RED}{_BOLD}✗ {sample.sample_id}{_RESET}"
        f"  {_DIM}[{sample.sample.language}] {reason}{_RESET}"
    )
    for line in result.message.splitlines():
        typer.echo(f"    {line}")
    if result.diff:
        for line in result.diff.splitlines():
            typer.echo(f"    {_color_diff_line(line)}")


def _print_skipped(skipped: list[SampleReport]) -> None:
    by_reason: dict[str, int] = {}
    for sample in skipped:
        reason = sample.result.reason.value if sample.result.reason else "skipped"
        by_reason[reason] = by_reason.get(reason, 0) + 1
    typer.echo("")
    typer.echo(f"  {_YELLOW}{_BOLD}Skipped  ({len(skipped)} total){_RESET}")
    for reason, count in sorted(by_reason.items()):
        typer.echo(f"  {_DIM}{reason:<24}{_RESET}  {count}")


def _print_summary(
    summary: RunSummary,
    report: Report,
    elapsed_seconds: float,
    output_path: Path | None,
) -> None:
    """Print a colorized summary to stdout: run metadata, counts, then failures with diffs."""
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  doc-verify  ·  Run Complete{_RESET}")
    _rule(color=_CYAN)
    typer.echo("")

    meta_rows: list[tuple[str, str]] = [
        ("Run ID", f"{summary.run_id[:8]}-..."),
        ("Config", summary.config_name),
        ("Articles SHA256", f"{summary.articles_sha256[:16]}..."),
        ("Articles", str(summary.total_articles)),
        ("Samples", str(len(report.samples))),
        ("Total checks", str(len(summary.checks))),
        ("Elapsed", _format_elapsed(elapsed_seconds=elapsed_seconds)),
    ]
    if output_path is not None:
        meta_rows.append(("Report", str(output_path)))
    label_w = max(len(label) for label, _ in meta_rows)
    for label, value in meta_rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")

    typer.echo("")
    for outcome, count in (
        (Outcome.PASS, report.passed),
        (Outcome.FAIL, report.failed),
        (Outcome.SKIPPED, report.skipped),
    ):
        color = _OUTCOME_COLORS[outcome] if count else _DIM
        typer.echo(f"  {color}{outcome.value:<{label_w}}  {count}{_RESET}")

    failures = [s for s in report.samples if s.result.outcome is Outcome.FAIL]
    for sample in failures[:_MAX_FAILURES_SHOWN]:
        _print_failure(sample=sample)
    if len(failures) > _MAX_FAILURES_SHOWN:
        typer.echo("")
        typer.echo(
            f"  {_DIM}… and {len(failures) - _MAX_FAILURES_SHOWN} more"
            f" failures, see the report file{_RESET}"
        )

    skipped = [s for s in report.samples if s.result.outcome is Outcome.SKIPPED]
    if skipped:
        _print_skipped(skipped=skipped)

    typer.echo("")
    verdict = (
        f"{_GREEN}{_BOLD}All samples passed or were skipped.{_RESET}"
        if report.ok
        else f"{_RED}{_BOLD}{report.failed} sample(s) failed.{_RESET}"
    )
    typer.echo(f"  {verdict}")
    _rule(color=_CYAN)
    typer.echo("")


def _print_samples(samples: list[Sample]) -> None:
    """List extracted samples, one per line, without running them."""
    for sample in samples:
        flags: list[str] = []
        if sample.skip:
            flags.append("skip")
        if sample.expectation.is_empty:
            flags.append("no-expectation")
        if sample.requires:
            flags.append("requires=" + ",".join(sorted(sample.requires)))
        suffix = f"  {_DIM}{' '.join(flags)}{_RESET}" if flags else ""
        typer.echo(f"{sample.sample_id}  {_CYAN}{sample.language}{_RESET}{suffix}")
    typer.echo(f"{_DIM}{len(samples)} sample(s){_RESET}")


@app.command()
def verify(
    paths: list[Path] = typer.Argument(
        ..., help="Markdown articles, or directories searched recursively"
    ),
    concurrency: int | None = typer.Option(
        None, "--concurrency", "-j", min=1, help="Samples evaluated at once"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", help="Optional YAML config file"
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Per-sample timeout in seconds"
    ),
    repetitions: int | None = typer.Option(
        None, "--repetitions", min=1, help="Times each sample is run"
    ),
    capabilities: list[str] | None = typer.Option(
        None,
        "--capability",
        help="Capability the environment provides (repeatable), e.g. 'dom'",
    ),
    match: str | None = typer.Option(
        None, "--match", help="Only check samples whose id matches this glob"
    ),
    list_only: bool = typer.Option(
        False, "--list", help="List extracted samples without running them"
    ),
    output_path: Path | None = typer.Option(
        None, "--output", "-o", help="Write the report to this file"
    ),
    report_format: str = typer.Option(
        "json", "--format", help="Report file format: 'json' or 'jsonl'"
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Check that the code samples in Markdown articles produce their documented output."""
    try:
        _configure_structlog(log_format=log_format)
        if report_format not in _REPORT_FORMATS:
            typer.echo(
                f"Invalid report format: {report_format!r}. Must be 'json' or 'jsonl'."
            )
            raise typer.Exit(code=1)

        loader = YamlConfigLoader(observer=StructlogConfigObserver())
        config = _apply_overrides(
            config=loader.load(path=config_path),
            concurrency=concurrency,
            timeout=timeout,
            repetitions=repetitions,
            capabilities=capabilities or [],
        )

        observers: list[VerificationObserver] = [StructlogVerificationObserver()]
        if log_format != "json" and not list_only:
            observers.append(ProgressVerificationObserver())

        runner = VerificationRunner(
            config=config,
            article_loader=FilesystemArticleLoader(observer=StructlogArticleObserver()),
            extractor=MarkdownSampleExtractor(
                runtimes=config.runtimes,
                observer=StructlogExtractionObserver(),
            ),
            evaluator_factory=SubprocessEvaluatorFactory(
                runtimes=config.runtimes,
                timeout_seconds=config.execution.timeout_seconds,
                observer=StructlogRuntimeObserver(),
            ),
            observer=CompositeVerificationObserver(observers=observers),
        )

        if list_only:
            _, samples = runner.collect(paths=paths, match=match)
            _print_samples(samples=samples)
            return

        started_at = time.monotonic()
        summary = asyncio.run(runner.run(paths=paths, match=match))
        elapsed_seconds = time.monotonic() - started_at

        report = aggregate(summary=summary)
        written: Path | None = None
        if output_path is not None:
            written = write_report(report=report, path=output_path, fmt=report_format)

        _print_summary(
            summary=summary,
            report=report,
            elapsed_seconds=elapsed_seconds,
            output_path=written,
        )
        if not report.ok:
            raise typer.Exit(code=1)

    except KeyboardInterrupt:
        typer.echo("Verification interrupted.")
        sys.exit(1)
    except DocVerifyError as exc:
        typer.echo(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    app()
