"""VerificationRunner — orchestrates the full load → extract → check loop."""

import asyncio
import fnmatch
import time
import uuid
from collections import Counter
from pathlib import Path

from doc_verify.article.domain.load_result import ArticleLoadResult
from doc_verify.article.domain.loader import ArticleLoader
from doc_verify.config.domain.config import VerifyConfig
from doc_verify.core.errors import DocVerifyError
from doc_verify.evaluation.application.checker import SampleChecker
from doc_verify.evaluation.domain.check import SampleCheck
from doc_verify.evaluation.domain.observer import VerificationObserver
from doc_verify.evaluation.domain.summary import RunSummary
from doc_verify.extraction.domain.extractor import SampleExtractor
from doc_verify.extraction.domain.sample import Sample
from doc_verify.runtime.domain.factory import EvaluatorFactory


class VerificationRunner:
    """Runs the full verification: loads articles, extracts samples, checks them.

    The runner holds no infrastructure of its own. It receives a loader, an
    extractor and an evaluator factory so that any of them can be replaced in
    tests without touching the orchestration.
    """

    def __init__(
        self,
        config: VerifyConfig,
        article_loader: ArticleLoader,
        extractor: SampleExtractor,
        evaluator_factory: EvaluatorFactory,
        observer: VerificationObserver,
    ) -> None:
        self._config = config
        self._article_loader = article_loader
        self._extractor = extractor
        self._checker = SampleChecker(
            evaluator_factory=evaluator_factory,
            capabilities=frozenset(cap.lower() for cap in config.capabilities),
        )
        self._observer = observer

    def collect(
        self, paths: list[Path], match: str | None = None
    ) -> tuple[ArticleLoadResult, list[Sample]]:
        """Load the articles under paths and extract their samples, in document order.

        ``match`` is an fnmatch pattern applied to sample ids.

        Raises:
            ArticleNotFoundError: if any input path does not exist.
        """
        load_result = self._article_loader.load(paths=paths, config=self._config.articles)
        samples = [
            sample
            for article in load_result.articles
            for sample in self._extractor.extract(article)
            if match is None or fnmatch.fnmatchcase(sample.sample_id, match)
        ]
        return load_result, samples

    async def run(self, paths: list[Path], match: str | None = None) -> RunSummary:
        """Execute the full verification and return a RunSummary.

        Every (sample, repetition_index) pair is checked concurrently, bounded
        by max_concurrent. Sample failures never abort the run; a
        non-retriable DocVerifyError (or one that exhausts its retries) does.
        Checks are sorted by (article, line, repetition_index) before returning.
        """
        run_id = str(uuid.uuid4())
        load_result, samples = self.collect(paths=paths, match=match)
        execution = self._config.execution

        per_runtime = Counter(sample.language for sample in samples)
        self._observer.verification_started(
            run_id=run_id,
            total_samples=len(samples),
            runtime_names=sorted(per_runtime),
            samples_per_runtime=dict(per_runtime),
            num_repetitions=execution.num_repetitions,
            max_concurrent=execution.max_concurrent,
        )
        started_at = time.monotonic()

        checks: list[SampleCheck] = []
        checks_lock = asyncio.Lock()
        sem = asyncio.Semaphore(execution.max_concurrent)
        total_checks = len(samples) * execution.num_repetitions
        completed_count: list[int] = [0]

        try:
            async with asyncio.TaskGroup() as tg:
                for sample in samples:
                    for repetition_index in range(execution.num_repetitions):
                        tg.create_task(
                            self._check_one(
                                sem=sem,
                                run_id=run_id,
                                sample=sample,
                                repetition_index=repetition_index,
                                checks=checks,
                                checks_lock=checks_lock,
                                total_checks=total_checks,
                                completed_count=completed_count,
                            )
                        )
        except* DocVerifyError as eg:
            # Observer was already told about each abort inside _check_one.
            raise eg.exceptions[0]

        checks.sort(
            key=lambda c: (c.sample.article, c.sample.line, c.repetition_index)
        )

        self._observer.verification_completed(
            run_id=run_id,
            total_checks=len(checks),
            elapsed_seconds=time.monotonic() - started_at,
        )

        return RunSummary(
            run_id=run_id,
            articles_sha256=load_result.sha256,
            config_name=self._config.name,
            total_articles=len(load_result.articles),
            checks=checks,
        )

    async def _check_one(
        self,
        sem: asyncio.Semaphore,
        run_id: str,
        sample: Sample,
        repetition_index: int,
        checks: list[SampleCheck],
        checks_lock: asyncio.Lock,
        total_checks: int,
        completed_count: list[int],
    ) -> None:
        """Check one (sample, repetition_index) pair with retry and backoff.

        The semaphore is held only while the sample is being evaluated; the
        backoff sleep between attempts happens outside it.
        """
        retry_cfg = self._config.execution.retry
        backoff = float(retry_cfg.initial_backoff_seconds)

        self._observer.sample_check_started(
            run_id=run_id,
            sample_id=sample.sample_id,
            runtime=sample.language,
            repetition_index=repetition_index,
        )

        for attempt in range(1, retry_cfg.max_attempts + 1):
            async with sem:
                try:
                    result = await self._checker.check(sample=sample)
                except DocVerifyError as exc:
                    if not exc.retriable or attempt == retry_cfg.max_attempts:
                        self._observer.sample_check_aborted(
                            run_id=run_id,
                            sample_id=sample.sample_id,
                            runtime=sample.language,
                            repetition_index=repetition_index,
                            reason=str(exc),
                        )
                        raise

                    self._observer.sample_check_retry(
                        run_id=run_id,
                        sample_id=sample.sample_id,
                        runtime=sample.language,
                        repetition_index=repetition_index,
                        attempt=attempt,
                        reason=str(exc),
                        backoff_seconds=backoff,
                    )
                else:
                    async with checks_lock:
                        checks.append(
                            SampleCheck(
                                run_id=run_id,
                                sample=sample,
                                repetition_index=repetition_index,
                                result=result,
                            )
                        )
                        completed_count[0] += 1
                        completed = completed_count[0]

                    self._observer.sample_check_completed(
                        run_id=run_id,
                        sample_id=sample.sample_id,
                        runtime=sample.language,
                        repetition_index=repetition_index,
                        outcome=result.outcome.value,
                        reason=result.reason.value if result.reason else None,
                    )
                    self._observer.verification_progress(
                        run_id=run_id,
                        runtime=sample.language,
                        completed=completed,
                        total=total_checks,
                    )
                    return
            # Semaphore released here; back off outside it.
            await asyncio.sleep(backoff)
            backoff *= retry_cfg.backoff_multiplier
