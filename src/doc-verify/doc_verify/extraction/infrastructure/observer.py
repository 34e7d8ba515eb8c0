"""Structlog implementation of the ExtractionObserver port."""

import structlog


class StructlogExtractionObserver:
    """Delegates extraction domain events to structlog.

    Satisfies the ExtractionObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def extraction_started(self, article: str) -> None:
        self._log.debug("extraction.started", article=article)

    def sample_extracted(self, sample_id: str, language: str, has_expectation: bool) -> None:
        self._log.debug(
            "extraction.sample_extracted",
            sample_id=sample_id,
            language=language,
            has_expectation=has_expectation,
        )

    def extraction_malformed(self, article: str, line: int, reason: str) -> None:
        self._log.warning(
            "extraction.malformed",
            article=article,
            line=line,
            reason=reason,
        )

    def extraction_completed(self, article: str, total_samples: int) -> None:
        self._log.info(
            "extraction.completed",
            article=article,
            total_samples=total_samples,
        )
