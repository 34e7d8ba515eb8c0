"""Observer port for the extraction domain — defines events in domain language."""

from typing import Protocol


class ExtractionObserver(Protocol):
    def extraction_started(self, article: str) -> None: ...

    def sample_extracted(self, sample_id: str, language: str, has_expectation: bool) -> None: ...

    def extraction_malformed(self, article: str, line: int, reason: str) -> None: ...

    def extraction_completed(self, article: str, total_samples: int) -> None: ...
