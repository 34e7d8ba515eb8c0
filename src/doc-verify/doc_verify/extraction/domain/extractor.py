"""SampleExtractor Protocol — structural interface for turning article text into samples."""

from collections.abc import Iterator
from typing import Protocol

from doc_verify.article.domain.article import Article
from doc_verify.extraction.domain.sample import Sample


class SampleExtractor(Protocol):
    """Yields the samples of one article lazily, in document order.

    Calling extract() again on the same article must yield an equal sequence.
    """

    def extract(self, article: Article) -> Iterator[Sample]: ...
