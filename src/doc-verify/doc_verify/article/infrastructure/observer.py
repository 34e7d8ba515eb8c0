"""Structlog implementation of the ArticleObserver port."""

import structlog


class StructlogArticleObserver:
    """Delegates article domain events to structlog.

    Satisfies the ArticleObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def articles_loading_started(self, paths: list[str], patterns: list[str]) -> None:
        self._log.info("articles.loading_started", paths=paths, patterns=patterns)

    def article_loaded(self, name: str, size_bytes: int) -> None:
        self._log.debug("articles.article_loaded", name=name, size_bytes=size_bytes)

    def articles_loading_completed(self, total_articles: int) -> None:
        self._log.info("articles.loading_completed", total_articles=total_articles)

    def articles_loading_failed(self, reason: str) -> None:
        self._log.error("articles.loading_failed", reason=reason)
