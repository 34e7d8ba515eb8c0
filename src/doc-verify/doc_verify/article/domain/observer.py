"""Observer port for the article domain — defines events in domain language."""

from typing import Protocol


class ArticleObserver(Protocol):
    def articles_loading_started(self, paths: list[str], patterns: list[str]) -> None: ...

    def article_loaded(self, name: str, size_bytes: int) -> None: ...

    def articles_loading_completed(self, total_articles: int) -> None: ...

    def articles_loading_failed(self, reason: str) -> None: ...
