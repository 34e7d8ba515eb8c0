"""FakeArticleLoader — in-memory ArticleLoader implementation for use in tests."""

from pathlib import Path

from doc_verify.article.domain.article import Article
from doc_verify.article.domain.load_result import ArticleLoadResult
from doc_verify.config.domain.articles import ArticlesConfig


class FakeArticleLoader:
    """Satisfies the ArticleLoader protocol. Returns canned articles and a fake SHA-256."""

    def __init__(self, articles: list[Article], sha256: str = "fake-sha256") -> None:
        self._articles = articles
        self._sha256 = sha256
        self.loaded_paths: list[list[Path]] = []

    def load(self, paths: list[Path], config: ArticlesConfig) -> ArticleLoadResult:
        self.loaded_paths.append(list(paths))
        return ArticleLoadResult(articles=self._articles, sha256=self._sha256)
