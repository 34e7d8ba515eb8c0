"""ArticleLoader Protocol — structural interface for resolving input paths to articles."""

from pathlib import Path
from typing import Protocol

from doc_verify.article.domain.load_result import ArticleLoadResult
from doc_verify.config.domain.articles import ArticlesConfig


class ArticleLoader(Protocol):
    """Loads every article named by paths (files, or directories searched recursively)."""

    def load(self, paths: list[Path], config: ArticlesConfig) -> ArticleLoadResult: ...
