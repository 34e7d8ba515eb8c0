"""ArticleLoadResult — the articles found for a run, plus an integrity hash."""

from pydantic import BaseModel, Field

from doc_verify.article.domain.article import Article


class ArticleLoadResult(BaseModel, frozen=True):
    """Immutable value object returned by an ArticleLoader.

    Carries the loaded articles in a stable order and the SHA-256 hex digest
    over their names and bytes, so a report can record which exact text was
    checked.
    """

    articles: list[Article]
    sha256: str = Field(min_length=1)
