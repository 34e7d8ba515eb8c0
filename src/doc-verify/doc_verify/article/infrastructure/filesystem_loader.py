"""Filesystem article loader — resolves files and directories into Article objects."""

import hashlib
from pathlib import Path

from doc_verify.article.domain.article import Article
from doc_verify.article.domain.load_result import ArticleLoadResult
from doc_verify.article.domain.observer import ArticleObserver
from doc_verify.article.infrastructure.errors import (
    ArticleNotFoundError,
    ArticleReadError,
)
from doc_verify.config.domain.articles import ArticlesConfig


class FilesystemArticleLoader:
    """Loads articles from explicit files and from directories matched by glob patterns."""

    def __init__(self, observer: ArticleObserver) -> None:
        self._observer = observer

    def load(self, paths: list[Path], config: ArticlesConfig) -> ArticleLoadResult:
        """
        Resolve paths into articles, in a stable order.

        Every input path is checked before any file is read, so a typo in the
        last argument aborts the run before anything is processed.

        Raises:
            ArticleNotFoundError: if any input path does not exist.
            ArticleReadError: if a matched file cannot be read or decoded.
        """
        self._observer.articles_loading_started(
            paths=[str(p) for p in paths],
            patterns=config.patterns,
        )

        for path in paths:
            if not path.exists():
                error = ArticleNotFoundError(path=path)
                self._observer.articles_loading_failed(reason=str(error))
                raise error

        articles: list[Article] = []
        seen: set[Path] = set()
        for path, name in self._discover(paths=paths, patterns=config.patterns):
            resolved = path.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            articles.append(self._read(path=path, name=name, encoding=config.encoding))

        self._observer.articles_loading_completed(total_articles=len(articles))
        return ArticleLoadResult(articles=articles, sha256=_digest(articles=articles))

    def _discover(
        self, paths: list[Path], patterns: list[str]
    ) -> list[tuple[Path, str]]:
        """
        Expand directories into (path, display name) pairs; files pass through.

        A lone directory names its articles relative to itself. With several
        inputs every name keeps the input path as given, so articles with the
        same relative path under different directories stay distinct.
        """
        relative = len(paths) == 1
        found: list[tuple[Path, str]] = []
        for path in paths:
            if path.is_file():
                found.append((path, path.as_posix()))
                continue
            matches: set[Path] = set()
            for pattern in patterns:
                matches.update(p for p in path.rglob(pattern) if p.is_file())
            for match in sorted(matches):
                name = match.relative_to(path) if relative else match
                found.append((match, name.as_posix()))
        return found

    def _read(self, path: Path, name: str, encoding: str) -> Article:
        try:
            raw = path.read_bytes()
            text = raw.decode(encoding)
        except OSError as exc:
            error = ArticleReadError(path=path, reason=exc.strerror or str(exc))
            self._observer.articles_loading_failed(reason=str(error))
            raise error from exc
        except UnicodeDecodeError as exc:
            error = ArticleReadError(path=path, reason=f"not valid {encoding}")
            self._observer.articles_loading_failed(reason=str(error))
            raise error from exc

        self._observer.article_loaded(name=name, size_bytes=len(raw))
        return Article(path=path, name=name, text=text)


def _digest(articles: list[Article]) -> str:
    """SHA-256 over every article name and text, in load order."""
    hasher = hashlib.sha256()
    for article in articles:
        hasher.update(article.name.encode("utf-8"))
        hasher.update(b"\0")
        hasher.update(article.text.encode("utf-8"))
        hasher.update(b"\0")
    return hasher.hexdigest()
