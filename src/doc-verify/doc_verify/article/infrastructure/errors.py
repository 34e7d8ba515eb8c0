"""Error types raised by article infrastructure."""

from pathlib import Path

from doc_verify.core.errors import DocVerifyError


class ArticleNotFoundError(DocVerifyError):
    """Raised when an input path does not exist. Fatal: nothing is checked."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to load articles: path does not exist: {path}")


class ArticleReadError(DocVerifyError):
    """Raised when an article exists but cannot be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to read article {path}: {reason}")
