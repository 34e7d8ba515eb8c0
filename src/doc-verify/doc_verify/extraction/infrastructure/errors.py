"""Error types raised by extraction infrastructure."""

from doc_verify.core.errors import DocVerifyError


class ExtractionMalformedError(DocVerifyError):
    """Raised for a fence that cannot be parsed. Recoverable: the block is skipped."""

    def __init__(self, article: str, line: int, reason: str) -> None:
        self.article = article
        self.line = line
        self.reason = reason
        super().__init__(f"Failed to extract sample at {article}:{line}: {reason}")
