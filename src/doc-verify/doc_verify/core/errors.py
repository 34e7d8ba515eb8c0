"""Base exception class for all doc-verify-specific errors."""


class DocVerifyError(Exception):
    """Base class for all doc-verify errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
