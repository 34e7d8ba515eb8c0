"""Error types raised by runtime infrastructure."""

from doc_verify.core.errors import DocVerifyError


class EvaluationTimeoutError(DocVerifyError):
    """Raised when a sample runs past its timeout. The process group is killed first."""

    def __init__(self, sample_id: str, timeout_seconds: float) -> None:
        self.sample_id = sample_id
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Failed to evaluate sample '{sample_id}': timed out after"
            f" {timeout_seconds:g}s"
        )


class EvaluatorSpawnError(DocVerifyError):
    """Raised when the OS refuses to start an evaluation process. Retriable."""

    def __init__(self, runtime: str, reason: str) -> None:
        super().__init__(
            f"Failed to start runtime '{runtime}': {reason}",
            retriable=True,
        )


class RuntimeNotFoundError(DocVerifyError):
    """Raised when a runtime's executable does not exist. Aborts the run."""

    def __init__(self, runtime: str, executable: str) -> None:
        self.runtime = runtime
        self.executable = executable
        super().__init__(
            f"Failed to start runtime '{runtime}': executable not found: {executable}"
        )


class RuntimeNotConfiguredError(DocVerifyError):
    """Raised when an evaluator is requested for a runtime name with no config."""

    def __init__(self, runtime: str) -> None:
        super().__init__(
            f"Failed to create evaluator: runtime '{runtime}' is not configured"
        )
