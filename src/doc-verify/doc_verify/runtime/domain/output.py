"""EvaluationOutput value object — what one sample evaluation produced."""

from pydantic import BaseModel, ConfigDict


class EvaluationOutput(BaseModel, frozen=True):
    """Immutable capture of a finished evaluation: its streams and exit status."""

    model_config = ConfigDict(frozen=True)

    stdout: str
    stderr: str
    exit_code: int
    duration_ms: int

    @property
    def threw(self) -> bool:
        return self.exit_code != 0
