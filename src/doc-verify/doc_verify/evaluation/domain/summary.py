"""RunSummary — the aggregate result of a completed verification run."""

from pydantic import BaseModel, Field

from doc_verify.evaluation.domain.check import SampleCheck


class RunSummary(BaseModel, frozen=True):
    """Immutable summary returned when a verification run completes.

    Captures the run identity, the hash of the article text that was checked,
    the configuration name, and every individual SampleCheck executed.
    """

    run_id: str = Field(min_length=1)
    articles_sha256: str = Field(min_length=1)
    config_name: str = Field(min_length=1)
    total_articles: int = Field(ge=0)
    checks: list[SampleCheck]
