"""Execution configuration models."""

from pydantic import BaseModel, Field


class RetryConfig(BaseModel, frozen=True):
    max_attempts: int = Field(ge=1)
    initial_backoff_seconds: float = Field(ge=0)
    backoff_multiplier: float = Field(ge=1)


class ExecutionConfig(BaseModel, frozen=True):
    max_concurrent: int = Field(ge=1)
    timeout_seconds: float = Field(gt=0)
    num_repetitions: int = Field(ge=1)
    retry: RetryConfig
