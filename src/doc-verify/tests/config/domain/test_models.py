"""Tests for config domain models."""

import pytest
from pydantic import ValidationError

from doc_verify.config.domain.articles import ArticlesConfig
from doc_verify.config.domain.config import VerifyConfig
from doc_verify.config.domain.execution import ExecutionConfig, RetryConfig
from doc_verify.config.domain.runtime import RuntimeConfig


def _make_execution(timeout_seconds: float = 5.0) -> ExecutionConfig:
    return ExecutionConfig(
        max_concurrent=2,
        timeout_seconds=timeout_seconds,
        num_repetitions=1,
        retry=RetryConfig(
            max_attempts=3, initial_backoff_seconds=0.5, backoff_multiplier=2.0
        ),
    )


def _make_runtime(aliases: list[str]) -> RuntimeConfig:
    return RuntimeConfig(command=["node"], aliases=aliases, comment_prefix="//")


class TestVerifyConfig:
    def test_defaults_for_articles_and_capabilities(self) -> None:
        cfg = VerifyConfig(
            name="docs",
            version="1",
            runtimes={"javascript": _make_runtime(["js"])},
            execution=_make_execution(),
        )

        assert cfg.articles == ArticlesConfig()
        assert cfg.capabilities == []

    def test_requires_at_least_one_runtime(self) -> None:
        with pytest.raises(ValidationError):
            VerifyConfig(
                name="docs", version="1", runtimes={}, execution=_make_execution()
            )

    def test_alias_claimed_by_two_runtimes_is_rejected(self) -> None:
        with pytest.raises(ValidationError, match="claimed by runtimes"):
            VerifyConfig(
                name="docs",
                version="1",
                runtimes={
                    "javascript": _make_runtime(["js"]),
                    "deno": _make_runtime(["JS"]),
                },
                execution=_make_execution(),
            )

    def test_is_frozen(self) -> None:
        cfg = VerifyConfig(
            name="docs",
            version="1",
            runtimes={"javascript": _make_runtime(["js"])},
            execution=_make_execution(),
        )
        with pytest.raises(ValidationError):
            cfg.name = "other"  # type: ignore[misc]


class TestExecutionConfig:
    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            _make_execution(timeout_seconds=0)

    def test_repetitions_must_be_at_least_one(self) -> None:
        with pytest.raises(ValidationError):
            ExecutionConfig(
                max_concurrent=1,
                timeout_seconds=1,
                num_repetitions=0,
                retry=RetryConfig(
                    max_attempts=1, initial_backoff_seconds=0, backoff_multiplier=1
                ),
            )


class TestRuntimeConfig:
    def test_command_must_not_be_empty(self) -> None:
        with pytest.raises(ValidationError):
            RuntimeConfig(command=[], aliases=["js"], comment_prefix="//")
