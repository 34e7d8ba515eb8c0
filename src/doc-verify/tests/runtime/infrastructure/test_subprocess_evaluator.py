"""Tests for SubprocessEvaluator, using the built-in Python runtime."""

import pytest

from doc_verify.config.domain.runtime import RuntimeConfig
from doc_verify.runtime.infrastructure.drivers import python_command
from doc_verify.runtime.infrastructure.errors import (
    EvaluationTimeoutError,
    RuntimeNotConfiguredError,
    RuntimeNotFoundError,
)
from doc_verify.runtime.infrastructure.factory import SubprocessEvaluatorFactory
from doc_verify.runtime.infrastructure.subprocess_evaluator import SubprocessEvaluator
from tests.runtime.fake_observer import FakeRuntimeObserver


def _python_runtime(env: dict[str, str] | None = None) -> RuntimeConfig:
    return RuntimeConfig(
        command=python_command(),
        aliases=["py"],
        comment_prefix="#",
        env=env or {},
    )


def _make_evaluator(
    config: RuntimeConfig | None = None,
    timeout_seconds: float = 10.0,
    observer: FakeRuntimeObserver | None = None,
) -> SubprocessEvaluator:
    return SubprocessEvaluator(
        runtime="python",
        config=config or _python_runtime(),
        sample_id="guide.md:3",
        timeout_seconds=timeout_seconds,
        observer=observer or FakeRuntimeObserver(),
    )


class TestEvaluation:
    """Samples run in a fresh process and their streams are captured."""

    async def test_print_is_captured(self) -> None:
        output = await _make_evaluator().evaluate("print(2 + 2)\n")

        assert output.stdout == "4\n"
        assert output.exit_code == 0
        assert output.threw is False

    async def test_trailing_expression_is_echoed(self) -> None:
        output = await _make_evaluator().evaluate("2 + 2  # => 4\n")
        assert output.stdout == "4\n"

    async def test_trailing_none_is_not_echoed(self) -> None:
        output = await _make_evaluator().evaluate("print('a')\n")
        assert output.stdout == "a\n"

    async def test_string_value_is_echoed_as_repr(self) -> None:
        output = await _make_evaluator().evaluate("'hi'\n")
        assert output.stdout == "'hi'\n"

    async def test_uncaught_error_sets_exit_code_and_stderr(self) -> None:
        output = await _make_evaluator().evaluate("1 / 0\n")

        assert output.threw is True
        assert "ZeroDivisionError: division by zero" in output.stderr

    async def test_evaluations_share_no_bindings(self) -> None:
        first = _make_evaluator()
        second = _make_evaluator()

        await first.evaluate("leaked = 1\n")
        output = await second.evaluate("print(leaked)\n")

        assert output.threw is True
        assert "NameError" in output.stderr

    async def test_runtime_env_is_applied(self) -> None:
        evaluator = _make_evaluator(config=_python_runtime(env={"DV_GREETING": "hey"}))
        output = await evaluator.evaluate("import os\nprint(os.environ['DV_GREETING'])\n")
        assert output.stdout == "hey\n"

    async def test_emits_started_and_completed(self) -> None:
        observer = FakeRuntimeObserver()
        await _make_evaluator(observer=observer).evaluate("print(1)\n")

        assert observer.started[0].sample_id == "guide.md:3"
        assert observer.completed[0].exit_code == 0


class TestTimeout:
    """A sample outliving the timeout is killed and reported."""

    async def test_sleeping_sample_times_out(self) -> None:
        observer = FakeRuntimeObserver()
        evaluator = _make_evaluator(timeout_seconds=0.5, observer=observer)

        with pytest.raises(EvaluationTimeoutError) as exc_info:
            await evaluator.evaluate("import time\ntime.sleep(30)\n")

        assert exc_info.value.timeout_seconds == 0.5
        assert len(observer.timed_out) == 1
        assert observer.completed == []

    async def test_infinite_loop_times_out(self) -> None:
        evaluator = _make_evaluator(timeout_seconds=0.5)
        with pytest.raises(EvaluationTimeoutError):
            await evaluator.evaluate("while True:\n    pass\n")


class TestSpawnFailures:
    """A missing executable is a fatal RuntimeNotFoundError."""

    async def test_missing_executable_raises_runtime_not_found(self) -> None:
        observer = FakeRuntimeObserver()
        config = RuntimeConfig(
            command=["doc-verify-no-such-interpreter", "-c", "pass"],
            aliases=["py"],
            comment_prefix="#",
        )
        evaluator = _make_evaluator(config=config, observer=observer)

        with pytest.raises(RuntimeNotFoundError) as exc_info:
            await evaluator.evaluate("print(1)\n")

        assert exc_info.value.executable == "doc-verify-no-such-interpreter"
        assert exc_info.value.retriable is False
        assert len(observer.spawn_failed) == 1


class TestSubprocessEvaluatorFactory:
    """The factory builds evaluators for configured runtimes only."""

    def test_creates_evaluator_for_configured_runtime(self) -> None:
        factory = SubprocessEvaluatorFactory(
            runtimes={"python": _python_runtime()},
            timeout_seconds=1.0,
            observer=FakeRuntimeObserver(),
        )
        evaluator = factory.create(runtime="python", sample_id="a.md:1")
        assert isinstance(evaluator, SubprocessEvaluator)

    def test_unknown_runtime_raises(self) -> None:
        factory = SubprocessEvaluatorFactory(
            runtimes={"python": _python_runtime()},
            timeout_seconds=1.0,
            observer=FakeRuntimeObserver(),
        )
        with pytest.raises(RuntimeNotConfiguredError):
            factory.create(runtime="ruby", sample_id="a.md:1")
