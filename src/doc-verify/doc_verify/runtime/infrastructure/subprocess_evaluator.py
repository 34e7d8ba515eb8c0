"""SubprocessEvaluator — evaluates a sample in a fresh interpreter process."""

import asyncio
import contextlib
import os
import signal
import sys
import time

from doc_verify.config.domain.runtime import RuntimeConfig
from doc_verify.runtime.domain.observer import RuntimeObserver
from doc_verify.runtime.domain.output import EvaluationOutput
from doc_verify.runtime.infrastructure.errors import (
    EvaluationTimeoutError,
    EvaluatorSpawnError,
    RuntimeNotFoundError,
)


class SubprocessEvaluator:
    """Evaluator that pipes the sample source into a new runtime process.

    One instance is constructed per sample evaluation. The process is started
    in its own session so that a timeout or cancellation can kill everything
    the sample spawned, not only the interpreter.
    """

    def __init__(
        self,
        runtime: str,
        config: RuntimeConfig,
        sample_id: str,
        timeout_seconds: float,
        observer: RuntimeObserver,
    ) -> None:
        self._runtime = runtime
        self._config = config
        self._sample_id = sample_id
        self._timeout_seconds = timeout_seconds
        self._observer = observer

    async def evaluate(self, source: str) -> EvaluationOutput:
        """Run source to completion and capture its output.

        Raises:
            EvaluationTimeoutError: if the process outlives the timeout.
            RuntimeNotFoundError: if the runtime executable does not exist.
            EvaluatorSpawnError: if the OS fails to start the process.
        """
        self._observer.evaluation_started(runtime=self._runtime, sample_id=self._sample_id)
        started_at = time.monotonic()
        process = await self._spawn()

        try:
            async with asyncio.timeout(self._timeout_seconds):
                stdout, stderr = await process.communicate(source.encode("utf-8"))
        except TimeoutError:
            await _kill(process)
            self._observer.evaluation_timed_out(
                runtime=self._runtime,
                sample_id=self._sample_id,
                timeout_seconds=self._timeout_seconds,
            )
            raise EvaluationTimeoutError(
                sample_id=self._sample_id, timeout_seconds=self._timeout_seconds
            ) from None
        except asyncio.CancelledError:
            _signal_group(process)
            raise

        duration_ms = int((time.monotonic() - started_at) * 1000)
        exit_code = process.returncode if process.returncode is not None else -1
        self._observer.evaluation_completed(
            runtime=self._runtime,
            sample_id=self._sample_id,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )
        return EvaluationOutput(
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
            exit_code=exit_code,
            duration_ms=duration_ms,
        )

    async def _spawn(self) -> asyncio.subprocess.Process:
        command = self._config.command
        try:
            return await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env={**os.environ, **self._config.env},
                start_new_session=sys.platform != "win32",
            )
        except (FileNotFoundError, PermissionError) as exc:
            self._observer.evaluation_spawn_failed(
                runtime=self._runtime, sample_id=self._sample_id, reason=str(exc)
            )
            raise RuntimeNotFoundError(
                runtime=self._runtime, executable=command[0]
            ) from exc
        except OSError as exc:
            self._observer.evaluation_spawn_failed(
                runtime=self._runtime, sample_id=self._sample_id, reason=str(exc)
            )
            raise EvaluatorSpawnError(runtime=self._runtime, reason=str(exc)) from exc


def _signal_group(process: asyncio.subprocess.Process) -> None:
    """SIGKILL the process group (or just the process where groups do not exist)."""
    if process.returncode is not None:
        return
    with contextlib.suppress(ProcessLookupError, PermissionError):
        if sys.platform == "win32":
            process.kill()
        else:
            os.killpg(process.pid, signal.SIGKILL)


async def _kill(process: asyncio.subprocess.Process) -> None:
    _signal_group(process)
    with contextlib.suppress(ProcessLookupError):
        await process.wait()
