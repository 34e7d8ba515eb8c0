"""ProgressVerificationObserver — renders per-runtime Rich progress bars to stderr."""

from __future__ import annotations

import sys
from dataclasses import dataclass

from rich.console import Console, Group
from rich.live import Live
from rich.progress import (
    Progress,
    ProgressColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

_OVERALL = "Overall"

_RUNTIME_COLORS: list[str] = ["cyan", "magenta", "blue", "yellow"]

# (outcome, glyph, style) in the order segments are drawn.
_SEGMENTS: list[tuple[str, str, str]] = [
    ("pass", "█", "bright_green"),
    ("fail", "█", "bright_red"),
    ("skipped", "▒", "yellow"),
]


@dataclass
class _Tally:
    total: int
    counts: dict[str, int]

    @property
    def done(self) -> int:
        return sum(self.counts.values())


class _OutcomeBarColumn(ProgressColumn):
    """ProgressColumn drawing passed, failed and skipped segments, then remaining."""

    def __init__(self, bar_width: int = 40) -> None:
        super().__init__()
        self.bar_width = bar_width

    def render(self, task: Task) -> Text:
        total = task.total or 0
        result = Text()
        used = 0
        if total > 0:
            for outcome, glyph, style in _SEGMENTS:
                cells = min(
                    int(task.fields.get(outcome, 0) / total * self.bar_width),
                    self.bar_width - used,
                )
                result.append(glyph * cells, style=style)
                used += cells
        result.append("░" * (self.bar_width - used), style="dim white")
        return result


class ProgressVerificationObserver:
    """Renders one progress row per runtime plus an Overall row on stderr.

    Only verification_started, sample_check_completed and
    verification_completed change what is shown; other events are no-ops.

    Pass ``disabled=True`` to keep the tallies without any terminal output
    (useful in tests).

    Does NOT inherit from VerificationObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._tallies: dict[str, _Tally] = {}
        self._task_ids: dict[str, TaskID] = {}
        self._progress: Progress | None = None
        self._live: Live | None = None

    @property
    def tallies(self) -> dict[str, dict[str, int]]:
        """Completed checks per row, by outcome."""
        return {key: dict(tally.counts) for key, tally in self._tallies.items()}

    def _make_desc(self, name: str, index: int, pad_width: int) -> str:
        if name == _OVERALL or not sys.stderr.isatty():
            return f"{name:<{pad_width}}"
        color = _RUNTIME_COLORS[index % len(_RUNTIME_COLORS)]
        return f"[{color}]{name:<{pad_width}}[/{color}]"

    def _update_task(self, key: str) -> None:
        if self._progress is None or key not in self._task_ids:
            return
        tally = self._tallies[key]
        self._progress.update(
            self._task_ids[key],
            completed=tally.done,
            done=tally.done,
            **tally.counts,
        )

    def verification_started(
        self,
        run_id: str,
        total_samples: int,
        runtime_names: list[str],
        samples_per_runtime: dict[str, int],
        num_repetitions: int,
        max_concurrent: int,
    ) -> None:
        empty = {outcome: 0 for outcome, _, _ in _SEGMENTS}
        self._tallies = {
            name: _Tally(
                total=samples_per_runtime.get(name, 0) * num_repetitions,
                counts=dict(empty),
            )
            for name in runtime_names
        }
        self._tallies[_OVERALL] = _Tally(
            total=total_samples * num_repetitions, counts=dict(empty)
        )
        self._task_ids = {}
        self._progress = None
        self._live = None

        if self._disabled:
            return

        console = Console(stderr=True)
        pad_width = max(len(name) for name in self._tallies)
        self._progress = Progress(
            TextColumn("{task.description}"),
            _OutcomeBarColumn(bar_width=40),
            TextColumn("{task.fields[done]}/{task.total:.0f}"),
            TextColumn("[bright_red]{task.fields[fail]} failed"),
            TimeElapsedColumn(),
            console=console,
            refresh_per_second=10,
            transient=False,
        )
        for index, name in enumerate([_OVERALL, *runtime_names]):
            self._task_ids[name] = self._progress.add_task(
                description=self._make_desc(name=name, index=index, pad_width=pad_width),
                total=float(self._tallies[name].total),
                done=0,
                **empty,
            )

        legend = Text.assemble(
            "  Legend:  ",
            ("█", "bright_green"),
            " pass  ",
            ("█", "bright_red"),
            " fail  ",
            ("▒", "yellow"),
            " skipped  ",
            ("░", "dim white"),
            " remaining",
        )
        self._live = Live(
            Group(self._progress, Text(""), legend),
            console=console,
            refresh_per_second=10,
        )
        self._live.start()

    def verification_completed(
        self, run_id: str, total_checks: int, elapsed_seconds: float
    ) -> None:
        if self._live is not None:
            self._live.stop()
        self._progress = None
        self._live = None

    def verification_progress(
        self, run_id: str, runtime: str, completed: int, total: int
    ) -> None:
        pass

    def sample_check_started(
        self, run_id: str, sample_id: str, runtime: str, repetition_index: int
    ) -> None:
        pass

    def sample_check_completed(
        self,
        run_id: str,
        sample_id: str,
        runtime: str,
        repetition_index: int,
        outcome: str,
        reason: str | None,
    ) -> None:
        for key in (runtime, _OVERALL):
            tally = self._tallies.get(key)
            if tally is None or outcome not in tally.counts:
                continue
            tally.counts[outcome] += 1
            if not self._disabled:
                self._update_task(key=key)

    def sample_check_aborted(
        self,
        run_id: str,
        sample_id: str,
        runtime: str,
        repetition_index: int,
        reason: str,
    ) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None

    def sample_check_retry(
        self,
        run_id: str,
        sample_id: str,
        runtime: str,
        repetition_index: int,
        attempt: int,
        reason: str,
        backoff_seconds: float,
    ) -> None:
        pass
