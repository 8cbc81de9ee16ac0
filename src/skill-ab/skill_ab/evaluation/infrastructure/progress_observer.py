"""ProgressEvaluationObserver — renders a Rich trial progress bar to stderr."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    ProgressColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text


class _CountsColumn(ProgressColumn):
    """Renders done+inflight/total, then the number of unscored trials."""

    def render(self, task: Task) -> Text:
        done = int(task.fields.get("done", 0))
        inflight = int(task.fields.get("inflight", 0))
        unscored = int(task.fields.get("unscored", 0))
        total = int(task.total or 0)
        text = Text.assemble(
            (str(done), "bright_green"),
            ("+", "dim white"),
            (str(inflight), "grey50"),
            ("/", "dim white"),
            (str(total), "default"),
        )
        if unscored:
            text.append(f"  {unscored} unscored", style="yellow")
        return text


class ProgressEvaluationObserver:
    """Shows one bar for the run's trials on stderr.

    Only evaluation_started, trial_started, trial_judged, trial_skipped and
    evaluation_completed affect the display; all other events are no-ops.

    Pass ``disabled=True`` to track state without rendering (useful in tests).

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self.done = 0
        self.inflight = 0
        self.unscored = 0
        self.total = 0
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    def _refresh(self) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(
            self._task_id,
            completed=self.done,
            done=self.done,
            inflight=self.inflight,
            unscored=self.unscored,
        )

    def evaluation_started(
        self,
        run_id: str,
        skill_name: str,
        total_trials: int,
        max_concurrent: int,
        run_budget_usd: float,
    ) -> None:
        self.done = 0
        self.inflight = 0
        self.unscored = 0
        self.total = total_trials

        if self._disabled:
            return

        self._progress = Progress(
            TextColumn("[bold cyan]{task.description}"),
            BarColumn(bar_width=40),
            _CountsColumn(),
            TimeElapsedColumn(),
            console=Console(stderr=True),
            transient=False,
        )
        self._task_id = self._progress.add_task(
            description=skill_name,
            total=float(total_trials),
            done=0,
            inflight=0,
            unscored=0,
        )
        self._progress.start()

    def evaluation_completed(
        self,
        run_id: str,
        attempted: int,
        valid: int,
        spent_usd: float,
        elapsed_seconds: float,
    ) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None

    def evaluation_progress(self, run_id: str, completed: int, total: int) -> None:
        pass

    def trial_started(self, run_id: str, trial_index: int, prompt: str) -> None:
        self.inflight += 1
        self._refresh()

    def trial_run_failed(
        self, run_id: str, trial_index: int, role: str, reason: str
    ) -> None:
        pass

    def trial_completed(
        self,
        run_id: str,
        trial_index: int,
        control_failed: bool,
        treatment_failed: bool,
    ) -> None:
        pass

    def trial_judged(self, run_id: str, trial_index: int, scored: bool) -> None:
        self.inflight = max(self.inflight - 1, 0)
        self.done += 1
        if not scored:
            self.unscored += 1
        self._refresh()

    def trial_skipped(self, run_id: str, trial_index: int, reason: str) -> None:
        self.done += 1
        self._refresh()
