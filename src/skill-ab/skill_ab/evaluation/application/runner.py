"""EvaluationRunner — orchestrates prompt generation, trials and judging."""

import asyncio
import time
import uuid
from collections.abc import Callable

from skill_ab.config.domain.request import EvaluationRequest
from skill_ab.evaluation.application.trial_runner import TrialRunner
from skill_ab.evaluation.domain.artifacts import ArtifactStore
from skill_ab.evaluation.domain.budget import SpendLedger
from skill_ab.evaluation.domain.observer import EvaluationObserver
from skill_ab.evaluation.domain.summary import EvaluationSummary
from skill_ab.evaluation.domain.trial import Trial
from skill_ab.judge.domain.judge import Judge
from skill_ab.prompts.application.generator import PromptGenerator
from skill_ab.skill.domain.metadata import SkillMetadata


class EvaluationRunner:
    """Runs the full A/B evaluation and returns every trial it started.

    The runner is free of infrastructure dependencies: the prompt generator,
    trial runner, judge and artifact store are injected so that tests can
    swap any of them.

    Trials are independent. Each is a task that runs its control/treatment
    pair and then judges only that pair; max_concurrent bounds how many are in
    flight (1 reproduces strictly sequential behaviour).
    """

    def __init__(
        self,
        request: EvaluationRequest,
        metadata: SkillMetadata,
        prompt_generator: PromptGenerator,
        trial_runner: TrialRunner,
        judge: Judge,
        artifacts: ArtifactStore,
        ledger: SpendLedger,
        observer: EvaluationObserver,
        run_id: str | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._request = request
        self._metadata = metadata
        self._prompt_generator = prompt_generator
        self._trial_runner = trial_runner
        self._judge = judge
        self._artifacts = artifacts
        self._ledger = ledger
        self._observer = observer
        self._run_id = run_id or str(uuid.uuid4())
        self._clock = clock

    @property
    def run_id(self) -> str:
        return self._run_id

    async def run(self) -> EvaluationSummary:
        """Execute the evaluation.

        Per-trial failures never propagate: failed runs become sentinels and
        failed judgments leave the trial unscored. Once the ledger or the
        deadline runs out, trials that have not started are skipped; trials
        already in flight complete and are judged.
        """
        started_at = self._clock()
        self._artifacts.save_metadata(metadata=self._metadata)

        prompts = await self._prompt_generator.generate(
            metadata=self._metadata, count=self._request.trials
        )
        self._artifacts.save_prompts(prompts=prompts)

        execution = self._request.execution
        self._observer.evaluation_started(
            run_id=self._run_id,
            skill_name=self._metadata.name,
            total_trials=len(prompts),
            max_concurrent=execution.max_concurrent,
            run_budget_usd=self._request.run_budget_usd,
        )

        trials: list[Trial] = []
        skipped: list[int] = []
        sem = asyncio.Semaphore(execution.max_concurrent)
        completed_count: list[int] = [0]

        async with asyncio.TaskGroup() as tg:
            for index, prompt in enumerate(prompts, start=1):
                tg.create_task(
                    self._run_one(
                        sem=sem,
                        index=index,
                        prompt=prompt,
                        total=len(prompts),
                        started_at=started_at,
                        trials=trials,
                        skipped=skipped,
                        completed_count=completed_count,
                    )
                )

        trials.sort(key=lambda t: t.index)
        skipped.sort()
        elapsed = self._clock() - started_at
        summary = EvaluationSummary(
            run_id=self._run_id,
            skill_name=self._metadata.name,
            trials=trials,
            skipped_trials=skipped,
            spent_usd=self._ledger.spent_usd,
            elapsed_seconds=elapsed,
        )

        self._observer.evaluation_completed(
            run_id=self._run_id,
            attempted=summary.attempted,
            valid=summary.valid,
            spent_usd=summary.spent_usd,
            elapsed_seconds=elapsed,
        )
        return summary

    async def _run_one(
        self,
        sem: asyncio.Semaphore,
        index: int,
        prompt: str,
        total: int,
        started_at: float,
        trials: list[Trial],
        skipped: list[int],
        completed_count: list[int],
    ) -> None:
        """Run, judge and record one trial, unless the run is out of budget."""
        async with sem:
            stop_reason = self._stop_reason(started_at=started_at)
            if stop_reason is not None:
                skipped.append(index)
                self._observer.trial_skipped(
                    run_id=self._run_id, trial_index=index, reason=stop_reason
                )
            else:
                trial = await self._trial_runner.run_trial(index=index, prompt=prompt)
                score = await self._judge.score(trial=trial)
                self._artifacts.save_trial_scores(index=index, score=score)
                self._observer.trial_judged(
                    run_id=self._run_id, trial_index=index, scored=score is not None
                )
                trials.append(trial.with_score(score))

            completed_count[0] += 1
            self._observer.evaluation_progress(
                run_id=self._run_id, completed=completed_count[0], total=total
            )

    def _stop_reason(self, started_at: float) -> str | None:
        deadline = self._request.execution.deadline_seconds
        if deadline is not None and self._clock() - started_at >= deadline:
            return f"deadline of {deadline:g}s reached"
        if self._ledger.exhausted(reserve_usd=self._request.trial_budget_usd):
            return (
                f"budget exhausted (${self._ledger.spent_usd:.2f}"
                f" of ${self._request.budget_usd:.2f} spent)"
            )
        return None
