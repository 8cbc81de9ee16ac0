"""TrialRunner — runs one prompt through control and treatment."""

import asyncio
from collections.abc import Mapping
from pathlib import Path

from skill_ab.agent.domain.agent import Agent
from skill_ab.agent.infrastructure.errors import AgentInvocationError
from skill_ab.evaluation.domain.artifacts import ArtifactStore
from skill_ab.evaluation.domain.observer import EvaluationObserver
from skill_ab.evaluation.domain.trial import Role, RunOutcome, Trial
from skill_ab.workspace.infrastructure.errors import WorkspaceError
from skill_ab.workspace.infrastructure.scratch import ScratchWorkspaceManager


class TrialRunner:
    """Executes the control and treatment runs of a trial in isolated workspaces.

    Both sides receive the same prompt, model, budget, tools and seed files;
    only the treatment side gets the plugin directory. A failure on either
    side is recorded as that side's error sentinel and never raised.
    """

    def __init__(
        self,
        run_id: str,
        agent: Agent,
        workspaces: ScratchWorkspaceManager,
        artifacts: ArtifactStore,
        observer: EvaluationObserver,
        model: str,
        budget_usd: float,
        plugin_dir: Path,
        seed_files: Mapping[str, str],
        allowed_tools: list[str] | None = None,
    ) -> None:
        self._run_id = run_id
        self._agent = agent
        self._workspaces = workspaces
        self._artifacts = artifacts
        self._observer = observer
        self._model = model
        self._budget_usd = budget_usd
        self._plugin_dir = plugin_dir
        self._seed_files = dict(seed_files)
        self._allowed_tools = allowed_tools

    async def run_trial(self, index: int, prompt: str) -> Trial:
        """Run both sides concurrently, persist the responses, return the Trial."""
        self._observer.trial_started(
            run_id=self._run_id, trial_index=index, prompt=prompt
        )

        control, treatment = await asyncio.gather(
            self._run_side(index=index, prompt=prompt, role="control"),
            self._run_side(index=index, prompt=prompt, role="treatment"),
        )

        self._artifacts.save_trial_responses(
            index=index,
            prompt=prompt,
            control=control.response,
            treatment=treatment.response,
        )
        self._observer.trial_completed(
            run_id=self._run_id,
            trial_index=index,
            control_failed=control.failed,
            treatment_failed=treatment.failed,
        )
        return Trial(index=index, prompt=prompt, control=control, treatment=treatment)

    async def _run_side(self, index: int, prompt: str, role: Role) -> RunOutcome:
        label = f"trial-{index}-{role}"
        plugin_dir = self._plugin_dir if role == "treatment" else None
        try:
            with self._workspaces.workspace(
                seed_files=self._seed_files, label=label
            ) as cwd:
                result = await self._agent.invoke(
                    prompt=prompt,
                    model=self._model,
                    budget_usd=self._budget_usd,
                    cwd=cwd,
                    plugin_dir=plugin_dir,
                    allowed_tools=self._allowed_tools,
                    label=label,
                )
        except (AgentInvocationError, WorkspaceError) as exc:
            reason = exc.reason if isinstance(exc, AgentInvocationError) else str(exc)
            self._observer.trial_run_failed(
                run_id=self._run_id, trial_index=index, role=role, reason=reason
            )
            return RunOutcome.failure(role=role, reason=reason)

        return RunOutcome(
            role=role,
            response=result.response,
            cost_usd=result.cost_usd,
            duration_ms=result.duration_ms,
        )
