"""ClaudeAgentSDKAgent — agent implementation using the Claude Agent SDK."""

import asyncio
from pathlib import Path
from typing import Any

from claude_agent_sdk import query
from claude_agent_sdk._errors import ClaudeSDKError
from claude_agent_sdk.types import (
    ClaudeAgentOptions,
    ResultMessage,
    SdkPluginConfig,
)

from skill_ab.agent.domain.observer import AgentObserver
from skill_ab.agent.domain.result import AgentResult, UsageMetrics
from skill_ab.agent.infrastructure.errors import AgentInvocationError

_DEFAULT_TIMEOUT_SECONDS = 600.0


class ClaudeAgentSDKAgent:
    """Agent implementation that delegates to the Claude Agent SDK.

    Every invoke() opens a fresh SDK session, so no state leaks between the
    control run, the treatment run and the judge. The plugin directory, when
    given, is loaded as a local plugin for that session only.
    """

    def __init__(
        self,
        observer: AgentObserver,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._observer = observer
        self._timeout_seconds = timeout_seconds

    async def invoke(
        self,
        prompt: str,
        model: str,
        budget_usd: float,
        cwd: Path | None = None,
        plugin_dir: Path | None = None,
        allowed_tools: list[str] | None = None,
        label: str = "agent",
    ) -> AgentResult:
        """Invoke the agent once and return the structured result.

        Raises:
            AgentInvocationError: on invalid arguments, SDK errors, timeouts,
                an error ResultMessage, or an empty response.
        """
        self._observer.agent_invocation_started(label=label, model=model)

        try:
            _check_arguments(prompt=prompt, budget_usd=budget_usd, cwd=cwd)
            options = self._build_options(
                model=model,
                budget_usd=budget_usd,
                cwd=cwd,
                plugin_dir=plugin_dir,
                allowed_tools=allowed_tools,
            )
            try:
                async with asyncio.timeout(self._timeout_seconds):
                    result_message = await self._collect_result(
                        prompt=prompt, options=options
                    )
            except TimeoutError as exc:
                raise AgentInvocationError(
                    reason=f"timed out after {self._timeout_seconds:g}s",
                    retriable=True,
                ) from exc
        except AgentInvocationError as exc:
            self._observer.agent_invocation_failed(label=label, reason=exc.reason)
            raise

        self._observer.agent_invocation_completed(
            label=label,
            duration_ms=result_message.duration_ms,
            num_turns=result_message.num_turns,
            cost_usd=result_message.total_cost_usd,
        )

        assert result_message.result is not None  # guaranteed by _collect_result
        return AgentResult(
            response=result_message.result,
            cost_usd=result_message.total_cost_usd,
            duration_ms=result_message.duration_ms,
            num_turns=result_message.num_turns,
            usage=self._map_usage(raw=result_message.usage),
        )

    def _build_options(
        self,
        model: str,
        budget_usd: float,
        cwd: Path | None,
        plugin_dir: Path | None,
        allowed_tools: list[str] | None,
    ) -> ClaudeAgentOptions:
        """Build SDK options; control calls simply omit the plugin."""
        plugins: list[SdkPluginConfig] = []
        if plugin_dir is not None:
            plugins.append(SdkPluginConfig(type="local", path=str(plugin_dir)))

        return ClaudeAgentOptions(
            model=model,
            cwd=cwd,
            plugins=plugins,
            allowed_tools=list(allowed_tools) if allowed_tools else [],
            max_budget_usd=budget_usd,
            permission_mode="bypassPermissions",
            setting_sources=[],
        )

    async def _collect_result(
        self, prompt: str, options: ClaudeAgentOptions
    ) -> ResultMessage:
        """Run the SDK query and return its single ResultMessage.

        Raises:
            AgentInvocationError: on SDK errors or a missing/error/empty result.
        """
        result_message: ResultMessage | None = None

        try:
            async for message in query(prompt=prompt, options=options):
                if isinstance(message, ResultMessage):
                    result_message = message
        except ClaudeSDKError as exc:
            raise AgentInvocationError(reason=str(exc), retriable=True) from exc
        except Exception as exc:
            # The SDK raises a bare Exception when its subprocess exits non-zero.
            raise AgentInvocationError(reason=str(exc), retriable=True) from exc

        if result_message is None:
            raise AgentInvocationError(reason="no ResultMessage in response stream")

        if result_message.is_error:
            raise AgentInvocationError(
                reason=f"agent returned error response: {result_message.result}"
            )

        if result_message.result is None or not result_message.result.strip():
            raise AgentInvocationError(reason="agent returned empty output")

        return result_message

    def _map_usage(self, raw: dict[str, Any] | None) -> UsageMetrics | None:
        """Map the SDK's raw usage dict to a typed UsageMetrics value object."""
        if raw is None:
            return None
        return UsageMetrics(
            input_tokens=raw.get("input_tokens"),
            output_tokens=raw.get("output_tokens"),
        )


def _check_arguments(prompt: str, budget_usd: float, cwd: Path | None) -> None:
    if not prompt.strip():
        raise AgentInvocationError(reason="prompt is empty")
    if budget_usd <= 0:
        raise AgentInvocationError(reason=f"budget must be positive, got {budget_usd}")
    if cwd is not None and not cwd.is_dir():
        raise AgentInvocationError(reason=f"working directory does not exist: {cwd}")
