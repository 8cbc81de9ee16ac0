"""Tests for ClaudeAgentSDKAgent infrastructure implementation."""

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from claude_agent_sdk._errors import ClaudeSDKError
from claude_agent_sdk.types import ClaudeAgentOptions, ResultMessage

from skill_ab.agent.infrastructure.claude_sdk import ClaudeAgentSDKAgent
from skill_ab.agent.infrastructure.errors import AgentInvocationError
from tests.agent.fake_observer import FakeAgentObserver

_QUERY = "skill_ab.agent.infrastructure.claude_sdk.query"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_agent(
    observer: FakeAgentObserver | None = None,
    timeout_seconds: float = 600.0,
) -> tuple[ClaudeAgentSDKAgent, FakeAgentObserver]:
    obs = observer if observer is not None else FakeAgentObserver()
    return ClaudeAgentSDKAgent(observer=obs, timeout_seconds=timeout_seconds), obs


def _make_result_message(
    result: str | None = "Here is the implementation.",
    is_error: bool = False,
    duration_ms: int = 1500,
    num_turns: int = 2,
    total_cost_usd: float | None = 0.005,
    usage: dict[str, Any] | None = None,
) -> ResultMessage:
    return ResultMessage(
        subtype="success",
        duration_ms=duration_ms,
        duration_api_ms=1200,
        is_error=is_error,
        num_turns=num_turns,
        session_id="test-session-id",
        total_cost_usd=total_cost_usd,
        usage=usage,
        result=result,
    )


async def _async_gen(*items: Any) -> AsyncIterator[Any]:
    for item in items:
        yield item


def _mock_query(*items: Any) -> MagicMock:
    """Return a MagicMock for `query` that yields the given items when iterated."""
    mock = MagicMock()
    mock.return_value = _async_gen(*items)
    return mock


def _mock_query_raising(exc: Exception) -> MagicMock:
    async def _raising_gen() -> AsyncIterator[Any]:
        raise exc
        yield  # make it an async generator

    mock = MagicMock()
    mock.return_value = _raising_gen()
    return mock


def _options_of(mock: MagicMock) -> ClaudeAgentOptions:
    return mock.call_args.kwargs["options"]


# ---------------------------------------------------------------------------
# Successful invocation
# ---------------------------------------------------------------------------


class TestInvokeSuccess:
    async def test_returns_response_text(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()

        with patch(_QUERY, _mock_query(_make_result_message(result="Use a context manager."))):
            result = await agent.invoke(
                prompt="How do I open files?", model="haiku", budget_usd=0.2, cwd=tmp_path
            )

        assert result.response == "Use a context manager."

    async def test_maps_cost_duration_and_turns(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()
        message = _make_result_message(duration_ms=900, num_turns=4, total_cost_usd=0.03)

        with patch(_QUERY, _mock_query(message)):
            result = await agent.invoke(
                prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path
            )

        assert result.cost_usd == 0.03
        assert result.duration_ms == 900
        assert result.num_turns == 4

    async def test_maps_usage_tokens(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()
        message = _make_result_message(usage={"input_tokens": 10, "output_tokens": 20})

        with patch(_QUERY, _mock_query(message)):
            result = await agent.invoke(
                prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path
            )

        assert result.usage is not None
        assert result.usage.input_tokens == 10
        assert result.usage.output_tokens == 20

    async def test_ignores_non_result_messages(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()

        with patch(_QUERY, _mock_query("noise", _make_result_message(result="final"))):
            result = await agent.invoke(
                prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path
            )

        assert result.response == "final"

    async def test_emits_started_and_completed(self, tmp_path: Path) -> None:
        agent, observer = _make_agent()

        with patch(_QUERY, _mock_query(_make_result_message(total_cost_usd=0.01))):
            await agent.invoke(
                prompt="p",
                model="haiku",
                budget_usd=0.2,
                cwd=tmp_path,
                label="trial-1-control",
            )

        assert observer.invocation_started[0].label == "trial-1-control"
        assert observer.invocation_started[0].model == "haiku"
        assert observer.invocation_completed[0].cost_usd == 0.01
        assert observer.invocation_failed == []


# ---------------------------------------------------------------------------
# Options passed to the SDK
# ---------------------------------------------------------------------------


class TestBuildOptions:
    async def test_plugin_dir_is_loaded_as_local_plugin(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()
        plugin = tmp_path / "plugin"
        mock = _mock_query(_make_result_message())

        with patch(_QUERY, mock):
            await agent.invoke(
                prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path, plugin_dir=plugin
            )

        plugins = _options_of(mock).plugins
        assert len(plugins) == 1
        assert plugins[0]["type"] == "local"
        assert plugins[0]["path"] == str(plugin)

    async def test_no_plugin_dir_means_no_plugins(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()
        mock = _mock_query(_make_result_message())

        with patch(_QUERY, mock):
            await agent.invoke(prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path)

        assert _options_of(mock).plugins == []

    async def test_model_cwd_budget_and_tools_forwarded(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()
        mock = _mock_query(_make_result_message())

        with patch(_QUERY, mock):
            await agent.invoke(
                prompt="p",
                model="sonnet",
                budget_usd=0.25,
                cwd=tmp_path,
                allowed_tools=["Read", "Write"],
            )

        options = _options_of(mock)
        assert options.model == "sonnet"
        assert options.cwd == tmp_path
        assert options.max_budget_usd == 0.25
        assert options.allowed_tools == ["Read", "Write"]
        assert options.permission_mode == "bypassPermissions"

    async def test_user_settings_are_not_loaded(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()
        mock = _mock_query(_make_result_message())

        with patch(_QUERY, mock):
            await agent.invoke(prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path)

        assert _options_of(mock).setting_sources == []


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestInvokeFailures:
    async def test_empty_prompt_rejected(self, tmp_path: Path) -> None:
        agent, observer = _make_agent()

        with pytest.raises(AgentInvocationError, match="prompt is empty"):
            await agent.invoke(prompt="   ", model="haiku", budget_usd=0.2, cwd=tmp_path)

        assert observer.invocation_failed[0].reason == "prompt is empty"

    async def test_non_positive_budget_rejected(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()

        with pytest.raises(AgentInvocationError, match="budget must be positive"):
            await agent.invoke(prompt="p", model="haiku", budget_usd=0.0, cwd=tmp_path)

    async def test_missing_cwd_rejected(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()

        with pytest.raises(AgentInvocationError, match="working directory"):
            await agent.invoke(
                prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path / "gone"
            )

    async def test_sdk_error_is_retriable(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()

        with patch(_QUERY, _mock_query_raising(ClaudeSDKError("boom"))):
            with pytest.raises(AgentInvocationError) as exc_info:
                await agent.invoke(prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path)

        assert exc_info.value.retriable is True
        assert "boom" in exc_info.value.reason

    async def test_subprocess_exception_is_wrapped(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()

        with patch(_QUERY, _mock_query_raising(Exception("exit code 1"))):
            with pytest.raises(AgentInvocationError, match="exit code 1"):
                await agent.invoke(prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path)

    async def test_no_result_message(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()

        with patch(_QUERY, _mock_query()):
            with pytest.raises(AgentInvocationError, match="no ResultMessage"):
                await agent.invoke(prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path)

    async def test_error_result_message(self, tmp_path: Path) -> None:
        agent, _ = _make_agent()

        with patch(_QUERY, _mock_query(_make_result_message(is_error=True, result="x"))):
            with pytest.raises(AgentInvocationError, match="error response"):
                await agent.invoke(prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path)

    @pytest.mark.parametrize("text", [None, "", "  \n"])
    async def test_empty_output(self, tmp_path: Path, text: str | None) -> None:
        agent, _ = _make_agent()

        with patch(_QUERY, _mock_query(_make_result_message(result=text))):
            with pytest.raises(AgentInvocationError, match="empty output"):
                await agent.invoke(prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path)

    async def test_timeout_is_retriable(self, tmp_path: Path) -> None:
        agent, observer = _make_agent(timeout_seconds=0.01)

        async def _slow_gen() -> AsyncIterator[Any]:
            await asyncio.sleep(1)
            yield _make_result_message()

        mock = MagicMock()
        mock.return_value = _slow_gen()

        with patch(_QUERY, mock):
            with pytest.raises(AgentInvocationError, match="timed out") as exc_info:
                await agent.invoke(prompt="p", model="haiku", budget_usd=0.2, cwd=tmp_path)

        assert exc_info.value.retriable is True
        assert len(observer.invocation_failed) == 1
