"""CLI entrypoint for skill-ab — typer app with an `evaluate` command."""

import asyncio
import random
import tempfile
import uuid
from pathlib import Path

import structlog
import typer

from skill_ab.agent.infrastructure.claude_sdk import ClaudeAgentSDKAgent
from skill_ab.agent.infrastructure.metered import MeteredAgent
from skill_ab.agent.infrastructure.observer import StructlogAgentObserver
from skill_ab.cli.output.aggregator import AggregateReport, AggregationError, aggregate
from skill_ab.cli.output.report_json import write_report
from skill_ab.config.domain.request import EvaluationRequest
from skill_ab.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from skill_ab.config.infrastructure.observer import StructlogConfigObserver
from skill_ab.config.infrastructure.yaml_loader import YamlSettingsLoader, build_request
from skill_ab.core.errors import SkillAbError
from skill_ab.evaluation.application.runner import EvaluationRunner
from skill_ab.evaluation.application.trial_runner import TrialRunner
from skill_ab.evaluation.domain.budget import SpendLedger
from skill_ab.evaluation.domain.observer import EvaluationObserver
from skill_ab.evaluation.domain.summary import EvaluationSummary
from skill_ab.evaluation.infrastructure.artifacts import FileArtifactStore
from skill_ab.evaluation.infrastructure.composite_observer import (
    CompositeEvaluationObserver,
)
from skill_ab.evaluation.infrastructure.observer import StructlogEvaluationObserver
from skill_ab.evaluation.infrastructure.progress_observer import (
    ProgressEvaluationObserver,
)
from skill_ab.judge.infrastructure.observer import StructlogJudgeObserver
from skill_ab.judge.infrastructure.registry import create_judge
from skill_ab.prompts.application.generator import PromptGenerator
from skill_ab.prompts.infrastructure.observer import StructlogPromptObserver
from skill_ab.skill.domain.bundle import SkillBundle
from skill_ab.skill.infrastructure.errors import (
    PluginDirNotFoundError,
    SkillNotFoundError,
    SkillParseError,
)
from skill_ab.skill.infrastructure.skill_md import SkillMdParser
from skill_ab.workspace.domain.seed import seed_files_for
from skill_ab.workspace.infrastructure.scratch import ScratchWorkspaceManager

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2

_CONFIG_ERRORS = (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
    PluginDirNotFoundError,
    SkillNotFoundError,
    SkillParseError,
)

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main() -> None:
    """A/B evaluation of Claude with and without a skill."""


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        raise ConfigValidationError(
            f"invalid log format {log_format!r}; must be 'console' or 'json'"
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_WHITE = "\033[97m"

_IMPACT_COLORS = {
    "STRONG+": _GREEN,
    "MODERATE+": _GREEN,
    "NEUTRAL": _YELLOW,
    "MODERATE-": _RED,
    "STRONG-": _RED,
}


def _rule(width: int = 70, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _format_elapsed(elapsed_seconds: float) -> str:
    """Format elapsed seconds as '1m 23.4s' or '5.2s'."""
    minutes, seconds = divmod(elapsed_seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def _print_header(request: EvaluationRequest, bundle: SkillBundle) -> None:
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  Skill A/B Evaluation  ·  {bundle.metadata.name}{_RESET}")
    _rule(color=_CYAN)
    rows = [
        ("Skill", str(bundle.skill_dir)),
        ("Plugin", str(bundle.plugin_dir)),
        ("Model", f"{request.model}  |  judge: {request.judge_model}"),
        (
            "Budget",
            f"${request.budget_usd:.2f}  (per-run: ${request.run_budget_usd:.4f})",
        ),
        ("Trials", str(request.trials)),
    ]
    label_w = max(len(label) for label, _ in rows)
    for label, value in rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")
    typer.echo("")


def _print_summary(
    report: AggregateReport,
    summary: EvaluationSummary,
    report_path: Path,
) -> None:
    """Print the dimension table, overall row and interpretation."""
    typer.echo("")
    typer.echo(
        f"  {_DIM}{'Dimension':<20} {'Control':>10} {'Treatment':>10}"
        f" {'Delta':>10} {'Impact':>12}{_RESET}"
    )
    _rule()
    for d in report.dimensions:
        color = _IMPACT_COLORS[str(d.impact)]
        typer.echo(
            f"  {_WHITE}{d.dimension:<20}{_RESET} {d.control:>10.1f} {d.treatment:>10.1f}"
            f" {d.delta:>+10.1f} {color}{str(d.impact):>12}{_RESET}"
        )
    _rule()
    overall = report.overall
    color = _IMPACT_COLORS[str(overall.impact)]
    typer.echo(
        f"  {_BOLD}{'OVERALL':<20}{_RESET} {overall.control:>10.1f}"
        f" {overall.treatment:>10.1f} {overall.delta:>+10.1f}"
        f" {color}{str(overall.impact):>12}{_RESET}"
    )
    typer.echo("")
    typer.echo(f"  {color}{_BOLD}Interpretation: {overall.interpretation}{_RESET}")
    typer.echo("")

    rows = [
        ("Valid trials", f"{report.valid_trials} of {report.attempted_trials} attempted"),
        ("Spent", f"${summary.spent_usd:.4f}"),
        ("Elapsed", _format_elapsed(elapsed_seconds=summary.elapsed_seconds)),
        ("Report", str(report_path)),
    ]
    if summary.skipped_trials:
        skipped = ", ".join(str(i) for i in summary.skipped_trials)
        rows.insert(1, ("Skipped trials", skipped))
    label_w = max(len(label) for label, _ in rows)
    for label, value in rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")
    typer.echo("")


def _build_runner(
    request: EvaluationRequest,
    bundle: SkillBundle,
    artifacts: FileArtifactStore,
    log_format: str,
) -> EvaluationRunner:
    """Wire production adapters into an EvaluationRunner."""
    execution = request.execution
    ledger = SpendLedger(total_usd=request.budget_usd)
    agent = MeteredAgent(
        inner=ClaudeAgentSDKAgent(
            observer=StructlogAgentObserver(),
            timeout_seconds=execution.timeout_seconds,
        ),
        ledger=ledger,
    )

    observers: list[EvaluationObserver] = [StructlogEvaluationObserver()]
    if log_format != "json":
        observers.append(ProgressEvaluationObserver())
    evaluation_observer = CompositeEvaluationObserver(observers=observers)

    run_id = str(uuid.uuid4())
    return EvaluationRunner(
        request=request,
        metadata=bundle.metadata,
        prompt_generator=PromptGenerator(
            agent=agent,
            model=request.model,
            budget_usd=request.run_budget_usd,
            observer=StructlogPromptObserver(),
            rng=random.Random(execution.seed),
        ),
        trial_runner=TrialRunner(
            run_id=run_id,
            agent=agent,
            workspaces=ScratchWorkspaceManager(),
            artifacts=artifacts,
            observer=evaluation_observer,
            model=request.model,
            budget_usd=request.run_budget_usd,
            plugin_dir=bundle.plugin_dir,
            seed_files=seed_files_for(metadata=bundle.metadata),
            allowed_tools=execution.allowed_tools,
        ),
        judge=create_judge(
            request=request, agent=agent, observer=StructlogJudgeObserver()
        ),
        artifacts=artifacts,
        ledger=ledger,
        observer=evaluation_observer,
        run_id=run_id,
    )


def _evaluate(
    skill_dir: Path,
    config_path: Path | None,
    overrides: dict[str, object],
    log_format: str,
) -> int:
    """Run one evaluation end to end and return the process exit code."""
    try:
        _configure_structlog(log_format=log_format)
        config_observer = StructlogConfigObserver()
        settings = (
            YamlSettingsLoader(observer=config_observer).load(path=config_path)
            if config_path is not None
            else None
        )
        request = build_request(
            skill_dir=skill_dir,
            settings=settings,
            overrides=overrides,
            observer=config_observer,
        )
        bundle = SkillMdParser().load(skill_dir=request.skill_dir)
    except _CONFIG_ERRORS as exc:
        typer.echo(str(exc), err=True)
        return EXIT_CONFIG_ERROR

    eval_dir = request.output_dir or Path(tempfile.mkdtemp(prefix="skill-eval-"))
    eval_dir.mkdir(parents=True, exist_ok=True)
    artifacts = FileArtifactStore(eval_dir=eval_dir)

    _print_header(request=request, bundle=bundle)
    try:
        runner = _build_runner(
            request=request, bundle=bundle, artifacts=artifacts, log_format=log_format
        )
        summary = asyncio.run(runner.run())
        report = aggregate(trials=summary.trials, attempted=summary.attempted)
    except _CONFIG_ERRORS as exc:
        typer.echo(str(exc), err=True)
        return EXIT_CONFIG_ERROR
    except AggregationError as exc:
        typer.echo(str(exc), err=True)
        typer.echo(f"Results directory: {artifacts.results_dir}", err=True)
        return EXIT_FAILURE

    report_path = write_report(report=report, eval_dir=eval_dir)
    _print_summary(report=report, summary=summary, report_path=report_path)
    return EXIT_OK


@app.command()
def evaluate(
    skill_dir: Path = typer.Argument(..., help="Skill directory containing SKILL.md"),
    trials: int | None = typer.Option(None, "--trials", "-n", help="Trials [default: 3]"),
    model: str | None = typer.Option(
        None, "--model", help="Model under test [default: haiku]"
    ),
    judge_model: str | None = typer.Option(
        None, "--judge-model", help="Judge model [default: sonnet]"
    ),
    budget: float | None = typer.Option(
        None, "--budget", help="Total budget in USD [default: 2.00]"
    ),
    judge_backend: str | None = typer.Option(
        None, "--judge-backend", help="'agent' or 'litellm' [default: agent]"
    ),
    max_concurrent: int | None = typer.Option(
        None, "--max-concurrent", help="Trials run in parallel [default: 1]"
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Per-call timeout in seconds [default: 600]"
    ),
    deadline: float | None = typer.Option(
        None, "--deadline", help="Stop starting trials after this many seconds"
    ),
    seed: int | None = typer.Option(None, "--seed", help="Prompt shuffle seed"),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Directory for report and artifacts"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="YAML settings file"
    ),
    log_format: str = typer.Option(
        "console", "--log-format", help="Log format: 'console' or 'json'"
    ),
) -> None:
    """Compare Claude WITH vs WITHOUT a skill and write report.json."""
    overrides: dict[str, object] = {
        "trials": trials,
        "model": model,
        "judge_model": judge_model,
        "budget_usd": budget,
        "judge_backend": judge_backend,
        "max_concurrent": max_concurrent,
        "timeout_seconds": timeout,
        "deadline_seconds": deadline,
        "seed": seed,
        "output_dir": output_dir,
    }
    try:
        code = _evaluate(
            skill_dir=skill_dir,
            config_path=config_path,
            overrides=overrides,
            log_format=log_format,
        )
    except KeyboardInterrupt:
        typer.echo("Evaluation interrupted.", err=True)
        code = EXIT_FAILURE
    except SkillAbError as exc:
        typer.echo(str(exc), err=True)
        code = EXIT_FAILURE
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.", err=True)
        code = EXIT_FAILURE
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
