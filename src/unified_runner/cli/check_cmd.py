"""unified-runner check -- evaluate which tests in a file may run.

Loads a unified test file, builds the environment snapshot from
unified.yaml, evaluates file- and test-level run-on requirements and
renders a RUN/SKIP table.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console

from unified_runner.cli.output import render_eligibility, render_summary
from unified_runner.environment import StaticEnvironment
from unified_runner.evaluation.requirements import RequirementError, RequirementEvaluator
from unified_runner.execution.matcher import load_matcher
from unified_runner.loader.errors import ErrorFormatter
from unified_runner.loader.validator import validate_test_file_path
from unified_runner.log_setup import setup_logging
from unified_runner.models.config import load_runner_config

console = Console()


def check(
    test_file_path: str = typer.Argument(..., help="Path to a unified test file"),
    matcher: Optional[str] = typer.Option(
        None, "--matcher", help="Dotted path to a document matcher for serverParameters"
    ),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Log each unmet requirement"),
) -> None:
    """Show which tests would run against the configured environment."""
    config = load_runner_config()
    setup_logging("DEBUG" if verbose else config.log_level)

    path = Path(test_file_path)
    if not path.exists():
        typer.echo(f"Error: File not found: {test_file_path}", err=True)
        raise typer.Exit(code=1)

    test_file, errors = validate_test_file_path(path)
    if test_file is None:
        formatter = ErrorFormatter(ci_mode=config.ci_mode or None)
        source = path.read_text(encoding="utf-8")
        typer.echo(formatter.format_all(errors, source, str(path)), err=True)
        raise typer.Exit(code=1)

    matcher_path = matcher or config.matcher
    document_matcher = None
    if matcher_path:
        try:
            document_matcher = load_matcher(matcher_path)
        except (ImportError, TypeError, ValueError) as exc:
            typer.echo(f"Error: cannot load matcher '{matcher_path}': {exc}", err=True)
            raise typer.Exit(code=1) from exc
    environment = StaticEnvironment.from_config(config.environment)
    logger.debug(
        "checking {} against server {} ({})",
        path,
        environment.server_version,
        environment.current_topology.value,
    )

    evaluator = RequirementEvaluator(environment, matcher=document_matcher)
    try:
        results = asyncio.run(evaluator.check_file(test_file))
    except RequirementError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    render_eligibility(str(path), results, console)
    render_summary(results, console)
