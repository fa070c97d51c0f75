"""unified-runner validate CLI command for test file validation.

Validates unified test format files against the closed schema, reporting
all errors at once with rich or CI-friendly formatting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from unified_runner.loader.errors import ErrorFormatter
from unified_runner.loader.validator import validate_test_file_path
from unified_runner.log_setup import setup_logging
from unified_runner.models.config import find_project_root, load_runner_config

TEST_FILE_PATTERNS: tuple[str, ...] = ("**/*.json", "**/*.yaml", "**/*.yml")


def validate(
    files: Optional[list[str]] = typer.Argument(
        None, help="Test files to validate (default: all in tests_dir)"
    ),
    ci: bool = typer.Option(False, "--ci", help="CI-friendly concise output"),
) -> None:
    """Validate unified test files against the schema.

    Exits with code 0 if all files are valid, 1 if any has errors.
    """
    project_root = find_project_root()
    config = load_runner_config(project_root)
    setup_logging(config.log_level)
    formatter = ErrorFormatter(ci_mode=ci or config.ci_mode or None)

    paths: list[Path] = []
    if files:
        for name in files:
            path = Path(name)
            if not path.exists():
                typer.echo(f"Error: File not found: {name}", err=True)
                raise typer.Exit(code=1)
            paths.append(path)
    else:
        tests_dir = project_root / config.tests_dir
        if tests_dir.is_dir():
            paths = sorted(
                path for pattern in TEST_FILE_PATTERNS for path in tests_dir.glob(pattern)
            )
        if not paths:
            typer.echo(
                f"No test files found. Specify files or create {config.tests_dir}/."
            )
            raise typer.Exit(code=1)

    valid_count = 0
    for path in paths:
        test_file, errors = validate_test_file_path(path)
        if errors:
            source = path.read_text(encoding="utf-8")
            typer.echo(formatter.format_all(errors, source, str(path)), err=not formatter.ci_mode)
        else:
            valid_count += 1
            typer.echo(f"  {path} ... valid")

    typer.echo(f"\n{valid_count}/{len(paths)} test files valid")

    if valid_count != len(paths):
        raise typer.Exit(code=1)
