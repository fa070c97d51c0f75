"""unified-runner merge-uri -- print a connection string with merged options."""

from __future__ import annotations

from typing import Any, Optional

import typer
import yaml

from unified_runner.execution.uri import merge_uri_options


def _parse_option(text: str) -> tuple[str, Any]:
    key, sep, raw = text.partition("=")
    if not sep or not key:
        raise typer.BadParameter(f"Expected key=value, got {text!r}")
    return key, yaml.safe_load(raw) if raw else ""


def merge_uri(
    uri: str = typer.Argument(..., help="Base connection string"),
    options: Optional[list[str]] = typer.Option(
        None, "-o", "--option", help="URI option as key=value (repeatable)"
    ),
) -> None:
    """Merge URI options into a connection string; given options win."""
    uri_options = dict(_parse_option(text) for text in options) if options else None
    typer.echo(merge_uri_options(uri, uri_options))
