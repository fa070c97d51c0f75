"""unified-runner CLI entry point."""

import typer

from unified_runner import __version__
from unified_runner.cli.check_cmd import check
from unified_runner.cli.uri_cmd import merge_uri
from unified_runner.cli.validate_cmd import validate

app = typer.Typer(
    name="unified-runner",
    help="Requirement gating and expectation checks for unified test format files",
    no_args_is_help=True,
)

app.command()(check)
app.command(name="merge-uri")(merge_uri)
app.command()(validate)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"unified-runner {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Requirement gating and expectation checks for unified test format files."""
