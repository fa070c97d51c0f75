"""Rich terminal output for eligibility checks."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table

from unified_runner.models.result import Eligibility

# Status styling map: runnable -> (label, Rich markup style)
_STATUS_STYLES: dict[bool, tuple[str, str]] = {
    True: ("✓ RUN", "bold green"),
    False: ("- SKIP", "bold yellow"),
}


def render_eligibility(
    filename: str,
    results: list[Eligibility],
    console: Console,
) -> None:
    """Render one row per test case with its run/skip status and reason."""
    table = Table(box=box.SIMPLE, title=filename, title_justify="left")
    table.add_column("Status", no_wrap=True)
    table.add_column("Test")
    table.add_column("Reason", style="dim")

    for result in results:
        label, style = _STATUS_STYLES[result.runnable]
        table.add_row(f"[{style}]{label}[/{style}]", result.test, result.reason)

    console.print(table)


def render_summary(results: list[Eligibility], console: Console) -> None:
    runnable = sum(1 for result in results if result.runnable)
    console.print(f"{runnable}/{len(results)} tests runnable, {len(results) - runnable} skipped")
