"""
Report generation for WordScan scan results.

Writes the ranked plain-text report artifact and renders rich-formatted
console output for the CLI.
"""

from __future__ import annotations

import os
import tempfile
from datetime import datetime
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from wordscan.errors import ReportWriteError
from wordscan.results import FileOutcome, ScanStats, rank_outcomes

REPORT_HEADER = "Forbidden word scan report:"
NO_MATCHES_MARKER = "no matches found"

_console = Console(highlight=False)


def format_text_report(outcomes: list[FileOutcome], finished_at: datetime | None = None) -> str:
    """Render the report text: header, ranked outcome lines, completion timestamp."""
    finished_at = finished_at or datetime.now()
    lines = [REPORT_HEADER, ""]

    for o in rank_outcomes(outcomes):
        lines.append(f"{o.path} | {o.size} bytes | {o.replacements} replacements")

    if not outcomes:
        lines.append(NO_MATCHES_MARKER)

    lines.append("")
    lines.append(f"Scan completed at {finished_at.isoformat(sep=' ', timespec='seconds')}")
    return "\n".join(lines) + "\n"


def write_text_report(
    outcomes: list[FileOutcome],
    output_path: Path,
    finished_at: datetime | None = None,
) -> Path:
    """
    Write the report to output_path.

    The file is written to a temporary sibling and moved into place, so a
    failure never leaves a partial report behind. Raises ReportWriteError.
    """
    text = format_text_report(outcomes, finished_at)
    tmp_name: str | None = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, output_path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ReportWriteError(f"Cannot write report to {output_path}: {exc}") from exc
    return output_path


def print_outcomes(outcomes: list[FileOutcome]) -> None:
    """Print the ranked outcomes as a rich table."""
    if not outcomes:
        _console.print("  [green][+][/green] No forbidden words found.")
        return

    table = Table(
        box=box.SIMPLE,
        show_header=True,
        header_style="bold dim",
        padding=(0, 1),
    )
    table.add_column("#", style="dim", width=4, justify="right")
    table.add_column("File", min_width=30)
    table.add_column("Size", width=12, justify="right")
    table.add_column("Replacements", width=12, justify="right", style="bold red")

    for rank, o in enumerate(rank_outcomes(outcomes), start=1):
        table.add_row(str(rank), o.path, f"{o.size} B", str(o.replacements))

    _console.print(table)


def print_summary(stats: ScanStats, cancelled: bool = False, elapsed: float | None = None) -> None:
    """Print a final scan summary."""
    _console.print()
    _console.print("[bold]--- Scan Summary ---[/bold]")
    _console.print(f"  Files found   : [bold]{stats.total}[/bold]")
    _console.print(f"  Files visited : [bold]{stats.processed}[/bold]")
    _console.print(f"  Files masked  : [{'red' if stats.matched else 'green'}]{stats.matched}[/]")
    _console.print(f"  Replacements  : [bold]{stats.replacements}[/bold]")
    _console.print(f"  Skipped       : [dim]{stats.skipped}[/dim]")
    _console.print(f"  Errors        : [{'yellow' if stats.errored else 'dim'}]{stats.errored}[/]")
    if cancelled:
        _console.print("  Status        : [yellow]cancelled[/yellow]")
    if elapsed is not None:
        _console.print(f"  Elapsed       : [dim]{elapsed:.2f}s[/dim]")
    _console.print()
