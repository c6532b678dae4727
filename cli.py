"""
WordScan CLI: forbidden-word scanner and redactor.

Commands:
  scan              Scan a directory tree and write masked copies plus a report
  mask              Mask a single file and print the result
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeElapsedColumn

from wordscan import __version__
from wordscan.config_loader import AppConfig, load_config
from wordscan.errors import ConfigurationError
from wordscan.file_loader import SkipFile, load_file
from wordscan.matcher import apply_mask
from wordscan.report import print_outcomes, print_summary
from wordscan.session import ScanSession, SessionStatus
from wordscan.word_set import WordSet, load_words_file, parse_words

_console = Console()
_err_console = Console(stderr=True)

EXIT_FAILED = 1
EXIT_CONFIG = 2
EXIT_CANCELLED = 130


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _resolve_config(config_path: Path | None) -> AppConfig:
    """Load AppConfig, exiting with a user-friendly message on failure."""
    try:
        return load_config(config_path)
    except (FileNotFoundError, ConfigurationError) as exc:
        _err_console.print(f"[bold red]Config error:[/bold red] {exc}")
        sys.exit(EXIT_CONFIG)


def _resolve_words(words: str | None, words_file: Path | None) -> WordSet:
    """Merge --words and --words-file into one WordSet, file entries first."""
    collected: list[str] = []
    if words_file is not None:
        collected.extend(load_words_file(words_file))
    collected.extend(parse_words(words))
    return WordSet.from_iterable(collected)


@click.group()
@click.version_option(__version__, prog_name="wordscan")
def cli() -> None:
    """WordScan: find and mask forbidden words in text files."""


@cli.command("scan")
@click.argument("root", type=click.Path(file_okay=False, path_type=Path))
@click.option("--words", "-w", default=None, help="Forbidden words separated by newlines, commas, or semicolons")
@click.option("--words-file", "-f", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="UTF-8 file containing forbidden words")
@click.option("--config", "-c", default=None, type=click.Path(path_type=Path), help="Path to wordscan.json")
@click.option("--output-dir", "-o", default=None, type=click.Path(file_okay=False, path_type=Path),
              help="Directory for masked copies")
@click.option("--layout", default=None, type=click.Choice(["flat", "mirror"]),
              help="flat: keep file names only; mirror: keep paths relative to ROOT")
@click.option("--report", "-r", default=None, type=click.Path(dir_okay=False, path_type=Path),
              help="Path of the text report")
@click.option("--throttle", default=None, type=click.FloatRange(min=0), help="Delay between files, in seconds")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cmd_scan(
    root: Path,
    words: str | None,
    words_file: Path | None,
    config: Path | None,
    output_dir: Path | None,
    layout: str | None,
    report: Path | None,
    throttle: float | None,
    verbose: bool,
) -> None:
    """Scan ROOT recursively, masking forbidden words in eligible files."""
    _setup_logging(verbose)
    cfg = _resolve_config(config)

    output = cfg.output
    if output_dir is not None:
        output = replace(output, directory=output_dir)
    if layout is not None:
        output = replace(output, layout=layout)
    if report is not None:
        output = replace(output, report=report)
    cfg.output = output
    if throttle is not None:
        cfg.loader.throttle_seconds = throttle

    progress = Progress(
        TextColumn("[bold]Scanning[/bold]"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=_console,
        transient=True,
    )
    task_id = progress.add_task("scan", total=100)

    session = ScanSession(
        root,
        _resolve_words(words, words_file),
        config=cfg,
        on_progress=lambda value: progress.update(task_id, completed=value),
    )

    try:
        session.start()
    except ConfigurationError as exc:
        _err_console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(EXIT_CONFIG)

    start = time.monotonic()
    with progress:
        try:
            # Poll so Ctrl+C reaches the main thread
            while session.wait(timeout=0.2) is None:
                pass
        except KeyboardInterrupt:
            session.cancel()
            _err_console.print("[yellow]Cancelling scan…[/yellow]")
            session.wait()
    elapsed = time.monotonic() - start

    result = session.result
    if result is None:
        _err_console.print("[bold red]Error:[/bold red] scan worker stopped unexpectedly")
        sys.exit(EXIT_FAILED)

    if result.status is SessionStatus.FAILED:
        _err_console.print(f"[bold red]Scan failed:[/bold red] {result.error}")
        sys.exit(EXIT_FAILED)

    print_outcomes(result.outcomes)
    print_summary(result.stats, cancelled=result.cancelled, elapsed=elapsed)

    if result.cancelled:
        _console.print("[yellow]Scan cancelled; no report written.[/yellow]")
        sys.exit(EXIT_CANCELLED)

    if result.report_error is not None:
        _err_console.print(f"[bold red]Report error:[/bold red] {result.report_error}")
        sys.exit(EXIT_FAILED)

    _console.print(f"[dim]Report written to {result.report_path}[/dim]")


@cli.command("mask")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--words", "-w", default=None, help="Forbidden words separated by newlines, commas, or semicolons")
@click.option("--words-file", "-f", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="UTF-8 file containing forbidden words")
@click.option("--config", "-c", default=None, type=click.Path(path_type=Path), help="Path to wordscan.json")
def cmd_mask(file: Path, words: str | None, words_file: Path | None, config: Path | None) -> None:
    """Print FILE with forbidden words masked; the replacement count goes to stderr."""
    cfg = _resolve_config(config)
    word_set = _resolve_words(words, words_file)
    if not word_set:
        _err_console.print("[bold red]Error:[/bold red] No forbidden words supplied")
        sys.exit(EXIT_CONFIG)

    # Explicitly named files bypass the extension allow-list
    try:
        content = load_file(file, cfg.loader)
    except (SkipFile, OSError) as exc:
        _err_console.print(f"[bold red]Error:[/bold red] cannot mask {file}: {exc}")
        sys.exit(EXIT_FAILED)

    result = apply_mask(content.text, word_set, cfg.mask.char)
    click.echo(result.content, nl=False)
    _err_console.print(f"[dim]{result.replacements} replacement(s)[/dim]")


if __name__ == "__main__":
    cli()
