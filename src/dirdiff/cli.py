"""dirdiff CLI — Typer application with compare, diff, and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from dirdiff import __version__

app = typer.Typer(
    name="dirdiff",
    help="Compare two directory trees and spot moved files.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _fail(label: str, exc: object) -> NoReturn:
    console.print(f"[bold red]{label}:[/bold red] {escape(str(exc))}")
    raise typer.Exit(code=2)


# ── compare ───────────────────────────────────────────────────────────────────


@app.command()
def compare(
    left: Path = typer.Argument(..., exists=True, file_okay=False, resolve_path=True, help="Left (old) directory"),
    right: Path = typer.Argument(..., exists=True, file_okay=False, resolve_path=True, help="Right (new) directory"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .dirdiff.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | csv"),
    view: Optional[str] = typer.Option(None, "--view", help="View: tree | table"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    type_filter: Optional[str] = typer.Option(None, "--type", help="Table/CSV type filter (e.g. java, directory)"),
    status_filter: Optional[str] = typer.Option(None, "--status", help="Table/CSV status filter (e.g. moved)"),
    no_moves: bool = typer.Option(False, "--no-moves", help="Skip move detection"),
    ignore_file: Optional[str] = typer.Option(None, "--ignore-file", help="Path to an ignore list"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Compare LEFT with RIGHT. Exit 0 if identical, 1 if they differ."""
    from dirdiff.compare.engine import CompareError, compare as run_compare
    from dirdiff.config.loader import ConfigError, load_config
    from dirdiff.config.schema import OUTPUT_FORMATS, VIEW_TYPES
    from dirdiff.log import configure_logging
    from dirdiff.namespaces.registry import ExtractorError
    from dirdiff.output import csv_export, json_report, terminal
    from dirdiff.output.filters import ALL, ENTRY_TYPES, STATUS_FILTERS, filter_entries

    configure_logging(verbose=verbose, debug=debug)
    base_dir = Path.cwd()

    # --- Load config ---
    try:
        cfg = load_config(base_dir, config)
    except ConfigError as exc:
        _fail("Config error", exc)

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            _fail("Invalid format", format)
        cfg.output.format = format  # type: ignore[assignment]
    if view:
        if view not in VIEW_TYPES:
            _fail("Invalid view", view)
        cfg.output.view = view  # type: ignore[assignment]
    if type_filter:
        if type_filter != ALL and type_filter not in ENTRY_TYPES:
            _fail("Invalid type filter", type_filter)
        cfg.export.type_filter = type_filter
    if status_filter:
        if status_filter != ALL and status_filter not in STATUS_FILTERS:
            _fail("Invalid status filter", status_filter)
        cfg.export.status_filter = status_filter
    if no_moves:
        cfg.compare.detect_moves = False
    if ignore_file:
        cfg.ignore.file = ignore_file

    if verbose or debug:
        console.print(f"[dim]Left:  {left}[/dim]")
        console.print(f"[dim]Right: {right}[/dim]")
        console.print(f"[dim]Move detection: {cfg.compare.detect_moves}[/dim]")

    # --- Run comparison ---
    try:
        result = run_compare(left, right, cfg, base_dir=base_dir)
    except (CompareError, ExtractorError) as exc:
        _fail("Compare error", exc)

    if debug:
        console.print(f"[dim]Compare duration: {result.duration_ms:.0f}ms[/dim]")

    entries = filter_entries(
        result.entries, cfg.export.type_filter, cfg.export.status_filter
    )

    # --- Output ---
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(
            result,
            view=cfg.output.view,
            entries=entries,
            show_summary=cfg.output.show_summary,
            show_identical=cfg.output.show_identical,
        )
    elif cfg.output.format == "json":
        report_text = json_report.render(result, view=cfg.output.view, entries=entries)
        if not output:
            print(report_text)
    elif cfg.output.format == "csv":
        report_text = csv_export.render(entries)
        if not output:
            print(report_text, end="")

    # --- Write to file ---
    if output and report_text is not None:
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")
    elif output and cfg.output.format == "terminal":
        # If output file requested but format is terminal, write JSON
        report_text = json_report.render(result, view=cfg.output.view, entries=entries)
        Path(output).write_text(report_text, encoding="utf-8")

    # --- Exit code ---
    raise typer.Exit(code=0 if result.identical else 1)


# ── diff ──────────────────────────────────────────────────────────────────────


@app.command()
def diff(
    left: Path = typer.Argument(..., exists=True, file_okay=False, resolve_path=True, help="Left (old) directory"),
    right: Path = typer.Argument(..., exists=True, file_okay=False, resolve_path=True, help="Right (new) directory"),
    relative_path: str = typer.Argument(..., help="File path relative to RIGHT (and LEFT)"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Left-side path for a moved file"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="Primary text encoding"),
) -> None:
    """Show the line-by-line diff of one file pair."""
    from dirdiff.compare.files import FileComparator
    from dirdiff.output import json_report, terminal

    if format not in ("terminal", "json"):
        _fail("Invalid format", format)

    left_file = left / (source or relative_path)
    right_file = right / relative_path
    present_left = left_file if left_file.is_file() else None
    present_right = right_file if right_file.is_file() else None
    if present_left is None and present_right is None:
        _fail("Not found", f"{relative_path} exists on neither side")

    comparator = FileComparator(encoding=encoding) if encoding else FileComparator()
    try:
        file_diff = comparator.compare_files(present_left, present_right)
    except OSError as exc:
        _fail("Read error", exc)

    if format == "json":
        print(json_report.render_file_diff(file_diff, relative_path, source))
    else:
        terminal.render_file_diff(file_diff, relative_path, source_path=source)

    identical = file_diff.added == file_diff.removed == file_diff.modified == 0
    raise typer.Exit(code=0 if identical else 1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    full: bool = typer.Option(False, "--full", help="Include all config options with comments"),
) -> None:
    """Generate a starter .dirdiff.toml (and .dirdiff-ignore) in the current directory."""
    from dirdiff.config.defaults import DEFAULT_IGNORE, DEFAULT_TOML, FULL_TOML
    from dirdiff.config.loader import CONFIG_FILE_NAME

    base_dir = Path.cwd()
    config_path = base_dir / CONFIG_FILE_NAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILE_NAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    template = FULL_TOML if full else DEFAULT_TOML
    config_path.write_text(template, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")

    ignore_path = base_dir / ".dirdiff-ignore"
    if not ignore_path.exists():
        ignore_path.write_text(DEFAULT_IGNORE, encoding="utf-8")
        console.print(f"[green]✓[/green] Created {ignore_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"dirdiff {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """dirdiff — compare two directory trees and spot moved files."""
