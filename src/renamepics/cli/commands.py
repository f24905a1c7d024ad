"""CLI commands for renamepics.

This module implements the user-facing commands: rename, config and version.
- Uses Typer for declarative CLI structure and option parsing.
- All output is routed through a Rich Console from ConsoleManager.
- Exit codes are defined as an Enum.
"""

import json
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from renamepics.cli.console import ConsoleManager
from renamepics.cli.renderer import render_report, render_summary
from renamepics.core.report import summarize_reports, write_run_report
from renamepics.core.runner import run
from renamepics.models.core import SortStrategy
from renamepics.models.options import (
    DEFAULT_MAX_DIGITS,
    DEFAULT_REPORT_FILE,
    RenameOptions,
)
from renamepics.utils.config import SETTINGS, resolve_setting, set_setting
from renamepics.utils.debug import close_log_file, debug, error, info, setup_logger
from renamepics.utils.json import DateTimeEncoder

app = typer.Typer(
    name="renamepics",
    help="Rename pictures and movies into a sequentially numbered series.",
    add_completion=False,
)


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    FAILURES = 2


DIRECTORIES = Annotated[
    List[Path],
    typer.Argument(
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Directories whose media files should be renamed",
    ),
]

BASE = Annotated[
    Optional[str],
    typer.Option(
        "--base",
        "-b",
        help="Base name for new filenames, e.g. 'Holiday' gives Holiday_0001.jpg. "
        "Must start with an uppercase letter.",
    ),
]

SORT = Annotated[
    Optional[str],
    typer.Option(
        "--sort",
        "-s",
        case_sensitive=False,
        help="Ordering used for numbering: name, num or time (default: name)",
    ),
]

DRY_RUN = Annotated[
    bool,
    typer.Option("--dry-run", "-t", help="Plan and report without renaming"),
]

MAX_DIGITS = Annotated[
    Optional[int],
    typer.Option(
        "--max-digits",
        min=1,
        help=f"Zero-pad width of sequence numbers (default: {DEFAULT_MAX_DIGITS})",
    ),
]

FORCE = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help="With --sort num, skip files that break the naming convention",
    ),
]

RECURSIVE = Annotated[
    bool,
    typer.Option("--recursive", "-r", help="Also process subdirectories"),
]

RENUMBER = Annotated[
    bool,
    typer.Option(
        "--renumber",
        "-n",
        help="With --sort num, close gaps in the existing numbering",
    ),
]

START = Annotated[
    int,
    typer.Option("--start", min=0, help="First sequence number for --renumber"),
]

REPORT_FILE = Annotated[
    Optional[Path],
    typer.Option(
        "--report-file",
        help=f"Where to write the run report (default: ./{DEFAULT_REPORT_FILE})",
    ),
]

LOG_FILE = Annotated[
    Optional[Path],
    typer.Option("--log-file", help="Also write a detailed log to this file"),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option("--json", help="Output directory reports in JSON format"),
]

NO_COLOR = Annotated[
    bool,
    typer.Option("--no-color", help="Disable colored output"),
]


@dataclass
class RenameCommandOptions:
    """Options for the rename command."""

    directories: List[Path] = field(default_factory=list)
    base: Optional[str] = None
    sort: Optional[str] = None
    dry_run: bool = False
    max_digits: Optional[int] = None
    force: bool = False
    recursive: bool = False
    renumber: bool = False
    start: int = 1
    report_file: Optional[Path] = None
    log_file: Optional[Path] = None
    json_output: bool = False


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. Can also be set with the "
            "RENAMEPICS_NO_RICH environment variable."
        ),
    ),
) -> None:
    """Rename pictures and movies into a sequentially numbered series."""
    if no_rich:
        os.environ["RENAMEPICS_NO_RICH"] = "1"


def _build_run_options(options: RenameCommandOptions) -> RenameOptions:
    """Merge CLI values with configured defaults.

    Raises:
        ValueError: If a value (including the base name) is invalid.
    """
    if not options.base:
        raise ValueError("A base name is required (--base NAME)")
    sort = resolve_setting(
        "rename.sort", default=SortStrategy.NAME.value, cli_value=options.sort
    )
    max_digits = resolve_setting(
        "rename.max_digits", default=DEFAULT_MAX_DIGITS, cli_value=options.max_digits
    )
    try:
        strategy = SortStrategy(sort.lower())
    except ValueError:
        valid = ", ".join(s.value for s in SortStrategy)
        raise ValueError(f"Invalid sort order {sort!r}. Must be one of: {valid}")
    return RenameOptions(
        base_name=options.base,
        strategy=strategy,
        dry_run=options.dry_run,
        max_digits=max_digits,
        force=options.force,
        recursive=options.recursive,
        renumber=options.renumber,
        renumber_start=options.start,
    )


def _rename_impl(options: RenameCommandOptions, console: Console) -> int:
    """Implementation of the rename command."""
    if not options.directories:
        console.print("[red]Error: At least one directory must be given[/red]")
        return ExitCode.ERROR
    for directory in options.directories:
        if not directory.is_dir():
            console.print(
                f"[red]Error: Not a directory: {escape(str(directory))}[/red]"
            )
            return ExitCode.ERROR

    try:
        run_options = _build_run_options(options)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return ExitCode.ERROR

    report_file = Path(
        resolve_setting(
            "rename.report_file",
            default=DEFAULT_REPORT_FILE,
            cli_value=str(options.report_file) if options.report_file else None,
        )
    )

    setup_logger(options.log_file)
    try:
        debug(f"Run options: {run_options.model_dump()}")
        try:
            reports = run(options.directories, run_options)
        except (FileNotFoundError, PermissionError, ValueError) as e:
            error(f"Run aborted: {e}")
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            return ExitCode.ERROR

        write_run_report(report_file, reports)
        info(f"Report written to '{report_file}'")
    finally:
        close_log_file()

    summary = summarize_reports(reports)
    if options.json_output:
        payload: dict[str, Any] = {
            "summary": summary.model_dump(),
            "directories": [r.model_dump() for r in reports],
        }
        sys.stdout.write(json.dumps(payload, cls=DateTimeEncoder, indent=2) + "\n")
    else:
        for report in reports:
            render_report(report, console=console)
        render_summary(summary, console=console)
        console.print(f"Report written to [bold]{escape(str(report_file))}[/bold]")

    if summary.error or summary.rejected:
        return ExitCode.FAILURES
    return ExitCode.SUCCESS


@app.command()
def rename(  # noqa: PLR0913
    directories: DIRECTORIES,
    base: BASE = None,
    sort: SORT = None,
    dry_run: DRY_RUN = False,
    max_digits: MAX_DIGITS = None,
    force: FORCE = False,
    recursive: RECURSIVE = False,
    renumber: RENUMBER = False,
    start: START = 1,
    report_file: REPORT_FILE = None,
    log_file: LOG_FILE = None,
    json_output: JSON_OUTPUT = False,
    no_color: NO_COLOR = False,
) -> None:
    """Rename the media files of each directory into a numbered series."""
    options = RenameCommandOptions(
        directories=list(directories),
        base=base,
        sort=sort,
        dry_run=dry_run,
        max_digits=max_digits,
        force=force,
        recursive=recursive,
        renumber=renumber,
        start=start,
        report_file=report_file,
        log_file=log_file,
        json_output=json_output,
    )
    with ConsoleManager(no_color=no_color) as console:
        code = _rename_impl(options, console)
    raise typer.Exit(int(code))


def _parse_setting(key: str, raw: str) -> Any:  # noqa: ANN401
    """Validate *raw* for the config *key* and convert it to its stored type.

    Raises:
        typer.BadParameter: If the key is unknown or the value invalid.
    """
    if key not in SETTINGS:
        raise typer.BadParameter(
            f"Unknown setting {key!r}. Must be one of: {', '.join(SETTINGS)}"
        )
    if key == "rename.sort":
        try:
            return SortStrategy(raw.lower()).value
        except ValueError:
            valid = ", ".join(s.value for s in SortStrategy)
            raise typer.BadParameter(f"Invalid sort order. Must be one of: {valid}")
    if SETTINGS[key] is int:
        try:
            value = int(raw)
        except ValueError:
            raise typer.BadParameter(f"{key} must be an integer")
        if value < 1:
            raise typer.BadParameter(f"{key} must be at least 1")
        return value
    return raw


@app.command()
def config(
    key: Annotated[str, typer.Argument(help="Setting name, e.g. rename.max_digits")],
    value: Annotated[str, typer.Argument(help="New value for the setting")],
) -> None:
    """Persist a default setting in the renamepics config file."""
    with ConsoleManager() as console:
        try:
            parsed = _parse_setting(key, value)
        except typer.BadParameter as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            code = ExitCode.ERROR
        else:
            path = set_setting(key, parsed)
            console.print(f"Set [bold]{key}[/bold] = {parsed!r} in {path}")
            code = ExitCode.SUCCESS
    raise typer.Exit(int(code))


@app.command()
def version() -> None:
    """Show the version of renamepics."""
    from renamepics.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"renamepics version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
