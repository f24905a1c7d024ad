"""Renderer for CLI output.

Renders directory reports and the run summary as Rich tables, using one
colour per entry status.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from renamepics.core.report import count_statuses
from renamepics.models.core import FileStatus
from renamepics.models.report import DirectoryReport, RunSummary

STATUS_STYLES = {
    FileStatus.UNPROCESSED: "white",
    FileStatus.READY: "yellow bold",
    FileStatus.RENAMED: "green bold",
    FileStatus.ERROR: "red bold",
    FileStatus.REJECTED: "bright_red bold",
    FileStatus.IGNORED: "cyan",
}


def render_report(report: DirectoryReport, console: Optional[Console] = None) -> None:
    """Render one directory report as a status table followed by its counts."""
    console = console or Console()

    table = Table(title=escape(f"{report.directory} ({report.file_count} files)"))
    table.add_column("Old Name", style="cyan")
    table.add_column("New Name", style="green")
    table.add_column("Status", style="bold")
    table.add_column("Reason", style="yellow")

    for entry in report.rows:
        table.add_row(
            escape(entry.original_name),
            escape(entry.new_name or ""),
            entry.status.value,
            escape(entry.reason or ""),
            style=STATUS_STYLES.get(entry.status, "white"),
        )

    console.print(table)

    counts = count_statuses(report.rows)
    tally = " | ".join(f"{status.value}: {n}" for status, n in counts.items() if n)
    console.print(f"Total: {report.file_count}" + (f" | {tally}" if tally else ""))
    if report.dry_run:
        console.print("Dry run: no files were renamed.", style="yellow")
    if report.failure:
        console.print(
            f"Batch not renamed: {escape(report.failure)}", style="red bold"
        )


def render_summary(summary: RunSummary, console: Optional[Console] = None) -> None:
    """Render the cross-directory triage table."""
    console = console or Console()

    table = Table(title=f"Folders processed: {summary.directories}")
    table.add_column("Outcome", style="bold")
    table.add_column("Folders", justify="right")
    table.add_column("Paths")

    buckets = [
        ("With errors", summary.error, "red bold"),
        ("With rejected files", summary.rejected, "bright_red bold"),
        ("All files renamed", summary.renamed, "green bold"),
        ("No changes", summary.no_change, "white"),
    ]
    for label, directories, style in buckets:
        table.add_row(
            label,
            str(len(directories)),
            escape("\n".join(str(d) for d in directories)),
            style=style,
        )

    console.print(table)
