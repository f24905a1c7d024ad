"""Plain-text rename reports.

Produces the per-directory status tables and the cross-directory summary
written to the report file at the end of a run. Rich terminal rendering lives
in :mod:`renamepics.cli.renderer`; both build on the helpers here.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from renamepics.core.errors import UnknownStatusError
from renamepics.models.core import FileEntry, FileStatus
from renamepics.models.report import DirectoryReport, RunSummary

DIVIDER = "=" * 77
ROW_FORMAT = "{:<24} | {:<24} | {:<23}"
HEADER = ROW_FORMAT.format("Old Name", "New Name", "Status")
HEADER_RULE = " | ".join(["-" * 24, "-" * 24, "-" * 23])


def build_directory_report(
    directory: Path,
    entries: Iterable[FileEntry],
    ignored: Iterable[FileEntry] = (),
    *,
    failure: Optional[str] = None,
    dry_run: bool = False,
) -> DirectoryReport:
    """Freeze the outcome of a directory batch into a report."""

    def _snapshot(items: Iterable[FileEntry]) -> List[FileEntry]:
        return [e.model_copy() for e in sorted(items, key=lambda e: e.sort_key)]

    return DirectoryReport(
        directory=directory,
        entries=_snapshot(entries),
        ignored=_snapshot(ignored),
        failure=failure,
        dry_run=dry_run,
    )


def count_statuses(entries: Iterable[FileEntry]) -> Dict[FileStatus, int]:
    """Count entries per status, with every status present.

    Raises:
        UnknownStatusError: If an entry holds a status outside FileStatus.
    """
    counts = {status: 0 for status in FileStatus}
    for entry in entries:
        if entry.status not in counts:
            raise UnknownStatusError(
                f"Unrecognized status {entry.status!r} for '{entry.original_name}'"
            )
        counts[FileStatus(entry.status)] += 1
    return counts


def summarize_reports(reports: Sequence[DirectoryReport]) -> RunSummary:
    """Sort directories into the four triage buckets.

    Only media entries are considered; ignored files never affect a bucket.
    A directory that could not be listed has a failure and no entries; it
    counts as a directory with errors.
    """
    error: List[Path] = []
    rejected: List[Path] = []
    renamed: List[Path] = []
    no_change: List[Path] = []
    for report in reports:
        counts = count_statuses(report.entries)
        total = len(report.entries)
        unlisted = report.failure is not None and not total
        if counts[FileStatus.ERROR] or unlisted:
            error.append(report.directory)
        if counts[FileStatus.REJECTED]:
            rejected.append(report.directory)
        if total and counts[FileStatus.RENAMED] == total:
            renamed.append(report.directory)
        if counts[FileStatus.UNPROCESSED] == total and not unlisted:
            no_change.append(report.directory)
    return RunSummary(
        directories=len(reports),
        error=error,
        rejected=rejected,
        renamed=renamed,
        no_change=no_change,
    )


def format_directory_report(report: DirectoryReport) -> str:
    """Render one directory as a divider-delimited status table."""
    heading = f"{report.directory} ({report.file_count} files)"
    lines = [DIVIDER, heading, DIVIDER]
    rows = report.rows
    if rows:
        lines += [HEADER, HEADER_RULE]
    for entry in rows:
        lines.append(
            ROW_FORMAT.format(entry.original_name, entry.new_name or "", entry.status.value)
        )

    counts = count_statuses(rows)
    tally = ", ".join(f"{status.value}: {n}" for status, n in counts.items() if n)
    lines.append("")
    lines.append(f"Status counts: {tally or 'none'}")
    if report.dry_run:
        lines.append("Dry run: no files were renamed.")
    if report.failure:
        lines.append(f"Batch not renamed: {report.failure}")
    notes = [entry for entry in rows if entry.reason]
    for entry in notes:
        lines.append(f"   {entry.original_name}: {entry.reason}")
    lines.append(f"{heading} - End")
    return "\n".join(lines) + "\n"


def _format_directory_list(directories: Sequence[Path], label: str) -> List[str]:
    lines = [f"   {label} ({len(directories)} folders)"]
    lines += [f"      {directory}" for directory in directories]
    return lines


def format_run_report(reports: Sequence[DirectoryReport]) -> str:
    """Render the full run: summary counts, folder triage, directory tables."""
    summary = summarize_reports(reports)
    lines = [
        DIVIDER,
        "Picture Renaming Report",
        "Summary:",
        f"   Number of Folders Processed: {summary.directories}",
        f"      with at least one error:  {len(summary.error)}",
        f"      with at least one reject: {len(summary.rejected)}",
        f"      with all files renamed:   {len(summary.renamed)}",
        f"      with no changes:          {len(summary.no_change)}",
        "",
        "Folders:",
        *_format_directory_list(summary.error, "with errors"),
        *_format_directory_list(summary.rejected, "with rejected files"),
        *_format_directory_list(
            summary.renamed, "with all files successfully renamed"
        ),
        *_format_directory_list(summary.no_change, "with no changes"),
        DIVIDER,
        "",
        "",
    ]
    body = "\n".join(lines) + "\n"
    return body + "\n\n".join(format_directory_report(r) for r in reports)


def write_run_report(path: Path, reports: Sequence[DirectoryReport]) -> Path:
    """Write the run report to *path*, replacing any previous report."""
    path.write_text(format_run_report(reports), encoding="utf-8")
    return path
