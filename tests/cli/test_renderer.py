"""Tests for the renderer module."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from renamepics.cli.renderer import render_report, render_summary
from renamepics.core.report import build_directory_report, summarize_reports
from renamepics.models.core import FileEntry, FileStatus
from renamepics.models.report import DirectoryReport


@pytest.fixture
def console() -> Console:
    """A wide, colourless console writing to a buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def report(tmp_path: Path) -> DirectoryReport:
    """A report with one entry in each interesting status."""
    renamed = FileEntry.from_path(tmp_path / "a.jpg")
    renamed.new_name = "Trip_0001.jpg"
    renamed.transition(FileStatus.RENAMED)
    failed = FileEntry.from_path(tmp_path / "b.jpg")
    failed.new_name = "Trip_0002.jpg"
    failed.transition(FileStatus.ERROR, "Move failed: [Errno 13] denied")
    ignored = FileEntry.from_path(tmp_path / "c.txt", status=FileStatus.IGNORED)
    return build_directory_report(tmp_path, [renamed, failed], [ignored])


def _output(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


def test_render_report_lists_rows(console: Console, report: DirectoryReport) -> None:
    """Every row, its status and reason are rendered."""
    render_report(report, console=console)
    out = _output(console)
    for text in ["a.jpg", "Trip_0001.jpg", "Renamed", "b.jpg", "Error", "c.txt"]:
        assert text in out
    # Square brackets in reasons are shown, not parsed as markup.
    assert "[Errno 13] denied" in out
    assert "Total: 3 | Renamed: 1 | Error: 1 | Ignored: 1" in out


def test_render_report_failure_and_dry_run(console: Console, tmp_path: Path) -> None:
    """Batch failures and dry runs are announced under the table."""
    entry = FileEntry.from_path(tmp_path / "a.jpg")
    entry.transition(FileStatus.READY)
    render_report(
        build_directory_report(tmp_path, [entry], dry_run=True), console=console
    )
    render_report(
        build_directory_report(tmp_path, [], failure="Naming conflict for: a.jpg"),
        console=console,
    )
    out = _output(console)
    assert "Dry run: no files were renamed." in out
    assert "Batch not renamed: Naming conflict for: a.jpg" in out


def test_render_summary(console: Console, report: DirectoryReport) -> None:
    """The summary table shows every bucket with its folders."""
    render_summary(summarize_reports([report]), console=console)
    out = _output(console)
    assert "Folders processed: 1" in out
    for label in ["With errors", "With rejected files", "All files renamed", "No changes"]:
        assert label in out
    assert str(report.directory) in out
