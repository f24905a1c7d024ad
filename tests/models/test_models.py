"""Tests for the renamepics data models.

Covers FileEntry construction and its status lifecycle, RenamePlan
validation, RenameOptions validation and report serialisation.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from renamepics.core.errors import StatusTransitionError
from renamepics.models import (
    DirectoryReport,
    FileEntry,
    FileStatus,
    RenameOptions,
    RenamePlan,
    SortStrategy,
)
from renamepics.utils.json import DateTimeEncoder


def test_file_entry_from_path(tmp_path: Path) -> None:
    """The extension is split off without its period, case kept."""
    entry = FileEntry.from_path(tmp_path / "Holiday-3.JPG")
    assert entry.original_name == "Holiday-3.JPG"
    assert entry.extension == "JPG"
    assert entry.status is FileStatus.UNPROCESSED
    assert entry.destination is None
    entry.new_name = "Trip_0001.jpg"
    assert entry.destination == tmp_path / "Trip_0001.jpg"


def test_file_entry_requires_absolute_path() -> None:
    """Relative paths are refused."""
    with pytest.raises(ValidationError):
        FileEntry.from_path(Path("relative/a.jpg"))


@pytest.mark.parametrize(
    "terminal",
    [
        FileStatus.READY,
        FileStatus.RENAMED,
        FileStatus.ERROR,
        FileStatus.REJECTED,
    ],
)
def test_status_never_regresses(tmp_path: Path, terminal: FileStatus) -> None:
    """Terminal statuses refuse any further transition."""
    entry = FileEntry.from_path(tmp_path / "a.jpg")
    entry.transition(terminal, "why")
    assert entry.status is terminal
    assert entry.reason == "why"
    with pytest.raises(StatusTransitionError) as excinfo:
        entry.transition(FileStatus.UNPROCESSED)
    assert f"from '{terminal.value}'" in str(excinfo.value)


def test_ignored_is_terminal(tmp_path: Path) -> None:
    """Ignored entries never transition."""
    entry = FileEntry.from_path(tmp_path / "a.txt", status=FileStatus.IGNORED)
    with pytest.raises(StatusTransitionError):
        entry.transition(FileStatus.RENAMED)


def test_rename_plan_rejects_unplanned_entries(tmp_path: Path) -> None:
    """Every planned entry needs a new name and a sequence number."""
    entry = FileEntry.from_path(tmp_path / "a.jpg")
    with pytest.raises(ValidationError):
        RenamePlan(
            directory=tmp_path,
            base_name="A",
            width=4,
            strategy=SortStrategy.NAME,
            entries=[entry],
        )
    entry.new_name, entry.sequence_number = "A_0001.jpg", 1
    plan = RenamePlan(
        directory=tmp_path,
        base_name="A",
        width=4,
        strategy=SortStrategy.NAME,
        entries=[entry],
    )
    assert plan.mapping == {"a.jpg": "A_0001.jpg"}

    with pytest.raises(ValidationError):
        RenamePlan(
            directory=Path("relative"),
            base_name="A",
            width=4,
            strategy=SortStrategy.NAME,
        )


def test_rename_options_validation() -> None:
    """Base name, digit width and renumber origin are validated."""
    options = RenameOptions(base_name="Trip", strategy="num")
    assert options.strategy is SortStrategy.NUMBER
    assert options.max_digits == 4
    for bad in [
        {"base_name": "trip"},
        {"base_name": "Trip\n"},
        {"base_name": "Trip", "max_digits": 0},
    ]:
        with pytest.raises(ValidationError):
            RenameOptions(**bad)
    with pytest.raises(ValidationError):
        RenameOptions(base_name="Trip", renumber_start=-1)
    with pytest.raises(ValidationError):
        RenameOptions(base_name="Trip", strategy="size")


def test_rename_options_origin() -> None:
    """The renumber origin only applies to the number strategy."""
    assert RenameOptions(base_name="A").origin == 1
    assert (
        RenameOptions(
            base_name="A", strategy="num", renumber=True, renumber_start=0
        ).origin
        == 0
    )
    assert RenameOptions(base_name="A", renumber=True, renumber_start=7).origin == 1


def test_directory_report_serialises(tmp_path: Path) -> None:
    """Reports dump to JSON with paths and statuses as strings."""
    entry = FileEntry.from_path(tmp_path / "a.jpg")
    entry.transition(FileStatus.RENAMED)
    report = DirectoryReport(directory=tmp_path, entries=[entry])
    data = json.loads(json.dumps(report.model_dump(), cls=DateTimeEncoder))
    assert data["directory"] == str(tmp_path)
    assert data["entries"][0]["status"] == "Renamed"
    assert data["entries"][0]["path"] == str(tmp_path / "a.jpg")

    with pytest.raises(ValidationError):
        report.failure = "late"  # type: ignore[misc]
