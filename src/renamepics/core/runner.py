"""Batch runner: one directory at a time, plan then commit.

Each directory is listed, planned and (unless dry-running) committed before
the next directory is listed. Listing and planning failures are recorded on
the directory's report and never stop the run; invariant violations do.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from renamepics.core.apply import MoveFunc, execute_plan
from renamepics.core.errors import PlanningError
from renamepics.core.planner import RenamePlanBuildContext, create_rename_plan
from renamepics.core.report import build_directory_report
from renamepics.core.scanner import DirectoryLister, list_directory, scan_directory
from renamepics.core.sequencer import TimestampReader
from renamepics.fs.operations import atomic_move
from renamepics.models.options import RenameOptions
from renamepics.models.report import DirectoryReport

logger = logging.getLogger(__name__)


@dataclass
class Collaborators:
    """External services the engine depends on."""

    lister: DirectoryLister = list_directory
    move: MoveFunc = atomic_move
    timestamp_reader: Optional[TimestampReader] = None


def process_directory(
    directory: Path,
    options: RenameOptions,
    collaborators: Optional[Collaborators] = None,
) -> tuple[DirectoryReport, List[Path]]:
    """Plan and apply renames for a single directory.

    Returns:
        The directory's report and its subdirectories.
    """
    collaborators = collaborators or Collaborators()
    logger.info("Processing '%s'", directory)
    try:
        scan = scan_directory(directory, lister=collaborators.lister)
    except (OSError, ValueError) as e:
        logger.error("Cannot list '%s': %s", directory, e)
        report = build_directory_report(
            directory.absolute(),
            [],
            failure=f"Cannot list directory: {e}",
            dry_run=options.dry_run,
        )
        return report, []

    if not scan.entries:
        report = build_directory_report(
            scan.directory, [], scan.ignored, dry_run=options.dry_run
        )
        return report, scan.subdirectories

    ctx = RenamePlanBuildContext(
        directory=scan.directory,
        entries=scan.entries,
        options=options,
        ignored=scan.ignored,
        existing_names=scan.existing_names,
        timestamp_reader=collaborators.timestamp_reader,
    )
    try:
        plan = create_rename_plan(ctx)
    except PlanningError as e:
        logger.error("Not renaming files in '%s': %s", scan.directory, e)
        report = build_directory_report(
            scan.directory,
            scan.entries,
            scan.ignored,
            failure=str(e),
            dry_run=options.dry_run,
        )
        return report, scan.subdirectories

    report = execute_plan(plan, dry_run=options.dry_run, move=collaborators.move)
    return report, scan.subdirectories


def iter_reports(
    directories: Iterable[Path],
    options: RenameOptions,
    collaborators: Optional[Collaborators] = None,
) -> Iterator[DirectoryReport]:
    """Yield a report per directory, descending depth-first when recursive.

    A directory's subdirectories are processed after the directory itself,
    in name order, one at a time.
    """
    stack = list(reversed(list(directories)))
    while stack:
        directory = stack.pop()
        report, subdirectories = process_directory(directory, options, collaborators)
        yield report
        if options.recursive:
            stack.extend(reversed(subdirectories))


def run(
    directories: Iterable[Path],
    options: RenameOptions,
    collaborators: Optional[Collaborators] = None,
) -> List[DirectoryReport]:
    """Process every directory and return their reports in processing order."""
    return list(iter_reports(directories, options, collaborators))
