"""Apply engine for rename plans.

This module executes a validated RenamePlan, the second half of the
plan/commit protocol.
- In dry-run mode every planned entry becomes ``Ready`` and nothing is moved.
- Otherwise each entry is moved with the injected move primitive. A failed
  move marks only that entry ``Error``; the remaining entries are still
  processed, since destination uniqueness was verified during planning.
"""

import logging
from pathlib import Path
from typing import Callable

from renamepics.core.report import build_directory_report
from renamepics.fs.operations import atomic_move
from renamepics.models.core import FileStatus
from renamepics.models.plan import RenamePlan
from renamepics.models.report import DirectoryReport

logger = logging.getLogger(__name__)

MoveFunc = Callable[[Path, Path], None]


def execute_plan(
    plan: RenamePlan, dry_run: bool = False, move: MoveFunc = atomic_move
) -> DirectoryReport:
    """Apply *plan* and report on its directory.

    Args:
        plan: The RenamePlan to execute.
        dry_run: Whether to skip all filesystem changes.
        move: Move primitive; called as ``move(source, destination)`` and
            expected to raise OSError on failure.

    Returns:
        DirectoryReport covering planned, rejected and ignored entries.

    Raises:
        ValueError: If a plan entry has no destination.
    """
    for entry in plan.entries:
        destination = entry.destination
        if destination is None:
            raise ValueError(f"Entry has not been planned: {entry.original_name}")
        if dry_run:
            logger.info("[dry run] Would rename %s -> %s", entry.path, destination)
            entry.transition(FileStatus.READY)
            continue
        if entry.new_name == entry.original_name:
            logger.debug("'%s' already has the planned name", entry.path)
            entry.transition(FileStatus.RENAMED)
            continue
        try:
            move(entry.path, destination)
        except OSError as e:
            logger.error("Could not rename file '%s': %s", entry.path, e)
            entry.transition(FileStatus.ERROR, f"Move failed: {e}")
            continue
        logger.info("Renamed %s to %s", entry.path, destination)
        entry.transition(FileStatus.RENAMED)

    return build_directory_report(
        plan.directory,
        [*plan.entries, *plan.rejected],
        plan.ignored,
        dry_run=dry_run,
    )


__all__ = ["MoveFunc", "atomic_move", "execute_plan"]
