"""Rename planner for a directory batch.

Planning is the first half of a two-phase plan/commit protocol. Every new
name is computed and checked before the filesystem is touched:

(a) no two entries may share a destination, compared case-insensitively,
    because the target filesystem may be case-insensitive even when the host
    is not;
(b) no destination may already exist under a different name. A destination
    that differs from the entry's own current name only in case is allowed.

If either check fails, the offending entries are marked ``Error`` and the
whole batch is refused.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Collection, Dict, List, Optional, Sequence

from renamepics.core.errors import DestinationCollisionError, InvalidBaseNameError
from renamepics.core.sequencer import TimestampReader, assign_sequence
from renamepics.models.core import FileEntry, FileStatus, SortStrategy
from renamepics.models.options import BASE_NAME_PATTERN, RenameOptions
from renamepics.models.plan import RenamePlan

logger = logging.getLogger(__name__)


def validate_base_name(base_name: str) -> str:
    """Check that *base_name* can start a new filename.

    Raises:
        InvalidBaseNameError: If it does not start with an uppercase letter or
            contains anything but letters, digits and underscores.
    """
    if not BASE_NAME_PATTERN.fullmatch(base_name):
        raise InvalidBaseNameError(
            "Base name must start with an uppercase letter and contain only "
            f"letters, digits and underscores: {base_name!r}"
        )
    return base_name


def generate_name(base_name: str, ordinal: int, width: int, extension: str) -> str:
    """Build a new filename.

    Example:
        >>> generate_name("Party", 7, 4, "JPG")
        'Party_0007.jpg'
    """
    return f"{base_name}_{str(ordinal).zfill(width)}.{extension.lower()}"


@dataclass
class RenamePlanBuildContext:
    """Everything needed to plan one directory batch."""

    directory: Path
    entries: Sequence[FileEntry]
    options: RenameOptions
    ignored: Sequence[FileEntry] = field(default_factory=list)
    existing_names: Optional[Collection[str]] = None
    timestamp_reader: Optional[TimestampReader] = None


def _existing_names(directory: Path) -> set[str]:
    return {name.lower() for name in os.listdir(directory)}


def find_destination_conflicts(
    entries: Sequence[FileEntry], existing_names: Collection[str]
) -> Dict[str, str]:
    """Return ``{original_name: reason}`` for every entry whose new name conflicts.

    Args:
        entries: Entries with ``new_name`` set.
        existing_names: Lower-cased names present in the directory.

    Raises:
        ValueError: If an entry has no ``new_name``.
    """
    conflicts: Dict[str, str] = {}
    claimed: Dict[str, FileEntry] = {}
    for entry in entries:
        if entry.new_name is None:
            raise ValueError(f"Entry has no new name: {entry.original_name}")
        key = entry.new_name.lower()
        if key in claimed:
            other = claimed[key]
            reason = f"Naming conflict: '{entry.new_name}' is planned more than once"
            conflicts[entry.original_name] = reason
            conflicts[other.original_name] = reason
            continue
        claimed[key] = entry
        if key in existing_names and key != entry.original_name.lower():
            conflicts[entry.original_name] = (
                f"Naming conflict: '{entry.new_name}' already exists"
            )
    return conflicts


def build_plan(
    directory: Path,
    entries: Sequence[FileEntry],
    base_name: str,
    width: int,
    *,
    strategy: SortStrategy = SortStrategy.NAME,
    existing_names: Optional[Collection[str]] = None,
    rejected: Sequence[FileEntry] = (),
    ignored: Sequence[FileEntry] = (),
) -> RenamePlan:
    """Name already-numbered entries and validate the batch.

    Args:
        directory: Directory the entries live in.
        entries: Entries with ``sequence_number`` assigned.
        base_name: Base filename for the new names.
        width: Zero-pad width.
        strategy: Strategy that produced the numbers, kept on the plan.
        existing_names: Lower-cased names present in *directory*. Listed from
            disk when omitted.
        rejected: Entries excluded from renaming, carried for reporting.
        ignored: Non-media files, carried for reporting.

    Returns:
        A plan in which every entry can be renamed.

    Raises:
        DestinationCollisionError: If any destination conflicts. Offending
            entries are marked ``Error``; no other entry changes status.
    """
    validate_base_name(base_name)
    for entry in entries:
        if entry.sequence_number is None:
            raise ValueError(f"Entry has no sequence number: {entry.original_name}")
        entry.new_name = generate_name(
            base_name, entry.sequence_number, width, entry.extension
        )

    if existing_names is None:
        existing_names = _existing_names(directory)
    else:
        existing_names = {name.lower() for name in existing_names}

    conflicts = find_destination_conflicts(entries, existing_names)
    if conflicts:
        for entry in entries:
            reason = conflicts.get(entry.original_name)
            if reason is not None:
                logger.error("Cannot rename '%s': %s", entry.path, reason)
                entry.transition(FileStatus.ERROR, reason)
        raise DestinationCollisionError(conflicts)

    return RenamePlan(
        directory=directory,
        base_name=base_name,
        width=width,
        strategy=strategy,
        entries=list(entries),
        rejected=list(rejected),
        ignored=list(ignored),
    )


def create_rename_plan(ctx: RenamePlanBuildContext) -> RenamePlan:
    """Create a rename plan for one directory batch.

    Sequence numbers are assigned with the configured strategy, then every
    new name is generated and checked.

    Args:
        ctx: RenamePlanBuildContext describing the batch.

    Returns:
        A RenamePlan ready for execution.

    Raises:
        PlanningError: If the batch cannot be renamed safely. No entry is
            left ``Ready`` or ``Renamed``.
    """
    options = ctx.options
    validate_base_name(options.base_name)
    if options.renumber and options.strategy is not SortStrategy.NUMBER:
        logger.warning(
            "Renumbering only applies to the number strategy; ignored for '%s'",
            options.strategy.value,
        )

    numbered = assign_sequence(
        ctx.entries,
        options.strategy,
        force=options.force,
        timestamp_reader=ctx.timestamp_reader,
        max_digits=options.max_digits,
        start=options.origin,
    )
    numbered_ids = {id(entry) for entry in numbered}
    rejected = [entry for entry in ctx.entries if id(entry) not in numbered_ids]

    plan = build_plan(
        ctx.directory,
        numbered,
        options.base_name,
        options.max_digits,
        strategy=options.strategy,
        existing_names=ctx.existing_names,
        rejected=rejected,
        ignored=ctx.ignored,
    )
    logger.info(
        "Planned %d rename(s) in '%s' (%d rejected)",
        len(plan.entries),
        ctx.directory,
        len(rejected),
    )
    logger.debug("Rename plan for '%s': %s", ctx.directory, plan.mapping)
    return plan


__all__: List[str] = [
    "RenamePlanBuildContext",
    "build_plan",
    "create_rename_plan",
    "find_destination_conflicts",
    "generate_name",
    "validate_base_name",
]
