"""Sequence assignment for a directory batch.

Each strategy orders the candidate files and the result is compacted into a
dense, gap-free run of ordinals:

- name: case-insensitive filename order. Always succeeds.
- num: embedded number order. Every file must follow one naming convention
  unless force mode is on, in which case files that break it are rejected.
- time: capture timestamp order. Every file must have a timestamp.

A strategy that fails assigns no ordinal to anyone. Entries that caused or
were caught up in the failure carry a failure status and reason instead.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from renamepics.core.collision import resolve_collisions
from renamepics.core.convention import match_convention
from renamepics.core.errors import (
    ConventionMismatchError,
    MissingTimestampError,
    SequenceOverflowError,
)
from renamepics.models.core import FileEntry, FileStatus, SortStrategy
from renamepics.models.options import DEFAULT_MAX_DIGITS

logger = logging.getLogger(__name__)

TimestampReader = Callable[[Path], Optional[str]]

T = TypeVar("T")


def in_filename_order(entries: Iterable[FileEntry]) -> List[FileEntry]:
    """Sort entries case-insensitively by filename."""
    return sorted(entries, key=lambda entry: entry.sort_key)


def _reject_all(
    entries: Sequence[FileEntry], offenders: Sequence[FileEntry], reason: str
) -> None:
    offender_ids = {id(entry) for entry in offenders}
    for entry in entries:
        if id(entry) in offender_ids:
            entry.transition(FileStatus.REJECTED, reason)
        else:
            entry.transition(
                FileStatus.REJECTED, "Batch rejected: " + reason[0].lower() + reason[1:]
            )


def rank_by_name(entries: Iterable[FileEntry]) -> List[FileEntry]:
    """Order entries by filename, ignoring case."""
    return in_filename_order(entries)


def rank_by_number(
    entries: Iterable[FileEntry], *, force: bool = False
) -> Dict[int, FileEntry]:
    """Key entries by the number embedded in their filenames.

    The naming convention is taken from the first entry, in filename order,
    that follows one. Without *force*, any entry that does not share it fails
    the whole batch. With *force*, those entries are rejected and the rest are
    keyed. Entries sharing a number are separated by the collision resolver.

    Returns:
        Mapping of resolved numeric key to entry.

    Raises:
        ConventionMismatchError: If conventions differ and *force* is off.
    """
    ordered = in_filename_order(entries)
    matched = [(entry, match_convention(entry.original_name)) for entry in ordered]
    reference = next((conv for _, conv in matched if conv is not None), None)

    offenders = [
        entry
        for entry, conv in matched
        if conv is None or reference is None or conv.base_token != reference.base_token
    ]
    if offenders:
        if reference is None:
            reason = "Unrecognized naming convention"
        else:
            reason = f"Does not follow the '{reference.display_base}' naming convention"
        if not force:
            _reject_all(ordered, offenders, reason)
            raise ConventionMismatchError([entry.original_name for entry in offenders])
        for entry in offenders:
            entry.transition(FileStatus.REJECTED, reason)
        logger.warning(
            "Force mode: excluded %d file(s) not following the '%s' convention",
            len(offenders),
            reference.display_base if reference else "?",
        )

    offender_ids = {id(entry) for entry in offenders}
    return resolve_collisions(
        (conv.embedded_number, entry)
        for entry, conv in matched
        if conv is not None and id(entry) not in offender_ids
    )


def rank_by_time(
    entries: Iterable[FileEntry], timestamp_reader: TimestampReader
) -> List[FileEntry]:
    """Order entries by capture timestamp.

    Entries are visited in filename order. Every timestamp gets a fractional
    suffix that counts how many earlier entries carried the same timestamp,
    so ties resolve in filename order. The counter is zero-padded to a fixed
    width, keeping the keys safe to sort as strings.

    Raises:
        MissingTimestampError: If any entry has no timestamp.
    """
    ordered = in_filename_order(entries)
    stamps: List[tuple[FileEntry, Optional[str]]] = []
    for entry in ordered:
        try:
            stamp = timestamp_reader(entry.path)
        except OSError as e:
            logger.warning("Could not read metadata of '%s': %s", entry.path, e)
            stamp = None
        stamps.append((entry, stamp))

    missing = [entry for entry, stamp in stamps if not stamp]
    if missing:
        _reject_all(ordered, missing, "No capture timestamp")
        raise MissingTimestampError([entry.original_name for entry in missing])

    width = len(str(len(ordered)))
    seen: Dict[str, int] = {}
    keyed: List[tuple[str, FileEntry]] = []
    for entry, stamp in stamps:
        count = seen.get(str(stamp), 0)
        seen[str(stamp)] = count + 1
        keyed.append((f"{stamp}.{count:0{width}d}", entry))
    keyed.sort(key=lambda pair: pair[0])
    return [entry for _, entry in keyed]


def renumber(keyed: Mapping[int, T], start: int = 1) -> Dict[int, T]:
    """Remap keys onto a dense run beginning at *start*, preserving order.

    Example:
        >>> renumber({1: "a", 2: "b", 60: "c"}, start=101)
        {101: 'a', 102: 'b', 103: 'c'}
    """
    return {start + offset: keyed[key] for offset, key in enumerate(sorted(keyed))}


def is_renumbering_required(keys: Iterable[int], start: int = 1) -> bool:
    """Return True unless *keys* already form a dense run from *start*."""
    for expected, key in enumerate(sorted(keys), start):
        if key != expected:
            return True
    return False


def assign_sequence(
    entries: Sequence[FileEntry],
    strategy: SortStrategy,
    *,
    force: bool = False,
    timestamp_reader: Optional[TimestampReader] = None,
    max_digits: int = DEFAULT_MAX_DIGITS,
    start: int = 1,
) -> List[FileEntry]:
    """Assign a sequence number to every entry.

    Args:
        entries: Candidate media files of one directory.
        strategy: How to order the files.
        force: Number strategy only; reject mismatched files instead of
            failing the batch.
        timestamp_reader: Time strategy only; returns a capture timestamp
            for a path. Defaults to the EXIF reader.
        max_digits: Largest number of digits an ordinal may have.
        start: First ordinal.

    Returns:
        The numbered entries, in sequence order. Entries rejected in force
        mode are not included.

    Raises:
        PlanningError: If the strategy's prerequisites are not met or the
            highest ordinal needs more than *max_digits* digits. No entry is
            numbered in that case.
    """
    if strategy is SortStrategy.NUMBER:
        keyed = rank_by_number(entries, force=force)
        if is_renumbering_required(keyed, start):
            logger.debug("Embedded numbers are not sequential; compacting")
    else:
        if strategy is SortStrategy.TIME:
            if timestamp_reader is None:
                from renamepics.core.metadata import read_capture_timestamp

                timestamp_reader = read_capture_timestamp
            ordered = rank_by_time(entries, timestamp_reader)
        else:
            ordered = rank_by_name(entries)
        keyed = dict(enumerate(ordered))

    sequenced = renumber(keyed, start)
    if sequenced:
        highest = max(sequenced)
        if len(str(highest)) > max_digits:
            error = SequenceOverflowError(highest, max_digits)
            for entry in sequenced.values():
                entry.transition(FileStatus.ERROR, str(error))
            raise error

    for ordinal, entry in sequenced.items():
        entry.sequence_number = ordinal
    return [sequenced[ordinal] for ordinal in sorted(sequenced)]
