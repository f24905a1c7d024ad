"""Exceptions raised by the renaming engine.

Planning errors abort a whole directory batch before any file is touched; the
batch runner records them on the directory report. Invariant errors signal a
programming mistake and abort the run.
"""

from typing import Iterable, Sequence


class RenamePicsError(Exception):
    """Base class for all renamepics errors."""


class PlanningError(RenamePicsError):
    """A directory batch cannot be planned; no file in it may be renamed."""


class ConventionMismatchError(PlanningError):
    """Files in a number-sorted batch do not share one naming convention."""

    def __init__(self, offenders: Sequence[str]) -> None:
        self.offenders = list(offenders)
        super().__init__(
            "Inconsistent or unrecognized naming convention: "
            + ", ".join(self.offenders)
        )


class MissingTimestampError(PlanningError):
    """Files in a time-sorted batch have no capture timestamp."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__("No capture timestamp for: " + ", ".join(self.missing))


class SequenceOverflowError(PlanningError):
    """The highest ordinal does not fit in the configured digit width."""

    def __init__(self, ordinal: int, max_digits: int) -> None:
        self.ordinal = ordinal
        self.max_digits = max_digits
        super().__init__(
            f"Sequence number {ordinal} needs {len(str(ordinal))} digits; "
            f"the maximum is {max_digits}"
        )


class DestinationCollisionError(PlanningError):
    """Planned names collide with each other or with existing files."""

    def __init__(self, conflicts: Iterable[str]) -> None:
        self.conflicts = sorted(set(conflicts), key=str.lower)
        super().__init__("Naming conflict for: " + ", ".join(self.conflicts))


class InvalidBaseNameError(PlanningError, ValueError):
    """The base filename is not usable for new names."""


class StatusTransitionError(RenamePicsError):
    """An entry was asked to leave a terminal status."""

    def __init__(self, name: str, current: object, requested: object) -> None:
        current = getattr(current, "value", current)
        requested = getattr(requested, "value", requested)
        super().__init__(
            f"Invalid status. Cannot move '{name}' from '{current}' to '{requested}'"
        )


class UnknownStatusError(RenamePicsError):
    """A status outside the closed set was found while tallying."""
