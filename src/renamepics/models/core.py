"""Core domain models for renamepics.

This module defines the data structures shared by scanning, planning,
execution and reporting.
- FileEntry is the atomic unit: one candidate file in one directory batch.
- FileStatus tracks the lifecycle of each entry and refuses regressions.
- ScanResult aggregates a single directory listing.

Design:
- All file paths are absolute so that a plan can never move a file relative to
  the wrong working directory.
- Extensions are stored exactly as found on disk; lower-casing happens only
  when a new name is generated.
"""

from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FileStatus(str, Enum):
    """Status of a file entry.

    ``UNPROCESSED`` is the initial state of every media file. ``READY`` (dry
    run) and ``RENAMED`` are terminal successes; ``ERROR`` and ``REJECTED`` are
    terminal failures. ``IGNORED`` is assigned at enumeration time to files
    whose extension is not a media extension and never changes.
    """

    UNPROCESSED = "Unprocessed"
    READY = "Ready"
    RENAMED = "Renamed"
    ERROR = "Error"
    REJECTED = "Rejected"
    IGNORED = "Ignored"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is permitted from this status."""
        return self is not FileStatus.UNPROCESSED


class SortStrategy(str, Enum):
    """Order in which files are assigned sequence numbers."""

    NAME = "name"
    NUMBER = "num"
    TIME = "time"


class NamingConvention(BaseModel):
    """Naming convention extracted from a single filename.

    Two files share a convention when their ``base_token`` values are equal.
    """

    model_config = ConfigDict(frozen=True)

    base_token: str
    """Case-folded base, used only for comparison."""

    display_base: str
    """The base exactly as it appears in the filename."""

    embedded_number: int = 0
    """Trailing number of the stem; 0 when the stem has no trailing digits."""


class FileEntry(BaseModel):
    """A single file in a directory batch.

    Entries are owned by exactly one batch and are mutated in place while the
    batch moves through planning and execution. Status changes must go through
    :meth:`transition` so that the lifecycle can never regress.
    """

    original_name: str
    """Filename (no directory part) as found on disk."""

    path: Path
    """Absolute path to the file."""

    extension: str = ""
    """Extension without the leading period, in its original case."""

    status: FileStatus = FileStatus.UNPROCESSED
    """Current lifecycle status."""

    sequence_number: Optional[int] = Field(default=None, ge=0)
    """Ordinal assigned by the sequence assigner."""

    new_name: Optional[str] = None
    """Planned filename (no directory part)."""

    reason: Optional[str] = None
    """Why the entry ended in a failure status, if it did."""

    @property
    def sort_key(self) -> tuple[str, str]:
        """Case-insensitive filename order, falling back to exact name on ties."""
        return self.original_name.lower(), self.original_name

    @property
    def destination(self) -> Optional[Path]:
        """Absolute path the entry will be renamed to, once planned."""
        if self.new_name is None:
            return None
        return self.path.parent / self.new_name

    def transition(self, status: FileStatus, reason: Optional[str] = None) -> None:
        """Move the entry to *status*.

        Raises:
            StatusTransitionError: If the entry already holds a terminal status.
        """
        from renamepics.core.errors import StatusTransitionError

        if self.status.is_terminal:
            raise StatusTransitionError(self.original_name, self.status, status)
        self.status = status
        if reason is not None:
            self.reason = reason

    @model_validator(mode="after")
    def validate_path(self) -> "FileEntry":
        """Ensure the path is absolute.

        Raises:
            ValueError: If the path is not absolute.
        """
        if not self.path.is_absolute():
            raise ValueError(f"Path must be absolute: {self.path}")
        return self

    @classmethod
    def from_path(
        cls, path: Path, status: FileStatus = FileStatus.UNPROCESSED
    ) -> "FileEntry":
        """Build an entry for *path*, splitting off its extension."""
        return cls(
            original_name=path.name,
            path=path,
            extension=path.suffix[1:],
            status=status,
        )


class ScanResult(BaseModel):
    """Result of listing a single directory."""

    directory: Path
    """Absolute path of the directory that was listed."""

    entries: List[FileEntry] = Field(default_factory=list)
    """Media files, all ``UNPROCESSED``."""

    ignored: List[FileEntry] = Field(default_factory=list)
    """Regular files with a non-media extension, all ``IGNORED``."""

    subdirectories: List[Path] = Field(default_factory=list)
    """Child directories, in sorted order."""

    existing_names: FrozenSet[str] = frozenset()
    """Lower-cased names of everything in the directory (files and folders)."""
