"""Models for rename plans.

A plan is the complete, validated, not-yet-applied mapping from current
filenames to new filenames for one directory batch.
- Plans are only ever constructed after destination checks pass, so holding a
  RenamePlan means every entry in it can be applied.
- Entries excluded from renaming (rejected in force mode) and ignored files
  travel with the plan so that the executor can report on the whole directory.
"""

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, model_validator

from renamepics.models.core import FileEntry, SortStrategy


class RenamePlan(BaseModel):
    """Validated rename operations for a single directory."""

    directory: Path
    """Absolute path of the directory the plan applies to."""

    base_name: str
    """Base filename every new name starts with."""

    width: int = Field(ge=1)
    """Zero-pad width of the sequence number."""

    strategy: SortStrategy
    """Strategy used to assign sequence numbers."""

    entries: List[FileEntry] = Field(default_factory=list)
    """Entries to rename, ordered by sequence number."""

    rejected: List[FileEntry] = Field(default_factory=list)
    """Entries excluded from renaming (force mode)."""

    ignored: List[FileEntry] = Field(default_factory=list)
    """Non-media files found in the directory."""

    @model_validator(mode="after")
    def validate_entries(self) -> "RenamePlan":
        """Ensure the directory is absolute and every entry has a new name.

        Raises:
            ValueError: If the directory is relative or an entry is unplanned.
        """
        if not self.directory.is_absolute():
            raise ValueError(f"Directory must be absolute: {self.directory}")
        for entry in self.entries:
            if entry.new_name is None or entry.sequence_number is None:
                raise ValueError(f"Entry has not been planned: {entry.original_name}")
        return self

    @property
    def mapping(self) -> dict[str, str]:
        """Original name to new name for every planned entry."""
        return {e.original_name: e.new_name for e in self.entries if e.new_name}
