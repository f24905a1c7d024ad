"""Report models for directory batches and whole runs."""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from renamepics.models.core import FileEntry


class DirectoryReport(BaseModel):
    """Outcome of processing one directory.

    Built once the directory's batch has completed and never modified after
    that. Entries are copies, so later changes to the batch objects do not
    leak into a finished report.
    """

    model_config = ConfigDict(frozen=True)

    directory: Path
    entries: List[FileEntry] = Field(default_factory=list)
    """Media entries, sorted case-insensitively by original name."""

    ignored: List[FileEntry] = Field(default_factory=list)
    """Non-media files, sorted case-insensitively by original name."""

    failure: Optional[str] = None
    """Batch-level failure reason when planning refused the batch."""

    dry_run: bool = False

    @property
    def rows(self) -> List[FileEntry]:
        """Media and ignored entries together, in case-insensitive name order."""
        return sorted([*self.entries, *self.ignored], key=lambda e: e.sort_key)

    @property
    def file_count(self) -> int:
        return len(self.entries) + len(self.ignored)


class RunSummary(BaseModel):
    """Cross-directory triage of a run.

    The four buckets are computed independently per directory, so a
    directory may appear in more than one of them.
    """

    model_config = ConfigDict(frozen=True)

    directories: int = 0
    error: List[Path] = Field(default_factory=list)
    """Directories with at least one ``Error`` entry, or that could not be listed."""

    rejected: List[Path] = Field(default_factory=list)
    """Directories with at least one ``Rejected`` entry."""

    renamed: List[Path] = Field(default_factory=list)
    """Directories whose entries were all ``Renamed``."""

    no_change: List[Path] = Field(default_factory=list)
    """Directories with no media entries, or only ``Unprocessed`` ones."""
