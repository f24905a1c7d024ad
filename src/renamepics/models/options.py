"""Run options for renamepics.

This module defines the configuration value passed explicitly from the CLI
into the batch runner, planner and executor. There is no process-wide state:
every component receives the options it needs.
"""

import re

from pydantic import BaseModel, Field, field_validator

from renamepics.models.core import SortStrategy

DEFAULT_MAX_DIGITS = 4
DEFAULT_REPORT_FILE = "rename_report.txt"

BASE_NAME_PATTERN = re.compile(r"[A-Z][A-Za-z0-9_]*")


class RenameOptions(BaseModel):
    """Options for a rename run."""

    base_name: str
    """Base filename for new names. Must start with an uppercase letter and
    contain only letters, digits and underscores."""

    strategy: SortStrategy = SortStrategy.NAME
    """How files are ordered before numbering."""

    dry_run: bool = False
    """Plan and report without touching the filesystem."""

    max_digits: int = Field(default=DEFAULT_MAX_DIGITS, ge=1)
    """Zero-pad width; also the largest number of digits an ordinal may have."""

    force: bool = False
    """Number strategy only: exclude files that break the naming convention
    instead of refusing the whole directory."""

    recursive: bool = False
    """Process subdirectories, one at a time, after their parent."""

    renumber: bool = False
    """Number strategy only: compact ordinals into a dense run starting at
    ``renumber_start``."""

    renumber_start: int = Field(default=1, ge=0)
    """First ordinal used when ``renumber`` is active."""

    @field_validator("base_name")
    @classmethod
    def validate_base_name(cls, value: str) -> str:
        """Reject base names that would produce unsortable or unsafe filenames."""
        if not BASE_NAME_PATTERN.fullmatch(value):
            raise ValueError(
                "Base name must start with an uppercase letter and contain only "
                f"letters, digits and underscores: {value!r}"
            )
        return value

    @property
    def origin(self) -> int:
        """First ordinal to assign."""
        if self.renumber and self.strategy is SortStrategy.NUMBER:
            return self.renumber_start
        return 1
