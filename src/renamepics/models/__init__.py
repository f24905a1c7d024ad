"""Domain models for the renamepics application."""

from renamepics.models.core import (
    FileEntry,
    FileStatus,
    NamingConvention,
    ScanResult,
    SortStrategy,
)
from renamepics.models.options import RenameOptions
from renamepics.models.plan import RenamePlan
from renamepics.models.report import DirectoryReport, RunSummary

__all__ = [
    "DirectoryReport",
    "FileEntry",
    "FileStatus",
    "NamingConvention",
    "RenameOptions",
    "RenamePlan",
    "RunSummary",
    "ScanResult",
    "SortStrategy",
]
