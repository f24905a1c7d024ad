"""Directory lister for picture and movie files.

This module lists a single directory and sorts its regular files into media
entries (candidates for renaming) and ignored entries. Subdirectories are
reported but not descended into; recursion is the batch runner's job so that
each directory is fully processed before the next one is listed.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List

from renamepics.models.core import FileEntry, FileStatus, ScanResult

logger = logging.getLogger(__name__)

# Extensions are compared lower-cased and without the leading period.
MEDIA_EXTENSIONS = frozenset({"jpg", "mp4", "wmv"})


@dataclass(frozen=True)
class DirectoryItem:
    """One entry of a directory listing."""

    name: str
    is_dir: bool
    is_file: bool


DirectoryLister = Callable[[Path], List[DirectoryItem]]


def list_directory(directory: Path) -> List[DirectoryItem]:
    """List *directory* in name order.

    Raises:
        FileNotFoundError: If the directory doesn't exist.
        NotADirectoryError: If the path is not a directory.
        PermissionError: If the directory cannot be read.
    """
    items = []
    with os.scandir(directory) as it:
        for dir_entry in it:
            items.append(
                DirectoryItem(
                    name=dir_entry.name,
                    is_dir=dir_entry.is_dir(),
                    is_file=dir_entry.is_file(),
                )
            )
    return sorted(items, key=lambda item: item.name)


def is_media_file(name: str) -> bool:
    """Check whether *name* has a media extension, in any case."""
    return Path(name).suffix[1:].lower() in MEDIA_EXTENSIONS


def scan_directory(
    directory: Path, lister: DirectoryLister = list_directory
) -> ScanResult:
    """Scan a single directory for media files.

    Args:
        directory: The directory to scan.
        lister: Directory listing collaborator.

    Returns:
        ScanResult with media entries (``Unprocessed``), ignored entries
        (``Ignored``) and subdirectories.

    Raises:
        FileNotFoundError: If the directory doesn't exist
        ValueError: If the path is not a directory
    """
    if not directory.exists():
        raise FileNotFoundError(f"Directory does not exist: {directory}")
    if not directory.is_dir():
        raise ValueError(f"Path is not a directory: {directory}")

    directory = directory.absolute()
    entries: List[FileEntry] = []
    ignored: List[FileEntry] = []
    subdirectories: List[Path] = []
    names = []

    for item in lister(directory):
        names.append(item.name.lower())
        path = directory / item.name
        if item.is_dir:
            subdirectories.append(path)
        elif item.is_file:
            if is_media_file(item.name):
                entries.append(FileEntry.from_path(path))
            else:
                ignored.append(FileEntry.from_path(path, status=FileStatus.IGNORED))

    logger.info(
        "Scanned '%s': %d media file(s), %d ignored, %d folder(s)",
        directory,
        len(entries),
        len(ignored),
        len(subdirectories),
    )
    return ScanResult(
        directory=directory,
        entries=entries,
        ignored=ignored,
        subdirectories=sorted(subdirectories),
        existing_names=frozenset(names),
    )
