"""Filesystem move operations for renamepics.

Provides the move primitive used by the executor. Source and destination
always share a directory, so a move is a plain rename. Case-only renames on
case-insensitive filesystems and Windows long paths are handled, and an
existing file is never overwritten.
"""

import errno
import sys
from pathlib import Path

WIN_MAX_PATH = 259  # Windows MAX_PATH limit for NTFS long paths


def get_win_long_path_prefix() -> str:
    """Return the Windows NTFS long path prefix."""
    bslash = chr(92)
    return bslash + bslash + "?" + bslash


def _win_long_path(path: Path) -> str:
    s = str(path)
    prefix = get_win_long_path_prefix()
    if sys.platform == "win32" and len(s) > WIN_MAX_PATH and not s.startswith(prefix):
        return prefix + s
    return s


def _is_same_file(src: Path, dst: Path) -> bool:
    """True when *dst* resolves to *src* itself (a case-only rename)."""
    try:
        return src.samefile(dst)
    except OSError:
        return False


def atomic_move(src: Path, dst: Path) -> None:
    """Rename *src* to *dst* without ever replacing another file.

    On a case-insensitive filesystem ``Photo.JPG -> Photo.jpg`` makes *dst*
    appear to exist already; that is recognised as the same file and the
    rename proceeds.

    Args:
        src: Source file path.
        dst: Destination file path.

    Raises:
        FileExistsError: If *dst* exists and is a different file.
        FileNotFoundError: If *src* is missing.
        OSError: If the rename itself fails.

    Example:
        >>> from pathlib import Path
        >>> from renamepics.fs.operations import atomic_move
        >>> src = Path('Party-1.JPG')
        >>> src.write_text('jpeg')
        >>> atomic_move(src, Path('Party_0001.jpg'))
    """
    if not src.exists():
        raise FileNotFoundError(errno.ENOENT, "Source file does not exist", str(src))
    if dst.exists() and not _is_same_file(src, dst):
        raise FileExistsError(errno.EEXIST, "Destination already exists", str(dst))
    Path(_win_long_path(src)).rename(_win_long_path(dst))
