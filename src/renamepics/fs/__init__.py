"""Filesystem operations for renamepics."""

from renamepics.fs.operations import atomic_move

__all__ = ["atomic_move"]
