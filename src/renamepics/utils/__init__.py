"""Utility modules for renamepics."""

from renamepics.utils.config import resolve_setting, set_setting
from renamepics.utils.json import DateTimeEncoder

__all__ = [
    "DateTimeEncoder",
    "resolve_setting",
    "set_setting",
]
