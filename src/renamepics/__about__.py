"""Version information for renamepics."""

__version__ = "0.3.0"
