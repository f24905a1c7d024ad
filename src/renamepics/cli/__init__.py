"""Command-line interface for renamepics.

- app: The Typer application object with the rename, config and version
  commands.
- ConsoleManager: Rich Console factory honouring ``--no-rich``.
"""

from renamepics.cli.commands import app, main
from renamepics.cli.console import ConsoleManager

__all__ = ["ConsoleManager", "app", "main"]
