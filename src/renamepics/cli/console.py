"""Rich console setup for CLI commands.

Commands open a ``ConsoleManager`` and print through the console it yields.
Plain output (no colour, no terminal control codes) is selected with the
global ``--no-rich`` flag, which sets ``RENAMEPICS_NO_RICH``, or by setting
that variable directly.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from types import TracebackType
from typing import Any

from rich.console import Console
from rich.traceback import Traceback
from rich.traceback import install as install_rich_traceback

__all__ = ["ConsoleManager", "rich_enabled"]

NO_RICH_ENV = "RENAMEPICS_NO_RICH"


def rich_enabled() -> bool:
    """Return False when ``RENAMEPICS_NO_RICH`` asks for plain output."""
    return os.getenv(NO_RICH_ENV, "0").lower() not in {"1", "true", "yes"}


class ConsoleManager(AbstractContextManager):
    """Yield a Rich :class:`Console` configured for the current run.

    Args:
        record: Keep everything printed so it can be read back with
            ``console.export_text()``.
        use_rich: Force Rich output on or off; ``None`` consults
            ``RENAMEPICS_NO_RICH``.
        **console_kwargs: Passed through to :class:`Console`
            (``no_color``, ``width``, ...).
    """

    def __init__(
        self,
        *,
        record: bool = False,
        use_rich: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self.record = record
        self.use_rich = rich_enabled() if use_rich is None else use_rich
        self.console_kwargs = console_kwargs
        self.console: Console | None = None

    def _build_console(self) -> Console:
        kwargs = dict(self.console_kwargs)
        if not self.use_rich:
            kwargs.update(color_system=None, force_terminal=False)
        return Console(record=self.record, **kwargs)

    def __enter__(self) -> Console:
        self.console = self._build_console()
        install_rich_traceback(show_locals=True, console=self.console)
        return self.console

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        if self.console is None:
            return False
        if exc_type is not None and exc_val is not None:
            self.console.print(Traceback.from_exception(exc_type, exc_val, exc_tb))
        self.console.file.flush()
        return False
