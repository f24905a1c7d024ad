"""Configure pytest."""

import logging
import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

# Add src directory to Python path so tests run without an install
src_path = str(Path(__file__).parent / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)


@pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point the config file at a temp dir and clear RENAMEPICS_* overrides."""
    from renamepics.utils import config

    config_dir = tmp_path_factory.mktemp("config") / "renamepics"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_FILE", config_dir / "config.toml")
    for var in [v for v in os.environ if v.startswith("RENAMEPICS_")]:
        monkeypatch.delenv(var)
    return config_dir


@pytest.fixture(autouse=True)
def detached_log_handlers() -> Iterator[None]:
    """Drop the package log handlers so no test logs to a stale stream."""
    yield
    from renamepics.utils import debug

    debug.close_log_file()
    if debug._stream_handler is not None:
        logging.getLogger("renamepics").removeHandler(debug._stream_handler)
        debug._stream_handler = None
