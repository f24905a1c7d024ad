"""JSON serialization helpers for renamepics.

Reports and plans hold Path, datetime and Enum values, none of which the
standard ``json`` module serializes on its own.
"""

import json
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder for renamepics models dumped with ``model_dump()``."""

    def default(self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to a JSON-serializable form.

        - datetime: ISO 8601 string
        - Path: string
        - Enum: its value
        """
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)
