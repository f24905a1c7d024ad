"""Capture timestamp reader.

Reads the EXIF ``DateTimeOriginal`` tag (falling back to ``DateTime``) with
Pillow. Files Pillow cannot open, such as movies, have no timestamp.
Timestamps are returned as ``YYYY-MM-DD HH:MM:SS`` so that they sort
correctly as strings.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import ExifTags, Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

EXIF_TIMESTAMP_FORMAT = "%Y:%m:%d %H:%M:%S"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def normalize_timestamp(value: object) -> Optional[str]:
    """Convert an EXIF timestamp to ``YYYY-MM-DD HH:MM:SS``.

    Returns None for empty or malformed values (cameras without a clock set
    often write ``0000:00:00 00:00:00``).
    """
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    if not isinstance(value, str):
        return None
    value = value.strip("\x00 ")
    try:
        return datetime.strptime(value, EXIF_TIMESTAMP_FORMAT).strftime(
            TIMESTAMP_FORMAT
        )
    except ValueError:
        return None


def read_capture_timestamp(path: Path) -> Optional[str]:
    """Return the capture timestamp of *path*, or None if it has none."""
    try:
        with Image.open(path) as img:
            exif = img.getexif()
            original = exif.get_ifd(ExifTags.IFD.Exif).get(
                ExifTags.Base.DateTimeOriginal
            )
            fallback = exif.get(ExifTags.Base.DateTime)
    except (UnidentifiedImageError, OSError) as e:
        logger.debug("No readable metadata in '%s': %s", path, e)
        return None
    timestamp = normalize_timestamp(original) or normalize_timestamp(fallback)
    if timestamp is None:
        logger.debug("No capture timestamp in '%s'", path)
    return timestamp
