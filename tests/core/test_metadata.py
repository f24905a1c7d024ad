"""Tests for renamepics.core.metadata using real JPEG files written by Pillow."""

from pathlib import Path

import pytest
from PIL import ExifTags, Image

from renamepics.core.metadata import normalize_timestamp, read_capture_timestamp


def _jpeg(path: Path, **tags: str) -> Path:
    exif = Image.Exif()
    if "datetime" in tags:
        exif[ExifTags.Base.DateTime] = tags["datetime"]
    if "original" in tags:
        exif.get_ifd(ExifTags.IFD.Exif)[ExifTags.Base.DateTimeOriginal] = tags[
            "original"
        ]
    Image.new("RGB", (4, 4), "red").save(path, "JPEG", exif=exif)
    return path


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2019:07:14 18:03:22", "2019-07-14 18:03:22"),
        (b"2019:07:14 18:03:22\x00", "2019-07-14 18:03:22"),
        ("0000:00:00 00:00:00", None),
        ("", None),
        ("yesterday", None),
        (None, None),
        (12345, None),
    ],
)
def test_normalize_timestamp(value: object, expected: object) -> None:
    """EXIF timestamps become sortable strings; junk becomes None."""
    assert normalize_timestamp(value) == expected


def test_read_capture_timestamp_prefers_original(tmp_path: Path) -> None:
    """DateTimeOriginal wins over DateTime."""
    path = _jpeg(
        tmp_path / "a.jpg",
        datetime="2020:01:01 00:00:00",
        original="2019:12:31 23:59:59",
    )
    assert read_capture_timestamp(path) == "2019-12-31 23:59:59"


def test_read_capture_timestamp_falls_back_to_datetime(tmp_path: Path) -> None:
    """Without DateTimeOriginal the IFD0 DateTime is used."""
    path = _jpeg(tmp_path / "a.jpg", datetime="2021:03:04 05:06:07")
    assert read_capture_timestamp(path) == "2021-03-04 05:06:07"


def test_read_capture_timestamp_missing(tmp_path: Path) -> None:
    """Images without timestamps and non-images return None."""
    assert read_capture_timestamp(_jpeg(tmp_path / "bare.jpg")) is None
    movie = tmp_path / "clip.mp4"
    movie.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    assert read_capture_timestamp(movie) is None
    assert read_capture_timestamp(tmp_path / "missing.jpg") is None
