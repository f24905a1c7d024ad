"""Tests for renamepics.core.scanner."""

from pathlib import Path

import pytest

from renamepics.core.scanner import (
    DirectoryItem,
    is_media_file,
    list_directory,
    scan_directory,
)
from renamepics.models.core import FileStatus


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("a.jpg", True),
        ("a.JPG", True),
        ("clip.Mp4", True),
        ("old.wmv", True),
        ("a.jpeg", False),
        ("notes.txt", False),
        ("jpg", False),
    ],
)
def test_is_media_file(name: str, expected: bool) -> None:
    """Media extensions match in any case."""
    assert is_media_file(name) is expected


def test_scan_directory_classifies_entries(tmp_path: Path) -> None:
    """Media files are Unprocessed, other files Ignored, folders listed."""
    for name in ["b.JPG", "a.mp4", "notes.txt", "Thumbs.db"]:
        (tmp_path / name).write_bytes(b"")
    (tmp_path / "sub2").mkdir()
    (tmp_path / "sub1").mkdir()

    result = scan_directory(tmp_path)

    assert result.directory == tmp_path
    assert sorted(e.original_name for e in result.entries) == ["a.mp4", "b.JPG"]
    assert all(e.status is FileStatus.UNPROCESSED for e in result.entries)
    assert all(e.path.is_absolute() for e in result.entries)
    assert {e.original_name for e in result.ignored} == {"notes.txt", "Thumbs.db"}
    assert all(e.status is FileStatus.IGNORED for e in result.ignored)
    assert result.subdirectories == [tmp_path / "sub1", tmp_path / "sub2"]
    assert "b.jpg" in result.existing_names
    assert "sub1" in result.existing_names


def test_scan_directory_keeps_extension_case(tmp_path: Path) -> None:
    """The extension is stored exactly as found."""
    (tmp_path / "a.JPG").write_bytes(b"")
    (entry,) = scan_directory(tmp_path).entries
    assert entry.extension == "JPG"


def test_scan_directory_uses_injected_lister(tmp_path: Path) -> None:
    """The directory lister collaborator can be replaced."""

    def fake_lister(directory: Path):
        return [
            DirectoryItem(name="x.jpg", is_dir=False, is_file=True),
            DirectoryItem(name="pipe.jpg", is_dir=False, is_file=False),
            DirectoryItem(name="child", is_dir=True, is_file=False),
        ]

    result = scan_directory(tmp_path, lister=fake_lister)
    assert [e.original_name for e in result.entries] == ["x.jpg"]
    assert result.ignored == []
    assert result.subdirectories == [tmp_path / "child"]


def test_scan_directory_errors(tmp_path: Path) -> None:
    """Missing paths and files are refused."""
    with pytest.raises(FileNotFoundError):
        scan_directory(tmp_path / "missing")
    file_path = tmp_path / "file.jpg"
    file_path.write_bytes(b"")
    with pytest.raises(ValueError):
        scan_directory(file_path)


def test_list_directory_is_sorted(tmp_path: Path) -> None:
    """Listings come back in name order."""
    for name in ["c.jpg", "a.jpg", "b.jpg"]:
        (tmp_path / name).write_bytes(b"")
    assert [item.name for item in list_directory(tmp_path)] == [
        "a.jpg",
        "b.jpg",
        "c.jpg",
    ]
