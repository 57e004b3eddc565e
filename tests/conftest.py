"""Shared fixtures for music sorter tests."""

import io
from pathlib import Path
from typing import Optional

import pytest
from mutagen.id3 import ID3, TALB, TDRC, TIT2, TPE1, TPOS, TRCK
from rich.console import Console

from music_sorter.models.config import Config

AUDIO_PAYLOAD = b"\xff\xfb\x90\x00" + b"\x00" * 256


@pytest.fixture
def music_root(tmp_path: Path) -> Path:
    """Source folder with the output folders next to it."""
    root = tmp_path / "music"
    root.mkdir()
    return root


@pytest.fixture
def sorter_config(music_root: Path) -> Config:
    return Config.from_source(music_root)


@pytest.fixture
def captured_console() -> Console:
    """Console writing into a buffer instead of the terminal."""
    return Console(file=io.StringIO(), width=200)


def write_tagged_file(
    path: Path,
    artist: Optional[str] = None,
    album: Optional[str] = None,
    title: Optional[str] = None,
    year: Optional[str] = None,
    track: Optional[str] = None,
    disc: Optional[str] = None,
) -> Path:
    """Write a fake audio payload with a real ID3 tag in front of it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(AUDIO_PAYLOAD)

    tags = ID3()
    frames = [
        (TPE1, artist),
        (TALB, album),
        (TIT2, title),
        (TDRC, year),
        (TRCK, track),
        (TPOS, disc),
    ]
    for frame_class, value in frames:
        if value is not None:
            tags.add(frame_class(encoding=3, text=[value]))
    tags.save(path)
    return path


@pytest.fixture
def tagged_file():
    """Factory for files with ID3 tags."""
    return write_tagged_file
