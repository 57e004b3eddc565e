"""Tests for file actions."""

from pathlib import Path
from unittest.mock import patch

import pytest

from music_sorter.core.mover import FileMover
from music_sorter.exceptions import (
    DeletionError,
    DirectoryCreationError,
    MissingFilenameError,
    MoveError,
)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "source" / "track.mp3"
    path.parent.mkdir()
    path.write_bytes(b"\x00\x01\x02 fake audio \xff")
    return path


class TestFileMover:
    """Test FileMover actions."""

    def test_delete(self, sample_file):
        mover = FileMover()

        result = mover.delete(sample_file)

        assert result.is_success()
        assert not sample_file.exists()

    def test_delete_missing_file_fails(self, tmp_path):
        result = FileMover().delete(tmp_path / "gone.csv")

        assert result.is_failure()
        assert isinstance(result.error(), DeletionError)
        assert "gone.csv" in str(result.error())

    def test_ensure_directory_creates_parents(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"

        result = FileMover().ensure_directory(target)

        assert result.is_success()
        assert target.is_dir()

    def test_ensure_directory_is_idempotent(self, tmp_path):
        mover = FileMover()

        mover.ensure_directory(tmp_path / "a")
        result = mover.ensure_directory(tmp_path / "a")

        assert result.is_success()

    def test_ensure_directory_under_a_file_fails(self, sample_file):
        result = FileMover().ensure_directory(sample_file / "child")

        assert result.is_failure()
        assert isinstance(result.error(), DirectoryCreationError)

    def test_move(self, sample_file, tmp_path):
        target = tmp_path / "target.mp3"
        content = sample_file.read_bytes()

        result = FileMover().move(sample_file, target)

        assert result.value() == target
        assert target.read_bytes() == content
        assert not sample_file.exists()

    def test_move_failure_is_not_retried(self, sample_file, tmp_path):
        with patch('music_sorter.core.mover.os.rename', side_effect=OSError("cross-device link")) as rename:
            result = FileMover().move(sample_file, tmp_path / "target.mp3")

        assert rename.call_count == 1
        assert isinstance(result.error(), MoveError)
        assert "cross-device link" in str(result.error())
        assert sample_file.exists()


class TestMoveToTaglessFolder:
    """Test quarantine moves."""

    def test_keeps_base_filename_and_bytes(self, sample_file, tmp_path):
        tagless = tmp_path / "tagless"
        content = sample_file.read_bytes()

        result = FileMover().move_to_tagless_folder(sample_file, tagless)

        assert result.value() == tagless / "track.mp3"
        assert (tagless / "track.mp3").read_bytes() == content
        assert not sample_file.exists()

    def test_logs_event(self, sample_file, tmp_path, caplog):
        FileMover().move_to_tagless_folder(sample_file, tmp_path / "tagless")

        assert "tagless file" in caplog.text

    def test_path_without_filename_fails(self, tmp_path):
        result = FileMover().move_to_tagless_folder(Path("/"), tmp_path / "tagless")

        assert isinstance(result.error(), MissingFilenameError)

    def test_move_failure(self, tmp_path):
        result = FileMover().move_to_tagless_folder(tmp_path / "missing.mp3", tmp_path / "tagless")

        assert isinstance(result.error(), MoveError)


class TestDryRun:
    """Dry-run computes targets without touching the filesystem."""

    def test_nothing_changes(self, sample_file, tmp_path):
        mover = FileMover(dry_run=True)

        mover.delete(sample_file)
        mover.ensure_directory(tmp_path / "new")
        result = mover.move_to_tagless_folder(sample_file, tmp_path / "tagless")

        assert sample_file.exists()
        assert not (tmp_path / "new").exists()
        assert not (tmp_path / "tagless").exists()
        assert result.value() == tmp_path / "tagless" / "track.mp3"
