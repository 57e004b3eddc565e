"""Filesystem actions for sorting: delete, create directories, move."""

import logging
import os
from pathlib import Path

from ..domain.result import Result, Success, Failure
from ..exceptions import (
    DeletionError,
    DirectoryCreationError,
    MissingFilenameError,
    MoveError,
    MusicSorterError,
)

logger = logging.getLogger(__name__)


class FileMover:
    """Perform file actions and report failures as Results.

    Nothing is retried. A failed action comes back as a ``Failure`` holding
    the matching error class and the caller decides whether to stop.
    In dry-run mode the filesystem is left untouched and every action
    succeeds with the path it would have produced.
    """

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def delete(self, path: Path) -> Result[Path, DeletionError]:
        """Delete a single file."""
        if not self.dry_run:
            try:
                os.remove(path)
            except OSError as e:
                return Failure(DeletionError(f"Error while removing {path}: {e}", path))

        return Success(path)

    def ensure_directory(self, directory: Path) -> Result[Path, DirectoryCreationError]:
        """Create ``directory`` and any missing parents."""
        if not self.dry_run:
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                return Failure(DirectoryCreationError(
                    f"Tried to make {directory} but could not: {e}", directory
                ))
        return Success(directory)

    def move(self, source: Path, target: Path) -> Result[Path, MoveError]:
        """Rename ``source`` to ``target``."""
        if not self.dry_run:
            try:
                os.rename(source, target)
            except OSError as e:
                return Failure(MoveError(f"Error moving {source} to {target}: {e}", source))

        return Success(target)

    def move_to_tagless_folder(self, path: Path, tagless_root: Path) -> Result[Path, MusicSorterError]:
        """Move a file without usable tags into the flat tagless folder.

        Only the base filename is kept, so files from different source
        folders share one namespace in ``tagless_root``.
        """
        logger.warning(f"tagless file: {path}")

        if not path.name:
            return Failure(MissingFilenameError(
                f"Was told to move a non-file to the tagless folder: {path}", path
            ))

        return (
            self.ensure_directory(tagless_root)
            .flat_map(lambda root: self.move(path, root / path.name))
        )
