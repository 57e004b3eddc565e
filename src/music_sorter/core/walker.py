"""Breadth-first traversal of a directory tree.

Directories are processed through a FIFO queue rather than by recursion, so
deep trees cannot exhaust the stack and every file of one level is handed
out before any file of the next level. Entries that cannot be read are
logged and skipped; only an invalid root stops the walk.
"""

import logging
import os
import stat
from collections import deque
from pathlib import Path
from typing import Callable, Deque, Iterator, List, Optional, Set, Tuple

from ..exceptions import InvalidRootError

logger = logging.getLogger(__name__)

FileVisitor = Callable[[Path], None]
DirectoryIdentity = Tuple[int, int]


def iter_files(root: Path, *, detect_cycles: bool = True) -> Iterator[Path]:
    """Yield every file under ``root`` exactly once, breadth-first.

    Args:
        root: Directory to walk. Must exist.
        detect_cycles: Skip directories already queued under another path.
            Without it a symlink loop makes the walk run forever.

    Yields:
        Paths of regular files, and of symlinks that resolve to files.

    Raises:
        InvalidRootError: If ``root`` is not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise InvalidRootError(f"Cannot walk {root}: not a directory")

    queue: Deque[Path] = deque([root])
    seen: Set[DirectoryIdentity] = set()
    if detect_cycles:
        identity = _identity_of(root)
        if identity is not None:
            seen.add(identity)

    while queue:
        directory = queue.popleft()

        for entry in _read_entries(directory):
            path = Path(entry.path)
            kind = _entry_kind(entry)

            if kind == 'dir':
                if _should_enqueue(entry, seen, detect_cycles):
                    queue.append(path)
            elif kind == 'file':
                yield path


def walk(root: Path, visitor: FileVisitor, *, detect_cycles: bool = True) -> int:
    """Call ``visitor`` synchronously for every file under ``root``.

    Returns:
        Number of files visited.
    """
    count = 0
    for path in iter_files(root, detect_cycles=detect_cycles):
        visitor(path)
        count += 1
    return count


def _read_entries(directory: Path) -> List[os.DirEntry]:
    """List a directory in native order, keeping whatever could be read."""
    entries: List[os.DirEntry] = []
    try:
        with os.scandir(directory) as iterator:
            for entry in iterator:
                entries.append(entry)
    except OSError as e:
        if entries:
            logger.warning(f"Error while reading entries of {directory}: {e}")
        else:
            logger.warning(f"Can't read directory {directory}: {e}")
    return entries


def _entry_kind(entry: os.DirEntry) -> Optional[str]:
    """Classify an entry as 'dir', 'file' or None (skipped, already logged)."""
    try:
        if entry.is_symlink():
            return _symlink_kind(entry)
        if entry.is_dir(follow_symlinks=False):
            return 'dir'
        if entry.is_file(follow_symlinks=False):
            return 'file'
    except OSError as e:
        logger.warning(f"Can't get file type of {entry.path}: {e}")
        return None

    logger.warning(f"Found {entry.path} but it's not a file, directory, or symlink")
    return None


def _symlink_kind(entry: os.DirEntry) -> Optional[str]:
    """Resolve what a symlink points at."""
    try:
        target = entry.stat(follow_symlinks=True)
    except OSError as e:
        logger.warning(f"Can't get metadata for symlink {entry.path}: {e}")
        return None

    if stat.S_ISDIR(target.st_mode):
        return 'dir'
    if stat.S_ISREG(target.st_mode):
        return 'file'

    logger.warning(f"Found symlink {entry.path} but it's not a file or a directory")
    return None


def _should_enqueue(entry: os.DirEntry, seen: Set[DirectoryIdentity], detect_cycles: bool) -> bool:
    if not detect_cycles:
        return True

    identity = _identity_of(Path(entry.path))
    if identity is None:
        return True

    if identity in seen:
        logger.warning(f"Skipping {entry.path}: directory already visited (symlink cycle?)")
        return False

    seen.add(identity)
    return True


def _identity_of(path: Path) -> Optional[DirectoryIdentity]:
    """Device and inode of the directory a path resolves to."""
    try:
        info = os.stat(path)
    except OSError:
        return None
    return info.st_dev, info.st_ino
