"""Classification and placement of every file under the source root."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console

from ..domain.result import Result, Success, Failure
from ..exceptions import MetadataError, MissingFilenameError, MusicSorterError
from ..models.config import Config
from .metadata import TagReader, read_tag
from .mover import FileMover
from .naming import build_destination
from .walker import iter_files

logger = logging.getLogger(__name__)

AUDIO_EXTENSIONS = frozenset({"mp3", "MP3"})
INDEX_EXTENSIONS = frozenset({"csv"})


class FileKind(Enum):
    """How a visited file is treated, decided by its extension alone."""
    AUDIO = "audio"
    INDEX = "index"
    OTHER = "other"


class SortOutcome(Enum):
    """Terminal outcome for one visited file."""
    SORTED = "sorted"
    QUARANTINED = "quarantined"
    DELETED = "deleted"
    IGNORED = "ignored"


def classify_extension(path: Path) -> FileKind:
    """Match the extension case-sensitively against the known spellings."""
    extension = path.suffix[1:]
    if extension in AUDIO_EXTENSIONS:
        return FileKind.AUDIO
    if extension in INDEX_EXTENSIONS:
        return FileKind.INDEX
    return FileKind.OTHER


@dataclass
class SortSummary:
    """Counters for one run."""
    sorted: int = 0
    quarantined: int = 0
    deleted: int = 0
    ignored: int = 0
    failures: List[Tuple[Path, MusicSorterError]] = field(default_factory=list)
    completed: bool = False

    @property
    def visited(self) -> int:
        return self.sorted + self.quarantined + self.deleted + self.ignored + len(self.failures)

    def record(self, outcome: SortOutcome) -> None:
        attribute = outcome.value
        setattr(self, attribute, getattr(self, attribute) + 1)


class MusicSorter:
    """Walk the source root and sort, quarantine or delete each file."""

    def __init__(
        self,
        config: Config,
        tag_reader: TagReader = read_tag,
        mover: Optional[FileMover] = None,
        console: Optional[Console] = None,
    ):
        self.config = config
        self.tag_reader = tag_reader
        self.mover = mover or FileMover(dry_run=config.dry_run)
        self.console = console or Console()

    def run(self) -> SortSummary:
        """Process every file under the source root, breadth-first.

        Stops at the first fatal failure unless ``config.keep_going`` is set.

        Raises:
            InvalidRootError: If the source root is not a directory.
        """
        summary = SortSummary()
        output_roots = self._output_roots_inside_source()

        for path in iter_files(self.config.source_directory, detect_cycles=self.config.detect_cycles):
            if any(path.absolute().is_relative_to(root) for root in output_roots):
                summary.record(SortOutcome.IGNORED)
                continue

            result = self.process_file(path)
            if result.is_success():
                summary.record(result.value())
                continue

            error = result.error()
            summary.failures.append((path, error))
            logger.debug(f"Fatal failure on {path}: {error}")
            if not self.config.keep_going:
                return summary

        summary.completed = True
        return summary

    def process_file(self, path: Path) -> Result[SortOutcome, MusicSorterError]:
        """Apply the placement policy to one visited file."""
        kind = classify_extension(path)

        if kind is FileKind.INDEX:
            return self.mover.delete(path).map(lambda _: SortOutcome.DELETED)

        if kind is FileKind.OTHER:
            return Success(SortOutcome.IGNORED)

        return self._place_track(path)

    def _place_track(self, path: Path) -> Result[SortOutcome, MusicSorterError]:
        try:
            metadata = self.tag_reader(path)
        except MetadataError as e:
            logger.info(str(e))
            return self._quarantine(path)

        if not metadata.artist or not metadata.album:
            logger.info(f"Missing artist or album tag: {path}")
            return self._quarantine(path)

        if metadata.title is None and not path.name:
            return Failure(MissingFilenameError(
                f"No filename when trying to make a fake title: {path}", path
            ))

        destination = build_destination(self.config.sorted_directory, metadata, path.name)

        created = self.mover.ensure_directory(destination.parent)
        if created.is_failure():
            return created

        self.console.print(f"{path}\n==> {destination}\n", markup=False, highlight=False, soft_wrap=True)
        return self.mover.move(path, destination).map(lambda _: SortOutcome.SORTED)

    def _quarantine(self, path: Path) -> Result[SortOutcome, MusicSorterError]:
        return (
            self.mover.move_to_tagless_folder(path, self.config.tagless_directory)
            .map(lambda _: SortOutcome.QUARANTINED)
        )

    def _output_roots_inside_source(self) -> List[Path]:
        """Output roots nested in the source tree must not be sorted again."""
        source = self.config.source_directory.absolute()
        roots = []
        for root in (self.config.sorted_directory, self.config.tagless_directory):
            root = root.absolute()
            if root.is_relative_to(source):
                roots.append(root)
        return roots
