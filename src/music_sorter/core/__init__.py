"""Core sorting components."""

from .walker import iter_files, walk
from .metadata import read_tag
from .naming import sanitize_component, build_destination
from .mover import FileMover
from .sorter import MusicSorter, SortOutcome, SortSummary, FileKind, classify_extension

__all__ = [
    "iter_files",
    "walk",
    "read_tag",
    "sanitize_component",
    "build_destination",
    "FileMover",
    "MusicSorter",
    "SortOutcome",
    "SortSummary",
    "FileKind",
    "classify_extension",
]
