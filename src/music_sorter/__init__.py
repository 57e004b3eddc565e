"""Music Sorter

Sorts a folder of MP3 files into an artist/album/track tree based on their
ID3 tags, parks untagged files in a separate folder and removes stray CSV
index files.
"""

__version__ = "0.1.0"

from .core.sorter import MusicSorter, SortOutcome, SortSummary
from .core.walker import iter_files, walk
from .core.naming import sanitize_component, build_destination
from .core.metadata import read_tag
from .models.config import Config, load_config
from .models.track import TrackMetadata
from .exceptions import MusicSorterError

__all__ = [
    "MusicSorter",
    "SortOutcome",
    "SortSummary",
    "Config",
    "TrackMetadata",
    "MusicSorterError",
    "iter_files",
    "walk",
    "sanitize_component",
    "build_destination",
    "read_tag",
    "load_config",
]
