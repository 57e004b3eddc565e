"""Path component naming for sorted tracks."""

from pathlib import Path
from typing import Tuple

from ..models.track import TrackMetadata

# Applied in this order. No replacement is itself a key, so one pass is final.
SANITIZE_RULES: Tuple[Tuple[str, str], ...] = (
    (':', '-'),
    ('/', '-'),
    ('\\', '-'),
    ('?', '-'),
    ('"', "'"),
    ('<', '['),
    ('>', ']'),
    ('|', '-'),
    ('*', '-'),
)

TRACK_EXTENSION = ".mp3"


def sanitize_component(text: str) -> str:
    """Make free text safe to use as a single path component.

    Example:
        >>> sanitize_component(' AC/DC: "Live" ')
        "AC-DC- 'Live'"
    """
    for old, new in SANITIZE_RULES:
        text = text.replace(old, new)
    return text.strip()


def album_folder_name(year: int, album: str) -> str:
    return f"({year}) {sanitize_component(album)}"


def track_file_name(disc: int, total_discs: int, track: int, title: str) -> str:
    return _format_track_name(disc, total_discs, track, sanitize_component(title))


def _format_track_name(disc: int, total_discs: int, track: int, title: str) -> str:
    return f"[{disc} of {total_discs}][{track:02d}] {title}{TRACK_EXTENSION}"


def build_destination(sorted_root: Path, metadata: TrackMetadata, fallback_title: str) -> Path:
    """Compute where a track belongs under ``sorted_root``.

    Args:
        sorted_root: Root of the sorted tree
        metadata: Decoded tags; artist and album must be present
        fallback_title: Used when the tag has no title (the original
            filename). It is only trimmed, never sanitized.

    Returns:
        ``<root>/<artist>/(<year>) <album>/[<disc> of <total>][<track>] <title>.mp3``

    Raises:
        ValueError: If artist or album is missing
    """
    if not metadata.is_placeable:
        raise ValueError("Artist and album are required to build a destination")

    year, track, disc, total_discs = metadata.numbers_or_zero()
    if metadata.title is not None:
        file_name = track_file_name(disc, total_discs, track, metadata.title)
    else:
        file_name = _format_track_name(disc, total_discs, track, fallback_title.strip())

    return (
        Path(sorted_root)
        / sanitize_component(metadata.artist)
        / album_folder_name(year, metadata.album)
        / file_name
    )
