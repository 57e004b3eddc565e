"""Tag reading for MP3 files using mutagen."""

from pathlib import Path
from typing import Callable, List, Optional, Tuple
import re

from mutagen import MutagenError
from mutagen.id3 import ID3

from ..exceptions import MetadataError
from ..models.track import TrackMetadata

TagReader = Callable[[Path], TrackMetadata]

_LEADING_NUMBER = re.compile(r'\s*(\d+)')
_YEAR = re.compile(r'\s*(\d{4})')


def read_tag(file_path: Path) -> TrackMetadata:
    """Decode the ID3 tag container of ``file_path``.

    Raises:
        MetadataError: If the file has no ID3 header or the tag is corrupt.
    """
    try:
        tags = ID3(file_path)
    except (MutagenError, OSError, ValueError) as e:
        raise MetadataError(f"Failed to read tag from {file_path}: {e}")

    disc, total_discs = _parse_pair(_get_id3_text(tags, ['TPOS']))
    track, _ = _parse_pair(_get_id3_text(tags, ['TRCK']))

    return TrackMetadata(
        artist=_get_id3_text(tags, ['TPE1']),
        album=_get_id3_text(tags, ['TALB']),
        title=_get_id3_text(tags, ['TIT2']),
        year=_parse_year(_get_id3_text(tags, ['TYER', 'TDRC'])),
        track=track,
        disc=disc,
        total_discs=total_discs,
    )


def _get_id3_text(tags: ID3, frame_ids: List[str]) -> Optional[str]:
    """First non-empty text value of the first frame present."""
    for frame_id in frame_ids:
        frame = tags.get(frame_id)
        if frame is None or not hasattr(frame, 'text'):
            continue
        for value in frame.text:
            text = str(value)
            if text:
                return text
    return None


def _parse_year(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    match = _YEAR.match(value)
    return int(match.group(1)) if match else None


def _parse_pair(value: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """Parse "n" or "n/total" as used by TRCK and TPOS."""
    if not value:
        return None, None

    number_part, _, total_part = value.partition('/')
    return _parse_number(number_part), _parse_number(total_part)


def _parse_number(value: str) -> Optional[int]:
    match = _LEADING_NUMBER.match(value)
    return int(match.group(1)) if match else None
