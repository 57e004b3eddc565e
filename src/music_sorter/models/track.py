"""Track metadata decoded from an audio file's tag container."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class TrackMetadata:
    """Read-only view of the tag fields used to place a track.

    Every field is optional; absent text fields are ``None`` and absent
    numbers are ``None`` until :meth:`numbers_or_zero` fills them in.
    """

    artist: Optional[str] = None
    album: Optional[str] = None
    title: Optional[str] = None
    year: Optional[int] = None
    track: Optional[int] = None
    disc: Optional[int] = None
    total_discs: Optional[int] = None

    @property
    def is_placeable(self) -> bool:
        """Artist and album are required to build a destination."""
        return bool(self.artist) and bool(self.album)

    def numbers_or_zero(self) -> "tuple[int, int, int, int]":
        """Return (year, track, disc, total_discs) with absent values as 0."""
        return (
            self.year or 0,
            self.track or 0,
            self.disc or 0,
            self.total_discs or 0,
        )
