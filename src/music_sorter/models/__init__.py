"""Data models for music sorter."""

from .config import Config, load_config, save_config, create_default_config
from .track import TrackMetadata

__all__ = [
    "Config",
    "TrackMetadata",
    "load_config",
    "save_config",
    "create_default_config",
]
