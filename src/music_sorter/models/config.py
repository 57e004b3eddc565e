"""Configuration model for music sorter."""

from pathlib import Path
from typing import Any, Dict
import json
from dataclasses import dataclass, fields, asdict

from ..exceptions import ConfigurationError

SORTED_FOLDER_NAME = "music-sorted"
TAGLESS_FOLDER_NAME = "music-tagless"


@dataclass
class Config:
    """Main configuration model.

    The three roots are fixed for a run: files are read from
    ``source_directory``, sorted tracks land under ``sorted_directory`` and
    files without usable tags are collected flat in ``tagless_directory``.
    """
    source_directory: Path
    sorted_directory: Path
    tagless_directory: Path
    dry_run: bool = False
    keep_going: bool = False
    detect_cycles: bool = True

    def __post_init__(self):
        self.source_directory = Path(self.source_directory)
        self.sorted_directory = Path(self.sorted_directory)
        self.tagless_directory = Path(self.tagless_directory)

    @classmethod
    def from_source(cls, source_directory: Path, **overrides: Any) -> "Config":
        """Create a configuration with sibling output folders next to the source."""
        source_directory = Path(source_directory)
        parent = source_directory.absolute().parent
        values: Dict[str, Any] = {
            'sorted_directory': parent / SORTED_FOLDER_NAME,
            'tagless_directory': parent / TAGLESS_FOLDER_NAME,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(source_directory=source_directory, **values)


def _config_to_dict(config: Config) -> Dict[str, Any]:
    """Convert config to a JSON-friendly dict."""
    result = {}
    for key, value in asdict(config).items():
        result[key] = str(value) if isinstance(value, Path) else value
    return result


def _dict_to_config(data: Dict[str, Any]) -> Config:
    """Build a config from a dict, ignoring unknown keys."""
    known = {f.name for f in fields(Config)}
    kwargs = {key: value for key, value in data.items() if key in known}

    missing = [name for name in ('source_directory', 'sorted_directory', 'tagless_directory')
               if name not in kwargs]
    if missing:
        raise ConfigurationError(f"Missing required configuration keys: {', '.join(missing)}")

    try:
        return Config(**kwargs)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration value: {e}")


def load_config(config_path: Path) -> Config:
    """Load configuration from JSON file."""
    try:
        with open(config_path, 'r') as f:
            config_data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {config_path}: {e}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {e}")

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration in {config_path} must be a JSON object")

    return _dict_to_config(config_data)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to JSON file."""
    with open(config_path, 'w') as f:
        json.dump(_config_to_dict(config), f, indent=2)


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = Config.from_source(Path("/path/to/music"))
    save_config(default_config, config_path)
