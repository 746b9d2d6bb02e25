"""
Session configuration.

Settings live in a dataclass with working defaults; an optional JSON file
overrides them. A missing or unreadable file falls back to the defaults.
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

# Half of the largest signed 32-bit value, leaving headroom for index math
MAX_PIXELS = (2 ** 31 - 1) // 2

CONFIG_FILE = Path.home() / ".seamcarve.json"


@dataclass
class SessionConfig:
    """Settings for a CarveSession."""

    max_pixels: int = MAX_PIXELS  # largest width * height accepted on load
    save_suffix: str = "_seam"  # appended to the loaded file's stem
    save_extension: str = ".png"
    log_level: str = "INFO"  # used by the example scripts


def load_config(path: Optional[Union[str, Path]] = None) -> SessionConfig:
    """Load configuration from a JSON file, returning defaults if not found.

    Args:
        path: JSON file to read (defaults to ~/.seamcarve.json)

    Returns:
        SessionConfig with loaded or default values
    """
    config = SessionConfig()
    path = Path(path) if path is not None else CONFIG_FILE
    if not path.exists():
        return config

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read config %s: %s", path, e)
        return config

    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object, using defaults", path)
        return config

    known = {f.name for f in fields(SessionConfig)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        default = getattr(config, key)
        if not isinstance(value, type(default)) or isinstance(value, bool):
            logger.warning("Ignoring config key %r: expected %s, got %r",
                           key, type(default).__name__, value)
            continue
        setattr(config, key, value)

    return config


def save_config(config: SessionConfig,
                path: Optional[Union[str, Path]] = None):
    """Write configuration to a JSON file."""
    path = Path(path) if path is not None else CONFIG_FILE
    data = {f.name: getattr(config, f.name) for f in fields(SessionConfig)}
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
