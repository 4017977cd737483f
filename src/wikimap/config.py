"""
Global Configuration and Display Defaults.

This module centralizes the constants that shape the explorer: traversal
safety limits, spawn jitter, label wrapping, and the highlight palette.
It also loads the optional per-project settings file
(``.wikimap/config.yaml``).
"""

import logging
import os
from pathlib import Path
from typing import Optional, Set

import yaml
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

# --- Safety Limits ---
# Parent walks longer than this are treated as a corrupted chain
MAX_TRACE_HOPS = 100

# --- Spawn Positions ---
# New children land at a random distance in this range from their parent
SPAWN_JITTER_MIN = 5.0
SPAWN_JITTER_MAX = 15.0

# Distance between seed nodes when several topics are started at once
ROOT_SPACING = 200.0

# --- Labels ---
ROOT_LABEL_WIDTH = 20
CHILD_LABEL_WIDTH = 15

# --- Highlighting ---
DEFAULT_EDGE_WIDTH = 1
CONNECTED_EDGE_WIDTH = 3
TRACED_EDGE_WIDTH = 5

ACTIVE_TEXT_OPACITY = 1.0
INACTIVE_TEXT_OPACITY = 0.3

DIMMED_EDGE_COLOR = "rgba(122, 206, 247, 0.4)"

# --- Wikipedia ---
DEFAULT_API_URL = "https://en.wikipedia.org/w/api.php"
DEFAULT_TIMEOUT_SECONDS = 10.0

# The categories endpoint accepts at most this many titles per request
CATEGORY_BATCH_SIZE = 50

# Category substrings that mark an article as being about a person
PEOPLE_CATEGORY_KEYWORDS: Set[str] = {
    "births",
    "deaths",
    "people",
    "characters",
    "human",
}

CONFIG_PATH = Path(".wikimap/config.yaml")


class ExplorerConfig(BaseModel):
    """User-tunable settings read from ``.wikimap/config.yaml``."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    people_only: bool = False
    touch: bool = False


def load_config(config_path: Optional[Path] = None) -> ExplorerConfig:
    """
    Load explorer settings, falling back to defaults.

    A missing, unreadable or invalid file yields the default configuration.
    The ``WIKIMAP_API_URL`` environment variable overrides the API endpoint.

    Args:
        config_path (Optional[Path]): Settings file. Defaults to CONFIG_PATH.

    Returns:
        ExplorerConfig: The effective configuration.
    """
    path = config_path or CONFIG_PATH
    data = {}

    if path.exists():
        try:
            with open(path, "r") as f:
                loaded = yaml.safe_load(f)
            if isinstance(loaded, dict):
                data = loaded.get("explorer") or {}
            else:
                logger.warning(f"Ignoring config {path}: expected a mapping")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read config {path}: {e}")
            data = {}

    try:
        config = ExplorerConfig(**data)
    except (TypeError, ValidationError) as e:
        logger.warning(f"Invalid config in {path}, using defaults: {e}")
        config = ExplorerConfig()

    env_url = os.getenv("WIKIMAP_API_URL")
    if env_url:
        config = config.model_copy(update={"api_url": env_url})

    return config
