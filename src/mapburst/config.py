"""
Global Configuration and Visual Defaults.

This module centralizes the fixed constants of the sunburst view (timings,
geometry, palette) and the optional per-project ``mapburst.yaml`` file that
supplies CLI defaults.
"""

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

# --- Viewport ---
# Width of the drawing and upper bound of its height
MIN_SIZE = 960

# Vertical room reserved above the rings for the breadcrumb trail
HEADER_OFFSET = 30

# --- Timings (milliseconds) ---
DEBOUNCE_MS = 300
ZOOM_DURATION_MS = 300
FADE_DURATION_MS = 500

# Number of recomputation steps per second while a transition runs
FRAMES_PER_SECOND = 60

# --- Arc styling ---
DIMMED_OPACITY = 0.3
PAD_ANGLE = 0.01

# Inner radius (px) of the rings while zoomed into a non-root node
ZOOMED_INNER_RADIUS = 20

# --- Breadcrumb trail ---
BREADCRUMB_WIDTH = 100
BREADCRUMB_HEIGHT = 20
BREADCRUMB_TAIL = 10
BREADCRUMB_SPACING = 3

# d3 category20; shared with the browser client so colors match
PALETTE: List[str] = [
    "#1f77b4", "#aec7e8", "#ff7f0e", "#ffbb78", "#2ca02c",
    "#98df8a", "#d62728", "#ff9896", "#9467bd", "#c5b0d5",
    "#8c564b", "#c49c94", "#e377c2", "#f7b6d2", "#7f7f7f",
    "#c7c7c7", "#bcbd22", "#dbdb8d", "#17becf", "#9edae5",
]

CONFIG_FILENAME = "mapburst.yaml"


class VisualizerConfig(BaseModel):
    """Defaults for the ``mapburst build`` command."""
    title: str = ""
    directory: Optional[str] = None
    open: bool = False

    model_config = ConfigDict(extra="ignore")


def load_config(path: Optional[Path] = None) -> VisualizerConfig:
    """
    Load CLI defaults from a YAML file.

    Args:
        path: Explicit config file. Defaults to ``mapburst.yaml`` in the
            working directory; a missing default file yields the defaults.

    Raises:
        ConfigError: The file exists but is not a valid YAML mapping.
    """
    config_path = path or Path.cwd() / CONFIG_FILENAME
    if not config_path.exists():
        if path is not None:
            raise ConfigError(f"Config file not found: {config_path}")
        return VisualizerConfig()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    try:
        config = VisualizerConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e

    logger.debug(f"Loaded config from {config_path}")
    return config
