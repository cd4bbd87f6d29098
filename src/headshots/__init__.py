"""Headshots Studio - AI headshots from a single photo in three steps."""

__version__ = "0.1.0"

from headshots.core.config import HeadshotsConfig, config

__all__ = [
    "HeadshotsConfig",
    "config",
]
