"""Configuration: environment settings, component models and logging."""

from .logging import configure_logging
from .models import ChunkingConfig, IngestionConfig, QueryOptions
from .settings import Settings, get_settings, load_settings

__all__ = [
    "Settings",
    "get_settings",
    "load_settings",
    "ChunkingConfig",
    "IngestionConfig",
    "QueryOptions",
    "configure_logging",
]
