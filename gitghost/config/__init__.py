"""
Configuration — Persisted GitGhost settings.
"""

from .settings import (
    GhostConfig,
    default_config_path,
    load_config,
    load_configured,
    save_config,
)

__all__ = [
    "GhostConfig",
    "default_config_path",
    "load_config",
    "load_configured",
    "save_config",
]
