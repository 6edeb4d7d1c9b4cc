"""
Config Store — Load and save GitGhost settings as YAML.

## Location

    $GITGHOST_CONFIG                 (if set)
    ~/.config/gitghost/config.yaml   (default)

## Keys

    dummy_repo_path: /home/me/.gitghost/mirror
    remote_url: git@github.com:me/gitghost.git
    author_name: Me
    author_email: me@example.com
    filter_authors: [me@example.com, me@work.example]
    synced_repos: [/home/me/code/project]

The sync engine never reads this file directly; the CLI turns it into a
SyncRequest.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field

from ..validation import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GITGHOST_CONFIG"


class GhostConfig(BaseModel):
    """Persisted settings."""

    dummy_repo_path: Optional[str] = None
    remote_url: Optional[str] = None
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    filter_authors: List[str] = Field(default_factory=list)
    synced_repos: List[str] = Field(default_factory=list)

    @property
    def is_configured(self) -> bool:
        return bool(self.dummy_repo_path)

    def add_filter_author(self, author: str) -> bool:
        """Add an author pattern. Returns False if already present."""
        if author in self.filter_authors:
            return False
        self.filter_authors.append(author)
        return True

    def add_synced_repo(self, path: Path) -> bool:
        """Register a source repository. Returns False if already present."""
        entry = str(path)
        if entry in self.synced_repos:
            return False
        self.synced_repos.append(entry)
        return True


def default_config_path() -> Path:
    """Config file path, honouring GITGHOST_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "gitghost" / "config.yaml"


def default_dummy_repo_path() -> Path:
    """Suggested mirror location for setup."""
    return Path.home() / ".gitghost" / "mirror"


def load_config(path: Optional[Path] = None) -> GhostConfig:
    """
    Load settings from YAML.

    A missing or empty file yields an empty GhostConfig.

    Raises:
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If keys have the wrong types
    """
    if path is None:
        path = default_config_path()

    if not path.exists():
        logger.debug(f"No config at {path}")
        return GhostConfig()

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GhostConfig(**data)


def save_config(config: GhostConfig, path: Optional[Path] = None) -> Path:
    """
    Save settings to YAML.

    Writes to a temp file, then renames over the target.
    """
    if path is None:
        path = default_config_path()

    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(".tmp")

    with temp_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(), f, sort_keys=False, default_flow_style=False)

    temp_path.replace(path)
    logger.debug(f"Config saved → {path}")
    return path


def load_configured(path: Optional[Path] = None) -> GhostConfig:
    """
    Load settings that setup has already written.

    Raises:
        ConfigurationError: If no mirror repo has been configured
    """
    config = load_config(path)
    if not config.is_configured:
        raise ConfigurationError("GitGhost is not set up. Please run the setup command first.")
    return config
