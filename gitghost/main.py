"""
GitGhost — CLI Entry Point

Usage:
    gitghost setup
    gitghost sync PATH [--dry-run]
    gitghost sync-all
    gitghost status [--json]
"""

from __future__ import annotations

# Load .env FIRST, before any other imports that might read env vars
from pathlib import Path
from dotenv import load_dotenv

_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

from typing import Optional

import click

from . import __version__
from .cli.setup import setup
from .cli.status import status
from .cli.sync import sync, sync_all
from .logging_config import setup_logging


@click.group()
@click.version_option(__version__, prog_name="gitghost")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: $GITGHOST_CONFIG or ~/.config/gitghost/config.yaml)",
)
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[Path], log_level: Optional[str]) -> None:
    """GitGhost — Mirror commit activity without exposing code."""
    setup_logging(level=log_level)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_file


cli.add_command(setup)
cli.add_command(sync)
cli.add_command(sync_all)
cli.add_command(status)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
