"""
CLI setup command — prepare the mirror repo and save configuration.

Usage:
    gitghost setup
    gitghost setup --non-interactive --mirror-path PATH --remote-url URL \
        --author-name NAME --author-email EMAIL --filter-author PATTERN
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import click

NEW_REPO_HINT = (
    "If using GitHub, you can create a new repo at "
    "https://github.com/new?name=gitghost&visibility=private"
)


@click.command("setup")
@click.option("--mirror-path", type=click.Path(file_okay=False, path_type=Path), help="Where the mirror repo lives")
@click.option("--remote-url", help="Git remote URL for the mirror repo")
@click.option("--author-name", help="Name for ghost commits")
@click.option("--author-email", help="Email for ghost commits")
@click.option("--filter-author", "filter_authors", multiple=True, help="Commit author to mirror (repeatable)")
@click.option("--non-interactive", is_flag=True, help="Skip prompts, use options and saved values")
@click.pass_context
def setup(
    ctx: click.Context,
    mirror_path: Optional[Path],
    remote_url: Optional[str],
    author_name: Optional[str],
    author_email: Optional[str],
    filter_authors: Tuple[str, ...],
    non_interactive: bool,
) -> None:
    """Set up GitGhost configuration and prepare the mirror repo."""
    from ..config.settings import default_dummy_repo_path, load_config, save_config
    from ..git.mirror import ensure_remote, init_mirror, set_identity

    config_path = ctx.obj.get("config_path")
    config = load_config(config_path)

    click.echo()
    click.secho("👻 GitGhost Setup", fg="cyan", bold=True)
    click.echo()

    def ask(value, prompt: str, default):
        if value:
            return value
        if non_interactive:
            return default
        return click.prompt(prompt, default=default, show_default=default is not None)

    # Mirror repo
    default_path = config.dummy_repo_path or str(default_dummy_repo_path())
    mirror = Path(ask(
        str(mirror_path) if mirror_path else None,
        "Path where the mirror repo should be created/located",
        default_path,
    )).expanduser().resolve()

    try:
        created = init_mirror(mirror)
    except RuntimeError as e:
        click.secho(f"❌ {e}", fg="red")
        raise SystemExit(1)

    if created:
        click.echo(f"  📁 Created mirror repo at {mirror}")
    else:
        click.echo(f"  📁 Mirror repo already exists at {mirror}")

    # Remote
    remote = remote_url or config.remote_url
    if not non_interactive:
        while True:
            remote = click.prompt(
                f"Git remote URL for the mirror repo. {NEW_REPO_HINT}",
                default=remote,
                show_default=remote is not None,
            ).strip()
            if remote:
                break
    if not remote:
        click.secho("❌ A remote URL is required (--remote-url)", fg="red")
        raise SystemExit(1)

    if not ensure_remote(mirror, remote):
        click.secho(f"❌ Could not configure remote 'origin' → {remote}", fg="red")
        raise SystemExit(1)

    # Identity
    name = ask(author_name, "Name for ghost commits", config.author_name)
    email = ask(author_email, "Email for ghost commits", config.author_email)
    if not set_identity(mirror, name, email):
        click.secho("⚠️  Could not set commit identity in the mirror repo", fg="yellow")

    # Author filters
    for author in filter_authors:
        config.add_filter_author(author)

    if not non_interactive:
        click.echo()
        click.secho("Filter Authors", bold=True)
        if config.filter_authors:
            click.echo(f"  Existing authors: {', '.join(config.filter_authors)}")
        while True:
            new_author = click.prompt(
                "Add a commit author to filter by (leave blank to finish)",
                default="",
                show_default=False,
            ).strip()
            if not new_author:
                break
            config.add_filter_author(new_author)

    config.dummy_repo_path = str(mirror)
    config.remote_url = remote
    config.author_name = name
    config.author_email = email

    saved_to = save_config(config, config_path)

    click.echo()
    click.secho("✓ GitGhost setup is complete!", fg="green")
    click.echo(f"  Mirror repo: {mirror}")
    click.echo(f"  Config:      {saved_to}")
