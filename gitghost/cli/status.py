"""
CLI status command — configuration and per-repo ledger counts.

Usage:
    gitghost status [--json]
"""

from __future__ import annotations

from pathlib import Path

import click


@click.command("status")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show configuration and how many commits each repo has mirrored."""
    import json as json_lib

    from ..config.settings import default_config_path, load_config
    from ..sync.ledger import Ledger
    from ..validation import is_git_repository

    config_path = ctx.obj.get("config_path") or default_config_path()
    config = load_config(config_path)

    mirror = Path(config.dummy_repo_path).expanduser() if config.dummy_repo_path else None

    repos = []
    for entry in config.synced_repos:
        source = Path(entry)
        mirrored = None
        if mirror is not None:
            ledger = Ledger.for_repositories(mirror, source)
            if ledger.path.exists():
                mirrored = len(ledger.hashes)
        repos.append({
            "path": entry,
            "exists": is_git_repository(source),
            "mirrored": mirrored,
        })

    result = {
        "config_path": str(config_path),
        "configured": config.is_configured,
        "mirror_repo": str(mirror) if mirror else None,
        "mirror_ready": bool(mirror and is_git_repository(mirror)),
        "remote_url": config.remote_url,
        "author_name": config.author_name,
        "author_email": config.author_email,
        "filter_authors": list(config.filter_authors),
        "repos": repos,
    }

    if as_json:
        click.echo(json_lib.dumps(result, indent=2))
        return

    click.echo("\n👻 GitGhost Status\n")
    click.echo(f"  Config:     {result['config_path']}")
    if not config.is_configured:
        click.secho("  Not set up. Run `gitghost setup` first.", fg="yellow")
        click.echo()
        return

    ready = "✅" if result["mirror_ready"] else "❌"
    click.echo(f"  Mirror:     {ready} {result['mirror_repo']}")
    click.echo(f"  Remote:     {config.remote_url or '—'}")
    click.echo(f"  Identity:   {config.author_name or '—'} <{config.author_email or '—'}>")
    authors = ", ".join(config.filter_authors) if config.filter_authors else "(all authors)"
    click.echo(f"  Authors:    {authors}")
    click.echo()

    if not repos:
        click.echo("  No synced repositories yet.")
        click.echo()
        return

    for repo in repos:
        icon = "📦" if repo["exists"] else "⚠️"
        count = repo["mirrored"] if repo["mirrored"] is not None else 0
        click.echo(f"  {icon} {repo['path']} — {count} commit(s) mirrored")
    click.echo()
