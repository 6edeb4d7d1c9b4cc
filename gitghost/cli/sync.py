"""
CLI sync commands — mirror one source repo, or every registered one.

Usage:
    gitghost sync PATH [--dry-run]
    gitghost sync-all [--dry-run]

Exit codes:
    0  everything mirrored and pushed (or nothing new)
    1  not set up, invalid repository, or history listing failed
    2  run completed with commit or push failures
"""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path

import click

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def _load_configured(ctx: click.Context):
    """Load config or exit if setup has not been run."""
    from ..config.settings import load_configured
    from ..validation import ConfigurationError

    try:
        return load_configured(ctx.obj.get("config_path"))
    except ConfigurationError as e:
        click.secho(f"❌ {e}", fg="red")
        raise SystemExit(EXIT_FATAL)


def _sync_one(config, source: Path, dry_run: bool) -> int:
    """Run one sync with a progress bar and print a summary. Returns an exit code."""
    from ..sync.engine import SyncRequest, sync_repository
    from ..validation import InvalidRepository

    mirror = Path(config.dummy_repo_path).expanduser()
    request = SyncRequest(
        source_repo=source,
        mirror_repo=mirror,
        filter_authors=list(config.filter_authors),
        dry_run=dry_run,
    )

    click.echo()
    click.secho(f"🔀 Syncing commits from {source} to {mirror}", bold=True)

    bar_holder: dict = {}

    with ExitStack() as stack:

        def on_plan(total: int) -> None:
            if total:
                bar_holder["bar"] = stack.enter_context(
                    click.progressbar(length=total, label="  Replaying", show_pos=True)
                )

        def on_commit(record, ok: bool) -> None:
            bar = bar_holder.get("bar")
            if bar is not None:
                bar.update(1)

        try:
            result = sync_repository(request, on_commit=on_commit, on_plan=on_plan)
        except InvalidRepository as e:
            click.secho(f"❌ {e}", fg="red")
            return EXIT_FATAL

    if result.listing_error is not None:
        click.secho(f"❌ Failed to retrieve commits from the source repo: {result.listing_error}", fg="red")
        return EXIT_FATAL

    if dry_run:
        if result.pending:
            click.echo(f"  {len(result.pending)} commit(s) would be mirrored:")
            for commit_hash in result.pending:
                click.echo(f"    {commit_hash}")
        else:
            click.secho("✓ No new commits to sync.", fg="green")
        click.secho("\n(Dry run — nothing written, committed or pushed)", fg="cyan")
        return EXIT_OK

    for failure in result.failures:
        click.secho(f"  ❌ {failure.hash[:12]} ({failure.step}): {failure.error}", fg="red")

    if result.push_error is not None:
        click.secho(f"  ❌ Failed to push changes to the mirror repo: {result.push_error}", fg="red")

    if result.synced:
        click.secho(f"✓ Synced {result.succeeded_count} new commit(s) to the mirror repo.", fg="green")
    elif not result.failures:
        click.secho("✓ No new commits to sync.", fg="green")

    if result.failures:
        click.secho(
            f"⚠️  {result.failed_count} commit(s) failed and are recorded in the ledger; "
            "they will not be retried.",
            fg="yellow",
        )

    return EXIT_OK if result.ok else EXIT_PARTIAL


@click.command("sync")
@click.argument("source", type=click.Path(path_type=Path))
@click.option("--dry-run", is_flag=True, help="Show what would be mirrored without changing anything")
@click.pass_context
def sync(ctx: click.Context, source: Path, dry_run: bool) -> None:
    """Sync commits from a source repo to the mirror repo."""
    from ..config.settings import save_config
    from ..validation import is_git_repository

    config = _load_configured(ctx)
    source_repo = source.expanduser().resolve()

    if not dry_run and is_git_repository(source_repo) and config.add_synced_repo(source_repo):
        save_config(config, ctx.obj.get("config_path"))
        click.secho(f"✓ Added {source_repo} to the list of synced repositories.", fg="green")

    ctx.exit(_sync_one(config, source_repo, dry_run))


@click.command("sync-all")
@click.option("--dry-run", is_flag=True, help="Show what would be mirrored without changing anything")
@click.pass_context
def sync_all(ctx: click.Context, dry_run: bool) -> None:
    """Sync every repo previously registered with `sync`."""
    config = _load_configured(ctx)

    if not config.synced_repos:
        click.echo("No synced repositories yet. Run `gitghost sync PATH` first.")
        return

    codes = [_sync_one(config, Path(entry), dry_run) for entry in config.synced_repos]

    if EXIT_FATAL in codes:
        ctx.exit(EXIT_FATAL)
    ctx.exit(EXIT_PARTIAL if EXIT_PARTIAL in codes else EXIT_OK)
