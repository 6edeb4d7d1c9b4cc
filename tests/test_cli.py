"""
Tests for the CLI — setup, sync, sync-all, status.

Uses Click's CliRunner with a temporary config file. The sync engine is
mocked except where the test exercises repository validation.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest import mock

import pytest
from click.testing import CliRunner

from gitghost.config.settings import GhostConfig, load_config, save_config
from gitghost.main import cli
from gitghost.sync.engine import CommitFailure, SyncResult

from fakes import make_hash

C1, C2 = make_hash(1), make_hash(2)


# -- Helpers ------------------------------------------------------------------

@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "gitghost.yaml"


@pytest.fixture
def configured(config_path: Path, mirror_repo: Path) -> Path:
    """Write a config pointing at mirror_repo."""
    save_config(
        GhostConfig(
            dummy_repo_path=str(mirror_repo),
            remote_url="git@example.com:me/ghost.git",
            author_name="Me",
            author_email="me@example.com",
            filter_authors=["alice"],
        ),
        config_path,
    )
    return config_path


def _run(args: list, config_path: Path, input: str | None = None):
    runner = CliRunner()
    return runner.invoke(
        cli,
        ["--config", str(config_path), *args],
        input=input,
        catch_exceptions=False,
    )


def _result(source: Path, mirror: Path, **kwargs) -> SyncResult:
    kwargs.setdefault("pushed", True)
    return SyncResult(source_repo=source, mirror_repo=mirror, **kwargs)


# -- sync ---------------------------------------------------------------------

class TestSync:

    def test_requires_setup(self, config_path, source_repo):
        result = _run(["sync", str(source_repo)], config_path)

        assert result.exit_code == 1
        assert "not set up" in result.output

    def test_success(self, configured, source_repo, mirror_repo):
        fake = _result(source_repo, mirror_repo, synced=[C1, C2])
        with mock.patch("gitghost.sync.engine.sync_repository", return_value=fake) as sync_mock:
            result = _run(["sync", str(source_repo)], configured)

        assert result.exit_code == 0
        assert "Synced 2 new commit(s)" in result.output

        request = sync_mock.call_args[0][0]
        assert request.source_repo == source_repo.resolve()
        assert request.mirror_repo == mirror_repo
        assert list(request.filter_authors) == ["alice"]
        assert request.dry_run is False

    def test_registers_source_once(self, configured, source_repo, mirror_repo):
        fake = _result(source_repo, mirror_repo)
        with mock.patch("gitghost.sync.engine.sync_repository", return_value=fake):
            first = _run(["sync", str(source_repo)], configured)
            second = _run(["sync", str(source_repo)], configured)

        assert "Added" in first.output
        assert "Added" not in second.output
        assert load_config(configured).synced_repos == [str(source_repo.resolve())]

    def test_nothing_new(self, configured, source_repo, mirror_repo):
        fake = _result(source_repo, mirror_repo)
        with mock.patch("gitghost.sync.engine.sync_repository", return_value=fake):
            result = _run(["sync", str(source_repo)], configured)

        assert result.exit_code == 0
        assert "No new commits to sync" in result.output

    def test_push_failure_exit_code(self, configured, source_repo, mirror_repo):
        fake = _result(source_repo, mirror_repo, synced=[C1], pushed=False, push_error="rejected")
        with mock.patch("gitghost.sync.engine.sync_repository", return_value=fake):
            result = _run(["sync", str(source_repo)], configured)

        assert result.exit_code == 2
        assert "Failed to push" in result.output
        assert "Synced 1 new commit(s)" in result.output

    def test_commit_failures_reported(self, configured, source_repo, mirror_repo):
        fake = _result(
            source_repo,
            mirror_repo,
            synced=[C1],
            failures=[CommitFailure(C2, "commit", "error: commit failed")],
        )
        with mock.patch("gitghost.sync.engine.sync_repository", return_value=fake):
            result = _run(["sync", str(source_repo)], configured)

        assert result.exit_code == 2
        assert C2[:12] in result.output
        assert "will not be retried" in result.output

    def test_listing_failure(self, configured, source_repo, mirror_repo):
        fake = _result(source_repo, mirror_repo, pushed=False, listing_error="fatal: bad revision")
        with mock.patch("gitghost.sync.engine.sync_repository", return_value=fake):
            result = _run(["sync", str(source_repo)], configured)

        assert result.exit_code == 1
        assert "fatal: bad revision" in result.output

    def test_invalid_source_repo(self, configured, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()

        result = _run(["sync", str(plain)], configured)

        assert result.exit_code == 1
        assert "not a valid Git repository" in result.output
        assert load_config(configured).synced_repos == []

    def test_dry_run(self, configured, source_repo, mirror_repo):
        fake = _result(source_repo, mirror_repo, pushed=False, pending=[C1, C2])
        with mock.patch("gitghost.sync.engine.sync_repository", return_value=fake) as sync_mock:
            result = _run(["sync", "--dry-run", str(source_repo)], configured)

        assert result.exit_code == 0
        assert C1 in result.output and C2 in result.output
        assert "Dry run" in result.output
        assert sync_mock.call_args[0][0].dry_run is True
        assert load_config(configured).synced_repos == []


# -- sync-all -----------------------------------------------------------------

class TestSyncAll:

    def test_no_registered_repos(self, configured):
        result = _run(["sync-all"], configured)

        assert result.exit_code == 0
        assert "No synced repositories yet" in result.output

    def test_runs_each_repo(self, configured, tmp_path, mirror_repo):
        config = load_config(configured)
        config.synced_repos = [str(tmp_path / "a"), str(tmp_path / "b")]
        save_config(config, configured)

        results = [
            _result(tmp_path / "a", mirror_repo, synced=[C1]),
            _result(tmp_path / "b", mirror_repo, pushed=False, push_error="rejected"),
        ]
        with mock.patch("gitghost.sync.engine.sync_repository", side_effect=results) as sync_mock:
            result = _run(["sync-all"], configured)

        assert sync_mock.call_count == 2
        assert result.exit_code == 2


# -- status -------------------------------------------------------------------

class TestStatus:

    def test_not_set_up(self, config_path):
        result = _run(["status"], config_path)

        assert result.exit_code == 0
        assert "Not set up" in result.output

    def test_json_counts_ledger_entries(self, configured, source_repo, mirror_repo):
        config = load_config(configured)
        config.add_synced_repo(source_repo)
        save_config(config, configured)
        ledger = mirror_repo / "repos" / source_repo.name
        ledger.parent.mkdir()
        ledger.write_text(f"{C1}\n{C2}\n")

        result = _run(["status", "--json"], configured)
        data = json.loads(result.output)

        assert data["configured"] is True
        assert data["mirror_ready"] is True
        assert data["filter_authors"] == ["alice"]
        assert data["repos"] == [{"path": str(source_repo), "exists": True, "mirrored": 2}]

    def test_human_output(self, configured, source_repo, mirror_repo):
        config = load_config(configured)
        config.add_synced_repo(source_repo)
        save_config(config, configured)

        result = _run(["status"], configured)

        assert str(mirror_repo) in result.output
        assert "0 commit(s) mirrored" in result.output


# -- setup --------------------------------------------------------------------

@pytest.fixture
def git_mirror_helpers():
    with mock.patch("gitghost.git.mirror.init_mirror", return_value=True) as init_mock, \
         mock.patch("gitghost.git.mirror.ensure_remote", return_value=True) as remote_mock, \
         mock.patch("gitghost.git.mirror.set_identity", return_value=True) as identity_mock:
        yield init_mock, remote_mock, identity_mock


class TestSetup:

    def test_non_interactive(self, config_path, tmp_path, git_mirror_helpers):
        init_mock, remote_mock, identity_mock = git_mirror_helpers
        mirror = tmp_path / "ghost-mirror"

        result = _run([
            "setup",
            "--non-interactive",
            "--mirror-path", str(mirror),
            "--remote-url", "git@example.com:me/ghost.git",
            "--author-name", "Me",
            "--author-email", "me@example.com",
            "--filter-author", "alice",
            "--filter-author", "bob",
            "--filter-author", "alice",
        ], config_path)

        assert result.exit_code == 0, result.output
        assert "setup is complete" in result.output

        config = load_config(config_path)
        assert config.dummy_repo_path == str(mirror.resolve())
        assert config.remote_url == "git@example.com:me/ghost.git"
        assert config.filter_authors == ["alice", "bob"]

        init_mock.assert_called_once_with(mirror.resolve())
        remote_mock.assert_called_once_with(mirror.resolve(), "git@example.com:me/ghost.git")
        identity_mock.assert_called_once_with(mirror.resolve(), "Me", "me@example.com")

    def test_non_interactive_requires_remote(self, config_path, tmp_path, git_mirror_helpers):
        result = _run([
            "setup",
            "--non-interactive",
            "--mirror-path", str(tmp_path / "ghost-mirror"),
        ], config_path)

        assert result.exit_code == 1
        assert "remote URL is required" in result.output
        assert not config_path.exists()

    def test_interactive_prompts(self, config_path, tmp_path, git_mirror_helpers):
        mirror = tmp_path / "ghost-mirror"
        answers = "\n".join([
            str(mirror),
            "git@example.com:me/ghost.git",
            "Me",
            "me@example.com",
            "alice",
            "bob",
            "",
        ]) + "\n"

        result = _run(["setup"], config_path, input=answers)

        assert result.exit_code == 0, result.output
        config = load_config(config_path)
        assert config.dummy_repo_path == str(mirror.resolve())
        assert config.author_name == "Me"
        assert config.filter_authors == ["alice", "bob"]

    def test_keeps_previous_values_as_defaults(self, configured, mirror_repo, git_mirror_helpers):
        result = _run(["setup"], configured, input="\n\n\n\n\n")

        assert result.exit_code == 0, result.output
        config = load_config(configured)
        assert config.dummy_repo_path == str(mirror_repo.resolve())
        assert config.remote_url == "git@example.com:me/ghost.git"
        assert config.author_email == "me@example.com"
        assert config.filter_authors == ["alice"]

    def test_remote_configuration_failure(self, config_path, tmp_path, git_mirror_helpers):
        _, remote_mock, _ = git_mirror_helpers
        remote_mock.return_value = False

        result = _run([
            "setup",
            "--non-interactive",
            "--mirror-path", str(tmp_path / "ghost-mirror"),
            "--remote-url", "not a url",
        ], config_path)

        assert result.exit_code == 1
        assert "Could not configure remote" in result.output
