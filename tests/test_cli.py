"""Tests for the CLI."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
import typer
from conftest import make_item
from typer.testing import CliRunner

from env_sync.adapters.notifications import ControlPlanePublisher
from env_sync.adapters.sources import GitHubOrgSource
from env_sync.cli import main
from env_sync.core import OrganizationNotFoundError, PublishError

runner = CliRunner()

cli = typer.Typer()
cli.command()(main)


@pytest.fixture(autouse=True)
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in ["GITHUB_TOKEN", "GITHUB_ORG", "CODEX_API_URL", "CODEX_API_TOKEN"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_dry_run_prints_report(workspace: Path) -> None:
    """Test that --dry-run prints the report and writes nothing."""
    fetch = AsyncMock(return_value=[make_item("core-api")])

    with patch.object(GitHubOrgSource, "fetch_all", fetch):
        result = runner.invoke(cli, ["--dry-run", "--org", "my-org"])

    assert result.exit_code == 0
    assert "# Codex Environments" in result.output
    assert "| core-api |" in result.output
    fetch.assert_called_once_with("my-org")
    assert list(workspace.iterdir()) == []


def test_sync_writes_then_reports_up_to_date(workspace: Path) -> None:
    fetch = AsyncMock(return_value=[make_item("core-api")])
    args = ["--output", "out/ENV.md", "--json", "out/env.json"]

    with patch.object(GitHubOrgSource, "fetch_all", fetch):
        first = runner.invoke(cli, args)
        second = runner.invoke(cli, args)

    assert first.exit_code == 0
    assert "Updated" in first.output
    assert "Skipped Codex sync" in first.output
    state = json.loads((workspace / "out" / "env.json").read_text(encoding="utf-8"))
    assert state["organization"] == "sovereign-codex"

    assert second.exit_code == 0
    assert second.output.count("already up to date.") == 2


def test_fatal_error_exits_non_zero(workspace: Path) -> None:
    fetch = AsyncMock(side_effect=OrganizationNotFoundError("ghost-org"))

    with patch.object(GitHubOrgSource, "fetch_all", fetch):
        result = runner.invoke(cli, ["--org", "ghost-org"])

    assert result.exit_code == 1
    assert "ghost-org" in result.output


def test_malformed_overrides_exit_non_zero(workspace: Path) -> None:
    (workspace / "overrides.json").write_text("{broken", encoding="utf-8")
    fetch = AsyncMock(return_value=[])

    with patch.object(GitHubOrgSource, "fetch_all", fetch):
        result = runner.invoke(cli, ["--overrides", "overrides.json"])

    assert result.exit_code == 1
    fetch.assert_not_called()


def test_publish_failure_after_sinks_written(workspace: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that sink outcomes are reported before a failing publish exits non-zero."""
    monkeypatch.setenv("CODEX_API_URL", "https://codex.example")
    monkeypatch.setenv("CODEX_API_TOKEN", "secret")
    fetch = AsyncMock(return_value=[make_item("core-api")])
    publish = AsyncMock(side_effect=PublishError(503, "unavailable"))

    with patch.object(GitHubOrgSource, "fetch_all", fetch), patch.object(
        ControlPlanePublisher, "publish", publish
    ):
        result = runner.invoke(cli, ["--output", "ENV.md", "--json", "env.json"])

    assert result.exit_code == 1
    assert "Updated" in result.output
    assert "503" in result.output
    assert (workspace / "ENV.md").exists()
    publish.assert_called_once()
