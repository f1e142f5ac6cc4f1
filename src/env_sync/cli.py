"""CLI entry point for environment sync."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer

from env_sync.adapters.notifications import ControlPlanePublisher
from env_sync.adapters.report import JsonStateRenderer, MarkdownReportRenderer
from env_sync.adapters.sources import GitHubOrgSource
from env_sync.config import get_settings
from env_sync.core import OverrideStore, SyncError
from env_sync.use_cases import SyncResult, SyncService


def main(
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the report without writing or publishing"),
    org: Optional[str] = typer.Option(None, "--org", help="GitHub organization to sync"),
    output: Optional[Path] = typer.Option(None, "--output", help="Markdown report path"),
    json_path: Optional[Path] = typer.Option(None, "--json", help="JSON state file path"),
    overrides: Optional[Path] = typer.Option(None, "--overrides", help="Overrides file path"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
) -> None:
    """Sync Codex environments from a GitHub organization."""
    try:
        asyncio.run(async_run(dry_run, org, output, json_path, overrides, config))
    except SyncError as e:
        print(str(e), file=sys.stderr)
        raise typer.Exit(code=1)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


async def async_run(
    dry_run: bool,
    org: Optional[str],
    output: Optional[Path],
    json_path: Optional[Path],
    overrides: Optional[Path],
    config: Path,
) -> SyncResult:
    """Async implementation of the sync command."""
    settings = get_settings(config)

    organization = org or settings.organization
    report_path = (output or settings.paths.output).resolve()
    state_path = (json_path or settings.paths.state).resolve()
    overrides_path = (overrides or settings.paths.overrides).resolve()

    service = SyncService(
        source=GitHubOrgSource(
            token=settings.github_token,
            api_base=settings.github.api_base,
            timeout=settings.github.timeout,
        ),
        override_store=OverrideStore(overrides_path),
        report_renderer=MarkdownReportRenderer(),
        state_renderer=JsonStateRenderer(),
        publisher=ControlPlanePublisher(
            endpoint=settings.control_plane_endpoint,
            token=settings.control_plane_token,
            timeout=settings.control_plane.timeout,
        ),
        rules=settings.classification.rules,
        default_category=settings.classification.default_category,
    )

    result = await service.run(organization, report_path, state_path, dry_run=dry_run)

    if result.dry_run:
        print(result.report)
        return result

    if result.publish is None or result.publish.skipped:
        print("Skipped Codex sync (CODEX_API_URL or CODEX_API_TOKEN not configured).")
    else:
        print("Codex environments synced successfully.")

    return result


if __name__ == "__main__":
    app()
