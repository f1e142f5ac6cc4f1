"""Markdown report of environments."""

from typing import Optional

from env_sync.core import Environment, Snapshot, SnapshotRenderer

PREAMBLE = (
    "# Codex Environments\n"
    "\n"
    "> Generated automatically. Run `env-sync` to refresh.\n"
    "\n"
    "| Repository | URL | Category | Status | Default Enabled |\n"
    "| --- | --- | --- | --- | --- |\n"
)


class MarkdownReportRenderer(SnapshotRenderer):
    """Render a snapshot as a Markdown table, one row per environment."""

    def render(self, snapshot: Snapshot, previous: Optional[str] = None) -> str:
        rows = [self._format_row(env) for env in snapshot.environments]
        return PREAMBLE + "".join(f"{row}\n" for row in rows)

    def _format_row(self, environment: Environment) -> str:
        default_enabled = "yes" if environment.default_enabled else "no"
        return (
            f"| {environment.name} | {environment.url} | {environment.category} "
            f"| {environment.status.value} | {default_enabled} |"
        )
