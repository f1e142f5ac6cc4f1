"""Business logic use cases."""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from env_sync.core import (
    DEFAULT_CATEGORY,
    DEFAULT_RULES,
    ClassificationRule,
    EnvironmentPublisher,
    ItemSource,
    OverrideStore,
    PublishResult,
    Snapshot,
    SnapshotRenderer,
    build_snapshot,
    classify,
    read_existing,
    write_if_changed,
)


@dataclass
class SyncResult:
    """Outcome of one synchronization run."""

    snapshot: Snapshot
    report: str
    dry_run: bool = False
    report_changed: bool = False
    state_changed: bool = False
    publish: Optional[PublishResult] = None


class SyncService:
    """Service reconciling GitHub repositories into environment sinks."""

    def __init__(
        self,
        source: ItemSource,
        override_store: OverrideStore,
        report_renderer: SnapshotRenderer,
        state_renderer: SnapshotRenderer,
        publisher: Optional[EnvironmentPublisher] = None,
        rules: Sequence[ClassificationRule] = DEFAULT_RULES,
        default_category: str = DEFAULT_CATEGORY,
    ) -> None:
        self.source = source
        self.override_store = override_store
        self.report_renderer = report_renderer
        self.state_renderer = state_renderer
        self.publisher = publisher
        self.rules = rules
        self.default_category = default_category

    async def build(self, organization: str, now: Optional[datetime] = None) -> Snapshot:
        """Load overrides, fetch repositories and build a sorted snapshot."""
        now = now or datetime.now(timezone.utc)

        # Overrides first: a broken file aborts before any request is made.
        overrides = self.override_store.load()
        items = await self.source.fetch_all(organization)

        environments = classify(
            items, overrides, now, rules=self.rules, default_category=self.default_category
        )
        return build_snapshot(environments, organization, now)

    async def run(
        self,
        organization: str,
        report_path: Path,
        state_path: Path,
        dry_run: bool = False,
        now: Optional[datetime] = None,
    ) -> SyncResult:
        """Build the snapshot, write changed sinks, then publish downstream."""
        snapshot = await self.build(organization, now)

        if dry_run:
            return SyncResult(
                snapshot=snapshot,
                report=self.report_renderer.render(snapshot),
                dry_run=True,
            )

        result = self.write_sinks(snapshot, report_path, state_path)
        await self.publish(result)
        return result

    def write_sinks(self, snapshot: Snapshot, report_path: Path, state_path: Path) -> SyncResult:
        """Write report and state files, each only if its content changed."""
        report = self.report_renderer.render(snapshot, read_existing(report_path))
        state = self.state_renderer.render(snapshot, read_existing(state_path))

        result = SyncResult(
            snapshot=snapshot,
            report=report,
            report_changed=write_if_changed(report_path, report),
            state_changed=write_if_changed(state_path, state),
        )

        print(f"Updated {report_path}" if result.report_changed else f"{report_path} already up to date.")
        print(f"Updated {state_path}" if result.state_changed else f"{state_path} already up to date.")
        return result

    async def publish(self, result: SyncResult) -> Optional[PublishResult]:
        """Push the in-memory snapshot downstream, if a publisher is set."""
        if self.publisher is None:
            return None

        result.publish = await self.publisher.publish(result.snapshot.environments)
        return result.publish
