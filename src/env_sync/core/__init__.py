"""Core domain layer."""

from env_sync.core.classifier import DEFAULT_CATEGORY, DEFAULT_RULES, classify
from env_sync.core.entities import (
    ClassificationRule,
    Environment,
    EnvironmentStatus,
    Item,
    Override,
    PublishResult,
    Snapshot,
)
from env_sync.core.errors import (
    ConfigError,
    OrganizationNotFoundError,
    PublishError,
    RemoteAPIError,
    SyncError,
    TransportError,
)
from env_sync.core.interfaces import EnvironmentPublisher, ItemSource, SnapshotRenderer
from env_sync.core.override_store import OverrideStore
from env_sync.core.sink_writer import read_existing, write_if_changed
from env_sync.core.snapshot import build_snapshot

__all__ = [
    "Item",
    "Override",
    "ClassificationRule",
    "Environment",
    "EnvironmentStatus",
    "Snapshot",
    "PublishResult",
    "SyncError",
    "ConfigError",
    "OrganizationNotFoundError",
    "RemoteAPIError",
    "TransportError",
    "PublishError",
    "ItemSource",
    "SnapshotRenderer",
    "EnvironmentPublisher",
    "OverrideStore",
    "DEFAULT_CATEGORY",
    "DEFAULT_RULES",
    "classify",
    "build_snapshot",
    "read_existing",
    "write_if_changed",
]
