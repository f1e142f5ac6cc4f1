"""Snapshot assembly."""

from datetime import datetime
from typing import Iterable

from env_sync.core.entities import Environment, Snapshot


def sort_key(environment: Environment) -> tuple[str, str, str]:
    return (environment.category, environment.status.value, environment.name)


def build_snapshot(
    environments: Iterable[Environment], organization: str, now: datetime
) -> Snapshot:
    """Sort environments by category, status, then name."""
    return Snapshot(
        generated_at=now,
        organization=organization,
        environments=tuple(sorted(environments, key=sort_key)),
    )
