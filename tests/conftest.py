"""Shared fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from env_sync.core import Item

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_item(
    name: str,
    description: Optional[str] = None,
    archived: bool = False,
    days_since_push: Optional[int] = 0,
    item_id: int = 1,
) -> Item:
    """Build a repository item pushed ``days_since_push`` days before NOW."""
    return Item(
        id=item_id,
        name=name,
        full_name=f"sovereign-codex/{name}",
        url=f"https://github.com/sovereign-codex/{name}",
        description=description,
        archived=archived,
        last_activity_at=None if days_since_push is None else NOW - timedelta(days=days_since_push),
    )


@pytest.fixture
def now() -> datetime:
    return NOW
