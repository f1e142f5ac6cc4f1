"""Core domain entities."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class EnvironmentStatus(str, Enum):
    """Lifecycle status of an environment."""

    ACTIVE = "active"
    DORMANT = "dormant"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class Item:
    """Repository record as fetched from GitHub."""

    id: int
    name: str
    full_name: str
    url: str
    description: Optional[str]
    archived: bool
    last_activity_at: Optional[datetime]

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Name cannot be empty")
        if not self.url:
            raise ValueError("URL cannot be empty")


@dataclass(frozen=True)
class Override:
    """Manual policy for a single repository.

    Every field is optional. ``default_enabled`` is tri-state: ``None`` means
    no override, ``False`` forces the environment off.
    """

    category: Optional[str] = None
    status: Optional[EnvironmentStatus] = None
    default_enabled: Optional[bool] = None


@dataclass(frozen=True)
class ClassificationRule:
    """Category assigned when any pattern matches name or description."""

    category: str
    patterns: tuple[re.Pattern, ...]

    @classmethod
    def from_strings(cls, category: str, patterns: list[str]) -> "ClassificationRule":
        """Compile plain pattern strings case-insensitively."""
        return cls(
            category=category,
            patterns=tuple(re.compile(p, re.IGNORECASE) for p in patterns),
        )

    def matches(self, *texts: str) -> bool:
        return any(pattern.search(text) for pattern in self.patterns for text in texts)


@dataclass(frozen=True)
class Environment:
    """Fully classified repository, the unit persisted and published."""

    id: int
    name: str
    full_name: str
    url: str
    description: Optional[str]
    archived: bool
    last_activity_at: Optional[datetime]
    category: str
    status: EnvironmentStatus
    default_enabled: bool

    def to_dict(self) -> dict[str, Any]:
        """Wire form shared by the state file and the control plane."""
        return {
            "id": self.id,
            "name": self.name,
            "fullName": self.full_name,
            "url": self.url,
            "description": self.description,
            "archived": self.archived,
            "pushedAt": format_timestamp(self.last_activity_at),
            "category": self.category,
            "status": self.status.value,
            "defaultEnabled": self.default_enabled,
        }


@dataclass(frozen=True)
class Snapshot:
    """Sorted environments plus run metadata."""

    generated_at: datetime
    organization: str
    environments: tuple[Environment, ...]


@dataclass(frozen=True)
class PublishResult:
    """Outcome of a control plane push."""

    skipped: bool


def parse_timestamp(value: str) -> datetime:
    """Parse GitHub's ISO-8601 timestamps (``Z`` suffix allowed)."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")
