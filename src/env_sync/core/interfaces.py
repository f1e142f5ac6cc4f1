"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from env_sync.core.entities import Environment, Item, PublishResult, Snapshot


class ItemSource(ABC):
    """Interface for fetching an organization's repositories."""

    @abstractmethod
    async def fetch_all(self, organization: str) -> list[Item]:
        """Fetch every repository of the organization."""
        pass


class SnapshotRenderer(ABC):
    """Interface for serializing a snapshot into a sink's content."""

    @abstractmethod
    def render(self, snapshot: Snapshot, previous: Optional[str] = None) -> str:
        """Render snapshot. ``previous`` is the sink's current content, if any."""
        pass


class EnvironmentPublisher(ABC):
    """Interface for pushing environments downstream."""

    @abstractmethod
    async def publish(self, environments: Sequence[Environment]) -> PublishResult:
        """Push environments, or report that the push was skipped."""
        pass
