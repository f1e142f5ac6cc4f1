"""Source adapters for fetching repositories."""

from env_sync.adapters.sources.github_source import GitHubOrgSource

__all__ = ["GitHubOrgSource"]
