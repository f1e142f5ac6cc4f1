"""Error taxonomy for environment synchronization."""


class SyncError(Exception):
    """Base class for every fatal sync failure."""


class ConfigError(SyncError):
    """Override file or config.yaml is malformed."""


class OrganizationNotFoundError(SyncError):
    """GitHub answered 404 for the organization."""

    def __init__(self, organization: str) -> None:
        self.organization = organization
        super().__init__(
            f'GitHub organization "{organization}" was not found or is inaccessible.'
        )


class RemoteAPIError(SyncError):
    """GitHub answered with a non-success status or an undecodable payload."""

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"GitHub API responded with {status}: {body}")


class TransportError(SyncError):
    """Network-level failure talking to GitHub."""


class PublishError(SyncError):
    """Control plane rejected the environment push."""

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"Failed to sync environments with Codex: {status} {body}")
