"""Control plane publisher adapter."""

from typing import Optional, Sequence

import httpx

from env_sync.core import Environment, EnvironmentPublisher, PublishError, PublishResult


class ControlPlanePublisher(EnvironmentPublisher):
    """Push environments to the Codex control plane API."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize publisher.

        Args:
            endpoint: Base URL of the control plane. If None, publishing is skipped.
            token: Bearer token. If None, publishing is skipped.
            timeout: Request timeout in seconds.
        """
        self.endpoint = endpoint
        self.token = token
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.endpoint and self.token)

    async def publish(self, environments: Sequence[Environment]) -> PublishResult:
        """Send the full environment list in a single request.

        Args:
            environments: Environments in snapshot order

        Raises:
            PublishError: On a non-success response or a transport failure
        """
        if not self.configured:
            return PublishResult(skipped=True)

        url = f"{self.endpoint.rstrip('/')}/environments/sync"
        payload = {"environments": [env.to_dict() for env in environments]}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(url, json=payload, headers=headers)
            except httpx.TransportError as e:
                raise PublishError(0, str(e)) from e

        if not response.is_success:
            raise PublishError(response.status_code, response.text)

        return PublishResult(skipped=False)
