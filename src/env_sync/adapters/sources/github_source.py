"""GitHub source listing every repository of an organization."""

from typing import Any, Optional

import httpx

from env_sync.core import Item, ItemSource, OrganizationNotFoundError, RemoteAPIError, TransportError
from env_sync.core.entities import parse_timestamp

PAGE_SIZE = 100
MAX_PAGES = 1000
USER_AGENT = "codex-sync-script"

_REQUIRED_FIELDS = ("id", "name", "full_name", "html_url", "archived")


class GitHubOrgSource(ItemSource):
    """Page through ``/orgs/{org}/repos`` until a short page comes back."""

    def __init__(
        self,
        token: Optional[str] = None,
        api_base: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def fetch_all(self, organization: str) -> list[Item]:
        """Fetch all repositories in server order.

        Pages are requested one after another; any failure aborts the whole
        fetch and nothing collected so far is returned.
        """
        items: list[Item] = []
        url = f"{self.api_base}/orgs/{organization}/repos"

        async with httpx.AsyncClient(
            timeout=self.timeout, headers=self._get_headers(), transport=self.transport
        ) as client:
            for page in range(1, MAX_PAGES + 1):
                data = await self._fetch_page(client, url, organization, page)
                items.extend(self._create_item(repo) for repo in data)

                if len(data) < PAGE_SIZE:
                    return items

        raise RemoteAPIError(200, f"Pagination did not terminate after {MAX_PAGES} pages")

    async def _fetch_page(
        self, client: httpx.AsyncClient, url: str, organization: str, page: int
    ) -> list[Any]:
        try:
            response = await client.get(
                url, params={"per_page": PAGE_SIZE, "page": page, "type": "all"}
            )
        except httpx.TransportError as e:
            raise TransportError(f"Request to GitHub failed on page {page}: {e}") from e

        if response.status_code == 404:
            raise OrganizationNotFoundError(organization)

        if not response.is_success:
            raise RemoteAPIError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteAPIError(response.status_code, f"Invalid JSON on page {page}: {e}") from e

        if not isinstance(data, list):
            raise RemoteAPIError(response.status_code, f"Expected a list of repositories on page {page}")

        return data

    def _create_item(self, repo: Any) -> Item:
        """Decode one raw repository record, failing on missing fields."""
        if not isinstance(repo, dict):
            raise RemoteAPIError(200, f"Repository record is not an object: {repo!r}")

        missing = [key for key in _REQUIRED_FIELDS if repo.get(key) is None]
        if missing:
            label = repo.get("full_name") or repo.get("name") or "?"
            raise RemoteAPIError(200, f"Repository {label} is missing fields: {', '.join(missing)}")

        pushed_at = repo.get("pushed_at")
        try:
            last_activity_at = parse_timestamp(pushed_at) if pushed_at else None
        except (TypeError, ValueError) as e:
            raise RemoteAPIError(200, f"Repository {repo['full_name']} has invalid pushed_at: {pushed_at!r}") from e

        try:
            return Item(
                id=repo["id"],
                name=repo["name"],
                full_name=repo["full_name"],
                url=repo["html_url"],
                description=repo.get("description"),
                archived=bool(repo["archived"]),
                last_activity_at=last_activity_at,
            )
        except ValueError as e:
            raise RemoteAPIError(200, f"Repository {repo['full_name']}: {e}") from e

    def _get_headers(self) -> dict[str, str]:
        """Get headers for GitHub API requests."""
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        return headers
