"""Tests for GitHub organization source."""

import httpx
import pytest

from env_sync.adapters.sources import GitHubOrgSource
from env_sync.core import OrganizationNotFoundError, RemoteAPIError, TransportError


def make_repo(index: int, **extra) -> dict:
    repo = {
        "id": index,
        "name": f"repo-{index}",
        "full_name": f"sovereign-codex/repo-{index}",
        "html_url": f"https://github.com/sovereign-codex/repo-{index}",
        "description": None,
        "archived": False,
        "pushed_at": "2025-11-27T08:30:00Z",
    }
    repo.update(extra)
    return repo


class PagedHandler:
    """Serve pages of the given sizes and record every request."""

    def __init__(self, page_sizes: list[int]) -> None:
        self.page_sizes = page_sizes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        page = int(request.url.params["page"])
        size = self.page_sizes[page - 1] if page <= len(self.page_sizes) else 0
        offset = sum(self.page_sizes[: page - 1])
        return httpx.Response(200, json=[make_repo(offset + i) for i in range(size)])


@pytest.mark.asyncio
async def test_pagination_stops_on_short_page() -> None:
    """Test that pages of 100, 100, 37 yield 237 items in 3 requests."""
    handler = PagedHandler([100, 100, 37])
    source = GitHubOrgSource(transport=httpx.MockTransport(handler))

    items = await source.fetch_all("sovereign-codex")

    assert len(items) == 237
    assert len(handler.requests) == 3
    assert [int(r.url.params["page"]) for r in handler.requests] == [1, 2, 3]
    assert [item.id for item in items] == list(range(237))


@pytest.mark.asyncio
async def test_exact_multiple_needs_empty_terminal_page() -> None:
    handler = PagedHandler([100])
    source = GitHubOrgSource(transport=httpx.MockTransport(handler))

    items = await source.fetch_all("sovereign-codex")

    assert len(items) == 100
    assert len(handler.requests) == 2


@pytest.mark.asyncio
async def test_request_shape_with_token() -> None:
    handler = PagedHandler([1])
    source = GitHubOrgSource(token="ghp_test", transport=httpx.MockTransport(handler))

    await source.fetch_all("sovereign-codex")

    request = handler.requests[0]
    assert request.url.path == "/orgs/sovereign-codex/repos"
    assert request.url.params["per_page"] == "100"
    assert request.url.params["type"] == "all"
    assert request.headers["User-Agent"] == "codex-sync-script"
    assert request.headers["Accept"] == "application/vnd.github+json"
    assert request.headers["Authorization"] == "Bearer ghp_test"


@pytest.mark.asyncio
async def test_no_authorization_without_token() -> None:
    handler = PagedHandler([1])
    source = GitHubOrgSource(transport=httpx.MockTransport(handler))

    await source.fetch_all("sovereign-codex")

    assert "Authorization" not in handler.requests[0].headers


@pytest.mark.asyncio
async def test_item_decoding() -> None:
    transport = httpx.MockTransport(
        lambda request: httpx.Response(
            200,
            json=[
                make_repo(1, description="Kernel", archived=True),
                make_repo(2, pushed_at=None),
            ],
        )
    )

    items = await GitHubOrgSource(transport=transport).fetch_all("sovereign-codex")

    assert items[0].name == "repo-1"
    assert items[0].url == "https://github.com/sovereign-codex/repo-1"
    assert items[0].description == "Kernel"
    assert items[0].archived is True
    assert items[0].last_activity_at.year == 2025
    assert items[1].last_activity_at is None


@pytest.mark.asyncio
async def test_not_found_organization() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(404, json={"message": "Not Found"}))

    with pytest.raises(OrganizationNotFoundError, match="no-such-org"):
        await GitHubOrgSource(transport=transport).fetch_all("no-such-org")


@pytest.mark.asyncio
async def test_api_error_aborts_whole_fetch() -> None:
    """Test that a failing second page discards the first page."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["page"] == "1":
            return httpx.Response(200, json=[make_repo(i) for i in range(100)])
        return httpx.Response(403, text="API rate limit exceeded")

    with pytest.raises(RemoteAPIError) as exc_info:
        await GitHubOrgSource(transport=httpx.MockTransport(handler)).fetch_all("sovereign-codex")

    assert exc_info.value.status == 403
    assert "rate limit" in exc_info.value.body


@pytest.mark.asyncio
async def test_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError):
        await GitHubOrgSource(transport=httpx.MockTransport(handler)).fetch_all("sovereign-codex")


@pytest.mark.asyncio
async def test_missing_required_field() -> None:
    repo = make_repo(1)
    del repo["html_url"]
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[repo]))

    with pytest.raises(RemoteAPIError, match="html_url"):
        await GitHubOrgSource(transport=transport).fetch_all("sovereign-codex")


@pytest.mark.asyncio
async def test_non_list_payload() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"message": "odd"}))

    with pytest.raises(RemoteAPIError):
        await GitHubOrgSource(transport=transport).fetch_all("sovereign-codex")
