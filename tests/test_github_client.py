"""Tests for the GitHub contributions client against a local server."""
import asyncio
from datetime import date
import pytest
from aiohttp import web
from aiohttp import test_utils
from contrib_stats.domain.errors import (
    RateLimited,
    TransportError,
    UpstreamHTTPError,
    UserNotFound,
)
from contrib_stats.domain.models import Chunk
from contrib_stats.infrastructure.github_client import GitHubContributionsClient


CHUNK = Chunk(start=date(2024, 1, 1), end=date(2024, 2, 1))

STATUS_BY_USER = {
    "missing": 404,
    "busy": 429,
    "broken": 500,
}


async def contributions(request):
    username = request.match_info["username"]
    if username == "slow":
        await asyncio.sleep(1)
    status = STATUS_BY_USER.get(username, 200)
    body = f"{username} {request.query.get('tab')} {request.query.get('from')} {request.query.get('to')}"
    return web.Response(status=status, text=body, content_type="text/html")


def fetch_chunk(username, timeout=5.0):
    async def run():
        app = web.Application()
        app.router.add_get("/{username}", contributions)
        async with test_utils.TestServer(app) as server:
            client = GitHubContributionsClient(
                username,
                base_url=str(server.make_url("/")),
                timeout=timeout
            )
            try:
                return await client.fetch_chunk(CHUNK)
            finally:
                await client.close()

    return asyncio.run(run())


def test_chunk_url():
    """Test the contributions URL of a chunk."""
    client = GitHubContributionsClient("jane")

    assert client.chunk_url(CHUNK) == (
        "https://github.com/jane?tab=contributions&from=2024-01-01&to=2024-02-01"
    )


def test_fetch_chunk_success():
    """Test that a 200 page is returned with its body."""
    page = fetch_chunk("jane")

    assert page.status == 200
    assert page.body == "jane contributions 2024-01-01 2024-02-01"


def test_not_found_is_user_not_found():
    """Test that 404 references the requested username."""
    with pytest.raises(UserNotFound) as exc_info:
        fetch_chunk("missing")

    assert exc_info.value.username == "missing"
    assert '"missing"' in str(exc_info.value)


def test_too_many_requests_is_rate_limited():
    """Test that 429 is classified as rate limiting."""
    with pytest.raises(RateLimited):
        fetch_chunk("busy")


def test_server_error_is_upstream_error():
    """Test that other statuses keep their code."""
    with pytest.raises(UpstreamHTTPError) as exc_info:
        fetch_chunk("broken")

    assert exc_info.value.status == 500
    assert "500" in str(exc_info.value)


def test_timeout_is_transport_error():
    """Test that a request exceeding the timeout fails below the HTTP layer."""
    with pytest.raises(TransportError):
        fetch_chunk("slow", timeout=0.2)


def test_connection_failure_is_transport_error():
    """Test that an unreachable host is a transport error."""
    async def run():
        client = GitHubContributionsClient("jane", base_url="http://127.0.0.1:1", timeout=2.0)
        try:
            await client.fetch_chunk(CHUNK)
        finally:
            await client.close()

    with pytest.raises(TransportError) as exc_info:
        asyncio.run(run())

    assert exc_info.value.url.startswith("http://127.0.0.1:1/jane")
