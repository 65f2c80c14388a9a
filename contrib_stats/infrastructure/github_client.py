"""GitHub contributions page client built on a pooled aiohttp session."""
import asyncio
import logging
from typing import Optional
import aiohttp
from contrib_stats.domain.errors import (
    RateLimited,
    TransportError,
    UpstreamHTTPError,
    UserNotFound,
)
from contrib_stats.domain.github_interface import IContributionsFetcher
from contrib_stats.domain.models import Chunk, Page


logger = logging.getLogger(__name__)


GITHUB_BASE_URL = "https://github.com"
CONTRIB_CHUNK_URL_TMPL = "{base_url}/{username}?tab=contributions&from={start}&to={end}"

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


class GitHubContributionsClient(IContributionsFetcher):
    """Client for the public contributions tab of a GitHub profile.

    Implements the IContributionsFetcher port. All requests of a run share one
    connection pool. Nothing is retried: a failed request is terminal.
    """

    def __init__(
        self,
        username: str,
        base_url: str = GITHUB_BASE_URL,
        timeout: float = 30.0,
        max_connections: int = 16
    ):
        """Initialize GitHub client.

        Args:
            username: Profile whose contributions are requested
            base_url: Scheme and host of the GitHub web interface
            timeout: Total seconds allowed for one request
            max_connections: Size of the connection pool
        """
        self._username = username
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._max_connections = max_connections
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None:
            connector = aiohttp.TCPConnector(limit=self._max_connections)
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers=DEFAULT_HEADERS,
                timeout=self._timeout
            )
        return self._session

    def chunk_url(self, chunk: Chunk) -> str:
        """Build the contributions URL for one chunk."""
        return CONTRIB_CHUNK_URL_TMPL.format(
            base_url=self._base_url,
            username=self._username,
            start=chunk.start.isoformat(),
            end=chunk.end.isoformat()
        )

    async def fetch(self, url: str) -> Page:
        """Fetch a URL and return its body with the HTTP status.

        Args:
            url: Absolute URL to retrieve

        Returns:
            Page with status and decoded body, whatever the status

        Raises:
            TransportError: On connection failure or timeout
        """
        session = self._init_session()
        logger.debug(f"GET {url}")

        try:
            async with session.get(url) as response:
                body = await response.text(errors="replace")
                return Page(url=url, status=response.status, body=body)
        except asyncio.TimeoutError as e:
            logger.warning(f"Request to {url} timed out")
            raise TransportError(url, f"timed out after {self._timeout.total} seconds") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise TransportError(url, str(e) or type(e).__name__) from e

    async def fetch_chunk(self, chunk: Chunk) -> Page:
        """Fetch the contributions page of one chunk.

        Args:
            chunk: Date window to request

        Returns:
            The successful page

        Raises:
            UserNotFound: On 404
            RateLimited: On 429
            UpstreamHTTPError: On any other non-200 status
            TransportError: On connection failure or timeout
        """
        page = await self.fetch(self.chunk_url(chunk))
        self.raise_for_status(page)
        return page

    def raise_for_status(self, page: Page) -> None:
        """Classify a non-200 page into the error taxonomy."""
        if page.status == 200:
            return

        logger.warning(f"GitHub responded {page.status} for {page.url}")
        if page.status == 404:
            raise UserNotFound(self._username)
        if page.status == 429:
            raise RateLimited()
        raise UpstreamHTTPError(page.status, page.url)

    async def close(self) -> None:
        """Close the HTTP session and its connection pool."""
        if self._session:
            await self._session.close()
            self._session = None
