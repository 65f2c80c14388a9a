"""GitHub interface (port) for fetching contributions pages.

This is the anti-corruption layer that shields the domain from HTTP specifics.
"""
from abc import ABC, abstractmethod
from contrib_stats.domain.models import Chunk, Page


class IContributionsFetcher(ABC):
    """Abstract interface for retrieving contributions markup."""

    @abstractmethod
    async def fetch(self, url: str) -> Page:
        """Fetch a single URL.

        Args:
            url: Absolute URL to retrieve

        Returns:
            The raw page with its HTTP status

        Raises:
            TransportError: When the request fails below the HTTP layer
        """
        pass

    @abstractmethod
    async def fetch_chunk(self, chunk: Chunk) -> Page:
        """Fetch the contributions page covering one chunk.

        Args:
            chunk: Date window to request

        Returns:
            A page whose status is 200

        Raises:
            UserNotFound, RateLimited, UpstreamHTTPError: For non-200 responses
            TransportError: When the request fails below the HTTP layer
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
