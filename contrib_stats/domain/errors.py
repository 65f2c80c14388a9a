"""Error taxonomy for a contribution statistics run.

Every error is terminal: the first one raised aborts the whole run and no
partial report is produced.
"""
from typing import Optional


class ContribStatsError(Exception):
    """Base class for classified, expected failures."""
    pass


class InputError(ContribStatsError):
    """Raised when the command line or configuration is unusable."""
    pass


class UserNotFound(ContribStatsError):
    """Raised when GitHub responds 404 for the requested user."""

    def __init__(self, username: str):
        super().__init__(f'Unknown username "{username}".')
        self.username = username


class RateLimited(ContribStatsError):
    """Raised when GitHub responds 429."""

    def __init__(self):
        super().__init__("Too many requests to GitHub. Please, wait a minute and try again.")


class UpstreamHTTPError(ContribStatsError):
    """Raised for any other non-200 response."""

    def __init__(self, status: int, url: Optional[str] = None):
        super().__init__(f"GitHub responded with status code {status}.")
        self.status = status
        self.url = url


class TransportError(ContribStatsError):
    """Raised for connection failures and timeouts below the HTTP layer."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Request to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class MarkupParseError(ContribStatsError):
    """Raised when a matched section holds an item in an unexpected format."""

    def __init__(self, message: str, text: str):
        super().__init__(f"{message}: {text!r}")
        self.text = text
