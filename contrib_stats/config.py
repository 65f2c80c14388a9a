"""Runtime settings read from environment variables."""
import os
from dataclasses import dataclass
from contrib_stats.domain.errors import InputError


@dataclass(frozen=True)
class Settings:
    base_url: str = "https://github.com"
    timeout: float = 30.0
    chunk_days: int = 31
    max_connections: int = 16
    log_level: str = "ERROR"

    @property
    def commit_history_url_template(self) -> str:
        """Format string for a project's commit history filtered by author."""
        return self.base_url.rstrip("/") + "/{project}/commits?author={username}"


def _number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise InputError(f"{name} must be a number, got {raw!r}.") from None
    if value <= 0:
        raise InputError(f"{name} must be positive, got {raw!r}.")
    return value


def load_settings() -> Settings:
    """Build settings from the environment, falling back to defaults."""
    defaults = Settings()
    return Settings(
        base_url=os.getenv("CONTRIB_STATS_BASE_URL", defaults.base_url),
        timeout=_number("CONTRIB_STATS_TIMEOUT", defaults.timeout, float),
        chunk_days=_number("CONTRIB_STATS_CHUNK_DAYS", defaults.chunk_days, int),
        max_connections=_number("CONTRIB_STATS_MAX_CONNECTIONS", defaults.max_connections, int),
        log_level=os.getenv("CONTRIB_STATS_LOG_LEVEL", defaults.log_level).upper()
    )
