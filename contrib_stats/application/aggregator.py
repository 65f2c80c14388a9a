"""Merging contribution events into running statistics."""
import asyncio
import logging
from typing import Iterable
from contrib_stats.domain.models import (
    AggregateStats,
    CommitEvent,
    CommitStats,
    ContributionEvent,
    ContributionKind,
    IssueLikeEvent,
    ProjectStats,
)


logger = logging.getLogger(__name__)


COMMIT_HISTORY_URL_TMPL = "https://github.com/{project}/commits?author={username}"


class Aggregator:
    """Single owner of the AggregateStats of a run.

    Every batch is applied inside one critical section, so concurrent chunk
    results never interleave their updates. Each event changes a project entry
    and the matching global total by the same delta, keeping the totals equal
    to the per-project sums after every merge.
    """

    def __init__(self, username: str, history_url_template: str = COMMIT_HISTORY_URL_TMPL):
        """Initialize aggregator.

        Args:
            username: User whose commit history links are generated
            history_url_template: Format string with ``{project}`` and ``{username}`` fields
        """
        self._username = username
        self._history_url_template = history_url_template
        self._stats = AggregateStats()
        self._lock = asyncio.Lock()
        self._frozen = False

    @property
    def stats(self) -> AggregateStats:
        return self._stats

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Stop accepting merges; the statistics are final from now on."""
        self._frozen = True

    async def merge(self, events: Iterable[ContributionEvent]) -> bool:
        """Apply a batch of events as one atomic update.

        Args:
            events: Events extracted from one chunk

        Returns:
            True if the batch was applied, False if the aggregator is frozen

        Raises:
            ValueError: An event names a blank project; nothing is applied
            TypeError: An event has an unsupported type; nothing is applied
        """
        async with self._lock:
            if self._frozen:
                logger.debug("Discarding events merged after the run was finalized")
                return False

            resolved = [(self._project_name(event), event) for event in events]
            for name, event in resolved:
                self._apply(name, event)
            return True

    @staticmethod
    def _project_name(event: ContributionEvent) -> str:
        if not isinstance(event, (CommitEvent, IssueLikeEvent)):
            raise TypeError(f"Unsupported event type: {type(event).__name__}")

        name = event.project.strip()
        if not name:
            raise ValueError("Project name must not be empty")
        return name

    def _apply(self, name: str, event: ContributionEvent) -> None:
        stats = self._project_stats(name)

        if isinstance(event, CommitEvent):
            stats.commits.count += event.count
            self._stats.commits_total += event.count
        elif isinstance(event, IssueLikeEvent):
            if event.kind is ContributionKind.PULL_REQUEST:
                stats.pull_requests.append(event)
                self._stats.pull_requests_total += 1
            else:
                stats.issues.append(event)
                self._stats.issues_total += 1

    def _project_stats(self, name: str) -> ProjectStats:
        stats = self._stats.project_stats.get(name)
        if stats is None:
            history_url = self._history_url_template.format(project=name, username=self._username)
            stats = ProjectStats(commits=CommitStats(count=0, history_url=history_url))
            self._stats.project_stats[name] = stats
        return stats
