"""Reporting interfaces (ports) consuming the result of a run.

These are the ports in hexagonal architecture that the infrastructure layer implements.
"""
from abc import ABC, abstractmethod
from contrib_stats.domain.models import AggregateStats, SortKey


class IReporter(ABC):
    """Abstract interface for presenting final statistics."""

    @abstractmethod
    def report(self, stats: AggregateStats, sort_key: SortKey) -> None:
        """Render the statistics of a completed run.

        Args:
            stats: Frozen aggregate statistics, read-only
            sort_key: Column projects are ordered by
        """
        pass


class IProgressListener(ABC):
    """Abstract interface notified while chunks are fetched."""

    @abstractmethod
    def start(self, total: int) -> None:
        """Called once with the number of chunks before any fetch starts."""
        pass

    @abstractmethod
    def advance(self, completed: int) -> None:
        """Called once per successfully merged chunk with the running count."""
        pass

    @abstractmethod
    def finish(self) -> None:
        """Called once when the run ends, successfully or not."""
        pass
