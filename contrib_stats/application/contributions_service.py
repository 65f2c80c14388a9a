"""Contributions service orchestrating a statistics run."""
import asyncio
import logging
import time
from typing import List, Optional
from contrib_stats.application.aggregator import Aggregator
from contrib_stats.application.chunk_planner import DAYS_PER_CHUNK, compute_chunks
from contrib_stats.application.extractor import ContributionExtractor
from contrib_stats.domain.github_interface import IContributionsFetcher
from contrib_stats.domain.models import AggregateStats, Chunk, TimeRange
from contrib_stats.domain.reporting_interface import IProgressListener


logger = logging.getLogger(__name__)


class ContributionsService:
    """Application service collecting contribution statistics for a user.

    Fetches every chunk of the requested range concurrently, extracts events
    from each page as it arrives and merges them through the aggregator. The
    first failing chunk aborts the run: the aggregator is frozen, the remaining
    fetches are cancelled and the error propagates to the caller.
    """

    def __init__(
        self,
        fetcher: IContributionsFetcher,
        extractor: ContributionExtractor,
        aggregator: Aggregator,
        max_chunk_days: int = DAYS_PER_CHUNK
    ):
        """Initialize contributions service.

        Args:
            fetcher: Contributions page fetcher implementation
            extractor: Page to event extractor
            aggregator: Owner of the statistics being built
            max_chunk_days: Upper bound of the length of one requested window
        """
        self._fetcher = fetcher
        self._extractor = extractor
        self._aggregator = aggregator
        self._max_chunk_days = max_chunk_days
        self._completed = 0
        self._failure: Optional[BaseException] = None

    async def collect(
        self,
        time_range: TimeRange,
        progress: Optional[IProgressListener] = None
    ) -> AggregateStats:
        """Collect statistics for every chunk of ``time_range``.

        Args:
            time_range: Inclusive date range to cover
            progress: Listener notified once per successfully merged chunk

        Returns:
            The final, frozen AggregateStats

        Raises:
            ContribStatsError: The first classified failure of any chunk
        """
        start_time = time.time()
        chunks = compute_chunks(time_range.start, time_range.end, self._max_chunk_days)
        self._completed = 0
        self._failure = None

        logger.info(
            f"Fetching {len(chunks)} chunks from {time_range.start.isoformat()} "
            f"to {time_range.end.isoformat()}"
        )

        if progress is not None:
            progress.start(len(chunks))

        tasks = [
            asyncio.create_task(self._process_chunk(chunk, len(chunks), progress))
            for chunk in chunks
        ]

        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            self._aggregator.freeze()
            await self._cancel(tasks)
            if progress is not None:
                progress.finish()

        if self._failure is not None:
            raise self._failure

        stats = self._aggregator.stats
        duration = time.time() - start_time
        logger.info(
            f"Collected {stats.total} contributions across {len(stats.project_stats)} "
            f"projects in {duration:.2f} seconds"
        )
        return stats

    async def _process_chunk(
        self,
        chunk: Chunk,
        total: int,
        progress: Optional[IProgressListener]
    ) -> None:
        try:
            page = await self._fetcher.fetch_chunk(chunk)
            events = self._extractor.extract(page.body)
            if not await self._aggregator.merge(events):
                return

            self._completed += 1
            logger.info(
                f"Merged {len(events)} events for {chunk.start.isoformat()}..{chunk.end.isoformat()} "
                f"({self._completed}/{total})"
            )
            if progress is not None:
                progress.advance(self._completed)
        except Exception as e:
            if self._failure is None:
                self._failure = e
                self._aggregator.freeze()
                logger.warning(f"Chunk {chunk.start.isoformat()}..{chunk.end.isoformat()} failed: {e}")
            raise

    async def _cancel(self, tasks: List[asyncio.Task]) -> None:
        """Cancel unfinished tasks and collect every outcome."""
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def close(self) -> None:
        """Close connections."""
        await self._fetcher.close()
