"""Splitting a date range into windows the contributions page can serve."""
from datetime import date, timedelta
from typing import List
from contrib_stats.domain.models import Chunk, ONE_DAY


# GitHub shows at most about a month of activity per contributions request
DAYS_PER_CHUNK = 31


def compute_chunks(start: date, end: date, max_chunk_days: int = DAYS_PER_CHUNK) -> List[Chunk]:
    """Partition ``[start, end]`` into contiguous chunks.

    Each chunk spans ``min(max_chunk_days, remaining days)`` and the next one
    starts the day after it ends, so chunks never overlap or leave gaps. When
    ``start == end`` a single zero-length chunk is returned.

    Args:
        start: First day of the range
        end: Last day of the range, not before ``start``
        max_chunk_days: Upper bound of ``chunk.end - chunk.start`` in days

    Returns:
        Ordered list of chunks, the last one ending on ``end``
    """
    if max_chunk_days < 1:
        raise ValueError(f"max_chunk_days must be at least 1, got {max_chunk_days}")

    chunks: List[Chunk] = []
    chunk_start = start

    while chunk_start <= end:
        chunk_days = min(max_chunk_days, (end - chunk_start).days)
        chunk_end = chunk_start + timedelta(days=chunk_days)
        chunks.append(Chunk(start=chunk_start, end=chunk_end))
        chunk_start = chunk_end + ONE_DAY

    return chunks
