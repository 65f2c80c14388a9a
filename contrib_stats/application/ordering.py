"""Display ordering of projects and their items."""
from typing import Callable, Dict, Iterable, List
from contrib_stats.domain.models import AggregateStats, IssueLikeEvent, ProjectStats, SortKey


_SORT_VALUES: Dict[SortKey, Callable[[ProjectStats], int]] = {
    SortKey.COMMITS: lambda stats: stats.commits.count,
    SortKey.PULL_REQUESTS: lambda stats: len(stats.pull_requests),
    SortKey.ISSUES: lambda stats: len(stats.issues),
    SortKey.TOTAL: lambda stats: stats.total,
}


def sort_projects(stats: AggregateStats, key: SortKey = SortKey.PROJECT) -> List[str]:
    """Return project names in ascending order of ``key``, ties by name."""
    names = sorted(stats.project_stats)
    if key is SortKey.PROJECT:
        return names

    value = _SORT_VALUES[key]
    return sorted(names, key=lambda name: value(stats.project_stats[name]))


def ordered_items(items: Iterable[IssueLikeEvent]) -> List[IssueLikeEvent]:
    """Return pull requests or issues in a stable display order.

    Chunks finish in any order, so the merged list order is not meaningful.
    """
    return sorted(items, key=lambda item: (item.url, item.title))
