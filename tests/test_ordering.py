"""Tests for project and item display ordering."""
from contrib_stats.application.ordering import ordered_items, sort_projects
from contrib_stats.domain.models import (
    AggregateStats,
    CommitStats,
    ContributionKind,
    IssueLikeEvent,
    ItemState,
    ProjectStats,
    SortKey,
)


def item(project, number, kind=ContributionKind.ISSUE):
    return IssueLikeEvent(
        kind=kind,
        project=project,
        title=f"#{number}",
        url=f"https://github.com/{project}/issues/{number}",
        state=ItemState.OPEN
    )


def project(name, commits=0, pull_requests=0, issues=0):
    return ProjectStats(
        commits=CommitStats(count=commits, history_url=f"https://github.com/{name}/commits"),
        pull_requests=[item(name, n, ContributionKind.PULL_REQUEST) for n in range(pull_requests)],
        issues=[item(name, n) for n in range(issues)]
    )


def stats_of(**projects):
    return AggregateStats(project_stats=dict(projects))


def test_default_sort_is_by_name():
    """Test plain name order."""
    stats = stats_of(gamma=project("gamma", 1), alpha=project("alpha", 9), beta=project("beta", 5))

    assert sort_projects(stats) == ["alpha", "beta", "gamma"]


def test_sort_by_total_breaks_ties_by_name():
    """Test that equal totals are ordered by project name."""
    stats = stats_of(beta=project("beta", commits=5), alpha=project("alpha", commits=2, issues=3))

    assert sort_projects(stats, SortKey.TOTAL) == ["alpha", "beta"]


def test_sort_by_each_column_ascending():
    """Test ascending order for every numeric key."""
    stats = stats_of(
        a=project("a", commits=3, pull_requests=0, issues=2),
        b=project("b", commits=1, pull_requests=2, issues=0),
        c=project("c", commits=2, pull_requests=1, issues=1),
    )

    assert sort_projects(stats, SortKey.COMMITS) == ["b", "c", "a"]
    assert sort_projects(stats, SortKey.PULL_REQUESTS) == ["a", "c", "b"]
    assert sort_projects(stats, SortKey.ISSUES) == ["b", "c", "a"]
    assert sort_projects(stats, SortKey.TOTAL) == ["b", "c", "a"]


def test_ordered_items_is_independent_of_merge_order():
    """Test that items are re-sorted before display."""
    items = [item("acme/widgets", n) for n in (3, 1, 2)]

    assert ordered_items(items) == ordered_items(list(reversed(items)))
    assert [i.title for i in ordered_items(items)] == ["#1", "#2", "#3"]
