"""Domain models representing contribution activity."""
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Dict, List, Union

from contrib_stats.domain.errors import InputError


class ContributionKind(Enum):
    """Kind of an issue-like contribution."""
    PULL_REQUEST = "pull_request"
    ISSUE = "issue"


class ItemState(Enum):
    """State label shown next to a pull request or issue."""
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


class SortKey(Enum):
    """Column used to order projects in reports."""
    PROJECT = "project"
    COMMITS = "commits"
    PULL_REQUESTS = "pr"
    ISSUES = "issues"
    TOTAL = "total"


@dataclass(frozen=True)
class TimeRange:
    """Inclusive range of calendar dates."""
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise InputError(
                f"Start date {self.start.isoformat()} is after end date {self.end.isoformat()}."
            )

    @classmethod
    def last_year(cls, today: date) -> 'TimeRange':
        """Returns the range from one year before ``today`` through ``today``."""
        return cls(start=one_year_before(today), end=today)


@dataclass(frozen=True)
class Chunk:
    """A bounded sub-range requested from the contributions page in one go."""
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days


@dataclass(frozen=True)
class CommitEvent:
    """A batch of commits pushed to one project."""
    project: str
    count: int


@dataclass(frozen=True)
class IssueLikeEvent:
    """A single pull request or issue."""
    kind: ContributionKind
    project: str
    title: str
    url: str
    state: ItemState

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "title": self.title,
            "url": self.url,
            "state": self.state.value,
        }


ContributionEvent = Union[CommitEvent, IssueLikeEvent]


@dataclass(frozen=True)
class Page:
    """Raw result of fetching one URL."""
    url: str
    status: int
    body: str


@dataclass
class CommitStats:
    count: int
    history_url: str


@dataclass
class ProjectStats:
    """Per-project accumulator of commit, pull request and issue activity."""
    commits: CommitStats
    pull_requests: List[IssueLikeEvent] = field(default_factory=list)
    issues: List[IssueLikeEvent] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.commits.count + len(self.pull_requests) + len(self.issues)

    def to_dict(self) -> dict:
        return {
            "commits": {
                "count": self.commits.count,
                "history_url": self.commits.history_url,
            },
            "pull_requests": [item.to_dict() for item in self.pull_requests],
            "issues": [item.to_dict() for item in self.issues],
        }


@dataclass
class AggregateStats:
    """Global totals plus the statistics of every project seen.

    Only the aggregator mutates an instance; reporters treat it as read-only.
    """
    commits_total: int = 0
    pull_requests_total: int = 0
    issues_total: int = 0
    project_stats: Dict[str, ProjectStats] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.commits_total + self.pull_requests_total + self.issues_total

    def to_dict(self) -> dict:
        return {
            "commits_total": self.commits_total,
            "pull_requests_total": self.pull_requests_total,
            "issues_total": self.issues_total,
            "project_stats": {
                name: stats.to_dict() for name, stats in self.project_stats.items()
            },
        }


def one_year_before(day: date) -> date:
    """Returns the same calendar day one year earlier (Feb 29 maps to Feb 28)."""
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return day.replace(year=day.year - 1, day=day.day - 1)


ONE_DAY = timedelta(days=1)
