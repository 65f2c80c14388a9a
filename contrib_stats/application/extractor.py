"""Extraction of contribution events from a contributions page."""
import logging
import re
from typing import Callable, List
from urllib.parse import urljoin
from contrib_stats.domain.errors import MarkupParseError
from contrib_stats.domain.markup_interface import IMarkupDocument
from contrib_stats.domain.models import (
    CommitEvent,
    ContributionEvent,
    ContributionKind,
    IssueLikeEvent,
    ItemState,
)


logger = logging.getLogger(__name__)


COMMIT_HEADER_TEXT_RE = re.compile(r"\d+ commits?", re.IGNORECASE)
PULL_REQUEST_HEADER_TEXT_RE = re.compile(r"\d+ pull requests?", re.IGNORECASE)
ISSUES_HEADER_TEXT_RE = re.compile(r"\d+ issues? reported", re.IGNORECASE)

COMMIT_TEXT_RE = re.compile(r"Pushed\s+(\d+)\s+commits?\s+to\s+(.+)")


class ContributionExtractor:
    """Turns the markup of one contributions page into typed events.

    Sections are located by their heading text; only the list directly
    following a matching heading is read, so unrelated lists on the page are
    ignored. An item in a matched section that does not have the expected shape
    aborts extraction with ``MarkupParseError`` instead of being skipped.
    """

    def __init__(self, base_url: str, markup_factory: Callable[[str], IMarkupDocument]):
        """Initialize extractor.

        Args:
            base_url: URL relative pull request and issue links are resolved against
            markup_factory: Builds a queryable document from a page body
        """
        self._base_url = base_url
        self._markup_factory = markup_factory

    def extract(self, body: str) -> List[ContributionEvent]:
        """Extract events from a page body.

        Events are returned commits first, then pull requests, then issues,
        each group in document order.

        Args:
            body: Raw HTML of the contributions page

        Returns:
            List of CommitEvent and IssueLikeEvent instances

        Raises:
            MarkupParseError: When an item in a matched section is malformed
        """
        document = self._markup_factory(body)

        events: List[ContributionEvent] = []
        events.extend(self._extract_commits(document))
        events.extend(self._extract_issue_like(document, PULL_REQUEST_HEADER_TEXT_RE, ContributionKind.PULL_REQUEST))
        events.extend(self._extract_issue_like(document, ISSUES_HEADER_TEXT_RE, ContributionKind.ISSUE))

        logger.debug(f"Extracted {len(events)} events from page")
        return events

    def _section_items(self, document: IMarkupDocument, header_re) -> list:
        items = []
        for heading in document.find_headings(header_re):
            items.extend(document.sibling_list(heading))
        return items

    def _extract_commits(self, document: IMarkupDocument) -> List[CommitEvent]:
        events = []
        for item in self._section_items(document, COMMIT_HEADER_TEXT_RE):
            text = document.item_text(item)
            match = COMMIT_TEXT_RE.search(text)
            if match is None:
                raise MarkupParseError("Unrecognized commit item", text)

            project = match.group(2)
            if not project.strip():
                raise MarkupParseError("Commit item without project name", text)

            events.append(CommitEvent(project=project, count=int(match.group(1))))
        return events

    def _extract_issue_like(
        self,
        document: IMarkupDocument,
        header_re,
        kind: ContributionKind
    ) -> List[IssueLikeEvent]:
        label = "pull request" if kind is ContributionKind.PULL_REQUEST else "issue"
        events = []

        for item in self._section_items(document, header_re):
            fields = document.item_fields(item)
            context = " | ".join(
                value for value in (fields.project, fields.title, fields.href, fields.state) if value
            )

            if not fields.project or not fields.project.strip():
                raise MarkupParseError(f"The {label} item has no project label", context)
            if not fields.href:
                raise MarkupParseError(f"The {label} item has no link", context)
            if not fields.state:
                raise MarkupParseError(f"The {label} item has no state label", context)

            try:
                state = ItemState(fields.state.strip().lower())
            except ValueError:
                raise MarkupParseError(f"Unknown {label} state", fields.state) from None

            events.append(
                IssueLikeEvent(
                    kind=kind,
                    project=fields.project,
                    title=(fields.title or "").strip(),
                    url=urljoin(self._base_url, fields.href),
                    state=state
                )
            )
        return events
