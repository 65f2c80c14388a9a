"""Markup query interface (port) used by the extractor.

Keeps the extraction rules independent of the HTML library that walks the page.
Heading, list and item handles are opaque to callers.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Pattern


@dataclass(frozen=True)
class ItemFields:
    """Labelled parts of a pull request or issue list item."""
    project: Optional[str]
    title: Optional[str]
    href: Optional[str]
    state: Optional[str]


class IMarkupDocument(ABC):
    """Abstract read-only view of one contributions page."""

    @abstractmethod
    def find_headings(self, pattern: Pattern) -> List[Any]:
        """Return section headings whose text matches ``pattern``, in document order."""
        pass

    @abstractmethod
    def sibling_list(self, heading: Any) -> List[Any]:
        """Return the items of the list that follows ``heading``.

        Only the first list container after the heading and before the next
        heading is considered; an empty list is returned when there is none.
        """
        pass

    @abstractmethod
    def item_text(self, item: Any) -> str:
        """Return the concatenated, untrimmed link text of a commit list item."""
        pass

    @abstractmethod
    def item_fields(self, item: Any) -> ItemFields:
        """Return the labelled fields of a pull request or issue list item."""
        pass
