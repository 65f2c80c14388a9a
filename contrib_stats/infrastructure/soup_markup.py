"""BeautifulSoup implementation of the markup query port."""
from typing import List, Optional, Pattern
from bs4 import BeautifulSoup, Tag
from contrib_stats.domain.markup_interface import IMarkupDocument, ItemFields


HEADER_SELECTOR = "h3.conversation-list-heading"
HEADER_CLASS = "conversation-list-heading"
LIST_CLASS = "simple-conversation-list"
PROJECT_NAME_SELECTOR = "span.cmeta"
TITLE_SELECTOR = "a.title"
STATE_SELECTOR = ".state"


def _clean(text: str) -> str:
    return " ".join(text.split())


def _has_class(tag: Tag, name: str) -> bool:
    return name in (tag.get("class") or [])


class SoupMarkupDocument(IMarkupDocument):
    """Contributions page parsed with BeautifulSoup."""

    def __init__(self, body: str, features: str = "html.parser"):
        self._soup = BeautifulSoup(body, features)

    def find_headings(self, pattern: Pattern) -> List[Tag]:
        return [
            heading
            for heading in self._soup.select(HEADER_SELECTOR)
            if pattern.search(heading.get_text(" ", strip=True))
        ]

    def sibling_list(self, heading: Tag) -> List[Tag]:
        for sibling in heading.find_next_siblings():
            if sibling.name == "h3" and _has_class(sibling, HEADER_CLASS):
                break
            if _has_class(sibling, LIST_CLASS):
                return sibling.find_all("li")
        return []

    def item_text(self, item: Tag) -> str:
        # Raw anchor text, whitespace included
        anchors = item.find_all("a")
        if not anchors:
            return item.get_text()
        return "".join(anchor.get_text() for anchor in anchors)

    def item_fields(self, item: Tag) -> ItemFields:
        project = self._text_of(item.select_one(PROJECT_NAME_SELECTOR))
        state = self._text_of(item.select_one(STATE_SELECTOR))

        link = item.select_one(TITLE_SELECTOR) or item.find("a", href=True)
        href = link.get("href") if link is not None else None
        title = None
        if link is not None:
            # The project label may sit inside the title anchor
            parts = [
                text for text in link.find_all(string=True)
                if text.find_parent("span", class_="cmeta") is None
            ]
            title = _clean(" ".join(parts))

        return ItemFields(project=project, title=title, href=href, state=state)

    @staticmethod
    def _text_of(tag: Optional[Tag]) -> Optional[str]:
        if tag is None:
            return None
        return _clean(tag.get_text(" "))
