"""
API section classifier.

Finds the level-2/3 headings that introduce API tables, decides which kind of
member they document, and pairs each of them with the table that follows.
"""

import logging
from typing import List, Optional, Tuple
from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)


class SectionClassifier:
    """Classifies headings into props/events/slots/methods sections."""

    # Tested in order, first match wins
    KIND_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
        ("props", ("api", "props", "属性")),
        ("events", ("event", "事件")),
        ("slots", ("slot", "插槽")),
        ("methods", ("method", "方法")),
    )

    HEADING_TAGS = ("h2", "h3")

    @staticmethod
    def classify_heading(text: str) -> Optional[str]:
        """Return the API kind for a heading text, or None if it is not an API heading."""
        lowered = (text or "").lower().strip()
        for kind, keywords in SectionClassifier.KIND_KEYWORDS:
            if any(keyword in lowered for keyword in keywords):
                return kind
        return None

    @staticmethod
    def find_section_table(heading: Tag) -> Optional[Tag]:
        """
        Walk the heading's following siblings up to the next h2/h3.

        Args:
            heading: A classified heading element

        Returns:
            The first ``<table>`` sibling, or None when another heading comes first
        """
        for sibling in heading.find_next_siblings():
            if sibling.name == "table":
                return sibling
            if sibling.name in SectionClassifier.HEADING_TAGS:
                return None
        return None

    @staticmethod
    def find_api_sections(soup: BeautifulSoup) -> List[Tuple[str, Tag, Optional[Tag]]]:
        """
        Collect (kind, heading, table) triples in document order.

        Headings that match no kind are left out; a classified heading without
        a table is kept with ``None`` so callers can see it yielded nothing.
        """
        sections = []
        for heading in soup.find_all(list(SectionClassifier.HEADING_TAGS)):
            heading_text = heading.get_text()
            kind = SectionClassifier.classify_heading(heading_text)
            if kind is None:
                continue
            table = SectionClassifier.find_section_table(heading)
            if table is None:
                logger.debug(f"No table under {kind} heading '{heading_text.strip()}'")
            sections.append((kind, heading, table))
        return sections
