"""
API extraction orchestrator.

Coordinates the extraction pipeline for one page:
section classifier -> table extractor -> row mapper.
"""

import logging
from typing import List, Union
from bs4 import BeautifulSoup

from .section_classifier import SectionClassifier
from .table_extractor import TableExtractor
from .row_mapper import RowMapper
from .data_models import ApiItem


logger = logging.getLogger(__name__)


class ApiExtractor:
    """Extracts every API item documented on a component page."""

    @staticmethod
    def extract_api_sections(document: Union[str, BeautifulSoup],
                             version: str,
                             component_tag: str,
                             source_url: str) -> List[ApiItem]:
        """
        Extract props, events, slots and methods from a documentation page.

        Args:
            document: Raw HTML or an already parsed document
            version: Documentation set of the page
            component_tag: Canonical tag of the documented component
            source_url: URL of the page

        Returns:
            API items of all sections concatenated in document order
        """
        soup = document if isinstance(document, BeautifulSoup) else BeautifulSoup(document, "html.parser")
        api_items: List[ApiItem] = []

        for kind, heading, table in SectionClassifier.find_api_sections(soup):
            if table is None:
                continue
            table_data = TableExtractor.parse_table(table)
            api_items.extend(RowMapper.to_api_items(
                table_data,
                kind=kind,
                version=version,
                component_tag=component_tag,
                source_url=source_url
            ))

        logger.debug(f"Extracted {len(api_items)} API items for {component_tag} ({version})")
        return api_items
