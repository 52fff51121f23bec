"""
Table extractor for API documentation tables.

Converts a ``<table>`` node into a raw header/row grid without interpreting
the columns; field mapping happens in the row mapper.
"""

import logging
from typing import List
from bs4 import Tag
from .data_models import TableData

logger = logging.getLogger(__name__)


class TableExtractor:
    """Turns HTML tables into TableData grids."""

    @staticmethod
    def parse_table(table: Tag) -> TableData:
        """
        Extract headers and data rows from a table node.

        Headers come from the ``thead`` row group when there is one, otherwise
        from the first row, which is then not treated as data. Rows made up
        only of ``th`` cells are skipped.

        Args:
            table: Parsed ``<table>`` element

        Returns:
            TableData with trimmed cell texts, rows possibly ragged
        """
        rows = TableExtractor._own_rows(table)
        headers: List[str] = []

        thead = table.find("thead", recursive=False)
        if thead is not None:
            for tr in thead.find_all("tr"):
                headers.extend(TableExtractor._cell_text(c) for c in tr.find_all(["th", "td"], recursive=False))
            rows = [tr for tr in rows if tr.find_parent("thead") is None]

        if not headers and rows:
            headers = [TableExtractor._cell_text(c) for c in rows[0].find_all(["th", "td"], recursive=False)]
            rows = rows[1:]

        data_rows: List[List[str]] = []
        for tr in rows:
            cells = tr.find_all(["th", "td"], recursive=False)
            if not cells:
                continue
            if all(c.name == "th" for c in cells):
                # Stray header row in the body
                continue
            data_rows.append([TableExtractor._cell_text(c) for c in cells])

        logger.debug(f"Parsed table with {len(headers)} headers and {len(data_rows)} rows")
        return TableData(headers=headers, rows=data_rows)

    @staticmethod
    def _own_rows(table: Tag) -> List[Tag]:
        """Rows of this table, excluding rows of nested tables."""
        return [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]

    @staticmethod
    def _cell_text(cell: Tag) -> str:
        return cell.get_text().strip()
