"""
Row-to-item mapper.

Maps a raw table grid onto ApiItem records using the canonical header names
produced by the normalizer.
"""

import logging
from typing import Dict, List, Optional
from .data_models import ApiItem, TableData
from .normalizer import normalize_header, parse_enum_values, parse_required_flag, split_values

logger = logging.getLogger(__name__)

NAME_PLACEHOLDER = "-"


class RowMapper:
    """Converts TableData rows into ApiItem records."""

    @staticmethod
    def build_column_map(headers: List[str]) -> Dict[str, int]:
        """Map canonical field -> column index. Later duplicate columns win."""
        column_map: Dict[str, int] = {}
        for index, header in enumerate(headers):
            column_map[normalize_header(header)] = index
        return column_map

    @staticmethod
    def _cell(row: List[str], column_map: Dict[str, int], field: str) -> Optional[str]:
        """Text of the row's cell for ``field``; None when unmapped, out of range or empty."""
        index = column_map.get(field)
        if index is None or index >= len(row):
            return None
        return row[index] or None

    @staticmethod
    def to_api_items(table: TableData,
                     kind: str,
                     version: str,
                     component_tag: str,
                     source_url: str) -> List[ApiItem]:
        """
        Convert every usable row of a table into an ApiItem.

        Args:
            table: Raw header/row grid
            kind: props, events, slots or methods
            version: Documentation set the page belongs to
            component_tag: Canonical tag of the owning component
            source_url: Page the table was found on

        Returns:
            One ApiItem per row with a usable name, in row order
        """
        column_map = RowMapper.build_column_map(table.headers)
        items: List[ApiItem] = []

        for row in table.rows:
            if not row:
                continue

            if "name" in column_map:
                name = RowMapper._cell(row, column_map, "name")
            else:
                name = row[0] or None
            if not name or name == NAME_PLACEHOLDER:
                continue

            type_str = RowMapper._cell(row, column_map, "type")
            values_str = RowMapper._cell(row, column_map, "values")

            if values_str:
                values = split_values(values_str)
            elif "values" not in column_map and type_str:
                values = parse_enum_values(type_str)
            else:
                values = []

            items.append(ApiItem(
                version=version,
                component_tag=component_tag,
                kind=kind,
                name=name,
                type=type_str,
                required=parse_required_flag(RowMapper._cell(row, column_map, "required") or ""),
                default_value=RowMapper._cell(row, column_map, "default"),
                description=RowMapper._cell(row, column_map, "description"),
                values=values or None,
                since=RowMapper._cell(row, column_map, "since"),
                deprecated=RowMapper._cell(row, column_map, "deprecated"),
                source_url=source_url
            ))

        logger.debug(f"Mapped {len(items)} {kind} items from {len(table.rows)} rows")
        return items
