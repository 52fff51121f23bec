"""
Extraction module for turning component documentation pages into API records.

Pipeline:
- SectionClassifier finds props/events/slots/methods headings
- TableExtractor turns the following table into a raw grid
- RowMapper maps grid rows onto ApiItem records via the bilingual normalizer
"""

from .normalizer import (
    normalize_header,
    parse_enum_values,
    parse_required_flag,
    normalize_tag,
    split_values
)
from .table_extractor import TableExtractor
from .section_classifier import SectionClassifier
from .row_mapper import RowMapper
from .extractor import ApiExtractor
from .data_models import (
    Page,
    Component,
    ApiItem,
    TableData,
    ComponentApi,
    SearchResult,
    PropLookup,
    IndexReport,
    VersionReport,
    KNOWN_VERSIONS,
    API_KINDS
)

__all__ = [
    "normalize_header",
    "parse_enum_values",
    "parse_required_flag",
    "normalize_tag",
    "split_values",
    "TableExtractor",
    "SectionClassifier",
    "RowMapper",
    "ApiExtractor",
    "Page",
    "Component",
    "ApiItem",
    "TableData",
    "ComponentApi",
    "SearchResult",
    "PropLookup",
    "IndexReport",
    "VersionReport",
    "KNOWN_VERSIONS",
    "API_KINDS"
]
