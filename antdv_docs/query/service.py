"""
Query service over the indexed documentation.

Implements the four lookup operations exposed to clients: search,
list_components, get_component_api and find_prop.
"""

import logging
from typing import List, Optional

from antdv_docs.exceptions import ComponentNotFoundError, InvalidVersionError
from antdv_docs.extraction.data_models import (
    Component, ComponentApi, PropLookup, SearchResult, KNOWN_VERSIONS
)
from antdv_docs.extraction.normalizer import normalize_tag
from antdv_docs.storage.store import DocStore

logger = logging.getLogger(__name__)

SEARCH_VERSIONS = KNOWN_VERSIONS + ("all",)
MAX_SUGGESTIONS = 5


class QueryService:
    """Read-side operations on a DocStore."""

    def __init__(self, store: DocStore):
        self.store = store

    @staticmethod
    def _check_version(version: str, allowed=KNOWN_VERSIONS) -> None:
        if version not in allowed:
            raise InvalidVersionError(version, allowed)

    def search(self, query: str, version: str = "all", limit: int = 10) -> List[SearchResult]:
        """
        Full-text search over pages and API items.

        Args:
            query: Free-text query
            version: v3, v4 or all
            limit: Maximum number of merged results

        Returns:
            Page and API hits merged by relevance
        """
        self._check_version(version, SEARCH_VERSIONS)
        # SQLite reads a negative LIMIT as unlimited
        limit = max(limit, 0)
        version_filter = None if version == "all" else version

        hits = self.store.search_pages(query, version_filter, limit)
        hits += self.store.search_api_items(query, version_filter, limit)
        # bm25 scores are negative, lower is better
        hits.sort(key=lambda hit: hit[0])

        results = [result for _, result in hits[:limit]]
        logger.debug(f"search '{query}' ({version}) -> {len(results)} results")
        return results

    def list_components(self, version: str) -> List[Component]:
        self._check_version(version)
        return self.store.list_components(version)

    def resolve_component(self, component: str, version: str) -> Optional[Component]:
        """Find a component by normalized tag, then by case-insensitive alias."""
        found = self.store.get_component(version, normalize_tag(component))
        if found is not None:
            return found

        wanted = component.lower().strip()
        for candidate in self.store.list_components(version):
            if any(alias.lower() == wanted for alias in candidate.aliases):
                return candidate
        return None

    def get_component_api(self, component: str, version: str) -> ComponentApi:
        """
        Structured API of a component grouped by kind.

        Raises:
            ComponentNotFoundError: when neither tag nor alias matches
        """
        self._check_version(version)
        found = self.resolve_component(component, version)
        if found is None:
            raise ComponentNotFoundError(component, version)

        api_items = self.store.get_api_items(version, found.tag)
        return ComponentApi(
            component=found,
            props=[item for item in api_items if item.kind == "props"],
            events=[item for item in api_items if item.kind == "events"],
            slots=[item for item in api_items if item.kind == "slots"],
            methods=[item for item in api_items if item.kind == "methods"]
        )

    def find_prop(self, component: str, prop: str, version: str) -> PropLookup:
        """Exact (version, tag, name) lookup with substring suggestions on a miss."""
        self._check_version(version)
        found = self.resolve_component(component, version)
        tag = found.tag if found is not None else normalize_tag(component)

        item = self.store.find_api_item(version, tag, prop)
        if item is not None:
            return PropLookup(found=True, item=item)

        suggestions = self.store.find_similar_api_items(version, tag, prop, MAX_SUGGESTIONS)
        return PropLookup(found=False, suggestions=suggestions)
