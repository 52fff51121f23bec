"""
MCP server exposing the query service over stdio.

Every tool returns JSON text; lookup and validation failures are returned as
``Error: <message>`` text instead of raising.
"""

import json
import logging
from typing import Callable, Optional
from mcp.server.fastmcp import FastMCP

from antdv_docs.exceptions import AntdvDocsError
from antdv_docs.query.service import QueryService

logger = logging.getLogger(__name__)

SERVER_NAME = "antdv-mcp-server"


def _to_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


class AntdvMcpServer:
    """Tool handlers for the antdv documentation MCP server."""

    def __init__(self, service: QueryService):
        self.service = service
        self.tools = {
            "adv_search_docs": (
                self.search_docs,
                "Search Ant Design Vue documentation with full-text search. "
                "Returns matching pages and API items with snippets."
            ),
            "adv_list_components": (
                self.list_components,
                "List all available components for a specific version (v3 or v4)."
            ),
            "adv_get_component_api": (
                self.get_component_api,
                "Get structured API documentation for a component, including props, "
                "events, slots, and methods. Component may be 'a-button', 'button' or 'Button'."
            ),
            "adv_find_prop": (
                self.find_prop,
                "Find a specific prop or API item for a component with alternatives."
            ),
        }

    def _call(self, handler: Callable[[], object]) -> str:
        try:
            return _to_json(handler())
        except AntdvDocsError as e:
            logger.warning(f"Tool call failed: {e.message}")
            return f"Error: {e.message}"

    def search_docs(self, query: str, version: str = "all", limit: int = 10) -> str:
        return self._call(lambda: [
            r.model_dump() for r in self.service.search(query, version, limit)
        ])

    def list_components(self, version: str) -> str:
        return self._call(lambda: [
            c.model_dump(include={"tag", "title", "doc_url"})
            for c in self.service.list_components(version)
        ])

    def get_component_api(self, component: str, version: str) -> str:
        return self._call(lambda: self.service.get_component_api(component, version).model_dump())

    def find_prop(self, component: str, prop: str, version: str) -> str:
        return self._call(lambda: self.service.find_prop(component, prop, version).model_dump())

    def build(self, name: Optional[str] = None) -> FastMCP:
        """Create a FastMCP app with every tool registered."""
        app = FastMCP(name or SERVER_NAME)
        for tool_name, (handler, description) in self.tools.items():
            app.add_tool(handler, name=tool_name, description=description)
        return app

    def run(self) -> None:
        logger.info("Ant Design Vue MCP Server running on stdio")
        self.build().run()
