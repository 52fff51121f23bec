"""
Custom exceptions for the antdv documentation indexer.

Error severity:
  - FetchError / ComponentTagError → per-page failures: the indexer logs them
    and moves on to the next component.
  - ComponentNotFoundError / InvalidVersionError → lookup failures: the query
    layer turns them into user-facing error text.
  - StoreError → fatal: the store could not be created or opened.
"""

from typing import Optional


class AntdvDocsError(Exception):
    """Base exception for all indexer and query errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FetchError(AntdvDocsError):
    """Raised when a documentation page cannot be fetched."""

    def __init__(self, message: str, url: str, status: Optional[int] = None):
        super().__init__(message, {"url": url, "status": status})
        self.url = url
        self.status = status


class ComponentTagError(AntdvDocsError):
    """Raised when neither the URL nor the page yields a component tag."""

    def __init__(self, url: str):
        super().__init__(f"Could not extract component tag from {url}", {"url": url})
        self.url = url


class ComponentNotFoundError(AntdvDocsError):
    """Raised when a component lookup matches neither a tag nor an alias."""

    def __init__(self, component: str, version: str):
        super().__init__(
            f"Component not found: {component} ({version})",
            {"component": component, "version": version}
        )
        self.component = component
        self.version = version


class InvalidVersionError(AntdvDocsError):
    """Raised for a version token outside the known documentation sets."""

    def __init__(self, version: str, allowed):
        allowed = list(allowed)
        super().__init__(
            f"Invalid version: {version}. Use {', '.join(allowed)}",
            {"version": version, "allowed": allowed}
        )
        self.version = version


class StoreError(AntdvDocsError):
    """Raised when the persistent store cannot be created or opened."""
    pass
