"""
Data models for the extraction module.

Defines the records produced by one indexing pass (pages, components, API items),
the transient table grid, and the shapes returned by the query service.
"""

from typing import List, Dict, Any, Optional, Literal
from datetime import datetime
from pydantic import BaseModel, Field


Version = Literal["v3", "v4"]
ApiKind = Literal["props", "events", "slots", "methods"]

KNOWN_VERSIONS = ("v3", "v4")
API_KINDS = ("props", "events", "slots", "methods")


class Page(BaseModel):
    """One fetched documentation page."""
    url: str
    version: Version
    title: str
    html: str
    text: str
    fetched_at: int  # epoch milliseconds
    sha256: str


class Component(BaseModel):
    """A documented component, unique per (version, tag)."""
    version: Version
    tag: str
    title: str
    doc_url: str
    aliases: List[str] = Field(default_factory=list)


class ApiItem(BaseModel):
    """One documented member (prop, event, slot or method) of a component."""
    version: Version
    component_tag: str
    kind: ApiKind
    name: str
    type: Optional[str] = None
    required: bool = False
    default_value: Optional[str] = None
    description: Optional[str] = None
    values: Optional[List[str]] = None
    since: Optional[str] = None
    deprecated: Optional[str] = None
    source_url: str


class TableData(BaseModel):
    """Raw header/row grid of an HTML table. Rows may be ragged."""
    headers: List[str] = Field(default_factory=list)
    rows: List[List[str]] = Field(default_factory=list)


class ComponentApi(BaseModel):
    """Structured API of one component grouped by kind."""
    component: Component
    props: List[ApiItem] = Field(default_factory=list)
    events: List[ApiItem] = Field(default_factory=list)
    slots: List[ApiItem] = Field(default_factory=list)
    methods: List[ApiItem] = Field(default_factory=list)


class SearchResult(BaseModel):
    """A ranked full-text hit on a page or an API item."""
    type: Literal["page", "api"]
    title: str
    snippet: str
    url: str
    version: Version


class PropLookup(BaseModel):
    """Outcome of a prop lookup: the exact item or a few suggestions."""
    found: bool
    item: Optional[ApiItem] = None
    suggestions: List[ApiItem] = Field(default_factory=list)


class VersionReport(BaseModel):
    """Counters for one indexed version."""
    version: Version
    discovered: int = 0
    indexed: int = 0
    skipped: int = 0
    failed: int = 0
    aborted: bool = False
    errors: List[Dict[str, Any]] = Field(default_factory=list)


class IndexReport(BaseModel):
    """Summary of an indexing run."""
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    versions: List[VersionReport] = Field(default_factory=list)
