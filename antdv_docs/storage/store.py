"""
SQLite store for pages, components and API items.

Full-text search uses FTS5 external-content tables kept in sync by triggers.
"""

import json
import sqlite3
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from antdv_docs.exceptions import StoreError
from antdv_docs.extraction.data_models import ApiItem, Component, Page, SearchResult

logger = logging.getLogger(__name__)

SNIPPET_TOKENS = 32

SCHEMA = """
CREATE TABLE IF NOT EXISTS pages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    url TEXT NOT NULL UNIQUE,
    version TEXT NOT NULL,
    title TEXT NOT NULL,
    html TEXT NOT NULL,
    text TEXT NOT NULL,
    fetched_at INTEGER NOT NULL,
    sha256 TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_pages_version ON pages(version);
CREATE INDEX IF NOT EXISTS idx_pages_sha256 ON pages(sha256);

CREATE TABLE IF NOT EXISTS components (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    version TEXT NOT NULL,
    tag TEXT NOT NULL,
    title TEXT NOT NULL,
    doc_url TEXT NOT NULL,
    aliases TEXT,
    UNIQUE(version, tag)
);

CREATE INDEX IF NOT EXISTS idx_components_version ON components(version);
CREATE INDEX IF NOT EXISTS idx_components_tag ON components(tag);

CREATE TABLE IF NOT EXISTS api_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    version TEXT NOT NULL,
    component_tag TEXT NOT NULL,
    kind TEXT NOT NULL,
    name TEXT NOT NULL,
    type TEXT,
    required INTEGER DEFAULT 0,
    default_value TEXT,
    description TEXT,
    "values" TEXT,
    since TEXT,
    deprecated TEXT,
    source_url TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_api_items_component ON api_items(version, component_tag);
CREATE INDEX IF NOT EXISTS idx_api_items_kind ON api_items(kind);
CREATE INDEX IF NOT EXISTS idx_api_items_name ON api_items(name);

CREATE VIRTUAL TABLE IF NOT EXISTS pages_fts USING fts5(
    url,
    title,
    text,
    content=pages,
    content_rowid=id
);

CREATE VIRTUAL TABLE IF NOT EXISTS api_items_fts USING fts5(
    component_tag,
    name,
    description,
    content=api_items,
    content_rowid=id
);

CREATE TRIGGER IF NOT EXISTS pages_ai AFTER INSERT ON pages BEGIN
    INSERT INTO pages_fts(rowid, url, title, text)
    VALUES (new.id, new.url, new.title, new.text);
END;

CREATE TRIGGER IF NOT EXISTS pages_ad AFTER DELETE ON pages BEGIN
    INSERT INTO pages_fts(pages_fts, rowid, url, title, text)
    VALUES ('delete', old.id, old.url, old.title, old.text);
END;

CREATE TRIGGER IF NOT EXISTS pages_au AFTER UPDATE ON pages BEGIN
    INSERT INTO pages_fts(pages_fts, rowid, url, title, text)
    VALUES ('delete', old.id, old.url, old.title, old.text);
    INSERT INTO pages_fts(rowid, url, title, text)
    VALUES (new.id, new.url, new.title, new.text);
END;

CREATE TRIGGER IF NOT EXISTS api_items_ai AFTER INSERT ON api_items BEGIN
    INSERT INTO api_items_fts(rowid, component_tag, name, description)
    VALUES (new.id, new.component_tag, new.name, COALESCE(new.description, ''));
END;

CREATE TRIGGER IF NOT EXISTS api_items_ad AFTER DELETE ON api_items BEGIN
    INSERT INTO api_items_fts(api_items_fts, rowid, component_tag, name, description)
    VALUES ('delete', old.id, old.component_tag, old.name, COALESCE(old.description, ''));
END;

CREATE TRIGGER IF NOT EXISTS api_items_au AFTER UPDATE ON api_items BEGIN
    INSERT INTO api_items_fts(api_items_fts, rowid, component_tag, name, description)
    VALUES ('delete', old.id, old.component_tag, old.name, COALESCE(old.description, ''));
    INSERT INTO api_items_fts(rowid, component_tag, name, description)
    VALUES (new.id, new.component_tag, new.name, COALESCE(new.description, ''));
END;
"""

API_ITEM_COLUMNS = (
    'version, component_tag, kind, name, type, required, default_value, '
    'description, "values", since, deprecated, source_url'
)


def build_match_query(query: str) -> str:
    """Quote every whitespace-separated term so user input is never FTS5 syntax."""
    terms = [term.replace('"', '""') for term in (query or "").split()]
    return " ".join(f'"{term}"' for term in terms if term)


class DocStore:
    """Persistent store for one index database.

    The store owns a single sqlite3 connection for its lifetime; callers pass
    it explicitly to the indexer and the query service.
    """

    def __init__(self, db_path: str, read_only: bool = False):
        self.db_path = Path(db_path)
        self.read_only = read_only
        try:
            if read_only:
                uri = self.db_path.resolve().as_uri() + "?mode=ro"
                self.conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
            else:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self.conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
                self.conn.execute("PRAGMA journal_mode = WAL")
                self.conn.executescript(SCHEMA)
                self.conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StoreError(f"Cannot open store at {self.db_path}: {e}", {"path": str(self.db_path)}) from e

        self.conn.row_factory = sqlite3.Row
        logger.debug(f"Opened store {self.db_path} (read_only={read_only})")

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "DocStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_page_hash(self, url: str) -> Optional[str]:
        row = self.conn.execute("SELECT sha256 FROM pages WHERE url = ?", (url,)).fetchone()
        return row["sha256"] if row else None

    # Writes

    def upsert_page(self, page: Page) -> None:
        with self.conn:
            self.conn.execute(
                """INSERT INTO pages (url, version, title, html, text, fetched_at, sha256)
                   VALUES (?, ?, ?, ?, ?, ?, ?)
                   ON CONFLICT(url) DO UPDATE SET
                       version = excluded.version,
                       title = excluded.title,
                       html = excluded.html,
                       text = excluded.text,
                       fetched_at = excluded.fetched_at,
                       sha256 = excluded.sha256""",
                (page.url, page.version, page.title, page.html, page.text, page.fetched_at, page.sha256)
            )

    def upsert_component(self, component: Component) -> None:
        with self.conn:
            self.conn.execute(
                """INSERT INTO components (version, tag, title, doc_url, aliases)
                   VALUES (?, ?, ?, ?, ?)
                   ON CONFLICT(version, tag) DO UPDATE SET
                       title = excluded.title,
                       doc_url = excluded.doc_url,
                       aliases = excluded.aliases""",
                (component.version, component.tag, component.title, component.doc_url,
                 json.dumps(component.aliases, ensure_ascii=False))
            )

    def replace_api_items(self, version: str, component_tag: str, items: List[ApiItem]) -> None:
        """Swap the item set of (version, component_tag) in one transaction."""
        with self.conn:
            self.conn.execute(
                "DELETE FROM api_items WHERE version = ? AND component_tag = ?",
                (version, component_tag)
            )
            self.conn.executemany(
                f"INSERT INTO api_items ({API_ITEM_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                [
                    (
                        item.version,
                        item.component_tag,
                        item.kind,
                        item.name,
                        item.type,
                        1 if item.required else 0,
                        item.default_value,
                        item.description,
                        json.dumps(item.values, ensure_ascii=False) if item.values else None,
                        item.since,
                        item.deprecated,
                        item.source_url,
                    )
                    for item in items
                ]
            )

    # Reads

    def get_component(self, version: str, tag: str) -> Optional[Component]:
        row = self.conn.execute(
            "SELECT * FROM components WHERE version = ? AND tag = ?", (version, tag)
        ).fetchone()
        return self._row_to_component(row) if row else None

    def list_components(self, version: str) -> List[Component]:
        rows = self.conn.execute(
            "SELECT * FROM components WHERE version = ? ORDER BY tag", (version,)
        ).fetchall()
        return [self._row_to_component(row) for row in rows]

    def get_api_items(self, version: str, component_tag: str) -> List[ApiItem]:
        rows = self.conn.execute(
            f"SELECT {API_ITEM_COLUMNS} FROM api_items "
            "WHERE version = ? AND component_tag = ? ORDER BY kind, name, id",
            (version, component_tag)
        ).fetchall()
        return [self._row_to_api_item(row) for row in rows]

    def find_api_item(self, version: str, component_tag: str, name: str) -> Optional[ApiItem]:
        row = self.conn.execute(
            f"SELECT {API_ITEM_COLUMNS} FROM api_items "
            "WHERE version = ? AND component_tag = ? AND name = ? ORDER BY id LIMIT 1",
            (version, component_tag, name)
        ).fetchone()
        return self._row_to_api_item(row) if row else None

    def find_similar_api_items(self, version: str, component_tag: str, fragment: str,
                               limit: int = 5) -> List[ApiItem]:
        pattern = "%" + fragment.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_") + "%"
        rows = self.conn.execute(
            f"SELECT {API_ITEM_COLUMNS} FROM api_items "
            "WHERE version = ? AND component_tag = ? AND name LIKE ? ESCAPE '\\' "
            "ORDER BY id LIMIT ?",
            (version, component_tag, pattern, limit)
        ).fetchall()
        return [self._row_to_api_item(row) for row in rows]

    def search_pages(self, query: str, version: Optional[str] = None,
                     limit: int = 10) -> List[Tuple[float, SearchResult]]:
        """Full-text search over page titles and text, best matches first."""
        match = build_match_query(query)
        if not match:
            return []

        sql = f"""
            SELECT p.url, p.title, p.version,
                   snippet(pages_fts, 2, '<mark>', '</mark>', '...', {SNIPPET_TOKENS}) AS snippet,
                   bm25(pages_fts) AS score
            FROM pages_fts
            JOIN pages p ON pages_fts.rowid = p.id
            WHERE pages_fts MATCH ?
        """
        params: list = [match]
        if version:
            sql += " AND p.version = ?"
            params.append(version)
        sql += " ORDER BY score LIMIT ?"
        params.append(max(limit, 0))

        return [
            (row["score"], SearchResult(
                type="page",
                title=row["title"],
                snippet=row["snippet"] or "",
                url=row["url"],
                version=row["version"]
            ))
            for row in self.conn.execute(sql, params).fetchall()
        ]

    def search_api_items(self, query: str, version: Optional[str] = None,
                         limit: int = 10) -> List[Tuple[float, SearchResult]]:
        """Full-text search over API item tags, names and descriptions."""
        match = build_match_query(query)
        if not match:
            return []

        sql = f"""
            SELECT a.component_tag, a.name, a.description, a.kind, a.source_url, a.version,
                   snippet(api_items_fts, 2, '<mark>', '</mark>', '...', {SNIPPET_TOKENS}) AS snippet,
                   bm25(api_items_fts) AS score
            FROM api_items_fts
            JOIN api_items a ON api_items_fts.rowid = a.id
            WHERE api_items_fts MATCH ?
        """
        params: list = [match]
        if version:
            sql += " AND a.version = ?"
            params.append(version)
        sql += " ORDER BY score LIMIT ?"
        params.append(max(limit, 0))

        return [
            (row["score"], SearchResult(
                type="api",
                title=f"{row['component_tag']}.{row['name']} ({row['kind']})",
                snippet=row["snippet"] or row["description"] or "",
                url=row["source_url"],
                version=row["version"]
            ))
            for row in self.conn.execute(sql, params).fetchall()
        ]

    @staticmethod
    def _row_to_component(row: sqlite3.Row) -> Component:
        return Component(
            version=row["version"],
            tag=row["tag"],
            title=row["title"],
            doc_url=row["doc_url"],
            aliases=json.loads(row["aliases"]) if row["aliases"] else []
        )

    @staticmethod
    def _row_to_api_item(row: sqlite3.Row) -> ApiItem:
        return ApiItem(
            version=row["version"],
            component_tag=row["component_tag"],
            kind=row["kind"],
            name=row["name"],
            type=row["type"],
            required=bool(row["required"]),
            default_value=row["default_value"],
            description=row["description"],
            values=json.loads(row["values"]) if row["values"] else None,
            since=row["since"],
            deprecated=row["deprecated"],
            source_url=row["source_url"]
        )
