"""
Tests for the indexing pipeline against a temporary store and a fake crawler.
"""

import io
import os
import json
import sqlite3
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from antdv_docs.crawler.component import ComponentLink
from antdv_docs.crawler.crawler import DocCrawler, FetchedPage
from antdv_docs.exceptions import ComponentTagError, FetchError, InvalidVersionError, StoreError
from antdv_docs.extraction.data_models import IndexReport, VersionReport
from antdv_docs.indexer import Indexer
from antdv_docs.storage.store import DocStore
from main import main, save_report
from sample_pages import (
    AFFIX_PAGE, AFFIX_URL, BUTTON_PAGE, BUTTON_PAGE_CHANGED, BUTTON_URL, NO_TAG_PAGE, NO_TAG_URL
)

BROKEN_URL = "https://antdv.com/components/broken-cn"


class FakeCrawler(DocCrawler):
    """Serves pages from a dict instead of a browser."""

    def __init__(self, pages, links=None):
        super().__init__(delay_ms=0)
        self.pages = dict(pages)
        self.links = links or {}
        self.fetched = []

    async def fetch_page(self, url):
        self.fetched.append(url)
        html = self.pages.get(url)
        if html is None:
            raise FetchError(f"HTTP 404: {url}", url, 404)
        return FetchedPage(url=url, html=html, sha256=self.content_hash(html))

    async def discover_components(self, version):
        return self.links.get(version, [])


class StoreTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = DocStore(os.path.join(self.tmp.name, "nested", "antdv.sqlite"))

    def tearDown(self):
        self.store.close()
        self.tmp.cleanup()

    def count(self, table):
        return self.store.conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


class TestIndexComponent(StoreTestCase):
    async def test_index_component_writes_page_component_and_items(self):
        indexer = Indexer(self.store, FakeCrawler({BUTTON_URL: BUTTON_PAGE}))
        self.assertTrue(await indexer.index_component(BUTTON_URL, "v4"))

        component = self.store.get_component("v4", "a-button")
        self.assertEqual(component.title, "Button 按钮")
        self.assertEqual(component.doc_url, BUTTON_URL)
        self.assertEqual(component.aliases, ["Button 按钮", "button"])

        items = self.store.get_api_items("v4", "a-button")
        self.assertEqual(len(items), 6)
        size = self.store.find_api_item("v4", "a-button", "size")
        self.assertEqual(size.values, ["large", "middle", "small"])
        self.assertEqual(size.default_value, "middle")

        page = self.store.conn.execute("SELECT * FROM pages WHERE url = ?", (BUTTON_URL,)).fetchone()
        self.assertEqual(page["version"], "v4")
        self.assertNotIn("secret", page["text"])

    async def test_reindex_replaces_items(self):
        crawler = FakeCrawler({BUTTON_URL: BUTTON_PAGE})
        indexer = Indexer(self.store, crawler)
        await indexer.index_component(BUTTON_URL, "v4")

        crawler.pages[BUTTON_URL] = BUTTON_PAGE_CHANGED
        self.assertTrue(await indexer.index_component(BUTTON_URL, "v4"))

        items = self.store.get_api_items("v4", "a-button")
        self.assertEqual([(i.kind, i.name) for i in items], [("props", "shape")])
        self.assertEqual(self.count("pages"), 1)
        self.assertEqual(self.count("components"), 1)

    async def test_failed_item_write_is_retried_on_next_run(self):
        indexer = Indexer(self.store, FakeCrawler({BUTTON_URL: BUTTON_PAGE}))
        replace_api_items = self.store.replace_api_items
        self.store.replace_api_items = MagicMock(side_effect=sqlite3.OperationalError("database is locked"))

        with self.assertRaises(sqlite3.OperationalError):
            await indexer.index_component(BUTTON_URL, "v4")
        self.assertIsNone(self.store.get_page_hash(BUTTON_URL))

        self.store.replace_api_items = replace_api_items
        self.assertTrue(await indexer.index_component(BUTTON_URL, "v4"))
        self.assertEqual(len(self.store.get_api_items("v4", "a-button")), 6)
        self.assertIsNotNone(self.store.get_page_hash(BUTTON_URL))

    async def test_unchanged_page_performs_no_writes(self):
        crawler = FakeCrawler({BUTTON_URL: BUTTON_PAGE})
        indexer = Indexer(self.store, crawler)
        await indexer.index_component(BUTTON_URL, "v4")

        self.store.upsert_page = MagicMock()
        self.store.upsert_component = MagicMock()
        self.store.replace_api_items = MagicMock()

        self.assertFalse(await indexer.index_component(BUTTON_URL, "v4"))
        self.store.upsert_page.assert_not_called()
        self.store.upsert_component.assert_not_called()
        self.store.replace_api_items.assert_not_called()

    async def test_versions_are_independent(self):
        indexer = Indexer(self.store, FakeCrawler({BUTTON_URL: BUTTON_PAGE}))
        await indexer.index_component(BUTTON_URL, "v4")
        self.assertEqual(self.store.get_api_items("v3", "a-button"), [])

    async def test_missing_tag_fails_without_writes(self):
        indexer = Indexer(self.store, FakeCrawler({NO_TAG_URL: NO_TAG_PAGE}))
        with self.assertRaises(ComponentTagError):
            await indexer.index_component(NO_TAG_URL, "v4")
        self.assertEqual(self.count("pages"), 0)


class TestIndexVersion(StoreTestCase):
    def links(self, *urls):
        return [ComponentLink(url=url, title=url.rsplit("/", 1)[-1]) for url in urls]

    async def test_component_failures_are_isolated(self):
        crawler = FakeCrawler(
            {BUTTON_URL: BUTTON_PAGE, AFFIX_URL: AFFIX_PAGE, NO_TAG_URL: NO_TAG_PAGE},
            links={"v4": self.links(BROKEN_URL, BUTTON_URL, NO_TAG_URL, AFFIX_URL, BUTTON_URL)}
        )
        report = await Indexer(self.store, crawler).index_version("v4")

        self.assertEqual(report.discovered, 4)
        self.assertEqual(report.indexed, 2)
        self.assertEqual(report.failed, 2)
        self.assertEqual(sorted(e["url"] for e in report.errors), sorted([BROKEN_URL, NO_TAG_URL]))
        self.assertEqual([c.tag for c in self.store.list_components("v4")], ["a-affix", "a-button"])
        # Duplicate discovery entries are fetched once
        self.assertEqual(crawler.fetched.count(BUTTON_URL), 1)

    async def test_second_run_skips_unchanged(self):
        crawler = FakeCrawler({BUTTON_URL: BUTTON_PAGE}, links={"v4": self.links(BUTTON_URL)})
        await Indexer(self.store, crawler).index_version("v4")
        report = await Indexer(self.store, crawler).index_version("v4")
        self.assertEqual((report.indexed, report.skipped), (0, 1))

    async def test_invalid_version(self):
        with self.assertRaises(InvalidVersionError):
            await Indexer(self.store, FakeCrawler({})).index_version("v5")

    async def test_discovery_failure_aborts_only_that_version(self):
        class PartialCrawler(FakeCrawler):
            async def discover_components(self, version):
                if version == "v3":
                    raise FetchError("HTTP 503: overview", "overview", 503)
                return await super().discover_components(version)

        crawler = PartialCrawler({BUTTON_URL: BUTTON_PAGE}, links={"v4": self.links(BUTTON_URL)})
        report = await Indexer(self.store, crawler).index_versions(["v3", "v4"])

        v3, v4 = report.versions
        self.assertTrue(v3.aborted)
        self.assertFalse(v4.aborted)
        self.assertEqual(v4.indexed, 1)
        self.assertIsNotNone(report.finished_at)


class TestCli(unittest.IsolatedAsyncioTestCase):
    def test_invalid_version_exits_nonzero(self):
        with patch("sys.stderr", new_callable=io.StringIO) as stderr:
            self.assertEqual(main(["index", "v5"]), 1)
        self.assertIn("Invalid version", stderr.getvalue())

    async def test_summary_written_as_json(self):
        report = IndexReport(versions=[VersionReport(version="v4", discovered=2, indexed=1, failed=1)])
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "summary.json")
            await save_report(report, path)
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        self.assertEqual(data["versions"][0]["indexed"], 1)
        self.assertFalse(data["versions"][0]["aborted"])


class TestStoreInit(unittest.TestCase):
    def test_read_only_missing_file_is_fatal(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(StoreError):
                DocStore(os.path.join(tmp, "missing.sqlite"), read_only=True)


if __name__ == "__main__":
    unittest.main()
