"""
Indexing pipeline.

Discovery -> fetch -> (skip if unchanged) -> API extraction -> store upserts,
run sequentially per component and per version.
"""

import time
import logging
from datetime import datetime
from typing import Iterable
from bs4 import BeautifulSoup

from antdv_docs.crawler.crawler import DocCrawler
from antdv_docs.exceptions import InvalidVersionError
from antdv_docs.extraction.extractor import ApiExtractor
from antdv_docs.extraction.data_models import (
    Component, Page, IndexReport, VersionReport, KNOWN_VERSIONS
)
from antdv_docs.storage.store import DocStore

logger = logging.getLogger(__name__)


class Indexer:
    """Indexes antdv component documentation into a DocStore."""

    def __init__(self, store: DocStore, crawler: DocCrawler):
        self.store = store
        self.crawler = crawler
        self.report = IndexReport()

    async def index_versions(self, versions: Iterable[str]) -> IndexReport:
        """
        Index several versions one after another.

        A version whose discovery fails is recorded in the report and the
        remaining versions are still indexed.

        Returns:
            The accumulated IndexReport
        """
        for version in versions:
            try:
                await self.index_version(version)
            except InvalidVersionError:
                raise
            except Exception as e:
                logger.error(f"Indexing {version} aborted: {e}")
                version_report = self._version_report(version)
                version_report.aborted = True
                version_report.errors.append({"url": None, "error": str(e)})
        self.report.finished_at = datetime.now()
        return self.report

    async def index_version(self, version: str) -> VersionReport:
        """
        Discover and index every component page of one version.

        Failures of single components are logged and counted; a discovery
        failure propagates to the caller.
        """
        if version not in KNOWN_VERSIONS:
            raise InvalidVersionError(version, KNOWN_VERSIONS)

        logger.info(f"Indexing {version}...")
        version_report = self._version_report(version)

        discovered = await self.crawler.discover_components(version)

        # Deduplicate components by URL
        seen_urls = set()
        components = []
        for component in discovered:
            if component.url in seen_urls:
                logger.debug(f"Skipping duplicate URL: {component.url}")
                continue
            seen_urls.add(component.url)
            components.append(component)

        version_report.discovered = len(components)
        logger.info(f"Found {len(components)} components for {version}")

        for i, component in enumerate(components):
            logger.info(f"Processing component {i+1}/{len(components)}: {component.title}")
            try:
                if await self.index_component(component.url, version):
                    version_report.indexed += 1
                else:
                    version_report.skipped += 1
            except Exception as e:
                logger.error(f"Error indexing {component.url}: {e}")
                version_report.failed += 1
                version_report.errors.append({"url": component.url, "error": str(e)})

        logger.info(
            f"Finished indexing {version}: indexed={version_report.indexed} "
            f"skipped={version_report.skipped} failed={version_report.failed}"
        )
        return version_report

    async def index_component(self, url: str, version: str) -> bool:
        """
        Fetch one component page and store its page, component and API items.

        Returns:
            True when the page was (re)indexed, False when its content was unchanged
        """
        fetched = await self.crawler.fetch_page(url)

        if self.store.get_page_hash(url) == fetched.sha256:
            logger.info(f"Skipped (unchanged): {url}")
            return False

        soup = BeautifulSoup(fetched.html, "html.parser")
        component_tag = self.crawler.extract_component_tag(url, soup)
        title = self.crawler.extract_title(soup)
        text = self.crawler.extract_text(fetched.html)

        prefix = self.crawler.config.tag_prefix
        self.store.upsert_component(Component(
            version=version,
            tag=component_tag,
            title=title,
            doc_url=url,
            aliases=[title, component_tag.replace(prefix, "", 1)]
        ))

        api_items = ApiExtractor.extract_api_sections(soup, version, component_tag, url)
        self.store.replace_api_items(version, component_tag, api_items)

        # A stored page hash marks the component as fully indexed
        self.store.upsert_page(Page(
            url=url,
            version=version,
            title=title,
            html=fetched.html,
            text=text,
            fetched_at=int(time.time() * 1000),
            sha256=fetched.sha256
        ))

        logger.info(f"Indexed: {component_tag} ({len(api_items)} API items)")
        return True

    def _version_report(self, version: str) -> VersionReport:
        for version_report in self.report.versions:
            if version_report.version == version:
                return version_report
        version_report = VersionReport(version=version)
        self.report.versions.append(version_report)
        return version_report
