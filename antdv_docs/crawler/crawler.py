import re
import time
import asyncio
import hashlib
import logging
from typing import List, Optional
from urllib.parse import urljoin
from bs4 import BeautifulSoup
from pydantic import BaseModel
from config import config

from antdv_docs.crawler.component import ComponentLink
from antdv_docs.crawler.discovery_config import DiscoveryConfig
from antdv_docs.crawler.page_handler import PageHandler
from antdv_docs.exceptions import ComponentTagError, FetchError

logger = logging.getLogger(__name__)


class FetchedPage(BaseModel):
    """Markup of a fetched page and its content hash."""
    url: str
    html: str
    sha256: str


class DocCrawler:
    """Discovers and fetches antdv component documentation pages.

    Fetches are serialized: each one waits until ``delay_ms`` have passed since
    the previous fetch finished.
    """

    def __init__(self,
                 page_handler: Optional[PageHandler] = None,
                 discovery_config: Optional[DiscoveryConfig] = None,
                 delay_ms: Optional[int] = None,
                 user_agent: Optional[str] = None,
                 headless: Optional[bool] = None):
        self.page_handler = page_handler or PageHandler()
        self.config = discovery_config or DiscoveryConfig()
        self.delay_ms = config.FETCH_DELAY_MS if delay_ms is None else delay_ms
        self.user_agent = user_agent or config.USER_AGENT
        self.headless = config.HEADLESS if headless is None else headless
        self._last_fetch_end: Optional[float] = None
        self._playwright = None
        self._browser = None
        self._page = None

    async def __aenter__(self) -> "DocCrawler":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Launch the browser used for all fetches."""
        from playwright.async_api import async_playwright

        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            context = await self._browser.new_context(user_agent=self.user_agent)
            self._page = await context.new_page()
        except Exception:
            await self.close()
            raise
        logger.info("Browser started")

    async def close(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        self._page = None

    async def _delay(self) -> None:
        if self._last_fetch_end is None:
            return
        elapsed_ms = (time.monotonic() - self._last_fetch_end) * 1000
        if elapsed_ms < self.delay_ms:
            await asyncio.sleep((self.delay_ms - elapsed_ms) / 1000)

    async def fetch_page(self, url: str) -> FetchedPage:
        """
        Fetches a page and hashes its markup.

        :param url: Absolute page URL
        :return: FetchedPage with html and sha256 hex digest
        :raises FetchError: when the page cannot be loaded
        """
        if self._page is None:
            raise FetchError("Crawler not started", url)

        await self._delay()
        logger.info(f"Fetching: {url}")
        try:
            await self.page_handler.navigate(self._page, url)
            html = await self.page_handler.extract_html(self._page)
        finally:
            self._last_fetch_end = time.monotonic()

        return FetchedPage(url=url, html=html, sha256=self.content_hash(html))

    async def discover_components(self, version: str) -> List[ComponentLink]:
        """
        Lists component pages linked from the version's overview page.

        :param version: Documentation version (v3 or v4)
        :return: Unique component links in page order
        """
        overview_url = self.config.overview_url(version)
        fetched = await self.fetch_page(overview_url)
        return self.parse_component_links(fetched.html, version)

    def parse_component_links(self, html: str, version: str) -> List[ComponentLink]:
        """Collects ``/components/<name>-cn`` links from an overview page."""
        soup = BeautifulSoup(html, "html.parser")
        base_url = self.config.base_urls[version]
        components: List[ComponentLink] = []
        seen_urls = set()

        for anchor in soup.select(self.config.link_selector):
            href = (anchor.get("href") or "").strip()
            title = anchor.get_text().strip()
            if not href or not title:
                continue
            if any(fragment in href for fragment in self.config.excluded_fragments):
                continue
            if not href.rstrip("/").endswith(self.config.language_suffix):
                continue

            full_url = href if href.startswith("http") else urljoin(base_url, href)
            if full_url in seen_urls:
                continue
            seen_urls.add(full_url)
            components.append(ComponentLink(url=full_url, title=title))

        logger.debug(f"Parsed {len(components)} component links for {version}")
        return components

    @staticmethod
    def content_hash(html: str) -> str:
        return hashlib.sha256(html.encode("utf-8")).hexdigest()

    @staticmethod
    def extract_text(html: str) -> str:
        """Plain text of a page without scripts and styles, whitespace collapsed."""
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup(["script", "style"]):
            tag.decompose()
        root = soup.body or soup
        return re.sub(r"\s+", " ", root.get_text(" ")).strip()

    def extract_component_tag(self, url: str, soup: BeautifulSoup) -> str:
        """
        Derives the component tag from the URL, else from the first code sample.

        :raises ComponentTagError: when neither source yields a tag
        """
        match = re.search(self.config.url_pattern, url)
        if match:
            name = match.group(1).lower()
            if name.startswith(self.config.tag_prefix):
                return name
            return self.config.tag_prefix + name

        code = soup.find("code")
        if code is not None:
            tag_match = re.search(self.config.code_tag_pattern, code.get_text())
            if tag_match:
                return tag_match.group(1)

        raise ComponentTagError(url)

    @staticmethod
    def extract_title(soup: BeautifulSoup) -> str:
        h1 = soup.find("h1")
        if h1 is not None and h1.get_text().strip():
            return h1.get_text().strip()

        title = soup.find("title")
        if title is not None and title.get_text().strip():
            return title.get_text().strip()

        return "Unknown"
