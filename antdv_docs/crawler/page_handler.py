import logging
from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError
from config import config
from antdv_docs.exceptions import FetchError

logger = logging.getLogger(__name__)

class PageHandler:
    """Handles page navigation and HTML capture."""

    def __init__(self, timeout: int = None):
        self.timeout = timeout or config.TIMEOUT

    async def navigate(self, page: Page, url: str) -> None:
        """
        Navigates to a documentation page and waits for it to render.

        :param page: Playwright page instance
        :param url: Absolute URL of the page
        :raises FetchError: on navigation failure or a non-success HTTP status
        """
        try:
            response = await page.goto(url, timeout=self.timeout, wait_until="domcontentloaded")
        except PlaywrightTimeoutError as e:
            raise FetchError(f"Timed out loading {url}: {e}", url) from e
        except Exception as e:
            raise FetchError(f"Failed to load {url}: {e}", url) from e

        if response is None:
            raise FetchError(f"No response for {url}", url)
        if not response.ok:
            raise FetchError(f"HTTP {response.status}: {url}", url, response.status)

        try:
            # Wait for client-side rendering of the API tables
            await page.wait_for_load_state("networkidle", timeout=self.timeout)
        except PlaywrightTimeoutError:
            logger.warning(f"Network did not settle for {url} - proceeding with current page state")

    async def extract_html(self, page: Page) -> str:
        """
        Returns the rendered HTML of the current page.

        :param page: Playwright page instance
        :return: Serialized DOM
        """
        return await page.content()
