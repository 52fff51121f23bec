from .component import ComponentLink
from .discovery_config import DiscoveryConfig
from .page_handler import PageHandler
from .crawler import DocCrawler, FetchedPage

__all__ = [
    'ComponentLink',
    'DiscoveryConfig',
    'PageHandler',
    'DocCrawler',
    'FetchedPage'
]
