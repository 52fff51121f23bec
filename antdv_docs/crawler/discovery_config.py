from typing import Dict, List
from pydantic import BaseModel

class DiscoveryConfig(BaseModel):
    """Configuration for component discovery on the antdv documentation site."""

    # Site root per documentation version
    base_urls: Dict[str, str] = {
        "v3": "https://3x.antdv.com",
        "v4": "https://antdv.com",
    }

    # Overview page listing every component
    overview_path: str = "/components/overview-cn/"

    # CSS selector for candidate component links
    link_selector: str = 'a[href*="/components/"]'

    # Component pages are the Chinese variants: /components/<name>-cn
    url_pattern: str = r"/components/([^/]+)-cn"
    excluded_fragments: List[str] = ["/overview"]
    language_suffix: str = "-cn"

    # Fallback when the URL carries no component name
    code_tag_pattern: str = r"<(a-[a-z-]+)"

    # Canonical namespace prefix of component tags
    tag_prefix: str = "a-"

    def overview_url(self, version: str) -> str:
        return self.base_urls[version].rstrip("/") + self.overview_path
