import os
from dotenv import load_dotenv
from typing import Dict, Any

# Load environment variables from .env file
load_dotenv()

class Config:
    """Central configuration management for the antdv docs indexer."""

    # Store
    DB_PATH: str = os.getenv("ANTDV_DB_PATH", "./data/antdv.sqlite")

    # Crawler configuration
    FETCH_DELAY_MS: int = int(os.getenv("ANTDV_FETCH_DELAY_MS", "1000"))
    USER_AGENT: str = os.getenv("ANTDV_USER_AGENT", "antdv-mcp-indexer/1.0 (Documentation Indexer)")

    # Playwright settings
    HEADLESS: bool = os.getenv("PLAYWRIGHT_HEADLESS", "true").lower() == "true"
    TIMEOUT: int = int(os.getenv("PLAYWRIGHT_TIMEOUT", "30000"))

    LOG_LEVEL: str = os.getenv("ANTDV_LOG_LEVEL", "INFO").upper()

    @classmethod
    def to_dict(cls) -> Dict[str, Any]:
        """Return configuration as a dictionary for logging/debugging."""
        return {
            "DB_PATH": cls.DB_PATH,
            "FETCH_DELAY_MS": cls.FETCH_DELAY_MS,
            "USER_AGENT": cls.USER_AGENT,
            "HEADLESS": cls.HEADLESS,
            "TIMEOUT": cls.TIMEOUT,
            "LOG_LEVEL": cls.LOG_LEVEL
        }

# Initialize on import
config = Config()
