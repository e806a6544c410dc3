"""Source data adapters for the offline loader."""

from craftsman_rag.boundary.sources.craftsmen_api import CraftsmenApiClient
from craftsman_rag.boundary.sources.web_page import PageFetcher, clean_html

__all__ = ["CraftsmenApiClient", "PageFetcher", "clean_html"]
