"""
Settings for the API and the loader CLI.

Each section reads its own environment prefix (ASTRA_DB_, VECTOR_STORE_,
EMBEDDING_, LLM_, CRAFTSMEN_API_, SCRAPER_) and ``.env``.
"""

from craftsman_rag.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
