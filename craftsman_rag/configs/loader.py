"""
Offline loader configuration settings.

Source API (craftsmen directory) and web scraping settings used by the
loader CLI.

Dependencies: pydantic, pydantic_settings
System role: Data ingestion configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CRAFTS = [
    "حداد",
    "نجار",
    "سباك",
    "كهربائي",
    "نقاش",
    "فني تكييف",
    "خراط",
]


class SourceAPISettings(BaseSettings):
    """Craftsmen directory API settings."""

    model_config = SettingsConfigDict(
        env_prefix="CRAFTSMEN_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:8080/api/client/search",
        description="Search endpoint of the craftsmen directory",
    )
    token: str | None = Field(default=None, description="Bearer token for the directory API")
    page_size: int = Field(default=100, ge=1, description="Records requested per page")
    crafts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CRAFTS),
        description="Craft names to fetch (JSON list in the environment)",
    )
    timeout_seconds: float = Field(default=30.0, gt=0, description="HTTP timeout")


class ScraperSettings(BaseSettings):
    """Web page ingestion settings."""

    model_config = SettingsConfigDict(
        env_prefix="SCRAPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=512, gt=0, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=100, ge=0, description="Overlap between consecutive chunks")
    timeout_seconds: float = Field(default=30.0, gt=0, description="HTTP timeout for page fetches")
