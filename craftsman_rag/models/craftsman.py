"""
Craftsman domain models.

Two shapes of the same entity: the raw record returned by the craftsmen
directory API (input to the loader) and the card extracted from model
output (output of the presentation parser).

Dependencies: pydantic
System role: Craftsman schemas
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class CraftRef(BaseModel):
    """Craft reference embedded in a directory record."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None


class CityRef(BaseModel):
    """City reference embedded in a directory record."""

    model_config = ConfigDict(extra="allow")

    city: str


class CraftsmanRecord(BaseModel):
    """Raw craftsman record from the directory API."""

    model_config = ConfigDict(extra="allow")

    id: int | str
    name: str
    craft: CraftRef | None = None
    address: str | None = None
    cities: list[CityRef] = Field(default_factory=list)
    average_rating: float | None = None
    number_of_ratings: int | None = None
    done_jobs_num: int | None = None
    active_jobs_num: int | None = None
    description: str | None = None
    status: str | None = None

    @property
    def craft_name(self) -> str | None:
        """Craft name, if the record carries one."""
        return self.craft.name if self.craft and self.craft.name else None

    @property
    def city_names(self) -> list[str]:
        """Names of the cities the craftsman serves."""
        return [c.city for c in self.cities]

    def raw(self) -> dict[str, Any]:
        """Original payload including fields not modelled here."""
        return self.model_dump(mode="json")


class CraftsmanPage(BaseModel):
    """One page of directory search results."""

    records: list[CraftsmanRecord] = Field(default_factory=list)
    raw_count: int | None = Field(default=None, description="Records on the page before validation")
    current_page: int = 1
    last_page: int = 1

    @property
    def is_empty(self) -> bool:
        """True when the API returned no records at all, valid or not."""
        total = self.raw_count if self.raw_count is not None else len(self.records)
        return total == 0


class Craftsman(BaseModel):
    """Card-ready craftsman extracted from a marked text block."""

    id: str = Field(description="sourceId of the record, or a generated fallback id")
    name: str
    craft: str
    rating: float | None = None
    review_count: int | None = None
    address: str | None = Field(default=None, description="Address and cities combined")
    description: str | None = None
    status: Literal["free", "busy"] = "free"
    cities: str | None = None
    completed_jobs: int | None = None
    active_jobs: int | None = None


class ExtractionRequest(BaseModel):
    """Request schema for the extraction endpoint."""

    text: str


class ExtractionResponse(BaseModel):
    """Response schema for the extraction endpoint."""

    contains_markers: bool
    craftsmen: list[Craftsman]
