"""
Craftsmen directory API client.

Paged search by craft against the directory's client search endpoint.
Failures are logged and reported as ``None`` so that the loader moves on
to the next craft instead of aborting the run.

Dependencies: httpx, pydantic
System role: Source data adapter for the offline loader
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from craftsman_rag.models.craftsman import CraftsmanPage, CraftsmanRecord

logger = logging.getLogger(__name__)


class CraftsmenApiClient:
    """Client for ``POST <url>`` with ``{pagination, page, craft}`` bodies."""

    def __init__(
        self,
        url: str,
        token: str | None = None,
        page_size: int = 100,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._page_size = page_size
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if token:
            headers["Authorization"] = token if token.lower().startswith("bearer ") else f"Bearer {token}"
        self._headers = headers
        self._client = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def fetch_page(self, craft: str, page: int = 1) -> CraftsmanPage | None:
        """
        Fetch one page of craftsmen for ``craft``.

        Returns:
            CraftsmanPage, or None when the call failed or the API reported failure
        """
        logger.info(f"{__name__}:fetch_page - Fetching {craft} craftsmen, page {page}")
        payload = {"pagination": self._page_size, "page": page, "craft": craft}

        try:
            response = self._client.post(self._url, json=payload, headers=self._headers)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{__name__}:fetch_page - API error for {craft}: status {e.response.status_code}",
                extra={"craft": craft, "page": page, "body": e.response.text[:200]},
            )
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{__name__}:fetch_page - API error for {craft}: {type(e).__name__}: {e}")
            return None

        if not isinstance(body, dict) or body.get("status") is not True:
            logger.error(
                f"{__name__}:fetch_page - API reported failure for {craft}",
                extra={"craft": craft, "page": page, "response": str(body)[:200]},
            )
            return None

        data: dict[str, Any] = body.get("data") or {}
        raw_records = data.get("data") or []
        records = []
        for raw in raw_records:
            try:
                records.append(CraftsmanRecord.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning(
                    f"{__name__}:fetch_page - Skipping malformed record: {e.error_count()} errors",
                    extra={"craft": craft, "record_id": raw.get("id") if isinstance(raw, dict) else None},
                )

        page_info = CraftsmanPage(
            records=records,
            raw_count=len(raw_records),
            current_page=int(data.get("current_page") or page),
            last_page=int(data.get("last_page") or page),
        )
        logger.info(
            f"{__name__}:fetch_page - Fetched {len(records)} {craft} craftsmen from page {page} "
            f"(last_page={page_info.last_page})"
        )
        return page_info

    @property
    def base_url(self) -> str:
        """Search URL without its trailing ``/search`` segment."""
        url = self._url.rstrip("/")
        return url[: -len("/search")] if url.endswith("/search") else url

    def check_connection(self) -> bool:
        """GET the base endpoint with the auth headers. True when it answers 2xx."""
        try:
            response = self._client.get(self.base_url, headers=self._headers)
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:check_connection - API unreachable: {type(e).__name__}: {e}")
            return False

        logger.info(f"{__name__}:check_connection - API answered with status {response.status_code}")
        return response.is_success
