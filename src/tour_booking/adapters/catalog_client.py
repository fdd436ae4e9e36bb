"""Tour catalog API client."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx

from tour_booking.domain.errors import CatalogError

HTTP_NOT_FOUND = 404


class CatalogClient(Protocol):
    """Interface for the read-only tour catalog."""

    async def list_tours(self) -> list[dict[str, object]]:
        """Return raw tour documents in display order."""

    async def get_tour(self, tour_id: str) -> dict[str, object] | None:
        """Return a raw tour document, or None when it does not exist."""


@dataclass
class HttpxCatalogClient(CatalogClient):
    """HTTPX-backed catalog client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10

    @classmethod
    def create(cls, base_url: str, timeout: float = 10) -> "HttpxCatalogClient":
        """Create a catalog client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def list_tours(self) -> list[dict[str, object]]:
        """Fetch every tour."""
        response = await self._get(f"{self.base_url}/tours")
        body = _json(response)
        if not isinstance(body, list):
            raise CatalogError("tour listing is not a list")
        return [item for item in body if isinstance(item, dict)]

    async def get_tour(self, tour_id: str) -> dict[str, object] | None:
        """Fetch one tour by id."""
        url = f"{self.base_url}/tours/{quote(tour_id, safe='')}"
        response = await self._get(url)
        if response.status_code == HTTP_NOT_FOUND:
            return None
        body = _json(response)
        if not isinstance(body, dict):
            raise CatalogError(f"tour {tour_id} is not an object")
        return body

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, url: str) -> httpx.Response:
        try:
            response = await self.http_client.get(url, timeout=self.timeout)
        except httpx.HTTPError as exc:
            raise CatalogError(f"catalog request failed: {exc}") from exc
        if response.is_error and response.status_code != HTTP_NOT_FOUND:
            raise CatalogError(f"catalog returned HTTP {response.status_code}")
        return response


def _json(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise CatalogError("catalog returned malformed JSON") from exc
