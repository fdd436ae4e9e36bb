"""Admin listing and statistics API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class AdminClient(Protocol):
    """Interface for privileged read-only admin data."""

    async def list_bookings(self) -> list[dict[str, object]]:
        """Return every stored booking."""

    async def get_stats(self) -> dict[str, object]:
        """Return headline user and booking counts."""


@dataclass
class HttpxAdminClient(AdminClient):
    """HTTPX-backed admin client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10

    @classmethod
    def create(cls, base_url: str, timeout: float = 10) -> "HttpxAdminClient":
        """Create an admin client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def list_bookings(self) -> list[dict[str, object]]:
        """Fetch all customer bookings."""
        response = await self.http_client.get(
            f"{self.base_url}/all-bookings", timeout=self.timeout
        )
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, list):
            raise ValueError("booking listing is not a list")
        return [item for item in body if isinstance(item, dict)]

    async def get_stats(self) -> dict[str, object]:
        """Fetch dashboard statistics."""
        response = await self.http_client.get(
            f"{self.base_url}/admin/stats", timeout=self.timeout
        )
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict):
            raise ValueError("admin stats are not an object")
        return body

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
