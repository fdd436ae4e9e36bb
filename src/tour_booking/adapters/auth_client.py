"""Credential check API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from tour_booking.adapters.http_errors import response_message
from tour_booking.domain.errors import CredentialError


class AuthClient(Protocol):
    """Interface for the external login and registration endpoints."""

    async def login(self, email: str, password: str) -> str:
        """Verify credentials and return the session identity."""

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account and return the backend message."""


@dataclass
class HttpxAuthClient(AuthClient):
    """HTTPX-backed credential client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10

    @classmethod
    def create(cls, base_url: str, timeout: float = 10) -> "HttpxAuthClient":
        """Create an auth client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def login(self, email: str, password: str) -> str:
        """Check credentials with the backend login endpoint."""
        body = await self._post("login", {"email": email, "password": password})
        identity = body.get("email")
        return identity if isinstance(identity, str) and identity else email

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account with the backend register endpoint."""
        body = await self._post(
            "register", {"name": name, "email": email, "password": password}
        )
        message = body.get("message")
        return message if isinstance(message, str) else ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _post(self, path: str, payload: dict[str, str]) -> dict[str, object]:
        try:
            response = await self.http_client.post(
                f"{self.base_url}/{path}", json=payload, timeout=self.timeout
            )
        except httpx.HTTPError as exc:
            raise CredentialError("Could not reach the server.") from exc
        if response.is_error:
            raise CredentialError(response_message(response))
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
