"""Booking submission API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from tour_booking.adapters.http_errors import response_message
from tour_booking.domain.bookings import BookingRequest
from tour_booking.domain.errors import SubmissionError


class BookingClient(Protocol):
    """Interface for submitting bookings."""

    async def submit_booking(self, request: BookingRequest) -> str:
        """Submit a booking and return the backend confirmation text.

        Raises SubmissionError when the booking is rejected or undeliverable.
        """


@dataclass
class HttpxBookingClient(BookingClient):
    """HTTPX-backed booking submission client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10

    @classmethod
    def create(cls, base_url: str, timeout: float = 10) -> "HttpxBookingClient":
        """Create a booking client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def submit_booking(self, request: BookingRequest) -> str:
        """Post the booking to the backend."""
        try:
            response = await self.http_client.post(
                f"{self.base_url}/book-tour",
                json=request.to_payload(),
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise SubmissionError() from exc
        if response.is_error:
            raise SubmissionError(response_message(response))
        try:
            body = response.json()
        except ValueError as exc:
            raise SubmissionError() from exc
        if not isinstance(body, dict):
            raise SubmissionError()
        message = body.get("message")
        return message if isinstance(message, str) else ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
