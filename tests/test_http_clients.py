"""Tests for HTTP-based adapters."""

import asyncio
import json
from decimal import Decimal

import httpx
import pytest

from tour_booking.adapters.admin_client import HttpxAdminClient
from tour_booking.adapters.auth_client import HttpxAuthClient
from tour_booking.adapters.booking_client import HttpxBookingClient
from tour_booking.adapters.catalog_client import HttpxCatalogClient
from tour_booking.domain.bookings import BookingRequest
from tour_booking.domain.errors import CatalogError, CredentialError, SubmissionError

BASE_URL = "https://api.test/api"


def _request() -> BookingRequest:
    return BookingRequest(
        full_name="Asha Rao",
        age=34,
        mobile_number="9876543210",
        email="asha@example.com",
        party_size=3,
        tour_id="t1",
        tour_name="Beach Tour",
        payment_method="UPI Apps",
        total_amount=Decimal("15000"),
    )


def _async_client(handler) -> httpx.AsyncClient:  # type: ignore[no-untyped-def]
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_catalog_client_lists_and_gets_tours() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/tours":
            return httpx.Response(200, json=[{"_id": "t1"}, "junk"])
        if request.url.path == "/api/tours/t1":
            return httpx.Response(200, json={"_id": "t1", "name": "Beach Tour"})
        return httpx.Response(404, json={"message": "Tour not found"})

    client = HttpxCatalogClient(base_url=BASE_URL, http_client=_async_client(handler))

    tours = asyncio.run(client.list_tours())
    tour = asyncio.run(client.get_tour("t1"))
    missing = asyncio.run(client.get_tour("nope"))

    assert tours == [{"_id": "t1"}]
    assert tour == {"_id": "t1", "name": "Beach Tour"}
    assert missing is None


def test_catalog_client_escapes_tour_id_in_path() -> None:
    seen: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(404, json={"message": "Tour not found"})

    client = HttpxCatalogClient(base_url=BASE_URL, http_client=_async_client(handler))

    assert asyncio.run(client.get_tour("t1?admin=1/../x")) is None
    assert seen[0].raw_path == b"/api/tours/t1%3Fadmin%3D1%2F..%2Fx"
    assert seen[0].query == b""


def test_catalog_client_wraps_server_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    client = HttpxCatalogClient(base_url=BASE_URL, http_client=_async_client(handler))

    with pytest.raises(CatalogError):
        asyncio.run(client.list_tours())


def test_booking_client_posts_payload_and_returns_message() -> None:
    seen: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/api/book-tour"
        seen.append(json.loads(request.content.decode()))
        return httpx.Response(201, json={"message": "ref=123"})

    client = HttpxBookingClient(base_url=BASE_URL, http_client=_async_client(handler))

    message = asyncio.run(client.submit_booking(_request()))

    assert message == "ref=123"
    assert seen[0]["numberOfPeople"] == 3
    assert seen[0]["paymentMethod"] == "UPI Apps"
    assert "totalAmount" not in seen[0]


def test_booking_client_surfaces_backend_rejection() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Tour sold out"})

    client = HttpxBookingClient(base_url=BASE_URL, http_client=_async_client(handler))

    with pytest.raises(SubmissionError) as excinfo:
        asyncio.run(client.submit_booking(_request()))

    assert excinfo.value.message == "Tour sold out"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="<html>oops</html>"),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json=["unexpected"]),
    ],
)
def test_booking_client_failures_without_message(response: httpx.Response) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    client = HttpxBookingClient(base_url=BASE_URL, http_client=_async_client(handler))

    with pytest.raises(SubmissionError) as excinfo:
        asyncio.run(client.submit_booking(_request()))

    assert excinfo.value.message is None


def test_booking_client_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = HttpxBookingClient(base_url=BASE_URL, http_client=_async_client(handler))

    with pytest.raises(SubmissionError):
        asyncio.run(client.submit_booking(_request()))


def test_auth_client_login_and_register() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content.decode())
        if request.url.path == "/api/login":
            if payload["password"] != "secret":
                return httpx.Response(401, json={"message": "Invalid credentials"})
            return httpx.Response(200, json={"message": "Login successful"})
        return httpx.Response(201, json={"message": "User registered successfully"})

    client = HttpxAuthClient(base_url=BASE_URL, http_client=_async_client(handler))

    identity = asyncio.run(client.login("alice@example.com", "secret"))
    message = asyncio.run(client.register("Alice", "alice@example.com", "secret"))

    assert identity == "alice@example.com"
    assert message == "User registered successfully"
    with pytest.raises(CredentialError) as excinfo:
        asyncio.run(client.login("alice@example.com", "wrong"))
    assert excinfo.value.message == "Invalid credentials"


def test_auth_client_prefers_backend_identity() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"email": "owner.com"})

    client = HttpxAuthClient(base_url=BASE_URL, http_client=_async_client(handler))

    assert asyncio.run(client.login("Owner.com", "pw")) == "owner.com"


def test_admin_client_fetches_bookings_and_stats() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/all-bookings":
            return httpx.Response(200, json=[{"_id": "b1"}])
        return httpx.Response(200, json={"totalUsers": 2, "totalBookings": 1})

    client = HttpxAdminClient(base_url=BASE_URL, http_client=_async_client(handler))

    assert asyncio.run(client.list_bookings()) == [{"_id": "b1"}]
    assert asyncio.run(client.get_stats()) == {"totalUsers": 2, "totalBookings": 1}


def test_admin_client_raises_on_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    client = HttpxAdminClient(base_url=BASE_URL, http_client=_async_client(handler))

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.get_stats())
