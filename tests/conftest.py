"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from tour_booking.adapters.admin_client import AdminClient
from tour_booking.adapters.auth_client import AuthClient
from tour_booking.adapters.booking_client import BookingClient
from tour_booking.adapters.catalog_client import CatalogClient
from tour_booking.config import Settings
from tour_booking.containers import AppContainer, client_session_factory
from tour_booking.domain.bookings import BookingRequest
from tour_booking.domain.errors import CredentialError
from tour_booking.domain.tours import TourReference
from tour_booking.services.admin import AdminService
from tour_booking.services.auth import AuthService
from tour_booking.services.booking_flow import BookingFlow
from tour_booking.services.cache import InMemoryCache
from tour_booking.services.catalog import CatalogService
from tour_booking.services.client_sessions import ClientSessionStore


def _default_tours() -> list[dict[str, object]]:
    return [
        {
            "_id": "t1",
            "name": "Beach Tour",
            "price": 5000,
            "duration": "3 Days",
            "description": "Sun, sand and sea.",
            "imageUrl": "https://img.test/beach.jpg",
        },
        {
            "_id": "t2",
            "name": "Himalayan Trek",
            "price": 125000,
            "duration": "10 Days",
            "description": "High passes and glaciers.",
            "imageUrl": "https://img.test/trek.jpg",
        },
    ]


@dataclass
class FakeCatalogClient(CatalogClient):
    """Catalog client serving tours from memory."""

    tours: list[dict[str, object]] = field(default_factory=_default_tours)
    list_calls: int = 0
    get_calls: int = 0

    async def list_tours(self) -> list[dict[str, object]]:
        self.list_calls += 1
        return list(self.tours)

    async def get_tour(self, tour_id: str) -> dict[str, object] | None:
        self.get_calls += 1
        for tour in self.tours:
            if tour.get("_id") == tour_id:
                return tour
        return None


@dataclass
class FakeBookingClient(BookingClient):
    """Booking client that records requests and replies as configured.

    When ``gate`` is set, submissions wait for it before replying.
    """

    confirmation: str = "ref=123"
    error: Exception | None = None
    gate: asyncio.Event | None = None
    requests: list[BookingRequest] = field(default_factory=list)

    async def submit_booking(self, request: BookingRequest) -> str:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.confirmation


@dataclass
class FakeAuthClient(AuthClient):
    """Credential check backed by a dict of email to password."""

    accounts: dict[str, str] = field(
        default_factory=lambda: {
            "alice@example.com": "secret",
            "owner.com": "owner-pass",
        }
    )

    async def login(self, email: str, password: str) -> str:
        if self.accounts.get(email) != password:
            raise CredentialError("Invalid credentials")
        return email

    async def register(self, name: str, email: str, password: str) -> str:
        if email in self.accounts:
            raise CredentialError("User already exists")
        self.accounts[email] = password
        return "User registered successfully"


@dataclass
class FakeAdminClient(AdminClient):
    """Admin client returning canned dashboard data."""

    bookings: list[dict[str, object]] = field(
        default_factory=lambda: [
            {
                "_id": "b1",
                "tourName": "Beach Tour",
                "name": "Alice",
                "mobile": "9876543210",
                "email": "alice@example.com",
                "numberOfPeople": 3,
                "paymentMethod": "UPI Apps",
            }
        ]
    )
    stats: dict[str, object] = field(
        default_factory=lambda: {"totalUsers": 4, "totalBookings": 1}
    )
    fail: bool = False

    async def list_bookings(self) -> list[dict[str, object]]:
        if self.fail:
            raise RuntimeError("backend down")
        return list(self.bookings)

    async def get_stats(self) -> dict[str, object]:
        if self.fail:
            raise RuntimeError("backend down")
        return dict(self.stats)


BEACH_TOUR = TourReference(id="t1", name="Beach Tour", unit_price=Decimal("5000"))


def make_flow(
    booking_client: BookingClient | None = None,
    tour: TourReference = BEACH_TOUR,
    submission_timeout: float = 1,
) -> BookingFlow:
    return BookingFlow(
        tour=tour,
        booking_client=booking_client or FakeBookingClient(),
        submission_timeout=submission_timeout,
    )


def sign_in(
    client: TestClient, email: str = "alice@example.com", password: str = "secret"
) -> None:
    response = client.post("/login", json={"email": email, "password": password})
    assert response.status_code == 200


def fill_draft(flow: BookingFlow, party_size: object = 3) -> None:
    flow.update_field("full_name", "Asha Rao")
    flow.update_field("age", "34")
    flow.update_field("mobile_number", "9876543210")
    flow.update_field("email", "asha@example.com")
    flow.update_field("party_size", party_size)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="https://api.test/api",
        privileged_identity="owner.com",
        submission_timeout_seconds=1,
    )


@pytest.fixture
def catalog_client() -> FakeCatalogClient:
    return FakeCatalogClient()


@pytest.fixture
def booking_client() -> FakeBookingClient:
    return FakeBookingClient()


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def admin_client() -> FakeAdminClient:
    return FakeAdminClient()


@pytest.fixture
def container(
    settings: Settings,
    catalog_client: FakeCatalogClient,
    booking_client: FakeBookingClient,
    auth_client: FakeAuthClient,
    admin_client: FakeAdminClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(auth_client),
        catalog_service=CatalogService(catalog_client, InMemoryCache()),
        admin_service=AdminService(admin_client),
        client_sessions=ClientSessionStore(
            client_session_factory(settings, booking_client)
        ),
        close_resources=close_resources,
    )
