"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from tour_booking.adapters.admin_client import HttpxAdminClient
from tour_booking.adapters.auth_client import HttpxAuthClient
from tour_booking.adapters.booking_client import BookingClient, HttpxBookingClient
from tour_booking.adapters.catalog_client import HttpxCatalogClient
from tour_booking.config import Settings, parse_payment_methods
from tour_booking.domain.tours import TourReference
from tour_booking.services.admin import AdminService
from tour_booking.services.auth import AuthService
from tour_booking.services.booking_flow import BookingFlow, BookingFlowRegistry
from tour_booking.services.cache import InMemoryCache
from tour_booking.services.catalog import CatalogService
from tour_booking.services.client_sessions import ClientSession, ClientSessionStore
from tour_booking.services.session_gate import SessionGate


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    catalog_service: CatalogService
    admin_service: AdminService
    client_sessions: ClientSessionStore
    close_resources: Callable[[], Awaitable[None]]


def client_session_factory(
    settings: Settings, booking_client: BookingClient
) -> Callable[[str], ClientSession]:
    """Build the factory giving each client its own gate and booking flows."""
    payment_methods = parse_payment_methods(settings.payment_methods)

    def new_flow(tour: TourReference) -> BookingFlow:
        return BookingFlow(
            tour=tour,
            booking_client=booking_client,
            payment_methods=payment_methods,
            submission_timeout=settings.submission_timeout_seconds,
            currency_symbol=settings.currency_symbol,
        )

    def new_client(session_id: str) -> ClientSession:
        return ClientSession(
            id=session_id,
            gate=SessionGate(privileged_identity=settings.privileged_identity),
            flows=BookingFlowRegistry(new_flow),
        )

    return new_client


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    base_url = resolved_settings.api_base_url
    timeout = resolved_settings.request_timeout_seconds
    catalog_client = HttpxCatalogClient.create(base_url, timeout)
    booking_client = HttpxBookingClient.create(base_url, timeout)
    auth_client = HttpxAuthClient.create(base_url, timeout)
    admin_client = HttpxAdminClient.create(base_url, timeout)

    async def close_resources() -> None:
        await catalog_client.close()
        await booking_client.close()
        await auth_client.close()
        await admin_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(auth_client),
        catalog_service=CatalogService(
            client=catalog_client,
            cache=InMemoryCache(),
            ttl_seconds=resolved_settings.catalog_cache_ttl_seconds,
        ),
        admin_service=AdminService(admin_client),
        client_sessions=ClientSessionStore(
            client_session_factory(resolved_settings, booking_client)
        ),
        close_resources=close_resources,
    )
