"""Admin dashboard data."""

import logging
from dataclasses import dataclass, field

from tour_booking.adapters.admin_client import AdminClient
from tour_booking.domain.admin import AdminStats, BookingRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminDashboard:
    """Everything the admin dashboard renders."""

    stats: AdminStats = field(default_factory=AdminStats)
    bookings: list[BookingRecord] = field(default_factory=list)


@dataclass
class AdminService:
    """Service for the privileged dashboard."""

    client: AdminClient

    async def dashboard(self) -> AdminDashboard:
        """Return bookings and stats, or an empty dashboard if the backend fails."""
        try:
            raw_bookings = await self.client.list_bookings()
            raw_stats = await self.client.get_stats()
        except Exception:
            logger.exception("Failed to fetch admin data")
            return AdminDashboard()
        return AdminDashboard(
            stats=_parse_stats(raw_stats),
            bookings=[_parse_booking(item) for item in raw_bookings],
        )


def _as_int(value: object) -> int:
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 0


def _parse_stats(raw: dict[str, object]) -> AdminStats:
    return AdminStats(
        total_users=_as_int(raw.get("totalUsers")),
        total_bookings=_as_int(raw.get("totalBookings")),
    )


def _parse_booking(raw: dict[str, object]) -> BookingRecord:
    return BookingRecord(
        id=str(raw.get("_id", "")),
        tour_name=str(raw.get("tourName", "")),
        customer_name=str(raw.get("name", "")),
        mobile_number=str(raw.get("mobile", "")),
        email=str(raw.get("email", "")),
        party_size=_as_int(raw.get("numberOfPeople")),
        payment_method=str(raw.get("paymentMethod", "")),
    )
