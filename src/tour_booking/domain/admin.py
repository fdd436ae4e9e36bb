"""Admin domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BookingRecord:
    """A stored customer booking as listed on the admin dashboard."""

    id: str
    tour_name: str
    customer_name: str
    mobile_number: str
    email: str
    party_size: int
    payment_method: str


@dataclass(frozen=True)
class AdminStats:
    """Headline counts for the admin dashboard."""

    total_users: int = 0
    total_bookings: int = 0
