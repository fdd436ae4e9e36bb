"""Domain models for the tour catalog."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TourSummary:
    """A tour as shown in the catalog listing."""

    id: str
    name: str
    unit_price: Decimal
    image_ref: str | None = None


@dataclass(frozen=True)
class TourReference:
    """A single tour loaded for its detail view."""

    id: str
    name: str
    unit_price: Decimal
    duration_label: str | None = None
    description: str | None = None
    image_ref: str | None = None
