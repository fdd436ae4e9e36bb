"""Tour catalog lookups."""

import logging
from dataclasses import dataclass
from decimal import Decimal

from tour_booking.adapters.catalog_client import CatalogClient
from tour_booking.domain.errors import CatalogError, TourNotFound
from tour_booking.domain.money import to_amount
from tour_booking.domain.tours import TourReference, TourSummary
from tour_booking.services.cache import Cache

logger = logging.getLogger(__name__)

TOURS_KEY = "tours"


@dataclass
class CatalogService:
    """Loads tours from the catalog backend and caches them."""

    client: CatalogClient
    cache: Cache
    ttl_seconds: int = 300

    async def list_tours(self) -> list[TourSummary]:
        """Return the catalog listing in backend order."""
        cached = self.cache.get(TOURS_KEY)
        if isinstance(cached, list):
            return cached
        tours: list[TourSummary] = []
        for document in await self.client.list_tours():
            try:
                tours.append(_parse_summary(document))
            except CatalogError:
                logger.warning("Skipping malformed tour", extra={"tour": document})
        self.cache.set(TOURS_KEY, tours, self.ttl_seconds)
        return tours

    async def get_tour(self, tour_id: str) -> TourReference:
        """Return the tour for a detail view; raises TourNotFound if absent."""
        key = f"tour:{tour_id}"
        cached = self.cache.get(key)
        if isinstance(cached, TourReference):
            return cached
        document = await self.client.get_tour(tour_id)
        if document is None:
            raise TourNotFound(tour_id)
        tour = _parse_reference(document)
        self.cache.set(key, tour, self.ttl_seconds)
        return tour


def _tour_id(document: dict[str, object]) -> str:
    raw = document.get("_id", document.get("id"))
    if raw is None or raw == "":
        raise CatalogError("tour without id")
    return str(raw)


def _tour_name(document: dict[str, object]) -> str:
    name = document.get("name")
    if not isinstance(name, str) or not name:
        raise CatalogError("tour without name")
    return name


def _unit_price(document: dict[str, object]) -> Decimal:
    try:
        return to_amount(document.get("price"))
    except ValueError as exc:
        raise CatalogError(str(exc)) from exc


def _optional_text(document: dict[str, object], key: str) -> str | None:
    value = document.get(key)
    return str(value) if value is not None else None


def _parse_summary(document: dict[str, object]) -> TourSummary:
    return TourSummary(
        id=_tour_id(document),
        name=_tour_name(document),
        unit_price=_unit_price(document),
        image_ref=_optional_text(document, "imageUrl"),
    )


def _parse_reference(document: dict[str, object]) -> TourReference:
    return TourReference(
        id=_tour_id(document),
        name=_tour_name(document),
        unit_price=_unit_price(document),
        duration_label=_optional_text(document, "duration"),
        description=_optional_text(document, "description"),
        image_ref=_optional_text(document, "imageUrl"),
    )
