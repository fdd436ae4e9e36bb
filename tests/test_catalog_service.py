"""Tests for catalog lookups."""

import asyncio
from decimal import Decimal

import pytest

from tour_booking.domain.errors import CatalogError, TourNotFound
from tour_booking.services.cache import InMemoryCache
from tour_booking.services.catalog import CatalogService
from tests.conftest import FakeCatalogClient


def test_get_tour_builds_reference_and_caches() -> None:
    client = FakeCatalogClient()
    service = CatalogService(client, InMemoryCache())

    tour = asyncio.run(service.get_tour("t1"))
    again = asyncio.run(service.get_tour("t1"))

    assert tour.name == "Beach Tour"
    assert tour.unit_price == Decimal("5000")
    assert tour.duration_label == "3 Days"
    assert tour.image_ref == "https://img.test/beach.jpg"
    assert again is tour
    assert client.get_calls == 1


def test_get_unknown_tour_raises_not_found() -> None:
    service = CatalogService(FakeCatalogClient(), InMemoryCache())

    with pytest.raises(TourNotFound):
        asyncio.run(service.get_tour("missing"))


def test_get_tour_with_bad_price_raises() -> None:
    client = FakeCatalogClient(tours=[{"_id": "x", "name": "Broken", "price": "n/a"}])
    service = CatalogService(client, InMemoryCache())

    with pytest.raises(CatalogError):
        asyncio.run(service.get_tour("x"))


def test_list_tours_skips_malformed_entries() -> None:
    client = FakeCatalogClient(
        tours=[
            {"_id": "a", "name": "Good", "price": 100},
            {"_id": "b", "price": 100},
            {"name": "No id", "price": 100},
        ]
    )
    service = CatalogService(client, InMemoryCache())

    tours = asyncio.run(service.list_tours())
    asyncio.run(service.list_tours())

    assert [tour.id for tour in tours] == ["a"]
    assert client.list_calls == 1


def test_cache_entries_expire() -> None:
    now = [100.0]
    cache = InMemoryCache(clock=lambda: now[0])

    cache.set("key", "value", ttl_seconds=10)
    assert cache.get("key") == "value"

    now[0] = 110.0
    assert cache.get("key") is None


def test_cache_clear_drops_entries() -> None:
    cache = InMemoryCache()
    cache.set("key", "value", ttl_seconds=10)

    cache.clear()

    assert cache.get("key") is None
