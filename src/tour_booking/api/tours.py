"""Tour listing, tour detail and booking flow endpoints."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from tour_booking.api.guards import client_session, require_view
from tour_booking.api.models import FieldUpdate, PaymentChoice
from tour_booking.domain.errors import CatalogError, TourNotFound
from tour_booking.domain.money import format_amount
from tour_booking.domain.sessions import TOUR_DETAIL_VIEW, TOURS_VIEW

if TYPE_CHECKING:
    from tour_booking.containers import AppContainer
    from tour_booking.domain.bookings import FlowSnapshot
    from tour_booking.domain.tours import TourReference, TourSummary
    from tour_booking.services.booking_flow import BookingFlow

HTTP_UNPROCESSABLE = 422
VIEW_KEY_HEADER = "X-Booking-View"

router = APIRouter(tags=["tours"])
detail_guard = [Depends(require_view(TOUR_DETAIL_VIEW))]


@router.get("/tours", dependencies=[Depends(require_view(TOURS_VIEW))])
async def list_tours(request: Request) -> dict[str, object]:
    """Return the tour catalog."""
    container: AppContainer = request.app.state.container
    try:
        tours = await container.catalog_service.list_tours()
    except CatalogError as exc:
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    symbol = container.settings.currency_symbol
    return {"tours": [_summary_payload(tour, symbol) for tour in tours]}


@router.get("/tours/{tour_id}", dependencies=detail_guard)
async def tour_detail(tour_id: str, request: Request) -> dict[str, object]:
    """Return a tour and the state of its booking flow."""
    flow = await _flow_for(request, tour_id)
    symbol = request.app.state.container.settings.currency_symbol
    return {
        "tour": _reference_payload(flow.tour, symbol),
        "booking": _snapshot_payload(flow.snapshot()),
    }


@router.post("/tours/{tour_id}/booking/start", dependencies=detail_guard)
async def start_booking(tour_id: str, request: Request) -> dict[str, object]:
    """Open the booking form."""
    flow = await _flow_for(request, tour_id)
    return _transition(flow, flow.start)


@router.post("/tours/{tour_id}/booking/fields", dependencies=detail_guard)
async def update_fields(
    tour_id: str, update: FieldUpdate, request: Request
) -> dict[str, object]:
    """Apply form edits to the draft."""
    flow = await _flow_for(request, tour_id)
    snapshot = None
    for name, value in update.normalized():
        snapshot = _transition(flow, partial(flow.update_field, name, value))
        if snapshot["error"]:
            break
    return snapshot or _snapshot_payload(flow.snapshot())


@router.post("/tours/{tour_id}/booking/details", dependencies=detail_guard)
async def submit_details(tour_id: str, request: Request) -> dict[str, object]:
    """Validate the draft and move on to payment."""
    flow = await _flow_for(request, tour_id)
    payload = _transition(flow, flow.submit_details)
    if payload["error"]:
        raise HTTPException(HTTP_UNPROCESSABLE, detail=payload)
    return payload


@router.post("/tours/{tour_id}/booking/revise", dependencies=detail_guard)
async def revise_booking(tour_id: str, request: Request) -> dict[str, object]:
    """Go back from payment to the booking form."""
    flow = await _flow_for(request, tour_id)
    return _transition(flow, flow.revise)


@router.post("/tours/{tour_id}/booking/cancel", dependencies=detail_guard)
async def cancel_booking(tour_id: str, request: Request) -> dict[str, object]:
    """Discard the booking in progress."""
    flow = await _flow_for(request, tour_id)
    return _transition(flow, flow.cancel)


@router.post("/tours/{tour_id}/booking/payment", dependencies=detail_guard)
async def choose_payment(
    tour_id: str, choice: PaymentChoice, request: Request
) -> dict[str, object]:
    """Pick a payment method and submit the booking."""
    flow = await _flow_for(request, tour_id)
    task = flow.choose_payment(choice.method)
    if task is None:
        raise HTTPException(
            status.HTTP_409_CONFLICT, detail=_snapshot_payload(flow.snapshot())
        )
    snapshot = await asyncio.shield(task)
    return _snapshot_payload(snapshot if snapshot is not None else flow.snapshot())


async def _flow_for(request: Request, tour_id: str) -> BookingFlow:
    container: AppContainer = request.app.state.container
    try:
        tour = await container.catalog_service.get_tour(tour_id)
    except TourNotFound as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Tour not found") from exc
    except CatalogError as exc:
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    view_key = request.headers.get(VIEW_KEY_HEADER, "")
    return client_session(request).flows.get_or_create(tour, view_key)


def _transition(
    flow: BookingFlow, action: Callable[[], FlowSnapshot | None]
) -> dict[str, object]:
    snapshot = action()
    if snapshot is None:
        raise HTTPException(
            status.HTTP_409_CONFLICT, detail=_snapshot_payload(flow.snapshot())
        )
    return _snapshot_payload(snapshot)


def _summary_payload(tour: TourSummary, symbol: str) -> dict[str, object]:
    return {
        "id": tour.id,
        "name": tour.name,
        "price": str(tour.unit_price),
        "price_display": format_amount(tour.unit_price, symbol),
        "image_ref": tour.image_ref,
    }


def _reference_payload(tour: TourReference, symbol: str) -> dict[str, object]:
    return {
        "id": tour.id,
        "name": tour.name,
        "price": str(tour.unit_price),
        "price_display": format_amount(tour.unit_price, symbol),
        "duration": tour.duration_label,
        "description": tour.description,
        "image_ref": tour.image_ref,
    }


def _snapshot_payload(snapshot: FlowSnapshot) -> dict[str, object]:
    draft = snapshot.draft
    return {
        "state": snapshot.state.value,
        "draft": (
            {
                "full_name": draft.full_name,
                "age": draft.age,
                "mobile_number": draft.mobile_number,
                "email": draft.email,
                "party_size": draft.party_size,
            }
            if draft is not None
            else None
        ),
        "total_amount": (
            str(snapshot.total_amount) if snapshot.total_amount is not None else None
        ),
        "total_display": snapshot.total_display,
        "outcome": (
            {
                "status": snapshot.outcome.status.value,
                "message": snapshot.outcome.message,
            }
            if snapshot.outcome is not None
            else None
        ),
        "error": snapshot.error,
        "payment_methods": list(snapshot.payment_methods),
    }
