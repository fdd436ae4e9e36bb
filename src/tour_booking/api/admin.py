"""Admin dashboard endpoint, reachable only with the elevated role."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from tour_booking.api.guards import require_view
from tour_booking.domain.sessions import ADMIN_DASHBOARD_VIEW

if TYPE_CHECKING:
    from tour_booking.containers import AppContainer

router = APIRouter(tags=["admin"])


@router.get(
    "/admin-dashboard", dependencies=[Depends(require_view(ADMIN_DASHBOARD_VIEW))]
)
async def admin_dashboard(request: Request) -> dict[str, object]:
    """Return headline stats and every customer booking."""
    container: AppContainer = request.app.state.container
    dashboard = await container.admin_service.dashboard()
    return {
        "stats": {
            "total_users": dashboard.stats.total_users,
            "total_bookings": dashboard.stats.total_bookings,
        },
        "bookings": [
            {
                "id": booking.id,
                "tour_name": booking.tour_name,
                "customer_name": booking.customer_name,
                "mobile_number": booking.mobile_number,
                "email": booking.email,
                "party_size": booking.party_size,
                "payment_method": booking.payment_method,
            }
            for booking in dashboard.bookings
        ],
    }
