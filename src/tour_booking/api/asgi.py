"""ASGI entrypoint for the tour booking host shell."""

from tour_booking.api.app import create_app
from tour_booking.containers import build_container

app = create_app(build_container())
