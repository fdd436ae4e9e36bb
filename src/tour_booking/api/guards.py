"""FastAPI dependencies that route every protected view through the gate."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from fastapi import Request, Response
from fastapi.responses import RedirectResponse

from tour_booking.domain.errors import AuthorizationDenied
from tour_booking.domain.sessions import RedirectSignal, View

if TYPE_CHECKING:
    from tour_booking.containers import AppContainer
    from tour_booking.services.client_sessions import ClientSession


def client_session(request: Request) -> ClientSession:
    """Return the session bound to the calling client."""
    return request.state.client_session


async def bind_client_session(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Attach the caller's session and keep its cookie in step with sign-in."""
    container: AppContainer = request.app.state.container
    cookie_name = container.settings.session_cookie_name
    store = container.client_sessions
    client = store.resolve(request.cookies.get(cookie_name))
    request.state.client_session = client

    response = await call_next(request)

    saved = store.contains(client.id)
    if client.gate.is_authorized():
        if not saved:
            store.save(client)
            response.set_cookie(cookie_name, client.id, httponly=True, samesite="lax")
    elif saved:
        store.discard(client.id)
        response.delete_cookie(cookie_name)
    return response


def require_view(view: View) -> Callable[[Request], Awaitable[View]]:
    """Build a dependency that admits the request only if ``view`` is reachable."""

    async def dependency(request: Request) -> View:
        decision = client_session(request).gate.guard(view)
        if isinstance(decision, RedirectSignal):
            raise AuthorizationDenied(decision.denied_view, decision.target)
        return decision

    return dependency


async def redirect_on_denied(
    request: Request, exc: AuthorizationDenied
) -> RedirectResponse:
    """Turn a denied guard check into a navigation to the entry view."""
    return RedirectResponse(exc.target, status_code=303)
