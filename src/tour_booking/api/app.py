"""FastAPI application factory for the host shell."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from tour_booking.api.admin import router as admin_router
from tour_booking.api.guards import (
    bind_client_session,
    client_session,
    redirect_on_denied,
    require_view,
)
from tour_booking.api.models import LoginForm, RegisterForm
from tour_booking.api.tours import router as tours_router
from tour_booking.app_logging import configure_logging
from tour_booking.containers import AppContainer
from tour_booking.domain.errors import AuthorizationDenied, CredentialError
from tour_booking.domain.sessions import (
    ADMIN_DASHBOARD_VIEW,
    HOME_VIEW,
    LOGIN_VIEW,
    REGISTER_VIEW,
    TOURS_VIEW,
    Role,
    View,
)
from tour_booking.services.session_gate import SessionGate

NAVIGATION_LINKS: list[tuple[str, View]] = [
    ("Home", HOME_VIEW),
    ("Tours", TOURS_VIEW),
    ("Admin Dashboard", ADMIN_DASHBOARD_VIEW),
]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_exception_handler(AuthorizationDenied, redirect_on_denied)
    app.middleware("http")(bind_client_session)

    app.include_router(tours_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/login", dependencies=[Depends(require_view(LOGIN_VIEW))])
    async def login_page() -> dict[str, str]:
        """Public entry view."""
        return {"view": LOGIN_VIEW.name}

    @app.get("/register", dependencies=[Depends(require_view(REGISTER_VIEW))])
    async def register_page() -> dict[str, str]:
        """Public registration view."""
        return {"view": REGISTER_VIEW.name}

    @app.post("/login")
    async def login(form: LoginForm, request: Request) -> dict[str, object]:
        """Check credentials and open the session."""
        state_container: AppContainer = request.app.state.container
        try:
            session = await state_container.auth_service.login(
                client_session(request).gate, form.email, form.password
            )
        except CredentialError as exc:
            logger.info("Login rejected")
            raise HTTPException(
                status.HTTP_401_UNAUTHORIZED,
                detail=exc.message or "Invalid email or password.",
            ) from exc
        return {
            "status": "ok",
            "identity": session.identity,
            "admin": Role.ADMIN in session.roles,
        }

    @app.post("/register")
    async def register(form: RegisterForm, request: Request) -> dict[str, str]:
        """Create an account; the user signs in afterwards."""
        state_container: AppContainer = request.app.state.container
        try:
            message = await state_container.auth_service.register(
                form.name, form.email, form.password
            )
        except CredentialError as exc:
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                detail=exc.message or "Registration failed.",
            ) from exc
        return {"status": "ok", "message": message, "next": LOGIN_VIEW.path}

    @app.post("/logout")
    async def logout(request: Request) -> RedirectResponse:
        """Close the session, drop booking flows and return to the entry view."""
        state_container: AppContainer = request.app.state.container
        client = client_session(request)
        state_container.auth_service.logout(client.gate)
        client.flows.reset()
        return RedirectResponse(LOGIN_VIEW.path, status_code=303)

    @app.get("/", dependencies=[Depends(require_view(HOME_VIEW))])
    async def home() -> dict[str, str]:
        """Signed-in landing view."""
        return {
            "title": "Welcome to Your Dashboard!",
            "message": "Your adventure starts here. Explore our exclusive tours.",
        }

    @app.get("/navigation")
    async def navigation(request: Request) -> dict[str, object]:
        """Return the navigation links visible to the current session."""
        return {"links": _navigation_links(client_session(request).gate)}

    @app.get("/{path:path}", include_in_schema=False)
    async def fallback(path: str) -> RedirectResponse:
        """Send unknown paths to the home view."""
        return RedirectResponse(HOME_VIEW.path, status_code=303)

    return app


def _navigation_links(gate: SessionGate) -> list[dict[str, str]]:
    """Build the navigation bar for the current session."""
    if not gate.is_authorized():
        return [
            {"label": "Login", "path": LOGIN_VIEW.path},
            {"label": "Register", "path": REGISTER_VIEW.path},
        ]
    links = [
        {"label": label, "path": view.path}
        for label, view in NAVIGATION_LINKS
        if gate.guard(view) is view
    ]
    links.append({"label": "Logout", "path": "/logout"})
    return links
