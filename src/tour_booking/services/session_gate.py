"""Session ownership and view access decisions."""

import logging
import threading
from dataclasses import dataclass, field

from tour_booking.domain.sessions import (
    LOGIN_VIEW,
    RedirectSignal,
    Role,
    Session,
    View,
)

logger = logging.getLogger(__name__)


@dataclass
class SessionGate:
    """Owns the current session and guards protected views.

    Elevated access is an exact match of the session identity against
    ``privileged_identity``; the match is recorded as ``Role.ADMIN`` on the
    session at login.
    """

    privileged_identity: str
    entry_view: View = LOGIN_VIEW
    _session: Session = field(default_factory=Session.anonymous, init=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    @property
    def session(self) -> Session:
        """Return the current session."""
        with self._lock:
            return self._session

    def login(self, identity: str) -> None:
        """Mark the session authenticated for an already verified identity."""
        roles = {Role.MEMBER}
        if identity == self.privileged_identity:
            roles.add(Role.ADMIN)
        with self._lock:
            self._session = Session(
                authenticated=True, identity=identity, roles=frozenset(roles)
            )
        logger.info("Session opened", extra={"roles": sorted(roles)})

    def logout(self) -> None:
        """Drop the session back to anonymous."""
        with self._lock:
            self._session = Session.anonymous()
        logger.info("Session closed")

    def is_authorized(self, required_role: Role | None = None) -> bool:
        """Return true when the session is signed in and holds ``required_role``."""
        session = self.session
        if not session.authenticated:
            return False
        if required_role is None:
            return True
        return required_role in session.roles

    def guard(self, view: View) -> View | RedirectSignal:
        """Return the view when reachable, otherwise a redirect to the entry view."""
        if not view.protected:
            return view
        if self.is_authorized(view.required_role):
            return view
        logger.info("Redirecting away from %s", view.name)
        return RedirectSignal(target=self.entry_view.path, denied_view=view.name)
