"""Per-client session state for the host shell."""

import logging
import secrets
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from tour_booking.services.booking_flow import BookingFlowRegistry
from tour_booking.services.session_gate import SessionGate

logger = logging.getLogger(__name__)


@dataclass
class ClientSession:
    """Gate and booking flows owned by one browser client."""

    id: str
    gate: SessionGate
    flows: BookingFlowRegistry


@dataclass
class ClientSessionStore:
    """Maps opaque session ids to client sessions.

    Anonymous clients get a fresh unsaved session on every request; a session
    is only kept once it signs in, and is dropped again on logout.
    """

    session_factory: Callable[[str], ClientSession]
    _sessions: dict[str, ClientSession] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def resolve(self, session_id: str | None) -> ClientSession:
        """Return the saved session for ``session_id`` or a new unsaved one."""
        if session_id:
            with self._lock:
                existing = self._sessions.get(session_id)
            if existing is not None:
                return existing
        return self.session_factory(secrets.token_urlsafe(32))

    def contains(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def save(self, client: ClientSession) -> None:
        with self._lock:
            self._sessions[client.id] = client
        logger.debug("Client session saved")

    def discard(self, session_id: str) -> None:
        with self._lock:
            client = self._sessions.pop(session_id, None)
        if client is not None:
            client.flows.reset()
            logger.debug("Client session discarded")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
