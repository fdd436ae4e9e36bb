"""Login and registration through the external credential check."""

from dataclasses import dataclass

from tour_booking.adapters.auth_client import AuthClient
from tour_booking.domain.sessions import Session
from tour_booking.services.session_gate import SessionGate


@dataclass
class AuthService:
    """Application service for signing users in and out of a session gate."""

    client: AuthClient

    async def login(self, gate: SessionGate, email: str, password: str) -> Session:
        """Verify credentials and open the session; raises CredentialError."""
        identity = await self.client.login(email, password)
        gate.login(identity)
        return gate.session

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account without signing in."""
        return await self.client.register(name, email, password)

    def logout(self, gate: SessionGate) -> None:
        """Close the session held by ``gate``."""
        gate.logout()
