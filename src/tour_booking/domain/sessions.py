"""Domain models for the authenticated session and view access."""

from dataclasses import dataclass, field
from enum import StrEnum


class Role(StrEnum):
    """Roles a session can hold."""

    MEMBER = "member"
    ADMIN = "admin"


@dataclass(frozen=True)
class Session:
    """In-memory record of who is signed in.

    ``identity`` is present exactly when ``authenticated`` is true.
    """

    authenticated: bool = False
    identity: str | None = None
    roles: frozenset[Role] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.authenticated != (self.identity is not None):
            raise ValueError("identity must be set if and only if authenticated")
        if not self.authenticated and self.roles:
            raise ValueError("an anonymous session cannot hold roles")

    @classmethod
    def anonymous(cls) -> "Session":
        """Return the unauthenticated session."""
        return cls()


@dataclass(frozen=True)
class View:
    """A routable screen and the access it requires."""

    name: str
    path: str
    protected: bool = True
    required_role: Role | None = None


@dataclass(frozen=True)
class RedirectSignal:
    """Tells the host shell to navigate elsewhere instead of rendering."""

    target: str
    denied_view: str


LOGIN_VIEW = View(name="login", path="/login", protected=False)
REGISTER_VIEW = View(name="register", path="/register", protected=False)
HOME_VIEW = View(name="home", path="/")
TOURS_VIEW = View(name="tours", path="/tours")
TOUR_DETAIL_VIEW = View(name="tour_detail", path="/tours/{tour_id}")
ADMIN_DASHBOARD_VIEW = View(
    name="admin_dashboard", path="/admin-dashboard", required_role=Role.ADMIN
)
