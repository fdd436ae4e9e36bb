"""Domain errors raised across the booking client."""


class TourBookingError(Exception):
    """Base class for all booking client errors."""


class ValidationError(TourBookingError):
    """Booking details are incomplete or malformed."""


class SubmissionError(TourBookingError):
    """The booking submission was rejected or could not be delivered."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "booking submission failed")
        self.message = message


class AuthorizationDenied(TourBookingError):
    """The current session may not reach the requested view."""

    def __init__(self, view_name: str, target: str) -> None:
        super().__init__(f"access to {view_name} denied")
        self.view_name = view_name
        self.target = target


class StaleResponse(TourBookingError):
    """A submission result arrived for an attempt that is no longer current."""


class CredentialError(TourBookingError):
    """The credential check rejected the supplied credentials."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "invalid credentials")
        self.message = message


class CatalogError(TourBookingError):
    """The tour catalog could not provide the requested data."""


class TourNotFound(CatalogError):
    """The requested tour does not exist."""
