"""Domain models for booking drafts, requests and outcomes."""

from dataclasses import dataclass, fields, replace
from decimal import Decimal
from enum import StrEnum

from tour_booking.domain.tours import TourReference

CONFIRMATION_MARKER = "Booking Confirmed!"
FALLBACK_FAILURE_MESSAGE = "Booking failed."

REQUIRED_TEXT_FIELDS = ("full_name", "mobile_number", "email")
NUMERIC_FIELDS = ("age", "party_size")


class FlowState(StrEnum):
    """States of a booking flow."""

    IDLE = "idle"
    EDITING = "editing"
    REVIEWING = "reviewing"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class OutcomeStatus(StrEnum):
    """Terminal result of a submission attempt."""

    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class BookingDraft:
    """User-editable booking form data."""

    full_name: str = ""
    age: int | None = None
    mobile_number: str = ""
    email: str = ""
    party_size: int = 1

    def missing_fields(self) -> list[str]:
        """Return the names of fields that block submission."""
        missing = [
            name for name in REQUIRED_TEXT_FIELDS if not getattr(self, name).strip()
        ]
        if self.age is None or self.age <= 0:
            missing.append("age")
        if self.party_size < 1:
            missing.append("party_size")
        return [field.name for field in fields(self) if field.name in missing]

    def is_submittable(self) -> bool:
        """Return true when every field is populated and party size is positive."""
        return not self.missing_fields()

    def copy(self) -> "BookingDraft":
        """Return an independent copy of the draft."""
        return replace(self)


@dataclass(frozen=True)
class BookingRequest:
    """Snapshot of a booking sent to the submission backend."""

    full_name: str
    age: int
    mobile_number: str
    email: str
    party_size: int
    tour_id: str
    tour_name: str
    payment_method: str
    total_amount: Decimal

    @classmethod
    def build(
        cls, draft: BookingDraft, tour: TourReference, payment_method: str
    ) -> "BookingRequest":
        """Freeze a submittable draft into a request."""
        if draft.age is None:
            raise ValueError("draft is not submittable")
        return cls(
            full_name=draft.full_name,
            age=draft.age,
            mobile_number=draft.mobile_number,
            email=draft.email,
            party_size=draft.party_size,
            tour_id=tour.id,
            tour_name=tour.name,
            payment_method=payment_method,
            total_amount=tour.unit_price * draft.party_size,
        )

    def to_payload(self) -> dict[str, object]:
        """Return the backend payload; the total is recomputed server-side."""
        return {
            "name": self.full_name,
            "age": self.age,
            "mobile": self.mobile_number,
            "email": self.email,
            "numberOfPeople": self.party_size,
            "tourId": self.tour_id,
            "tourName": self.tour_name,
            "paymentMethod": self.payment_method,
        }


@dataclass(frozen=True)
class BookingOutcome:
    """Confirmed or failed result of a submission attempt."""

    status: OutcomeStatus
    message: str

    @classmethod
    def confirmed(cls, confirmation: str | None) -> "BookingOutcome":
        """Success, with the backend confirmation text after the marker."""
        text = (confirmation or "").strip()
        message = f"{CONFIRMATION_MARKER} {text}" if text else CONFIRMATION_MARKER
        return cls(status=OutcomeStatus.CONFIRMED, message=message)

    @classmethod
    def failed(cls, message: str | None = None) -> "BookingOutcome":
        """Failure carrying the backend message or the generic fallback."""
        text = (message or "").strip()
        return cls(status=OutcomeStatus.FAILED, message=text or FALLBACK_FAILURE_MESSAGE)


@dataclass(frozen=True)
class FlowSnapshot:
    """Read-only projection of a booking flow for rendering."""

    state: FlowState
    tour: TourReference
    draft: BookingDraft | None
    total_amount: Decimal | None
    total_display: str | None
    outcome: BookingOutcome | None
    error: str | None
    payment_methods: tuple[str, ...]
