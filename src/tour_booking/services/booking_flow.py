"""Booking and payment state machine for a tour detail view."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal

from tour_booking.adapters.booking_client import BookingClient
from tour_booking.config import DEFAULT_PAYMENT_METHODS
from tour_booking.domain.bookings import (
    NUMERIC_FIELDS,
    REQUIRED_TEXT_FIELDS,
    BookingDraft,
    BookingOutcome,
    BookingRequest,
    FlowSnapshot,
    FlowState,
    OutcomeStatus,
)
from tour_booking.domain.errors import StaleResponse, SubmissionError, ValidationError
from tour_booking.domain.money import format_amount
from tour_booking.domain.tours import TourReference

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "full_name": "Full name",
    "age": "Age",
    "mobile_number": "Mobile number",
    "email": "Email address",
    "party_size": "Number of people",
}

_STARTABLE = {
    FlowState.IDLE,
    FlowState.SUBMITTING,
    FlowState.CONFIRMED,
    FlowState.FAILED,
}
_PRICED = {FlowState.REVIEWING, FlowState.SUBMITTING}


@dataclass
class BookingFlow:
    """Drives one tour's booking from draft through payment to an outcome.

    Transitions that do not apply to the current state return None and leave
    the flow untouched. Each ``start()`` opens a new attempt generation; a
    submission result is only applied if its generation is still current.
    """

    tour: TourReference
    booking_client: BookingClient
    payment_methods: tuple[str, ...] = DEFAULT_PAYMENT_METHODS
    submission_timeout: float = 15
    currency_symbol: str = "₹"
    state: FlowState = field(default=FlowState.IDLE, init=False)
    draft: BookingDraft | None = field(default=None, init=False)
    outcome: BookingOutcome | None = field(default=None, init=False)
    error: str | None = field(default=None, init=False)
    generation: int = field(default=0, init=False)
    _inflight: "set[asyncio.Task[FlowSnapshot | None]]" = field(
        default_factory=set, init=False, repr=False, compare=False
    )

    @property
    def total_amount(self) -> Decimal | None:
        """Unit price times party size of the live draft, while priced."""
        if self.draft is None or self.state not in _PRICED:
            return None
        return self.tour.unit_price * self.draft.party_size

    def start(self) -> FlowSnapshot | None:
        """Begin a fresh draft, discarding any previous outcome."""
        if self.state not in _STARTABLE:
            return None
        if self.state is FlowState.SUBMITTING:
            logger.info(
                "Restarting while attempt %s is in flight", self.generation
            )
        self.generation += 1
        self.draft = BookingDraft()
        self.outcome = None
        self.error = None
        self.state = FlowState.EDITING
        logger.debug("Booking started for tour %s", self.tour.id)
        return self.snapshot()

    def update_field(self, name: str, value: object) -> FlowSnapshot | None:
        """Assign one draft field; non-numeric input to numeric fields is rejected."""
        if self.state is not FlowState.EDITING or self.draft is None:
            return None
        try:
            coerced = _coerce_field(name, value)
        except ValidationError as exc:
            self.error = str(exc)
            return self.snapshot()
        setattr(self.draft, name, coerced)
        self.error = None
        return self.snapshot()

    def cancel(self) -> FlowSnapshot | None:
        """Discard the draft and return to idle."""
        if self.state not in {FlowState.EDITING, FlowState.REVIEWING}:
            return None
        self.draft = None
        self.error = None
        self.state = FlowState.IDLE
        logger.debug("Booking cancelled for tour %s", self.tour.id)
        return self.snapshot()

    def submit_details(self) -> FlowSnapshot | None:
        """Move to payment review once the draft is complete."""
        if self.state is not FlowState.EDITING or self.draft is None:
            return None
        try:
            _validate_draft(self.draft)
        except ValidationError as exc:
            self.error = str(exc)
            return self.snapshot()
        self.error = None
        self.state = FlowState.REVIEWING
        logger.debug(
            "Reviewing booking for tour %s, total %s", self.tour.id, self.total_amount
        )
        return self.snapshot()

    def revise(self) -> FlowSnapshot | None:
        """Return from review to editing, keeping the draft."""
        if self.state is not FlowState.REVIEWING:
            return None
        self.state = FlowState.EDITING
        return self.snapshot()

    def choose_payment(
        self, method: str
    ) -> "asyncio.Task[FlowSnapshot | None] | None":
        """Leave review and submit the booking in a background task.

        Must be called from a running event loop. Returns None when the flow
        is not reviewing (a submission is already in flight, for example) or
        the method is not offered.
        """
        if self.state is not FlowState.REVIEWING or self.draft is None:
            logger.info("Ignoring payment choice in state %s", self.state)
            return None
        if method not in self.payment_methods:
            self.error = f"Unsupported payment method: {method}"
            return None
        loop = asyncio.get_running_loop()
        request = BookingRequest.build(self.draft, self.tour, method)
        attempt = self.generation
        self.error = None
        self.state = FlowState.SUBMITTING
        logger.info(
            "Submitting booking for tour %s (attempt %s, %s)",
            self.tour.id,
            attempt,
            method,
        )
        task = loop.create_task(
            self._submit(attempt, request),
            name=f"booking-{self.tour.id}-{attempt}",
        )
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def pay(self, method: str) -> FlowSnapshot | None:
        """Choose a payment method and wait for the outcome.

        Cancelling the caller does not cancel the submission itself.
        """
        task = self.choose_payment(method)
        if task is None:
            return None
        return await asyncio.shield(task)

    @property
    def pending_submissions(self) -> "tuple[asyncio.Task[FlowSnapshot | None], ...]":
        """Submission tasks that have not finished yet, stale ones included."""
        return tuple(self._inflight)

    def snapshot(self) -> FlowSnapshot:
        """Return a read-only view of the flow for rendering."""
        total = self.total_amount
        return FlowSnapshot(
            state=self.state,
            tour=self.tour,
            draft=self.draft.copy() if self.draft is not None else None,
            total_amount=total,
            total_display=(
                format_amount(total, self.currency_symbol)
                if total is not None
                else None
            ),
            outcome=self.outcome,
            error=self.error,
            payment_methods=(
                self.payment_methods if self.state is FlowState.REVIEWING else ()
            ),
        )

    async def _submit(
        self, attempt: int, request: BookingRequest
    ) -> FlowSnapshot | None:
        try:
            confirmation = await asyncio.wait_for(
                self.booking_client.submit_booking(request),
                timeout=self.submission_timeout,
            )
        except SubmissionError as exc:
            logger.warning("Booking rejected for tour %s: %s", self.tour.id, exc)
            outcome = BookingOutcome.failed(exc.message)
        except TimeoutError:
            logger.warning(
                "Booking for tour %s timed out after %ss",
                self.tour.id,
                self.submission_timeout,
            )
            outcome = BookingOutcome.failed()
        except Exception:
            logger.exception("Booking submission crashed for tour %s", self.tour.id)
            outcome = BookingOutcome.failed()
        else:
            outcome = BookingOutcome.confirmed(confirmation)

        try:
            self._apply(attempt, outcome)
        except StaleResponse:
            logger.info(
                "Discarding result of attempt %s for tour %s",
                attempt,
                self.tour.id,
            )
            return None
        return self.snapshot()

    def _apply(self, attempt: int, outcome: BookingOutcome) -> None:
        if attempt != self.generation or self.state is not FlowState.SUBMITTING:
            raise StaleResponse(attempt)
        self.outcome = outcome
        self.draft = None
        self.state = (
            FlowState.CONFIRMED
            if outcome.status is OutcomeStatus.CONFIRMED
            else FlowState.FAILED
        )


@dataclass
class BookingFlowRegistry:
    """Keeps one isolated booking flow per tour view.

    A view is a tour id plus an optional ``view_key`` naming the browser tab
    it is open in.
    """

    flow_factory: Callable[[TourReference], BookingFlow]
    _flows: dict[tuple[str, str], BookingFlow] = field(default_factory=dict)

    def get_or_create(self, tour: TourReference, view_key: str = "") -> BookingFlow:
        """Return the flow for ``tour``, creating it on first use."""
        flow = self._flows.get((view_key, tour.id))
        if flow is None:
            flow = self.flow_factory(tour)
            self._flows[(view_key, tour.id)] = flow
        return flow

    def get(self, tour_id: str, view_key: str = "") -> BookingFlow | None:
        """Return the existing flow for a tour id, if any."""
        return self._flows.get((view_key, tour_id))

    def reset(self) -> None:
        """Forget every flow."""
        self._flows.clear()


def _coerce_field(name: str, value: object) -> object:
    if name in REQUIRED_TEXT_FIELDS:
        return "" if value is None else str(value)
    if name in NUMERIC_FIELDS:
        return _coerce_number(name, value)
    raise ValidationError(f"Unknown booking field: {name}")


def _coerce_number(name: str, value: object) -> int | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None if name == "age" else 0
    if isinstance(value, bool):
        raise ValidationError(f"{FIELD_LABELS[name]} must be a whole number.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{FIELD_LABELS[name]} must be a whole number.")


def _validate_draft(draft: BookingDraft) -> None:
    missing = draft.missing_fields()
    if missing:
        labels = ", ".join(FIELD_LABELS[name] for name in missing)
        raise ValidationError(f"Please complete: {labels}.")
