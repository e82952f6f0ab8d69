"""
Booking Lifecycle State Machine

Pure transition rules, independent of storage and of who is asking:

- pending -> confirmed | declined | cancelled
- confirmed -> completed | cancelled
- declined, cancelled and completed are terminal

Payment status is an independent one-way axis (unpaid -> paid). Marking a
booking paid is a named compound transition: it also confirms the booking,
whether it was pending, declined or cancelled. A completed booking stays
completed.
"""

from dataclasses import dataclass
from enum import Enum

from shared.domain.exceptions import ConflictError, InvalidTransitionError


class Status(str, Enum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    DECLINED = 'declined'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'


class PaymentStatus(str, Enum):
    UNPAID = 'unpaid'
    PAID = 'paid'


class Transition(str, Enum):
    CONFIRM = 'confirm'
    DECLINE = 'decline'
    CANCEL = 'cancel'
    COMPLETE = 'complete'
    MARK_PAID = 'mark_paid'


TERMINAL_STATUSES = frozenset({Status.DECLINED, Status.CANCELLED, Status.COMPLETED})

# transition -> (allowed source statuses, target status)
STATUS_TRANSITIONS = {
    Transition.CONFIRM: (frozenset({Status.PENDING}), Status.CONFIRMED),
    Transition.DECLINE: (frozenset({Status.PENDING}), Status.DECLINED),
    Transition.CANCEL: (frozenset({Status.PENDING, Status.CONFIRMED}), Status.CANCELLED),
    Transition.COMPLETE: (frozenset({Status.CONFIRMED}), Status.COMPLETED),
}

# Requested status value -> transition that produces it
TRANSITION_FOR_STATUS = {
    Status.CONFIRMED: Transition.CONFIRM,
    Status.DECLINED: Transition.DECLINE,
    Status.CANCELLED: Transition.CANCEL,
    Status.COMPLETED: Transition.COMPLETE,
}


@dataclass(frozen=True)
class BookingState:
    status: Status
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payment_reference: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass(frozen=True)
class Outcome:
    """Result of planning a transition against the current state."""

    before: BookingState
    after: BookingState

    @property
    def changed(self) -> bool:
        return self.before != self.after

    @property
    def became_confirmed(self) -> bool:
        return self.after.status == Status.CONFIRMED and self.before.status != Status.CONFIRMED

    @property
    def released_confirmed(self) -> bool:
        return self.before.status == Status.CONFIRMED and self.after.status in {
            Status.CANCELLED,
            Status.COMPLETED,
        }


def plan(state: BookingState, transition: Transition, payment_reference: str | None = None) -> Outcome:
    """
    Compute the state after ``transition``.

    Cancelling an already terminal booking is a no-op. Any other transition
    not defined from the current status raises InvalidTransitionError.
    """
    transition = Transition(transition)
    if transition == Transition.MARK_PAID:
        return Outcome(state, _mark_paid(state, payment_reference))

    sources, target = STATUS_TRANSITIONS[transition]
    if transition == Transition.CANCEL and state.is_terminal:
        return Outcome(state, state)
    if state.status not in sources:
        raise InvalidTransitionError(state.status.value, transition.value)
    return Outcome(
        state,
        BookingState(target, state.payment_status, state.payment_reference),
    )


def _mark_paid(state: BookingState, payment_reference: str | None) -> BookingState:
    if state.payment_status == PaymentStatus.PAID:
        if payment_reference and state.payment_reference and payment_reference != state.payment_reference:
            raise ConflictError(
                "Booking is already paid under a different payment reference.",
                payment_reference=state.payment_reference,
            )
        return state

    status = state.status if state.status == Status.COMPLETED else Status.CONFIRMED
    return BookingState(
        status,
        PaymentStatus.PAID,
        payment_reference or state.payment_reference,
    )
