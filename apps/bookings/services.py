"""Domain services for booking workflows.

Every status or payment change is a compare-and-swap on ``Booking.version``:
a single conditional UPDATE that only matches the version the caller read.
Losing a race surfaces as ``StaleWriteError`` instead of a silent overwrite.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import DecimalField, F, Q, QuerySet  # type: ignore
from django.utils import timezone  # type: ignore

from apps.pricing.resolver import Unpriced, price_booking, resolve
from apps.users.permissions import Actor, Capability, require_capability
from apps.vehicles.models import Vehicle
from apps.vehicles.services import set_availability
from shared.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StaleWriteError,
    UnpricedError,
    ValidationError,
)
from shared.domain.value_objects import DateRange

from .domain.state_machine import TRANSITION_FOR_STATUS, Outcome, Status, Transition, plan
from .models import Booking

logger = logging.getLogger(__name__)

TRANSITION_CAPABILITIES = {
    Transition.CONFIRM: Capability.BOOKING_RESPOND,
    Transition.DECLINE: Capability.BOOKING_RESPOND,
    Transition.CANCEL: Capability.BOOKING_CANCEL,
    Transition.COMPLETE: Capability.BOOKING_COMPLETE,
    Transition.MARK_PAID: Capability.BOOKING_MARK_PAID,
}

TRIP_FIELDS = (
    "passengers",
    "pickup_address",
    "dropoff_address",
    "flight_number",
    "terminal",
    "with_driver",
    "is_return_trip",
    "duration_hours",
    "distance_km",
    "notes",
)


def _base_queryset() -> QuerySet[Booking]:
    return Booking.objects.select_related("renter", "vehicle", "vehicle__owner")


def _get_booking(booking_id) -> Booking:
    try:
        return _base_queryset().get(pk=booking_id)
    except (Booking.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Booking not found.", booking_id=booking_id)


def _require_version(expected_version) -> int:
    if expected_version in (None, ""):
        raise ValidationError("The booking version you last read is required.")
    try:
        return int(expected_version)
    except (TypeError, ValueError):
        raise ValidationError("Booking version must be an integer.")



def _ensure_storable(values: dict[str, Any]) -> None:
    """Refuse amounts that do not fit their decimal column."""

    for name, value in values.items():
        field = Booking._meta.get_field(name)
        if not isinstance(field, DecimalField) or value is None:
            continue
        limit = Decimal(10) ** (field.max_digits - field.decimal_places)
        if abs(Decimal(str(value))) >= limit:
            raise ValidationError(
                f"Booking {field.verbose_name} is too large; shorten the booking or lower the price.",
                field=name,
                limit=str(limit),
            )


@transaction.atomic
def create_booking(
    renter,
    *,
    vehicle_id,
    start_date: date,
    end_date: date,
    service_code: str | None = None,
    **trip: Any,
) -> Booking:
    """Price the request server-side and create a pending booking."""

    actor = Actor.from_principal(renter)
    require_capability(actor, Capability.BOOKING_CREATE)
    if settings.RENTAL_REQUIRE_VERIFIED_EMAIL and not getattr(renter, "is_email_verified", False):
        raise ForbiddenError("Verify your email address before booking.")

    dates = DateRange(start_date, end_date)
    service_code = service_code or settings.RENTAL_DEFAULT_SERVICE_CODE

    try:
        vehicle = Vehicle.objects.get(pk=vehicle_id)
    except (Vehicle.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Vehicle not found.", vehicle_id=vehicle_id)
    if not vehicle.is_available:
        raise ConflictError("Vehicle is not available for booking.", vehicle_id=vehicle.pk)

    quote = resolve(vehicle, service_code)
    if isinstance(quote, Unpriced):
        logger.info(f"Booking refused: vehicle {vehicle.pk} has no price for {service_code} ({quote.reason})")
        raise UnpricedError(
            f"Vehicle does not offer service '{service_code}'.",
            vehicle_id=vehicle.pk,
            code=service_code,
            reason=quote.reason,
        )

    details = {key: value for key, value in trip.items() if key in TRIP_FIELDS and value is not None}
    charge = price_booking(
        quote,
        dates,
        duration_hours=details.get("duration_hours"),
        distance_km=details.get("distance_km"),
    )

    amounts = {
        "unit_price": charge.unit_price.amount,
        "quantity": charge.quantity,
        "base_price": charge.base_price.amount,
        "service_charge": charge.service_charge.amount,
        "total_price": charge.total_price.amount,
    }
    _ensure_storable({**amounts, **details})

    booking = Booking.objects.create(
        renter=renter,
        vehicle=vehicle,
        start_date=dates.start_date,
        end_date=dates.end_date,
        service_code=quote.service_code,
        pricing_unit=quote.pricing_unit,
        currency=charge.total_price.currency,
        **amounts,
        **details,
    )
    logger.info(
        f"Booking {booking.pk} created by {actor} for vehicle {vehicle.pk}: "
        f"{service_code} x {charge.quantity} = {charge.total_price}"
    )
    return booking


def get_booking_for(booking_id, actor: Actor) -> Booking:
    booking = _get_booking(booking_id)
    require_capability(actor, Capability.BOOKING_VIEW, booking)
    return booking


def list_bookings(actor: Actor) -> QuerySet[Booking]:
    """Administrators see everything; others see what they requested or own."""

    qs = _base_queryset().order_by("-created_at", "-id")
    if actor.is_payment_system:
        return qs.none()
    if actor.is_admin:
        return qs
    return qs.filter(Q(renter_id=actor.actor_id) | Q(vehicle__owner_id=actor.actor_id))


def _sync_vehicle_availability(booking: Booking, outcome: Outcome) -> None:
    if not settings.RENTAL_SYNC_VEHICLE_AVAILABILITY:
        return
    if outcome.became_confirmed:
        set_availability(booking.vehicle_id, False)
    elif outcome.released_confirmed:
        set_availability(booking.vehicle_id, True)


@transaction.atomic
def apply_transition(
    booking_id,
    actor: Actor,
    transition: Transition,
    *,
    expected_version,
    payment_reference: str | None = None,
) -> Booking:
    """Gate, plan and persist one lifecycle transition."""

    transition = Transition(transition)
    booking = _get_booking(booking_id)
    require_capability(actor, TRANSITION_CAPABILITIES[transition], booking)
    expected_version = _require_version(expected_version)
    if booking.version != expected_version:
        raise StaleWriteError(current_version=booking.version)

    outcome = plan(booking.state, transition, payment_reference=payment_reference)
    if not outcome.changed:
        logger.info(f"Booking {booking.pk}: {transition.value} by {actor} changed nothing")
        return booking

    updated = Booking.objects.filter(pk=booking.pk, version=expected_version).update(
        status=outcome.after.status.value,
        payment_status=outcome.after.payment_status.value,
        payment_reference=outcome.after.payment_reference,
        version=F("version") + 1,
        updated_at=timezone.now(),
    )
    if not updated:
        raise StaleWriteError()

    if transition == Transition.MARK_PAID and outcome.before.status in (Status.DECLINED, Status.CANCELLED):
        logger.warning(
            f"Booking {booking.pk} marked paid while {outcome.before.status.value}; promoted to confirmed"
        )
    logger.info(
        f"Booking {booking.pk}: {transition.value} by {actor} "
        f"{outcome.before.status.value}/{outcome.before.payment_status.value} -> "
        f"{outcome.after.status.value}/{outcome.after.payment_status.value}"
    )
    _sync_vehicle_availability(booking, outcome)
    booking.refresh_from_db()
    return booking


def mark_paid(booking_id, actor: Actor, *, expected_version, payment_reference: str | None = None) -> Booking:
    """Record a successful payment; a pending booking becomes confirmed."""

    return apply_transition(
        booking_id,
        actor,
        Transition.MARK_PAID,
        expected_version=expected_version,
        payment_reference=payment_reference,
    )


def change_status(booking_id, actor: Actor, status: str, *, expected_version) -> Booking:
    try:
        transition = TRANSITION_FOR_STATUS[Status(status)]
    except (KeyError, ValueError):
        raise ValidationError(f"Cannot move a booking to status '{status}'.", status=status)
    return apply_transition(booking_id, actor, transition, expected_version=expected_version)


@transaction.atomic
def delete_booking(booking_id, actor: Actor, *, expected_version) -> None:
    """Physically remove a booking; only its requester may do this."""

    booking = _get_booking(booking_id)
    require_capability(actor, Capability.BOOKING_DELETE, booking)
    expected_version = _require_version(expected_version)

    deleted, _ = Booking.objects.filter(pk=booking.pk, version=expected_version).delete()
    if not deleted:
        raise StaleWriteError(current_version=booking.version)
    if settings.RENTAL_SYNC_VEHICLE_AVAILABILITY and booking.status == Booking.Status.CONFIRMED:
        set_availability(booking.vehicle_id, True)
    logger.info(f"Booking {booking_id} deleted by {actor}")
