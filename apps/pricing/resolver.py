"""
Price Resolver

Given a vehicle and a requested service code, returns the applicable price
(``PriceQuote``) or signals that the vehicle cannot be booked for that
service (``Unpriced``). Resolution always reads current state; the result
is frozen into the booking at creation time.

The platform service charge is applied on top of the owner's base price:
``total = round(base * (1 + RENTAL_SERVICE_CHARGE_RATE))`` in whole
currency units.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from django.conf import settings  # type: ignore

from apps.catalog.models import ServiceOffering
from shared.domain.base import ValueObject
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import DateRange, Money

logger = logging.getLogger(__name__)

WHOLE_UNITS = Decimal("1")


def total_with_service_charge(base_price, rate: Decimal | None = None) -> Decimal:
    """Owner's base price plus the platform charge, rounded to whole units."""

    if rate is None:
        rate = Decimal(str(settings.RENTAL_SERVICE_CHARGE_RATE))
    total = Decimal(str(base_price)) * (Decimal("1") + rate)
    return total.quantize(WHOLE_UNITS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceQuote(ValueObject):
    """Resolved per-unit price of one service on one vehicle."""

    service_code: str
    pricing_unit: str
    price: Money
    base_price: Money

    @property
    def service_charge(self) -> Money:
        if self.price.amount <= self.base_price.amount:
            return Money(Decimal("0"), self.price.currency)
        return self.price - self.base_price


@dataclass(frozen=True)
class Unpriced(ValueObject):
    """The vehicle does not offer the service right now."""

    service_code: str
    reason: str


Resolution = Union[PriceQuote, Unpriced]


@dataclass(frozen=True)
class BookingCharge(ValueObject):
    """Quote multiplied out over the booked quantity."""

    quote: PriceQuote
    quantity: Decimal
    base_price: Money
    service_charge: Money
    total_price: Money

    @property
    def unit_price(self) -> Money:
        return self.quote.price


def resolve(vehicle, service_code: str) -> Resolution:
    """Return the active price of ``service_code`` on ``vehicle``."""

    from apps.vehicles.models import VehicleServicePrice  # Local import to prevent circular dependency

    entry = (
        VehicleServicePrice.objects.select_related("service")
        .filter(vehicle=vehicle, service__code=service_code)
        .first()
    )
    if entry is None:
        return Unpriced(service_code, "not_offered")
    if not entry.is_active:
        return Unpriced(service_code, "disabled_for_vehicle")
    if not entry.service.is_active:
        return Unpriced(service_code, "service_inactive")

    currency = settings.RENTAL_CURRENCY
    return PriceQuote(
        service_code=service_code,
        pricing_unit=entry.service.pricing_unit,
        price=Money(entry.total_price, currency),
        base_price=Money(entry.base_price, currency),
    )


def quantity_for(
    pricing_unit: str,
    dates: DateRange,
    *,
    duration_hours=None,
    distance_km=None,
) -> Decimal:
    """Number of pricing units a booking consumes."""

    unit = ServiceOffering.PricingUnit
    if pricing_unit == unit.PER_DAY:
        return Decimal(dates.days)
    if pricing_unit == unit.PER_TRIP:
        return Decimal("1")
    if pricing_unit == unit.PER_HOUR:
        hours = Decimal("1") if duration_hours in (None, "") else Decimal(str(duration_hours))
        if hours <= 0:
            raise ValidationError("Duration in hours must be positive.")
        return hours
    if pricing_unit == unit.PER_KM:
        if distance_km in (None, ""):
            raise ValidationError("Distance in kilometres is required for per-km services.")
        distance = Decimal(str(distance_km))
        if distance <= 0:
            raise ValidationError("Distance in kilometres must be positive.")
        return distance
    raise ValidationError(f"Unknown pricing unit '{pricing_unit}'.")


def price_booking(quote: PriceQuote, dates: DateRange, *, duration_hours=None, distance_km=None) -> BookingCharge:
    quantity = quantity_for(
        quote.pricing_unit,
        dates,
        duration_hours=duration_hours,
        distance_km=distance_km,
    )
    base_price = quote.base_price * quantity
    total_price = quote.price * quantity
    service_charge = quote.service_charge * quantity
    logger.debug(f"Priced {quote.service_code}: {quantity} x {quote.price} = {total_price}")
    return BookingCharge(
        quote=quote,
        quantity=quantity,
        base_price=base_price,
        service_charge=service_charge,
        total_price=total_price,
    )
