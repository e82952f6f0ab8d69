"""Tests for price resolution and booking charges."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from django.test import override_settings

from apps.catalog.models import ServiceOffering
from apps.pricing.resolver import (
    PriceQuote,
    Unpriced,
    price_booking,
    quantity_for,
    resolve,
    total_with_service_charge,
)
from apps.users.models import User
from apps.vehicles.models import Vehicle, VehicleServicePrice
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import DateRange, Money


@pytest.fixture
def owner(db):
    return User.objects.create_user(email="owner@example.com", password="OwnerPass123", role="owner")


@pytest.fixture
def airport(db):
    return ServiceOffering.objects.create(
        code="airport",
        name="Airport Transfer",
        description="To and from the airport",
        pricing_unit=ServiceOffering.PricingUnit.PER_TRIP,
        default_price=Decimal("150.00"),
    )


@pytest.fixture
def vehicle(owner):
    return Vehicle.objects.create(owner=owner, make="Toyota", model="Corolla", year=2020)


def test_total_with_service_charge_rounds_to_whole_units() -> None:
    assert total_with_service_charge(Decimal("100"), Decimal("0.25")) == Decimal("125")
    assert total_with_service_charge(Decimal("50.10"), Decimal("0.25")) == Decimal("63")
    assert total_with_service_charge(Decimal("2"), Decimal("0.25")) == Decimal("3")


@override_settings(RENTAL_SERVICE_CHARGE_RATE=Decimal("0.10"))
def test_total_with_service_charge_uses_configured_rate() -> None:
    assert total_with_service_charge(Decimal("200")) == Decimal("220")


@pytest.mark.django_db
def test_resolve_returns_vehicle_total_and_catalog_unit(vehicle, airport) -> None:
    VehicleServicePrice.objects.create(
        vehicle=vehicle, service=airport, base_price=Decimal("144.00"), total_price=Decimal("180.00")
    )

    quote = resolve(vehicle, "airport")

    assert isinstance(quote, PriceQuote)
    assert quote.price == Money(Decimal("180.00"), "GHS")
    assert quote.pricing_unit == "per_trip"
    assert quote.service_charge == Money(Decimal("36.00"), "GHS")


@pytest.mark.django_db
def test_resolve_is_unpriced_without_vehicle_price(vehicle, airport) -> None:
    result = resolve(vehicle, "airport")

    assert isinstance(result, Unpriced)
    assert result.reason == "not_offered"


@pytest.mark.django_db
def test_resolve_is_unpriced_when_disabled_for_vehicle(vehicle, airport) -> None:
    VehicleServicePrice.objects.create(
        vehicle=vehicle, service=airport, base_price=Decimal("100"), total_price=Decimal("125"), is_active=False
    )

    result = resolve(vehicle, "airport")

    assert result == Unpriced("airport", "disabled_for_vehicle")


@pytest.mark.django_db
def test_resolve_is_unpriced_when_catalog_entry_deactivated(vehicle, airport) -> None:
    VehicleServicePrice.objects.create(
        vehicle=vehicle, service=airport, base_price=Decimal("100"), total_price=Decimal("125")
    )
    airport.is_active = False
    airport.save()

    assert resolve(vehicle, "airport") == Unpriced("airport", "service_inactive")


@pytest.mark.django_db
def test_resolve_reads_current_price(vehicle, airport) -> None:
    entry = VehicleServicePrice.objects.create(
        vehicle=vehicle, service=airport, base_price=Decimal("100"), total_price=Decimal("125")
    )
    assert resolve(vehicle, "airport").price.amount == Decimal("125.00")

    entry.total_price = Decimal("140")
    entry.save()

    assert resolve(vehicle, "airport").price.amount == Decimal("140.00")


def test_quantity_per_unit() -> None:
    three_days = DateRange(date(2025, 3, 1), date(2025, 3, 3))

    assert quantity_for("per_day", three_days) == Decimal("3")
    assert quantity_for("per_day", DateRange(date(2025, 3, 1), date(2025, 3, 1))) == Decimal("1")
    assert quantity_for("per_trip", three_days) == Decimal("1")
    assert quantity_for("per_hour", three_days) == Decimal("1")
    assert quantity_for("per_hour", three_days, duration_hours=Decimal("4")) == Decimal("4")
    assert quantity_for("per_km", three_days, distance_km=Decimal("12.5")) == Decimal("12.5")


def test_per_km_requires_distance() -> None:
    with pytest.raises(ValidationError):
        quantity_for("per_km", DateRange(date(2025, 3, 1), date(2025, 3, 1)))


def test_price_booking_multiplies_quote() -> None:
    quote = PriceQuote(
        service_code="daily",
        pricing_unit="per_day",
        price=Money(Decimal("250"), "GHS"),
        base_price=Money(Decimal("200"), "GHS"),
    )

    charge = price_booking(quote, DateRange(date(2025, 3, 1), date(2025, 3, 3)))

    assert charge.quantity == Decimal("3")
    assert charge.unit_price.amount == Decimal("250.00")
    assert charge.base_price.amount == Decimal("600.00")
    assert charge.service_charge.amount == Decimal("150.00")
    assert charge.total_price.amount == Decimal("750.00")
