"""Vehicle listing operations.

Only the vehicle's owner may change a vehicle or its service prices. The
(vehicle, service) pair is unique; the database constraint is the final
arbiter when two attach calls race.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import QuerySet  # type: ignore

from apps.catalog.models import ServiceOffering
from apps.pricing.resolver import total_with_service_charge
from apps.users.permissions import Actor, Capability, require_capability
from shared.domain.exceptions import ConflictError, NotFoundError, ValidationError

from .models import Vehicle, VehicleServicePrice

logger = logging.getLogger(__name__)

VEHICLE_FIELDS = (
    "make",
    "model",
    "year",
    "vehicle_type",
    "location",
    "description",
    "images",
    "features",
    "is_available",
)


def _public_queryset() -> QuerySet[Vehicle]:
    return Vehicle.objects.select_related("owner").prefetch_related("service_prices__service")


def get_vehicle(vehicle_id) -> Vehicle:
    try:
        return _public_queryset().get(pk=vehicle_id)
    except (Vehicle.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Vehicle not found.", vehicle_id=vehicle_id)


def list_public(service_code: str | None = None) -> QuerySet[Vehicle]:
    """Vehicles, optionally only those offering ``service_code`` right now."""

    qs = _public_queryset()
    if service_code:
        qs = qs.filter(
            service_prices__service__code=service_code,
            service_prices__is_active=True,
            service_prices__service__is_active=True,
        ).distinct()
    return qs


def list_for_owner(actor: Actor) -> QuerySet[Vehicle]:
    return _public_queryset().filter(owner_id=actor.actor_id)


def _clean_string_list(value, field: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ValidationError(f"{field} must be a list of strings.")
    items = [str(item).strip() for item in value]
    return [item for item in items if item]


@transaction.atomic
def create_vehicle(
    owner,
    attributes: dict[str, Any],
    images: Iterable[str] | None = None,
    services: Iterable[dict[str, Any]] | None = None,
) -> Vehicle:
    """Create a vehicle owned by ``owner``; client-supplied owners are ignored."""

    require_capability(Actor.from_principal(owner), Capability.VEHICLE_CREATE)
    fields = {key: value for key, value in attributes.items() if key in VEHICLE_FIELDS}
    fields["images"] = _clean_string_list(images if images is not None else fields.get("images"), "images")
    fields["features"] = _clean_string_list(fields.get("features"), "features")

    vehicle = Vehicle.objects.create(owner=owner, **fields)
    logger.info(f"Vehicle {vehicle.pk} created by owner {owner.pk}")

    actor = Actor.from_principal(owner)
    for entry in services or ():
        attach_service(
            vehicle,
            actor,
            entry["service_code"],
            base_price=entry["base_price"],
            total_price=entry.get("total_price"),
            is_active=entry.get("is_active", True),
        )
    return vehicle


@transaction.atomic
def update_vehicle(vehicle: Vehicle, actor: Actor, fields: dict[str, Any]) -> Vehicle:
    require_capability(actor, Capability.VEHICLE_MANAGE, vehicle)
    changes = {key: value for key, value in fields.items() if key in VEHICLE_FIELDS}
    for key in ("images", "features"):
        if key in changes:
            changes[key] = _clean_string_list(changes[key], key)
    for key, value in changes.items():
        setattr(vehicle, key, value)
    vehicle.save()
    logger.info(f"Vehicle {vehicle.pk} updated by {actor}: {sorted(changes)}")
    return vehicle


@transaction.atomic
def delete_vehicle(vehicle: Vehicle, actor: Actor) -> None:
    require_capability(actor, Capability.VEHICLE_MANAGE, vehicle)
    vehicle_id = vehicle.pk
    if vehicle.bookings.exists():
        raise ConflictError("Vehicle has bookings and cannot be deleted.", vehicle_id=vehicle_id)
    vehicle.delete()
    logger.info(f"Vehicle {vehicle_id} deleted by {actor}")


def set_availability(vehicle_id, available: bool) -> None:
    updated = Vehicle.objects.filter(pk=vehicle_id).exclude(is_available=available).update(is_available=available)
    if updated:
        logger.info(f"Vehicle {vehicle_id} availability set to {available}")


@transaction.atomic
def attach_service(
    vehicle: Vehicle,
    actor: Actor,
    service_code: str,
    *,
    base_price,
    total_price=None,
    is_active: bool = True,
) -> VehicleServicePrice:
    """Offer a catalog service on the vehicle at the owner's price."""

    require_capability(actor, Capability.VEHICLE_MANAGE, vehicle)
    try:
        service = ServiceOffering.objects.get(code=service_code)
    except ServiceOffering.DoesNotExist:
        raise NotFoundError(f"Service type '{service_code}' not found.", code=service_code)

    if total_price is None:
        total_price = total_with_service_charge(base_price)

    try:
        with transaction.atomic():
            entry = VehicleServicePrice.objects.create(
                vehicle=vehicle,
                service=service,
                base_price=base_price,
                total_price=total_price,
                is_active=is_active,
            )
    except IntegrityError as exc:
        raise ConflictError(
            f"Vehicle already offers service '{service_code}'.",
            vehicle_id=vehicle.pk,
            code=service_code,
        ) from exc
    logger.info(f"Vehicle {vehicle.pk} offers {service_code} at {entry.base_price}/{entry.total_price}")
    return entry


def _get_service_price(vehicle: Vehicle, service_code: str) -> VehicleServicePrice:
    try:
        return VehicleServicePrice.objects.select_related("service", "vehicle").get(
            vehicle=vehicle,
            service__code=service_code,
        )
    except VehicleServicePrice.DoesNotExist:
        raise NotFoundError(
            f"Vehicle does not offer service '{service_code}'.",
            vehicle_id=vehicle.pk,
            code=service_code,
        )


@transaction.atomic
def update_service_price(
    vehicle: Vehicle,
    actor: Actor,
    service_code: str,
    fields: dict[str, Any],
) -> VehicleServicePrice:
    require_capability(actor, Capability.VEHICLE_MANAGE, vehicle)
    entry = _get_service_price(vehicle, service_code)
    if "base_price" in fields:
        entry.base_price = fields["base_price"]
        if fields.get("total_price") is None:
            entry.total_price = total_with_service_charge(entry.base_price)
    if fields.get("total_price") is not None:
        entry.total_price = fields["total_price"]
    if "is_active" in fields:
        entry.is_active = fields["is_active"]
    entry.save()
    logger.info(f"Vehicle {vehicle.pk} service {service_code} updated by {actor}")
    return entry


@transaction.atomic
def detach_service(vehicle: Vehicle, actor: Actor, service_code: str) -> None:
    require_capability(actor, Capability.VEHICLE_MANAGE, vehicle)
    entry = _get_service_price(vehicle, service_code)
    entry.delete()
    logger.info(f"Vehicle {vehicle.pk} no longer offers {service_code}")
