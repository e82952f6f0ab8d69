"""Service catalog operations.

All catalog writes go through these functions; they never touch bookings,
which keep the prices frozen into them at creation time.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Q, QuerySet  # type: ignore

from shared.domain.exceptions import ConflictError, NotFoundError

from .models import ServiceOffering

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "name",
    "description",
    "pricing_unit",
    "default_price",
    "icon",
    "sort_order",
    "is_active",
)


def list_active() -> QuerySet[ServiceOffering]:
    return ServiceOffering.objects.filter(is_active=True).order_by("sort_order", "name")


def list_all() -> QuerySet[ServiceOffering]:
    return ServiceOffering.objects.order_by("sort_order", "name")


def get_offering(code: str) -> ServiceOffering:
    try:
        return ServiceOffering.objects.get(code=code)
    except ServiceOffering.DoesNotExist:
        raise NotFoundError(f"Service type '{code}' not found.", code=code)


def _ensure_unique(name: str | None, code: str | None, exclude_pk=None) -> None:
    condition = Q()
    if name:
        condition |= Q(name__iexact=name)
    if code:
        condition |= Q(code=code)
    if not condition:
        return
    qs = ServiceOffering.objects.filter(condition)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ConflictError("A service type with this name or code already exists.")


@transaction.atomic
def create_offering(
    *,
    name: str,
    code: str,
    description: str,
    default_price,
    pricing_unit: str = ServiceOffering.PricingUnit.PER_DAY,
    icon: str = "car",
    sort_order: int = 0,
    is_active: bool = True,
) -> ServiceOffering:
    _ensure_unique(name, code)
    try:
        with transaction.atomic():
            offering = ServiceOffering.objects.create(
                name=name,
                code=code,
                description=description,
                default_price=default_price,
                pricing_unit=pricing_unit,
                icon=icon,
                sort_order=sort_order,
                is_active=is_active,
            )
    except IntegrityError as exc:
        raise ConflictError("A service type with this name or code already exists.") from exc
    logger.info(f"Service type {offering.code} created ({offering.pricing_unit}, {offering.default_price})")
    return offering


@transaction.atomic
def update_offering(code: str, **fields: Any) -> ServiceOffering:
    offering = get_offering(code)
    changes = {key: value for key, value in fields.items() if key in EDITABLE_FIELDS}
    if "name" in changes:
        _ensure_unique(changes["name"], None, exclude_pk=offering.pk)
    for key, value in changes.items():
        setattr(offering, key, value)
    try:
        with transaction.atomic():
            offering.save()
    except IntegrityError as exc:
        raise ConflictError("A service type with this name already exists.") from exc
    logger.info(f"Service type {offering.code} updated: {sorted(changes)}")
    return offering


@transaction.atomic
def deactivate_offering(code: str) -> ServiceOffering:
    offering = get_offering(code)
    if offering.is_active:
        offering.is_active = False
        offering.save(update_fields=["is_active", "updated_at"])
        logger.info(f"Service type {offering.code} deactivated")
    return offering
