"""Capability gate for the marketplace.

A single predicate decides whether an actor may do something:
``has_capability(actor, capability, resource)``. Grants are expressed as the
relations an actor may have to a resource (requester of a booking, owner of
the booking's vehicle, administrator, trusted payment system). Viewsets
declare the capability each action needs and ``CapabilityPermission``
evaluates it once before dispatch; resource-scoped capabilities are checked
again by the services once the resource is loaded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from rest_framework import permissions  # type: ignore

from shared.domain.exceptions import ForbiddenError

logger = logging.getLogger(__name__)

PAYMENT_SYSTEM_ROLE = "payment_system"


class Capability(str, Enum):
    CATALOG_VIEW_ALL = "catalog.view_all"
    CATALOG_MANAGE = "catalog.manage"
    VEHICLE_CREATE = "vehicle.create"
    VEHICLE_MANAGE = "vehicle.manage"
    BOOKING_CREATE = "booking.create"
    BOOKING_VIEW = "booking.view"
    BOOKING_CANCEL = "booking.cancel"
    BOOKING_DELETE = "booking.delete"
    BOOKING_RESPOND = "booking.respond"
    BOOKING_COMPLETE = "booking.complete"
    BOOKING_MARK_PAID = "booking.mark_paid"
    STATS_VIEW = "stats.view"


class Relation(str, Enum):
    """How an actor stands towards a resource."""

    USER = "user"
    OWNER_ROLE = "owner_role"
    ADMIN = "admin"
    REQUESTER = "requester"
    VEHICLE_OWNER = "vehicle_owner"
    PAYMENT_SYSTEM = "payment_system"


GRANTS: dict[Capability, frozenset[Relation]] = {
    Capability.CATALOG_VIEW_ALL: frozenset({Relation.ADMIN}),
    Capability.CATALOG_MANAGE: frozenset({Relation.ADMIN}),
    Capability.VEHICLE_CREATE: frozenset({Relation.OWNER_ROLE, Relation.ADMIN}),
    Capability.VEHICLE_MANAGE: frozenset({Relation.VEHICLE_OWNER}),
    Capability.BOOKING_CREATE: frozenset({Relation.USER}),
    Capability.BOOKING_VIEW: frozenset({Relation.REQUESTER, Relation.VEHICLE_OWNER, Relation.ADMIN}),
    Capability.BOOKING_CANCEL: frozenset({Relation.REQUESTER}),
    Capability.BOOKING_DELETE: frozenset({Relation.REQUESTER}),
    Capability.BOOKING_RESPOND: frozenset({Relation.VEHICLE_OWNER}),
    Capability.BOOKING_COMPLETE: frozenset({Relation.VEHICLE_OWNER, Relation.ADMIN}),
    Capability.BOOKING_MARK_PAID: frozenset({Relation.PAYMENT_SYSTEM}),
    Capability.STATS_VIEW: frozenset({Relation.ADMIN}),
}

# Capabilities that only make sense once the resource is known.
RESOURCE_SCOPED = frozenset(
    {
        Capability.VEHICLE_MANAGE,
        Capability.BOOKING_VIEW,
        Capability.BOOKING_CANCEL,
        Capability.BOOKING_DELETE,
        Capability.BOOKING_RESPOND,
        Capability.BOOKING_COMPLETE,
    }
)


@dataclass(frozen=True)
class Actor:
    """Opaque identity plus role, as supplied by authentication."""

    actor_id: int | None
    role: str
    is_admin: bool = False

    @property
    def is_payment_system(self) -> bool:
        return self.role == PAYMENT_SYSTEM_ROLE

    @classmethod
    def from_principal(cls, principal) -> "Actor":
        if getattr(principal, "is_payment_system", False):
            return cls(actor_id=None, role=PAYMENT_SYSTEM_ROLE)
        is_admin = principal.is_admin() if hasattr(principal, "is_admin") else False
        return cls(actor_id=principal.pk, role=getattr(principal, "role", ""), is_admin=is_admin)

    def __str__(self) -> str:
        if self.is_payment_system:
            return "payment-system"
        return f"{self.role}:{self.actor_id}"


def relations_of(actor: Actor, resource=None) -> set[Relation]:
    """Relations the actor has, optionally towards a booking or vehicle.

    Resources expose ``requester_id`` and/or ``vehicle_owner_id``.
    """

    if actor.is_payment_system:
        return {Relation.PAYMENT_SYSTEM}

    relations = {Relation.USER}
    if actor.is_admin:
        relations.add(Relation.ADMIN)
    if actor.role == "owner":
        relations.add(Relation.OWNER_ROLE)
    if resource is not None and actor.actor_id is not None:
        if getattr(resource, "requester_id", None) == actor.actor_id:
            relations.add(Relation.REQUESTER)
        if getattr(resource, "vehicle_owner_id", None) == actor.actor_id:
            relations.add(Relation.VEHICLE_OWNER)
    return relations


def has_capability(actor: Actor, capability: Capability, resource=None) -> bool:
    return bool(GRANTS[capability] & relations_of(actor, resource))


def require_capability(actor: Actor, capability: Capability, resource=None) -> None:
    if has_capability(actor, capability, resource):
        return
    logger.warning(
        f"Denied {capability.value} for {actor}"
        + (f" on {resource.__class__.__name__} {getattr(resource, 'pk', '')}" if resource is not None else "")
    )
    raise ForbiddenError(f"You are not allowed to perform '{capability.value}'.")


class CapabilityPermission(permissions.BasePermission):
    """Evaluates ``view.required_capabilities[view.action]`` before dispatch.

    Plain API views without actions declare a single ``required_capability``.

    Actions missing from the mapping fall through to the other permission
    classes. Resource-scoped capabilities only require authentication here.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        required = getattr(view, "required_capabilities", {})
        capability = getattr(view, "required_capability", None) or required.get(getattr(view, "action", None))
        if capability is None:
            return True
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if capability in RESOURCE_SCOPED:
            return True
        require_capability(Actor.from_principal(user), capability)
        return True
