"""Unit tests for the capability gate."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from apps.users.permissions import (
    Actor,
    Capability,
    PAYMENT_SYSTEM_ROLE,
    Relation,
    has_capability,
    relations_of,
    require_capability,
)
from shared.domain.exceptions import ForbiddenError

RENTER = Actor(actor_id=1, role="user")
OWNER = Actor(actor_id=2, role="owner")
ADMIN = Actor(actor_id=3, role="admin", is_admin=True)
STRANGER = Actor(actor_id=4, role="owner")
PAYMENTS = Actor(actor_id=None, role=PAYMENT_SYSTEM_ROLE)

BOOKING = SimpleNamespace(pk=10, requester_id=1, vehicle_owner_id=2)


def test_relations_towards_booking() -> None:
    assert Relation.REQUESTER in relations_of(RENTER, BOOKING)
    assert Relation.VEHICLE_OWNER in relations_of(OWNER, BOOKING)
    assert Relation.OWNER_ROLE in relations_of(STRANGER, BOOKING)
    assert Relation.VEHICLE_OWNER not in relations_of(STRANGER, BOOKING)
    assert relations_of(PAYMENTS, BOOKING) == {Relation.PAYMENT_SYSTEM}


@pytest.mark.parametrize(
    "actor, capability, allowed",
    [
        (RENTER, Capability.BOOKING_CANCEL, True),
        (OWNER, Capability.BOOKING_CANCEL, False),
        (ADMIN, Capability.BOOKING_CANCEL, False),
        (RENTER, Capability.BOOKING_RESPOND, False),
        (OWNER, Capability.BOOKING_RESPOND, True),
        (ADMIN, Capability.BOOKING_RESPOND, False),
        (OWNER, Capability.BOOKING_COMPLETE, True),
        (ADMIN, Capability.BOOKING_COMPLETE, True),
        (RENTER, Capability.BOOKING_COMPLETE, False),
        (STRANGER, Capability.BOOKING_VIEW, False),
        (ADMIN, Capability.BOOKING_VIEW, True),
        (RENTER, Capability.BOOKING_DELETE, True),
        (OWNER, Capability.BOOKING_DELETE, False),
        (PAYMENTS, Capability.BOOKING_MARK_PAID, True),
        (RENTER, Capability.BOOKING_MARK_PAID, False),
        (OWNER, Capability.BOOKING_MARK_PAID, False),
    ],
)
def test_booking_grants(actor: Actor, capability: Capability, allowed: bool) -> None:
    assert has_capability(actor, capability, BOOKING) is allowed


def test_role_grants_without_resource() -> None:
    assert has_capability(ADMIN, Capability.CATALOG_MANAGE)
    assert not has_capability(OWNER, Capability.CATALOG_MANAGE)
    assert has_capability(OWNER, Capability.VEHICLE_CREATE)
    assert not has_capability(RENTER, Capability.VEHICLE_CREATE)
    assert has_capability(RENTER, Capability.BOOKING_CREATE)
    assert not has_capability(PAYMENTS, Capability.BOOKING_CREATE)
    assert has_capability(ADMIN, Capability.STATS_VIEW)


def test_require_capability_raises_forbidden() -> None:
    with pytest.raises(ForbiddenError):
        require_capability(STRANGER, Capability.BOOKING_RESPOND, BOOKING)
    require_capability(OWNER, Capability.BOOKING_RESPOND, BOOKING)


@pytest.mark.django_db
def test_actor_from_staff_user_is_admin() -> None:
    from apps.users.models import User

    staff = User.objects.create_user(email="staff@example.com", password="x" * 10, is_staff=True)
    actor = Actor.from_principal(staff)

    assert actor.is_admin
    assert actor.actor_id == staff.pk
    assert has_capability(actor, Capability.CATALOG_VIEW_ALL)
