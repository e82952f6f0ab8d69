"""Tests for shared value objects and the error taxonomy."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from shared.domain.exceptions import (
    ConflictError,
    DomainError,
    InvalidTransitionError,
    StaleWriteError,
    UnpricedError,
    ValidationError,
)
from shared.domain.value_objects import DateRange, Money


def test_money_quantizes_and_adds() -> None:
    total = Money(Decimal("10.005")) + Money(Decimal("5"))

    assert total.amount == Decimal("15.01")
    assert total.currency == "GHS"
    assert (Money(Decimal("2.50")) * 3).amount == Decimal("7.50")


def test_money_rejects_negative_and_unknown_currency() -> None:
    with pytest.raises(ValidationError):
        Money(Decimal("-1"))
    with pytest.raises(ValidationError):
        Money(Decimal("1"), "XYZ")


def test_money_rejects_mixed_currencies() -> None:
    with pytest.raises(ValueError):
        Money(Decimal("1"), "GHS") + Money(Decimal("1"), "USD")


def test_date_range_is_inclusive() -> None:
    same_day = DateRange(date(2025, 1, 1), date(2025, 1, 1))
    week = DateRange(date(2025, 1, 1), date(2025, 1, 7))

    assert same_day.days == 1
    assert week.days == 7


@pytest.mark.parametrize(
    "start, end",
    [
        (date(2025, 1, 2), date(2025, 1, 1)),
        (None, date(2025, 1, 1)),
        (date(2025, 1, 1), None),
    ],
)
def test_date_range_rejects_invalid(start, end) -> None:
    with pytest.raises(ValidationError):
        DateRange(start, end)


def test_error_kinds_are_distinct() -> None:
    assert ValidationError.status_code == 400
    assert StaleWriteError.status_code == 409
    assert issubclass(InvalidTransitionError, ConflictError)
    assert issubclass(UnpricedError, ConflictError)
    assert {cls.code for cls in (StaleWriteError, InvalidTransitionError, UnpricedError, ConflictError)} == {
        "stale_write",
        "invalid_transition",
        "unpriced",
        "conflict",
    }
    error = InvalidTransitionError("cancelled", "confirm")
    assert isinstance(error, DomainError)
    assert "cancelled" in str(error)
