"""Aggregations behind the administrator dashboard."""

from __future__ import annotations

from decimal import Decimal

from django.db.models import Count, QuerySet, Sum  # type: ignore
from django.db.models.functions import TruncDate  # type: ignore

from apps.bookings.models import Booking
from apps.vehicles.models import Vehicle


def _by_creation_day(qs: QuerySet[Booking]) -> QuerySet:
    return qs.annotate(day=TruncDate("created_at")).values("day").order_by("day")


def daily_booking_counts() -> dict[str, int]:
    rows = _by_creation_day(Booking.objects.all()).annotate(total=Count("id"))
    return {row["day"].isoformat(): row["total"] for row in rows}


def daily_revenue() -> dict[str, Decimal]:
    """Sum of frozen totals of completed bookings, by booking creation day."""

    rows = _by_creation_day(Booking.objects.filter(status=Booking.Status.COMPLETED)).annotate(
        total=Sum("total_price")
    )
    return {row["day"].isoformat(): row["total"] for row in rows}


def overview() -> dict:
    by_status = {
        row["status"]: row["total"]
        for row in Booking.objects.order_by().values("status").annotate(total=Count("id"))
    }
    revenue = (
        Booking.objects.filter(status=Booking.Status.COMPLETED).aggregate(total=Sum("total_price")).get("total")
        or Decimal("0")
    )
    return {
        "vehicles": Vehicle.objects.count(),
        "available_vehicles": Vehicle.objects.filter(is_available=True).count(),
        "bookings": sum(by_status.values()),
        "bookings_by_status": {status: by_status.get(status, 0) for status in Booking.Status.values},
        "paid_bookings": Booking.objects.filter(payment_status=Booking.PaymentStatus.PAID).count(),
        "revenue": revenue,
    }
