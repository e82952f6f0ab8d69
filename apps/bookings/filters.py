"""FilterSet definitions for booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class NumberInFilter(django_filters.BaseInFilter, django_filters.NumberFilter):
    pass


class BookingFilterSet(django_filters.FilterSet):
    """Narrows the caller's visible bookings; never widens them."""

    userId = django_filters.NumberFilter(field_name="renter_id", lookup_expr="exact")
    # Comma separated vehicle ids
    carIds = NumberInFilter(field_name="vehicle_id", lookup_expr="in")
    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    paymentStatus = django_filters.ChoiceFilter(field_name="payment_status", choices=Booking.PaymentStatus.choices)

    class Meta:
        model = Booking
        fields = ["userId", "carIds", "status", "paymentStatus"]
