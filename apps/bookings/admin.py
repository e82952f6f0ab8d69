"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import FROZEN_FIELDS, Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "vehicle",
        "renter",
        "service_code",
        "status",
        "payment_status",
        "start_date",
        "end_date",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "payment_status", "service_code", "start_date")
    search_fields = ("renter__email", "vehicle__make", "vehicle__model", "payment_reference")
    readonly_fields = tuple(name.removesuffix("_id") for name in FROZEN_FIELDS) + (
        "status",
        "payment_status",
        "payment_reference",
        "version",
        "created_at",
        "updated_at",
    )
