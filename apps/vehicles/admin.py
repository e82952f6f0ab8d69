"""Admin registration for vehicles."""

from __future__ import annotations

from django.contrib import admin

from .models import Vehicle, VehicleServicePrice


class VehicleServicePriceInline(admin.TabularInline):
    model = VehicleServicePrice
    extra = 0
    fields = ("service", "base_price", "total_price", "is_active")


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("__str__", "owner", "vehicle_type", "location", "is_available", "created_at")
    list_filter = ("vehicle_type", "is_available")
    search_fields = ("make", "model", "location", "owner__email")
    readonly_fields = ("owner", "created_at", "updated_at")
    inlines = [VehicleServicePriceInline]
