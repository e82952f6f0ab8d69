"""Admin registration for the service catalog."""

from __future__ import annotations

from django.contrib import admin

from .models import ServiceOffering


@admin.register(ServiceOffering)
class ServiceOfferingAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "pricing_unit", "default_price", "is_active", "sort_order")
    list_filter = ("pricing_unit", "is_active")
    search_fields = ("code", "name")
    ordering = ("sort_order", "name")
    readonly_fields = ("created_at", "updated_at")
