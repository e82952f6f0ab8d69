"""FilterSet definitions for vehicle listing."""

from __future__ import annotations

import django_filters  # type: ignore

from . import services
from .models import Vehicle


class VehicleFilterSet(django_filters.FilterSet):
    """Public vehicle search filters."""

    owner = django_filters.NumberFilter(field_name="owner_id", lookup_expr="exact")
    make = django_filters.CharFilter(field_name="make", lookup_expr="icontains")
    model = django_filters.CharFilter(field_name="model", lookup_expr="icontains")
    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")
    type = django_filters.ChoiceFilter(field_name="vehicle_type", choices=Vehicle.VehicleType.choices)
    available = django_filters.BooleanFilter(field_name="is_available")
    service_type = django_filters.CharFilter(method="filter_service_type")

    class Meta:
        model = Vehicle
        fields = ["owner", "make", "model", "location", "type", "available"]

    def filter_service_type(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        return queryset.filter(pk__in=services.list_public(value).values("pk"))
