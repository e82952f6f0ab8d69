"""Serializers for the service catalog."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import ServiceOffering


class ServiceOfferingSerializer(serializers.ModelSerializer):
    """Catalog entry as seen by renters, owners and administrators."""

    pricingUnit = serializers.ChoiceField(
        source="pricing_unit",
        choices=ServiceOffering.PricingUnit.choices,
        required=False,
    )
    defaultPrice = serializers.DecimalField(
        source="default_price",
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.00"),
    )
    active = serializers.BooleanField(source="is_active", required=False)
    sortOrder = serializers.IntegerField(source="sort_order", min_value=0, required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = ServiceOffering
        fields = [
            "id",
            "code",
            "name",
            "description",
            "pricingUnit",
            "defaultPrice",
            "active",
            "icon",
            "sortOrder",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id"]
        # Uniqueness is enforced by the catalog services as ConflictError.
        extra_kwargs = {
            "code": {"validators": []},
            "name": {"validators": []},
            "icon": {"required": False},
        }


class ServiceOfferingUpdateSerializer(ServiceOfferingSerializer):
    """Partial edit; the code is the stable identity and cannot change."""

    class Meta(ServiceOfferingSerializer.Meta):
        read_only_fields = ["id", "code"]
