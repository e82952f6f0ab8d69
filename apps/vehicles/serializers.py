"""Serializers for the vehicle listing."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import Vehicle, VehicleServicePrice


class VehicleServicePriceSerializer(serializers.ModelSerializer):
    """Service offered on a vehicle with its price breakdown.

    The vehicle owner sees the base price as ``displayPrice``; everyone else
    sees the total including the platform service charge.
    """

    serviceCode = serializers.ReadOnlyField(source="service.code")
    name = serializers.ReadOnlyField(source="service.name")
    icon = serializers.ReadOnlyField(source="service.icon")
    pricingUnit = serializers.ReadOnlyField(source="service.pricing_unit")
    basePrice = serializers.DecimalField(source="base_price", max_digits=10, decimal_places=2, read_only=True)
    serviceCharge = serializers.DecimalField(
        source="service_charge", max_digits=10, decimal_places=2, read_only=True
    )
    totalPrice = serializers.DecimalField(source="total_price", max_digits=10, decimal_places=2, read_only=True)
    displayPrice = serializers.SerializerMethodField()
    active = serializers.BooleanField(source="is_active", read_only=True)

    class Meta:
        model = VehicleServicePrice
        fields = [
            "serviceCode",
            "name",
            "icon",
            "pricingUnit",
            "basePrice",
            "serviceCharge",
            "totalPrice",
            "displayPrice",
            "active",
        ]

    def get_displayPrice(self, obj: VehicleServicePrice) -> str:  # noqa: N802
        request = self.context.get("request")
        user = getattr(request, "user", None)
        is_owner = bool(user and user.is_authenticated and obj.vehicle.owner_id == user.pk)
        price = obj.base_price if is_owner else obj.total_price
        return f"{Decimal(price):.2f}"


class VehicleSerializer(serializers.ModelSerializer):
    """Read model of a vehicle."""

    ownerId = serializers.ReadOnlyField(source="owner_id")
    type = serializers.ReadOnlyField(source="vehicle_type")
    availability = serializers.BooleanField(source="is_available", read_only=True)
    services = VehicleServicePriceSerializer(source="service_prices", many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Vehicle
        fields = [
            "id",
            "ownerId",
            "make",
            "model",
            "year",
            "type",
            "location",
            "description",
            "images",
            "features",
            "availability",
            "services",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class ServicePriceInputSerializer(serializers.Serializer):
    serviceCode = serializers.SlugField(source="service_code")
    basePrice = serializers.DecimalField(
        source="base_price", max_digits=10, decimal_places=2, min_value=Decimal("0.00")
    )
    totalPrice = serializers.DecimalField(
        source="total_price",
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        allow_null=True,
    )
    active = serializers.BooleanField(source="is_active", default=True)


class ServicePriceUpdateSerializer(serializers.Serializer):
    basePrice = serializers.DecimalField(
        source="base_price", max_digits=10, decimal_places=2, min_value=Decimal("0.00"), required=False
    )
    totalPrice = serializers.DecimalField(
        source="total_price",
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        allow_null=True,
    )
    active = serializers.BooleanField(source="is_active", required=False)


class VehicleWriteSerializer(serializers.ModelSerializer):
    """Owner input for creating or editing a vehicle; the owner itself is never accepted."""

    type = serializers.ChoiceField(source="vehicle_type", choices=Vehicle.VehicleType.choices, required=False)
    availability = serializers.BooleanField(source="is_available", required=False)
    images = serializers.ListField(child=serializers.CharField(max_length=500), required=False)
    features = serializers.ListField(child=serializers.CharField(max_length=100), required=False)
    services = ServicePriceInputSerializer(many=True, required=False)

    class Meta:
        model = Vehicle
        fields = [
            "make",
            "model",
            "year",
            "type",
            "location",
            "description",
            "images",
            "features",
            "availability",
            "services",
        ]
        extra_kwargs = {
            "location": {"required": False, "allow_blank": True},
            "description": {"required": False, "allow_blank": True},
        }
