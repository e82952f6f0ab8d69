"""Serializers for the booking domain."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSummarySerializer

from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Booking request from a renter. Prices are never accepted from the client."""

    vehicleId = serializers.IntegerField(source="vehicle_id", min_value=1)
    startDate = serializers.DateField(source="start_date")
    endDate = serializers.DateField(source="end_date")
    serviceCode = serializers.SlugField(source="service_code", required=False)

    passengers = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    pickupAddress = serializers.CharField(source="pickup_address", max_length=255, required=False, allow_blank=True)
    dropoffAddress = serializers.CharField(
        source="dropoff_address", max_length=255, required=False, allow_blank=True
    )
    flightNumber = serializers.CharField(source="flight_number", max_length=20, required=False, allow_blank=True)
    terminal = serializers.CharField(max_length=20, required=False, allow_blank=True)
    withDriver = serializers.BooleanField(source="with_driver", required=False)
    isReturnTrip = serializers.BooleanField(source="is_return_trip", required=False)
    durationHours = serializers.DecimalField(
        source="duration_hours",
        max_digits=6,
        decimal_places=2,
        min_value=Decimal("0.01"),
        required=False,
        allow_null=True,
    )
    distanceKm = serializers.DecimalField(
        source="distance_km",
        max_digits=8,
        decimal_places=2,
        min_value=Decimal("0.01"),
        required=False,
        allow_null=True,
    )
    notes = serializers.CharField(required=False, allow_blank=True)


class BookingUpdateSerializer(serializers.Serializer):
    """Status or payment change; ``version`` is the one the caller last read."""

    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)
    paymentStatus = serializers.ChoiceField(
        source="payment_status",
        choices=Booking.PaymentStatus.choices,
        required=False,
    )
    paymentReference = serializers.CharField(
        source="payment_reference",
        max_length=100,
        required=False,
        allow_blank=True,
    )
    version = serializers.IntegerField(min_value=1, required=False, allow_null=True)

    def validate(self, attrs):  # type: ignore
        status = attrs.get("status")
        payment_status = attrs.get("payment_status")
        if status is None and payment_status is None:
            raise serializers.ValidationError("Provide status or paymentStatus.")
        if payment_status == Booking.PaymentStatus.UNPAID:
            raise serializers.ValidationError({"paymentStatus": "A paid booking cannot be reverted to unpaid."})
        if payment_status and status and status != Booking.Status.CONFIRMED:
            raise serializers.ValidationError("Marking a booking paid can only be combined with status 'confirmed'.")
        return attrs


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking, optionally joined with the requester's identity."""

    userId = serializers.ReadOnlyField(source="renter_id")
    vehicleId = serializers.ReadOnlyField(source="vehicle_id")
    vehicle = serializers.SerializerMethodField()
    startDate = serializers.DateField(source="start_date", read_only=True)
    endDate = serializers.DateField(source="end_date", read_only=True)
    serviceCode = serializers.ReadOnlyField(source="service_code")
    pricingUnit = serializers.ReadOnlyField(source="pricing_unit")
    unitPrice = serializers.DecimalField(source="unit_price", max_digits=10, decimal_places=2, read_only=True)
    quantity = serializers.DecimalField(max_digits=8, decimal_places=2, read_only=True)
    basePrice = serializers.DecimalField(source="base_price", max_digits=12, decimal_places=2, read_only=True)
    serviceCharge = serializers.DecimalField(
        source="service_charge", max_digits=12, decimal_places=2, read_only=True
    )
    totalPrice = serializers.DecimalField(source="total_price", max_digits=12, decimal_places=2, read_only=True)
    paymentStatus = serializers.ReadOnlyField(source="payment_status")
    paymentReference = serializers.ReadOnlyField(source="payment_reference")
    pickupAddress = serializers.ReadOnlyField(source="pickup_address")
    dropoffAddress = serializers.ReadOnlyField(source="dropoff_address")
    flightNumber = serializers.ReadOnlyField(source="flight_number")
    withDriver = serializers.ReadOnlyField(source="with_driver")
    isReturnTrip = serializers.ReadOnlyField(source="is_return_trip")
    durationHours = serializers.DecimalField(
        source="duration_hours", max_digits=6, decimal_places=2, read_only=True
    )
    distanceKm = serializers.DecimalField(source="distance_km", max_digits=8, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "userId",
            "vehicleId",
            "vehicle",
            "startDate",
            "endDate",
            "serviceCode",
            "pricingUnit",
            "unitPrice",
            "quantity",
            "basePrice",
            "serviceCharge",
            "totalPrice",
            "currency",
            "status",
            "paymentStatus",
            "paymentReference",
            "version",
            "passengers",
            "pickupAddress",
            "dropoffAddress",
            "flightNumber",
            "terminal",
            "withDriver",
            "isReturnTrip",
            "durationHours",
            "distanceKm",
            "notes",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_vehicle(self, obj: Booking) -> dict:
        vehicle = obj.vehicle
        return {"id": vehicle.pk, "make": vehicle.make, "model": vehicle.model, "ownerId": vehicle.owner_id}

    def to_representation(self, instance):  # type: ignore
        data = super().to_representation(instance)
        if self.context.get("include_user"):
            data["user"] = UserSummarySerializer(instance.renter).data
        return data
