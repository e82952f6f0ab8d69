"""Vehicle listing models."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Vehicle(models.Model):
    """A vehicle owned by one owner and offered for rent or rides."""

    class VehicleType(models.TextChoices):
        SEDAN = "sedan", _("Sedan")
        SUV = "suv", _("SUV")
        HATCHBACK = "hatchback", _("Hatchback")
        VAN = "van", _("Van")
        PICKUP = "pickup", _("Pickup")
        BUS = "bus", _("Bus")
        LUXURY = "luxury", _("Luxury")
        OTHER = "other", _("Other")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="vehicles",
        editable=False,
    )
    make = models.CharField(_("Make"), max_length=100)
    model = models.CharField(_("Model"), max_length=100)
    year = models.PositiveSmallIntegerField(
        _("Year"),
        null=True,
        blank=True,
        validators=[MinValueValidator(1950), MaxValueValidator(2100)],
    )
    vehicle_type = models.CharField(
        _("Type"),
        max_length=20,
        choices=VehicleType.choices,
        default=VehicleType.SEDAN,
    )
    location = models.CharField(_("Location"), max_length=255, blank=True)
    description = models.TextField(_("Description"), blank=True)
    images = models.JSONField(_("Images"), default=list, blank=True)
    features = models.JSONField(_("Features"), default=list, blank=True)
    is_available = models.BooleanField(_("Available"), default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Vehicle")
        verbose_name_plural = _("Vehicles")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner"], name="vehicle_owner_idx"),
            models.Index(fields=["is_available"], name="vehicle_available_idx"),
        ]

    def __str__(self) -> str:
        label = f"{self.make} {self.model}"
        return f"{label} ({self.year})" if self.year else label

    @property
    def vehicle_owner_id(self) -> int:
        return self.owner_id


class VehicleServicePrice(models.Model):
    """Vehicle-specific price and activation flag for one catalog service."""

    vehicle = models.ForeignKey(
        Vehicle,
        on_delete=models.CASCADE,
        related_name="service_prices",
    )
    service = models.ForeignKey(
        "catalog.ServiceOffering",
        on_delete=models.PROTECT,
        related_name="vehicle_prices",
    )
    base_price = models.DecimalField(
        _("Base price"),
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    total_price = models.DecimalField(
        _("Total price"),
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Price charged to renters, service charge included."),
    )
    is_active = models.BooleanField(_("Active"), default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Vehicle service price")
        verbose_name_plural = _("Vehicle service prices")
        ordering = ["service__sort_order", "service__name"]
        constraints = [
            models.UniqueConstraint(
                fields=["vehicle", "service"],
                name="unique_vehicle_service",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.vehicle_id}:{self.service_id} {self.total_price}"

    @property
    def service_charge(self) -> Decimal:
        return max(self.total_price - self.base_price, Decimal("0.00"))

    @property
    def vehicle_owner_id(self) -> int:
        return self.vehicle.owner_id
