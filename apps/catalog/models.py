"""Service catalog models."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class ServiceOffering(models.Model):
    """A named pricing category independent of any specific vehicle."""

    class PricingUnit(models.TextChoices):
        PER_DAY = "per_day", _("Per day")
        PER_HOUR = "per_hour", _("Per hour")
        PER_TRIP = "per_trip", _("Per trip")
        PER_KM = "per_km", _("Per kilometre")

    code = models.SlugField(_("Code"), max_length=50, unique=True)
    name = models.CharField(_("Name"), max_length=100, unique=True)
    description = models.TextField(_("Description"))
    pricing_unit = models.CharField(
        _("Pricing unit"),
        max_length=20,
        choices=PricingUnit.choices,
        default=PricingUnit.PER_DAY,
    )
    default_price = models.DecimalField(
        _("Default price"),
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    is_active = models.BooleanField(_("Active"), default=True)
    icon = models.CharField(_("Icon"), max_length=50, default="car")
    sort_order = models.PositiveIntegerField(_("Sort order"), default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Service offering")
        verbose_name_plural = _("Service offerings")
        ordering = ["sort_order", "name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(default_price__gte=0),
                name="service_offering_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"
